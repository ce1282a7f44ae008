# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """One file, read as / written from a `T`.

    `encoding=None` means: system default when reading, UTF-8 when writing.
    """
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        self._fn = fspath(filename)
        self._codec = encoding

    @property
    def filename(self) -> str:
        return self._fn

    @property
    def encoding(self) -> str | None:
        return self._codec

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return f'{self._fn}({self._codec})'
