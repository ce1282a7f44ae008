# -*- encoding: utf-8 -*-
# @File   : file.py
# @Time   : 2026/10/13 03:30:02
# @Author : Kariko Lin

from os import PathLike
from typing import TypeVar

from .abstract import FileHandler
from .de import from_document
from .ini import IniDocument, IniParser
from .ser import to_document

T = TypeVar('T')


class IniFile(FileHandler[T]):
    """把 INI 文件读写为`schema`指定的记录类型。

    编码未指定时使用系统默认编码读取；解码失败则交给`chardet`猜测。
    写入时未指定编码则一律 UTF-8。
    """
    def __init__(
        self,
        filename: str | PathLike[str],
        schema: type[T],
        encoding: str | None = None
    ) -> None:
        super().__init__(filename, encoding)
        self._schema = schema
        self._parser = IniParser(self._fn, self._codec)

    @property
    def schema(self) -> type[T]:
        return self._schema

    def readdoc(self) -> IniDocument:
        """Parsed but not hydrated, unknown keys included."""
        return self._parser.read()

    def read(self) -> T:
        return from_document(self.readdoc(), self._schema)

    def write(self, instance: T, *, blank_lines: int = 1) -> None:
        self._parser.write(to_document(instance), blank_lines=blank_lines)

    def __str__(self) -> str:
        return f'{self._schema.__name__} <- {self._parser}'
