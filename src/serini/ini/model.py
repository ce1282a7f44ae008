# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/12 22:31:47
# @Author : Kariko Lin

"""
Flat INI structure, the middle ground between text and records.

Only one level: a header (pairs not belonging to any section)
and a number of `[section]`s holding plain pairs.
"""

from collections.abc import MutableMapping
from typing import Iterator


class IniSection(MutableMapping[str, str | None]):
    """... is a dict, just maintaining pairs of one section.

    Values are the *raw* (still escaped) text.
    `None` stands for a commented assignment, i.e. `; key = `,
    which only the serializer would produce. Parsing skips comments.
    """
    def __init__(self, section_name: str = '') -> None:
        self._name = section_name
        self._data: dict[str, str | None] = {}
        # line numbers, for error messages when hydrating.
        self._lines: dict[str, int] = {}

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str | None:
        return self._data[key]

    def __setitem__(self, key: str, value: str | None) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]
        self._lines.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def set_line(self, key: str, value: str, lineno: int) -> None:
        self._data[key] = value
        self._lines[key] = lineno

    def lineno(self, key: str) -> int:
        """Where `key` was (last) read from. 0 if not read from text."""
        return self._lines.get(key, 0)

    def to_dict(self) -> dict[str, str | None]:
        return self._data.copy()


class IniDocument(MutableMapping[str, IniSection]):
    """INI 文件表示，形如：

        ```ini
        key = val  ; 使用 self.header 访问游离的键值对。

        [section]
        key233 = val666
        ```

    小节按首次出现的顺序排列。重复声明的小节会合并到同一个`IniSection`。
    """
    def __init__(self) -> None:
        self.__header = IniSection()
        self.__sections: dict[str, IniSection] = {}

    @property
    def header(self) -> IniSection:
        """位于文件头部的，不属于任何小节的游离键值对。"""
        return self.__header

    def __getitem__(self, key: str) -> IniSection:
        return self.__sections[key]

    def __setitem__(
        self,
        key: str,
        value: IniSection | dict[str, str | None]
    ) -> None:
        if isinstance(value, IniSection) and value.name == key:
            self.__sections[key] = value
            return
        sect = IniSection(key)
        sect.update(value)
        self.__sections[key] = sect

    def __delitem__(self, key: str) -> None:
        del self.__sections[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def setdefault(  # type: ignore[override]
        self, key: str, default: IniSection | None = None
    ) -> IniSection:
        if key not in self.__sections:
            self[key] = default if default is not None else IniSection(key)
        return self.__sections[key]

    def clear(self) -> None:
        self.__header.clear()
        self.__sections.clear()
