# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/12 23:02:15
# @Author : Kariko Lin

"""Line oriented INI reading and writing.

The dialect we accept:

    ```ini
    ; comment, as well as `# comment`
    key = value

    [section]
    key=value  ; <- NOT an inline comment, `;` in values must be `\\;`
    ```

Values stay *escaped* here. Unescaping is up to whoever knows
the value is a text, see `serini.de`.
"""

import logging
import re
from io import StringIO, TextIOBase
from os import PathLike
from warnings import warn

import chardet

from .model import IniDocument, IniSection
from ..abstract import FileHandler
from ..errors import IniSyntaxError

_SECTION = re.compile(r'^\[(.+)\]$')
# first `=` which is not escaped.
_DELIMITER = re.compile(r'(?<!\\)=')
_COMMENTS = (';', '#')


class IniParser(FileHandler[IniDocument]):
    @staticmethod
    def readstream(buf: TextIOBase) -> IniDocument:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`或`loads()`便是。
        """
        ret = IniDocument()
        this_sect = ret.header
        lineno = 0
        while raw := buf.readline():
            lineno += 1
            line = raw.strip()
            if not line or line.startswith(_COMMENTS):
                continue
            if m := _SECTION.match(line):
                # a re-declared section continues the old one.
                this_sect = ret.setdefault(m.group(1))
                continue
            if (d := _DELIMITER.search(line)) is None:
                raise IniSyntaxError(
                    lineno, raw.rstrip('\r\n'),
                    'expected `key = value` or `[section]`')
            key = line[:d.start()].strip()
            if not key:
                raise IniSyntaxError(lineno, raw.rstrip('\r\n'), 'empty key')
            if key in this_sect:
                warn(
                    f'{this_sect if this_sect.name else "header"}: '
                    f'duplicated key "{key}" at line {lineno}, '
                    f'overriding the one at line {this_sect.lineno(key)}.')
            this_sect.set_line(key, line[d.end():].strip(), lineno)
        return ret

    @classmethod
    def loads(cls, text: str) -> IniDocument:
        return cls.readstream(StringIO(text))

    @staticmethod
    def dumps(doc: IniDocument, *, blank_lines: int = 1) -> str:
        """Render a document. Pairs valued `None` become `; key = `.

        Each section header is preceded with `blank_lines` empty lines.
        """
        lines: list[str] = []
        lines.extend(IniParser.__pairs(doc.header))
        for name, section in doc.items():
            lines.extend([''] * blank_lines)
            lines.append(f'[{name}]')
            lines.extend(IniParser.__pairs(section))
        if not lines:
            return ''
        return '\n'.join(lines) + '\n'

    @staticmethod
    def __pairs(section: IniSection) -> list[str]:
        return [
            f'; {k} = ' if v is None else f'{k} = {v}'
            for k, v in section.items()
        ]

    @staticmethod
    def _decode_file(filename: str | PathLike[str]) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8', 'confidence': 1.0}
        logging.debug(f'{filename}: guessed codec {codec["encoding"]}')

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode('gbk')
        return StringIO(buf)

    def read(self) -> IniDocument:
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp)
        except UnicodeDecodeError:
            return self.readstream(self._decode_file(self._fn))

    def write(
        self, instance: IniDocument, *, blank_lines: int = 1
    ) -> None:
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            fp.write(self.dumps(instance, blank_lines=blank_lines))

    def __str__(self) -> str:
        return 'INI file: ' + super().__str__()
