# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/12 21:40:06
# @Author : Kariko Lin

"""Everything raised by serini derives from `IniError`.

Unknown keys and unmatched sections are *not* errors, they're dropped
on purpose so older schemas may still read newer INIs.
"""


class IniError(Exception):
    """Base class of serini errors."""
    pass


class IniSyntaxError(IniError):
    """A line which is neither blank, comment, assignment nor section header,
    or a value carrying an unknown escape sequence."""
    def __init__(self, line: int, content: str, reason: str = '') -> None:
        self.line = line
        self.content = content
        msg = f'line {line}: {content!r}'
        if reason:
            msg += f' ({reason})'
        super().__init__(msg)


class InvalidValue(IniError):
    def __init__(self, typ: str, value: object) -> None:
        self.typ = typ
        self.value = value
        try:
            shown = repr(value)
        except ValueError:
            # ints past `sys.get_int_max_str_digits()`.
            shown = f'<{type(value).__name__} too long to display>'
        super().__init__(f'invalid {typ} value: {shown}')


class MissingRequiredField(IniError):
    def __init__(self, key: str, section: str = '') -> None:
        self.key = key
        self.section = section
        where = f' in [{section}]' if section else ''
        super().__init__(f'missing required field "{key}"{where}')


class UnsupportedFeature(IniError):
    """Sequences, tuples, maps, enums and sections inside sections."""
    def __init__(self, feature: str) -> None:
        self.feature = feature
        super().__init__(f'unsupported feature: {feature}')


class InvalidSchema(IniError):
    """The record type itself can't be mapped, e.g. two fields share a key."""
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
