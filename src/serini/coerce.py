# -*- encoding: utf-8 -*-
# @File   : coerce.py
# @Time   : 2026/10/13 01:20:55
# @Author : Kariko Lin

"""Raw text <-> scalar, knowing nothing about INI syntax.

Text values arrive here already unescaped, and leave unescaped.
"""

import math
import re

from .errors import InvalidValue
from .schema import IntRange

_INTEGER = re.compile(r'^[+-]?[0-9]+$')
_FLOAT = re.compile(
    r'^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$'
    r'|^[+-]?(inf|infinity|nan)$',
    re.IGNORECASE)

# beyond this integral floats would print in exponent form anyway.
_PLAIN_FLOAT_LIMIT = 1e16


def parse_int(text: str, bounds: IntRange | None = None) -> int:
    typ = 'int' if bounds is None else bounds.name
    if not _INTEGER.match(text):
        raise InvalidValue(typ, text)
    try:
        ret = int(text)
    except ValueError:
        # longer than `sys.get_int_max_str_digits()`.
        raise InvalidValue(typ, text) from None
    if bounds is not None and ret not in bounds:
        raise InvalidValue(typ, text)
    return ret


def parse_float(text: str) -> float:
    if not _FLOAT.match(text):
        raise InvalidValue('float', text)
    return float(text)


def parse_bool(text: str) -> bool:
    match text:
        case 'true':
            return True
        case 'false':
            return False
        case _:
            raise InvalidValue('bool', text)


def parse_scalar(
    text: str, typ: type, bounds: IntRange | None = None
) -> int | float | bool | str:
    if typ is bool:
        return parse_bool(text)
    if typ is int:
        return parse_int(text, bounds)
    if typ is float:
        return parse_float(text)
    if typ is str:
        return text
    raise TypeError(f'{typ!r} is not a scalar type')


def format_float(value: float) -> str:
    # `1.0` -> `1`, the way the INI files we mimic write them.
    if math.isfinite(value) and value.is_integer() \
            and abs(value) < _PLAIN_FLOAT_LIMIT:
        return ('-' if math.copysign(1.0, value) < 0 else '') \
            + str(abs(int(value)))
    return repr(value)


def format_scalar(
    value: object, typ: type, bounds: IntRange | None = None
) -> str:
    """Encode a scalar. Text is returned *unescaped*.

    Raises `InvalidValue` when `value` doesn't fit `typ`.
    """
    if typ is bool:
        if not isinstance(value, bool):
            raise InvalidValue('bool', value)
        return 'true' if value else 'false'
    if typ is int:
        typname = 'int' if bounds is None else bounds.name
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidValue(typname, value)
        if bounds is not None and value not in bounds:
            raise InvalidValue(typname, value)
        try:
            return str(value)
        except ValueError:
            raise InvalidValue(typname, value) from None
    if typ is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidValue('float', value)
        try:
            return format_float(float(value))
        except OverflowError:
            raise InvalidValue('float', value) from None
    if typ is str:
        if not isinstance(value, str):
            raise InvalidValue('str', value)
        return value
    raise TypeError(f'{typ!r} is not a scalar type')
