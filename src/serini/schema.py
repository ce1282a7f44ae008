# -*- encoding: utf-8 -*-
# @File   : schema.py
# @Time   : 2026/10/13 00:12:40
# @Author : Kariko Lin

"""Field walking over dataclasses, shared by both directions.

A record is simply a `@dataclass`. Field options go through `ini_field()`:

    ```python
    @dataclass
    class AppConfig:
        app_name: str = ini_field(rename='app-name')
        port: U16 = 8080
        debug: int | None = ini_field(default=None, skip_if_none=True)
        cache: 'CacheSettings | None' = None
    ```

Only `int`, `float`, `bool`, `str`, other dataclasses, and `X | None`
of those are understood. Anything else is `UnsupportedFeature`.
"""

import re
from collections.abc import Mapping, Sequence, Set
from dataclasses import MISSING, Field, dataclass, field, fields, is_dataclass
from enum import Enum
from types import NoneType, UnionType
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from .errors import InvalidSchema, UnsupportedFeature

__all__ = [
    'FieldKind', 'IntRange', 'FieldDescriptor',
    'I8', 'I16', 'I32', 'I64', 'U8', 'U16', 'U32', 'U64',
    'ini_field', 'is_record', 'describe', 'describe_value', 'find_field',
    'SCALAR_TYPES'
]

SCALAR_TYPES = (int, float, bool, str)

_META_KEY = 'serini'
# keys are written verbatim, so they must survive the line parser.
_BAD_KEY = re.compile(r'^$|^\s|\s$|^[;#\[]|[=\r\n]')


class FieldKind(str, Enum):
    SCALAR = 'scalar'
    OPTIONAL_SCALAR = 'optional scalar'
    RECORD = 'record'
    OPTIONAL_RECORD = 'optional record'

    @property
    def is_record(self) -> bool:
        return self in (FieldKind.RECORD, FieldKind.OPTIONAL_RECORD)

    @property
    def optional(self) -> bool:
        return self in (FieldKind.OPTIONAL_SCALAR, FieldKind.OPTIONAL_RECORD)


@dataclass(frozen=True)
class IntRange:
    """Bounds of a fixed width integer. Use it through `Annotated`."""
    name: str
    min: int
    max: int

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.min <= value <= self.max


I8 = Annotated[int, IntRange('i8', -2 ** 7, 2 ** 7 - 1)]
I16 = Annotated[int, IntRange('i16', -2 ** 15, 2 ** 15 - 1)]
I32 = Annotated[int, IntRange('i32', -2 ** 31, 2 ** 31 - 1)]
I64 = Annotated[int, IntRange('i64', -2 ** 63, 2 ** 63 - 1)]
U8 = Annotated[int, IntRange('u8', 0, 2 ** 8 - 1)]
U16 = Annotated[int, IntRange('u16', 0, 2 ** 16 - 1)]
U32 = Annotated[int, IntRange('u32', 0, 2 ** 32 - 1)]
U64 = Annotated[int, IntRange('u64', 0, 2 ** 64 - 1)]


@dataclass(frozen=True, kw_only=True)
class FieldDescriptor:
    name: str  # attribute name
    key: str   # INI key (or section name), rename applied
    kind: FieldKind
    type: type  # scalar type, or the record class
    int_range: IntRange | None = None
    skip_if_none: bool = False
    # where defaults come from.
    dc_field: Field = field(repr=False, compare=False)

    @property
    def has_default(self) -> bool:
        return (self.dc_field.default is not MISSING
                or self.dc_field.default_factory is not MISSING)

    def make_default(self) -> Any:
        if self.dc_field.default_factory is not MISSING:
            return self.dc_field.default_factory()
        if self.dc_field.default is not MISSING:
            return self.dc_field.default
        raise LookupError(self.name)

    @property
    def typename(self) -> str:
        """Used as `InvalidValue.typ`."""
        if self.int_range is not None:
            return self.int_range.name
        return self.type.__name__


def ini_field(
    *,
    rename: str | None = None,
    skip: bool = False,
    skip_if_none: bool = False,
    **kwargs: Any
) -> Any:
    """`dataclasses.field()` with INI options.

    Args:
        rename: INI key to use instead of the attribute name.
        skip: never written nor read. Needs a default.
        skip_if_none: write nothing (instead of `; key = `) when `None`.
        kwargs: passed to `dataclasses.field()` as is.
    """
    if rename is not None and _BAD_KEY.search(rename):
        raise InvalidSchema(f'{rename!r} is not usable as an INI key')
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[_META_KEY] = {
        'rename': rename,
        'skip': skip,
        'skip_if_none': skip_if_none
    }
    return field(metadata=metadata, **kwargs)


def is_record(obj: object) -> bool:
    """A dataclass, or an instance of one."""
    return is_dataclass(obj)


def _unwrap(tp: Any) -> tuple[Any, bool, IntRange | None]:
    """Peel `Optional` and `Annotated` off an annotation."""
    optional, int_range = False, None
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            tp, *extras = get_args(tp)
            for i in extras:
                if isinstance(i, IntRange):
                    int_range = i
        elif origin is Union or origin is UnionType:
            rest = [i for i in get_args(tp) if i is not NoneType]
            if len(rest) != 1:
                raise UnsupportedFeature('union')
            optional, tp = True, rest[0]
        else:
            return tp, optional, int_range


def _unsupported_name(tp: Any) -> str:
    origin = get_origin(tp) or tp
    if origin is tuple:
        return 'tuple'
    if isinstance(origin, type):
        if issubclass(origin, Enum):
            return 'enum'
        if issubclass(origin, (bytes, bytearray)):
            return 'bytes'
        if issubclass(origin, Mapping):
            return 'map'
        if issubclass(origin, (Sequence, Set)):
            return 'sequence'
    return getattr(tp, '__name__', repr(tp))


def _classify(tp: Any) -> tuple[FieldKind, type, IntRange | None]:
    tp, optional, int_range = _unwrap(tp)
    if tp in SCALAR_TYPES:
        kind = FieldKind.OPTIONAL_SCALAR if optional else FieldKind.SCALAR
    elif isinstance(tp, type) and is_dataclass(tp):
        kind = FieldKind.OPTIONAL_RECORD if optional else FieldKind.RECORD
    else:
        raise UnsupportedFeature(_unsupported_name(tp))
    if int_range is not None and tp is not int:
        raise InvalidSchema(
            f'{int_range.name} bounds given to non-integer type {tp.__name__}')
    return kind, tp, int_range


def describe(cls: type) -> list[FieldDescriptor]:
    """Fields of a record type, in declaration order.

    Fields with `init=False` or `ini_field(skip=True)` are left out,
    the dataclass itself takes care of them.
    """
    if not isinstance(cls, type) or not is_dataclass(cls):
        raise UnsupportedFeature(
            _unsupported_name(cls) if isinstance(cls, type)
            else type(cls).__name__)
    # resolves forward references, e.g. self-referential profiles.
    hints = get_type_hints(cls, include_extras=True)
    ret: list[FieldDescriptor] = []
    seen: dict[str, str] = {}
    for f in fields(cls):
        meta = f.metadata.get(_META_KEY, {})
        has_default = (
            f.default is not MISSING or f.default_factory is not MISSING)
        if meta.get('skip') or not f.init:
            if f.init and not has_default:
                raise InvalidSchema(
                    f'{cls.__name__}.{f.name} is skipped but has no default')
            continue

        key = meta.get('rename') or f.name
        if _BAD_KEY.search(key):
            raise InvalidSchema(f'{key!r} is not usable as an INI key')
        if key in seen:
            raise InvalidSchema(
                f'{cls.__name__}: "{key}" used by both '
                f'{seen[key]} and {f.name}')
        seen[key] = f.name

        kind, tp, int_range = _classify(hints[f.name])
        ret.append(FieldDescriptor(
            name=f.name,
            key=key,
            kind=kind,
            type=tp,
            int_range=int_range,
            skip_if_none=bool(meta.get('skip_if_none')),
            dc_field=f))
    return ret


def describe_value(value: object) -> list[tuple[FieldDescriptor, Any]]:
    """`describe()` plus the current value of each field."""
    return [(i, getattr(value, i.name)) for i in describe(type(value))]


def find_field(
    fields_: list[FieldDescriptor], key: str
) -> FieldDescriptor | None:
    """Which field (if any) receives `key`. Keys are case-sensitive."""
    for i in fields_:
        if i.key == key:
            return i
    return None
