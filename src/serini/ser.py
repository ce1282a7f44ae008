# -*- encoding: utf-8 -*-
# @File   : ser.py
# @Time   : 2026/10/13 02:04:11
# @Author : Kariko Lin

"""Record -> INI.

Pairs of the root record come first, then one `[section]`
for each nested record, both in field declaration order.
"""

from typing import Any

from .coerce import format_scalar
from .errors import InvalidValue, UnsupportedFeature
from .ini import IniDocument, IniParser, IniSection, escape
from .schema import FieldDescriptor, describe, describe_value, is_record

__all__ = ['to_document', 'to_string', 'serialize']


def _encode(desc: FieldDescriptor, value: Any) -> str:
    text = format_scalar(value, desc.type, desc.int_range)
    return escape(text) if desc.type is str else text


def _write_pairs(
    section: IniSection, value: object, nested: bool
) -> list[tuple[FieldDescriptor, Any]]:
    """Fill `section` with scalars of `value`.

    Returns present nested records, which are left to the caller.
    """
    records: list[tuple[FieldDescriptor, Any]] = []
    for desc, v in describe_value(value):
        if v is None:
            if not desc.kind.optional:
                raise InvalidValue(desc.typename, v)
            # absent records leave no trace at all.
            if not desc.kind.is_record and not desc.skip_if_none:
                section[desc.key] = None
            continue

        if not desc.kind.is_record:
            section[desc.key] = _encode(desc, v)
            continue
        if not isinstance(v, desc.type):
            raise InvalidValue(desc.typename, v)
        if nested:
            # a section can't hold another section.
            raise UnsupportedFeature('nested sections')
        records.append((desc, v))
    return records


def to_document(value: object) -> IniDocument:
    """Map a record instance onto an `IniDocument`, values escaped."""
    if isinstance(value, type):
        raise TypeError(
            f'expected a record instance, got the type {value.__name__}')
    if not is_record(value):
        # describe() names the offending kind, e.g. "sequence".
        describe(type(value))

    ret = IniDocument()
    for desc, sub in _write_pairs(ret.header, value, nested=False):
        _write_pairs(ret.setdefault(desc.key), sub, nested=True)
    return ret


def to_string(value: object, *, blank_lines: int = 1) -> str:
    """Serialize a record instance into INI text.

    Args:
        value: a dataclass instance.
        blank_lines: empty lines put before each section header.
    """
    return IniParser.dumps(to_document(value), blank_lines=blank_lines)


serialize = to_string
