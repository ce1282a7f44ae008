# -*- encoding: utf-8 -*-
# @File   : de.py
# @Time   : 2026/10/13 02:47:36
# @Author : Kariko Lin

"""INI -> record.

Parse into an `IniDocument` first, then hydrate the record type from it.
Keys and sections the record doesn't know are dropped (see debug logs).
"""

import logging
from typing import Any, TypeVar

from .coerce import parse_scalar
from .errors import MissingRequiredField, UnsupportedFeature
from .ini import IniDocument, IniParser, IniSection, unescape
from .schema import FieldDescriptor, describe, find_field

__all__ = ['from_document', 'from_str', 'deserialize']

T = TypeVar('T')


def _decode(desc: FieldDescriptor, raw: str, lineno: int) -> Any:
    if desc.type is str:
        return unescape(raw, lineno)
    return parse_scalar(raw, desc.type, desc.int_range)


def _read_pairs(
    section: IniSection, fields_: list[FieldDescriptor]
) -> dict[str, Any]:
    where = section.name and str(section) or 'header'
    ret: dict[str, Any] = {}
    for key, raw in section.items():
        desc = find_field(fields_, key)
        if desc is None:
            logging.debug(f'{where}: unknown key "{key}" ignored.')
            continue
        if desc.kind.is_record:
            logging.debug(
                f'{where}: "{key}" should be a section, not a key. Ignored.')
            continue
        if raw is None:  # commented pair in a hand-made document
            continue
        ret[desc.name] = _decode(desc, raw, section.lineno(key))
    return ret


def _construct(
    cls: type[T],
    fields_: list[FieldDescriptor],
    kwargs: dict[str, Any],
    section: str = ''
) -> T:
    for desc in fields_:
        if desc.name in kwargs or desc.has_default:
            continue
        if desc.kind.optional:
            kwargs[desc.name] = None
        elif section and desc.kind.is_record:
            raise UnsupportedFeature('nested sections')
        else:
            raise MissingRequiredField(desc.key, section)
    return cls(**kwargs)


def from_document(doc: IniDocument, cls: type[T]) -> T:
    """Hydrate `cls` from an already parsed document."""
    fields_ = describe(cls)
    kwargs = _read_pairs(doc.header, fields_)
    for name, section in doc.items():
        desc = find_field(fields_, name)
        if desc is None or not desc.kind.is_record:
            logging.debug(f'[{name}] matches no record field, ignored.')
            continue
        sub_fields = describe(desc.type)
        # records inside sections are never filled: one level only.
        kwargs[desc.name] = _construct(
            desc.type, sub_fields, _read_pairs(section, sub_fields), name)
    return _construct(cls, fields_, kwargs)


def from_str(text: str, cls: type[T]) -> T:
    """Deserialize INI text into an instance of the record type `cls`.

    Raises:
        IniSyntaxError: bad line, or bad escape sequence in a text value.
        InvalidValue: a value can't be converted to its field type.
        MissingRequiredField: a mandatory field got nothing.
        UnsupportedFeature: `cls` uses types INI can't express.
    """
    return from_document(IniParser.loads(text), cls)


deserialize = from_str
