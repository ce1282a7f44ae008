# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 21:31:20
# @Author : Kariko Lin

"""Typed records (dataclasses) to INI, and back."""

import logging

from .de import deserialize, from_document, from_str
from .errors import (
    IniError,
    IniSyntaxError,
    InvalidSchema,
    InvalidValue,
    MissingRequiredField,
    UnsupportedFeature
)
from .file import IniFile
from .ini import IniDocument, IniParser, IniSection, escape, unescape
from .schema import (
    I8, I16, I32, I64, U8, U16, U32, U64,
    FieldDescriptor,
    FieldKind,
    IntRange,
    describe,
    find_field,
    ini_field
)
from .ser import serialize, to_document, to_string

__all__ = [
    'to_string', 'from_str', 'serialize', 'deserialize',
    'to_document', 'from_document',
    'ini_field', 'describe', 'find_field',
    'FieldDescriptor', 'FieldKind', 'IntRange',
    'I8', 'I16', 'I32', 'I64', 'U8', 'U16', 'U32', 'U64',
    'IniDocument', 'IniSection', 'IniParser', 'IniFile',
    'escape', 'unescape',
    'IniError', 'IniSyntaxError', 'InvalidValue',
    'MissingRequiredField', 'UnsupportedFeature', 'InvalidSchema'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
