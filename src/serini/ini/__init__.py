# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 23:40:18
# @Author : Kariko Lin

from .escape import escape, unescape
from .model import IniDocument, IniSection
from .parser import IniParser
