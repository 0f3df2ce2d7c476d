"""calcvm: integer expression compiler and stack virtual machine.

Lexer -> Parser -> Compiler -> VirtualMachine.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from .lexer import Lexer, Token, tokenize
from .parser import Parser, parse_source
from .arena import MemoryArena
from .compiler import Compiler, compile_source, disassemble
from .vm import VirtualMachine
from .printer import format_tree
from .pipeline import evaluate, self_check

__all__ = [
    "Lexer",
    "Token",
    "tokenize",
    "Parser",
    "parse_source",
    "MemoryArena",
    "Compiler",
    "compile_source",
    "disassemble",
    "VirtualMachine",
    "format_tree",
    "evaluate",
    "self_check",
]
