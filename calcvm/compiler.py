"""calcvm bytecode compiler.

This module lowers the AST produced by :mod:`calcvm.parser` into the binary
instruction set executed by :class:`calcvm.vm.VirtualMachine`. Instructions
are written straight into a :class:`calcvm.arena.MemoryArena`.

Encoding: one opcode byte, followed for ``PUSH_INT`` by a four byte
little-endian signed operand. The arithmetic opcodes reuse the ASCII code
of their operator character.

Usage:
    python -m calcvm.compiler "12*34+45/56+25"

File: compiler.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations
import logging
import struct
import sys

from typing import List

from calcvm.arena import MemoryArena
from calcvm.exceptions import CalcException
from calcvm.operations import Op
from calcvm.parser import parse_source

logger = logging.getLogger(__name__)

# Mapping of instruction mnemonics to opcode numbers.
OPCODES: dict[str, int] = {
    "HALT": 0x01,
    "PUSH_INT": 0x02,
    "MUL": ord("*"),
    "ADD": ord("+"),
    "SUB": ord("-"),
    "DIV": ord("/"),
    "NOT": ord("~"),
}

# Reverse-mapped opcode mnemonics
REV_OPCODES: dict[int, str] = {v: k for k, v in OPCODES.items()}

INT_OPERAND = struct.Struct("<i")

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


class Compiler:
    """Compile calcvm AST nodes into bytecode instructions."""

    def __init__(self, arena: MemoryArena) -> None:
        """
        Initialize the compiler.

        Parameters:
            arena (MemoryArena): Destination for the emitted bytes.
        """
        self.arena = arena

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def emit(self, op: str, arg: int | None = None) -> None:
        """
        Emit a bytecode instruction.
        """
        if op == "PUSH_INT" and not INT32_MIN <= arg <= INT32_MAX:
            raise ValueError(f"Integer literal {arg} does not fit in 32 bits")
        self.arena.reserve(1)[0] = OPCODES[op]
        if op == "PUSH_INT":
            INT_OPERAND.pack_into(self.arena.reserve(INT_OPERAND.size), 0, arg)

    # ------------------------------------------------------------------
    # Compilation entry points
    # ------------------------------------------------------------------
    def compile(self, tree: tuple) -> memoryview:
        """
        Compile the given AST into binary bytecode.

        Returns:
            memoryview: The emitted program, valid until the arena is reset.
        """
        start = self.arena.used
        self.compile_expr(tree)
        self.emit("HALT")
        code = self.arena.contents()[start:]
        logger.debug("compiled %d bytes of bytecode", len(code))
        return code

    # ------------------------------------------------------------------
    # Expression compilation
    # ------------------------------------------------------------------
    def compile_expr(self, node: tuple) -> None:
        """
        Compile an expression node into bytecode.

        The tree is walked post-order with an explicit stack, so arbitrarily
        deep trees compile without recursion. Each entry pairs a node with a
        flag telling whether its children have already been scheduled.
        """
        op_map = {
            Op.ADD: "ADD",
            Op.SUB: "SUB",
            Op.MUL: "MUL",
            Op.DIV: "DIV",
        }
        pending = [(node, False)]
        while pending:
            node, expanded = pending.pop()
            op = node[0]
            if op == "number":
                self.emit("PUSH_INT", node[1])
            elif op == "unary":
                unary_op = node[1]
                if unary_op != Op.NOT_BITS:
                    raise NotImplementedError(f"Unsupported unary operator: {unary_op}")
                if expanded:
                    self.emit("NOT")
                else:
                    pending.append((node, True))
                    pending.append((node[2], False))
            elif isinstance(op, Op) and op != Op.NOT_BITS:
                if expanded:
                    self.emit(op_map[op])
                else:
                    # Right is pushed first so the left operand is emitted first.
                    pending.append((node, True))
                    pending.append((node[2], False))
                    pending.append((node[1], False))
            else:
                raise NotImplementedError(f"Unsupported expression node: {node}")


def compile_source(source: str, arena: MemoryArena, strict: bool = True) -> memoryview:
    """
    Compile an expression string to binary bytecode inside ``arena``.
    """
    tree = parse_source(source, strict)
    return Compiler(arena).compile(tree)


def disassemble(data: bytes) -> str:
    """Convert binary bytecode back to a textual representation."""
    idx = 0
    lines: List[str] = []
    while idx < len(data):
        op = data[idx]
        idx += 1
        name = REV_OPCODES.get(op)
        if name is None:
            raise ValueError(f"Unknown opcode 0x{op:02x} at offset {idx - 1}")
        if name == "PUSH_INT":
            if idx + INT_OPERAND.size > len(data):
                raise ValueError(f"Truncated PUSH_INT operand at offset {idx}")
            (v,) = INT_OPERAND.unpack_from(data, idx)
            idx += INT_OPERAND.size
            lines.append(f"PUSH_INT {v}")
        else:
            lines.append(name)
    return "\n".join(lines)


def main(argv: List[str]) -> int:
    """
    Entry point for the CLI.
    """
    if not argv:
        print("Usage: python -m calcvm.compiler <expression>")
        return 1
    arena = MemoryArena()
    try:
        code = compile_source(" ".join(argv), arena)
    except CalcException as e:
        print(f"{type(e).__name__}: {e}")
        return 1
    print(disassemble(code))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main(sys.argv[1:]))
