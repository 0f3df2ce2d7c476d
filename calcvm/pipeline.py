"""End-to-end evaluation.

Workflow:
1. The Lexer splits the expression into tokens.
2. The Parser builds an AST following the precedence layers.
3. The Compiler lowers the AST into bytecode inside a memory arena.
4. The VirtualMachine executes the bytecode and returns the result.
5. The arena is reset, ready for the next expression.


File: pipeline.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging

from calcvm.arena import MemoryArena
from calcvm.compiler import Compiler, INT_OPERAND, OPCODES
from calcvm.lexer import Lexer
from calcvm.parser import Parser
from calcvm.printer import format_tree
from calcvm.vm import VirtualMachine

logger = logging.getLogger(__name__)


def evaluate(source: str, arena: MemoryArena | None = None,
             vm: VirtualMachine | None = None, strict: bool = True) -> int:
    """
    Parse, compile and execute an expression.

    The arena is reset afterwards whether or not a stage raised.

    Parameters:
        source (str): The expression.
        arena (MemoryArena): Bytecode storage; a fresh one when omitted.
        vm (VirtualMachine): Executor; a fresh one when omitted.
        strict (bool): Reject trailing input after the expression.

    Returns:
        int: The value of the expression.
    """
    arena = arena if arena is not None else MemoryArena()
    vm = vm if vm is not None else VirtualMachine()
    try:
        tree = Parser(Lexer(source)).parse(strict)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parsed %r as %s", source, format_tree(tree))
        code = Compiler(arena).compile(tree)
        return vm.execute(code)
    finally:
        arena.reset()


def assemble(arena: MemoryArena, *instructions: tuple) -> memoryview:
    """
    Write hand-built ``(mnemonic, operand)`` instructions into ``arena``.
    """
    start = arena.used
    for op, *arg in instructions:
        arena.reserve(1)[0] = OPCODES[op]
        if arg:
            INT_OPERAND.pack_into(arena.reserve(INT_OPERAND.size), 0, arg[0])
    return arena.contents()[start:]


def check_vm_op(arena: MemoryArena, a: int, b: int, op: str, expected: int) -> None:
    """
    Run ``a op b`` as a hand-assembled program and compare the result.
    """
    code = assemble(arena, ("PUSH_INT", a), ("PUSH_INT", b), (op,), ("HALT",))
    try:
        result = VirtualMachine().execute(code)
    finally:
        arena.reset()
    if result != expected:
        raise AssertionError(f"{a} {op} {b}: expected {expected}, got {result}")


def self_check(arena: MemoryArena | None = None) -> None:
    """
    Built-in sanity checks for the VM and the full pipeline.

    Raises:
        AssertionError: If any check produces the wrong value.
    """
    arena = arena if arena is not None else MemoryArena()

    check_vm_op(arena, 20, 5, "SUB", 15)
    check_vm_op(arena, 20, 5, "ADD", 25)
    check_vm_op(arena, 20, 5, "MUL", 100)
    check_vm_op(arena, 20, 5, "DIV", 4)

    result = evaluate("12*34+45/56+25", arena)
    if result != 12 * 34 + 45 // 56 + 25:
        raise AssertionError(f"12*34+45/56+25: expected 433, got {result}")
    logger.debug("self check passed")
