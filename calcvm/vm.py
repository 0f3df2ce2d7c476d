"""Virtual machine.

A stack machine over signed 32-bit integers that executes the bytecode
emitted by :mod:`calcvm.compiler`.

1. Execution Model
Instructions are decoded sequentially from an instruction pointer into the
code buffer. There are no jumps: execution is linear until ``HALT``.

2. Operand Stack
Each run starts with an empty stack of fixed capacity. Before every group
of pops the VM checks that enough values are present, and before every
push that room remains; violations raise :class:`StackUnderflowException`
or :class:`StackOverflowException`.

3. Arithmetic
Binary opcodes pop the right operand first, then the left, and push
``left OP right``. Results wrap to 32-bit two's complement. ``DIV``
truncates toward zero and refuses a zero divisor. ``NOT`` replaces the top
value with its bitwise complement.

4. Termination
``HALT`` requires exactly one value on the stack and returns it. Reaching
the end of the buffer without ``HALT`` is an error.


File: vm.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging

from calcvm.compiler import INT_OPERAND, OPCODES
from calcvm.exceptions import (
    DivisionByZeroException,
    IllegalOpcodeException,
    StackOverflowException,
    StackUnderflowException,
    VMRuntimeException,
)

logger = logging.getLogger(__name__)

STACK_CAPACITY = 1024

HALT = OPCODES["HALT"]
PUSH_INT = OPCODES["PUSH_INT"]
NOT = OPCODES["NOT"]
ADD = OPCODES["ADD"]
SUB = OPCODES["SUB"]
MUL = OPCODES["MUL"]
DIV = OPCODES["DIV"]


def wrap_int32(value: int) -> int:
    """Reduce ``value`` to the signed 32-bit range, two's complement."""
    return (value + 2**31) % 2**32 - 2**31


def trunc_div(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return quotient


BINARY_OPS = {
    ADD: lambda left, right: left + right,
    SUB: lambda left, right: left - right,
    MUL: lambda left, right: left * right,
    DIV: trunc_div,
}


class VirtualMachine:
    """Stack-based bytecode interpreter."""

    def __init__(self, max_stack: int = STACK_CAPACITY):
        """
        Initialize the VM.

        Parameters:
            max_stack (int): Operand stack capacity, in slots.
        """
        self.max_stack = max_stack
        self.max_depth = 0

    def execute(self, code) -> int:
        """
        Run a program to completion.

        Parameters:
            code (bytes-like): The bytecode buffer.

        Returns:
            int: The value left on the stack by ``HALT``.
        """
        stack: list[int] = []
        self.max_depth = 0
        ip = 0

        def pops(n: int, op: int, at: int) -> None:
            if len(stack) < n:
                raise StackUnderflowException(n, len(stack), op, at)

        def pushes(n: int, op: int, at: int) -> None:
            if len(stack) + n > self.max_stack:
                raise StackOverflowException(self.max_stack, op, at)
            self.max_depth = max(self.max_depth, len(stack) + n)

        while True:
            if ip >= len(code):
                raise VMRuntimeException("Ran off the end of the code without HALT", ip=ip)
            at = ip
            op = code[ip]
            ip += 1

            if op in BINARY_OPS:
                pops(2, op, at)
                # Note the stack's operand order!
                right = stack.pop()
                left = stack.pop()
                if op == DIV and right == 0:
                    raise DivisionByZeroException(op, at)
                pushes(1, op, at)
                stack.append(wrap_int32(BINARY_OPS[op](left, right)))
            elif op == NOT:
                pops(1, op, at)
                value = stack.pop()
                pushes(1, op, at)
                stack.append(~value)
            elif op == PUSH_INT:
                pushes(1, op, at)
                if ip + INT_OPERAND.size > len(code):
                    raise VMRuntimeException("Truncated PUSH_INT operand", op, at)
                (value,) = INT_OPERAND.unpack_from(code, ip)
                ip += INT_OPERAND.size
                stack.append(value)
            elif op == HALT:
                pops(1, op, at)
                if len(stack) != 1:
                    raise VMRuntimeException(
                        f"HALT with {len(stack)} values on the stack", op, at
                    )
                result = stack.pop()
                logger.debug("halted with %d (peak stack depth %d)", result, self.max_depth)
                return result
            else:
                raise IllegalOpcodeException(op, at)
