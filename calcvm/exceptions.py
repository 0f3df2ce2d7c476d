"""Errors.

Every stage of the pipeline reports failure by raising one of the classes
below instead of terminating the process. The three families map to the
stage that failed:

- :class:`SyntaxException` for the lexer and parser.
- :class:`AllocationException` for the bytecode arena.
- :class:`VMRuntimeException` (and its subclasses) for the virtual machine.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


class CalcException(Exception):
    """
    Base class for all calcvm errors.
    """
    def __init__(self, message, offset=None):
        self.offset = offset
        if offset is not None:
            message += f" at offset {offset}"
        super().__init__(message)


class SyntaxException(CalcException):
    """
    Error for malformed input.
    """
    def __init__(self, expected, found=None, offset=None):
        self.expected = expected
        self.found = found
        message = f"Expected {expected}"
        if found is not None:
            message += f", but got {found}"
        super().__init__(message, offset)


class AllocationException(CalcException):
    """
    Error for an exhausted memory arena.
    """
    def __init__(self, requested, used, size):
        self.requested = requested
        self.used = used
        self.size = size
        super().__init__(
            f"Arena exhausted: requested {requested} bytes "
            f"with {used} of {size} bytes in use"
        )


class VMRuntimeException(CalcException):
    """
    Error raised while executing bytecode.
    """
    def __init__(self, reason, opcode=None, ip=None):
        self.reason = reason
        self.opcode = opcode
        self.ip = ip
        message = reason
        if opcode is not None:
            message += f" (opcode 0x{opcode:02x})"
        if ip is not None:
            message += f" at ip {ip}"
        super().__init__(message)


class IllegalOpcodeException(VMRuntimeException):
    """
    Error for bytes that do not decode to an instruction.
    """
    def __init__(self, opcode, ip=None):
        super().__init__("Illegal opcode", opcode, ip)


class StackOverflowException(VMRuntimeException):
    """
    Error for a push beyond the stack capacity.
    """
    def __init__(self, capacity, opcode=None, ip=None):
        self.capacity = capacity
        super().__init__(f"Stack overflow (capacity {capacity})", opcode, ip)


class StackUnderflowException(VMRuntimeException):
    """
    Error for a pop from a stack holding too few values.
    """
    def __init__(self, needed, depth, opcode=None, ip=None):
        self.needed = needed
        self.depth = depth
        super().__init__(
            f"Stack underflow (needed {needed}, have {depth})", opcode, ip
        )


class DivisionByZeroException(VMRuntimeException):
    """
    Error for a DIV instruction whose right operand is zero.
    """
    def __init__(self, opcode=None, ip=None):
        super().__init__("Division by zero", opcode, ip)
