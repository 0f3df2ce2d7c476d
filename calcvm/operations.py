"""Shared definitions for AST operation identifiers.

The parser labels operator nodes with these values and the compiler maps
them onto opcodes. Each value is the operator's source character, which is
also what :func:`calcvm.printer.format_tree` prints.
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported AST operation names.
    """

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    # Unary bitwise
    NOT_BITS = "~"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


__all__ = ["Op"]
