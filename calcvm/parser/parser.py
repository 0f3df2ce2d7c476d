"""
Main parser entry point for calcvm.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The layer routines themselves are in
`calcvm.parser.expressions`.

Tokens are pulled from the lexer on demand, one at a time, so the parser
never holds more than the current token.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from calcvm.exceptions import SyntaxException
from calcvm.lexer import END, INTEGER, Lexer, Token

from . import expressions as _expr


def describe(token: Token) -> str:
    """
    Human readable description of a token for error messages.
    """
    if token.kind == INTEGER:
        return f"integer {token.value}"
    if token.kind == END:
        return "end of input"
    return f"'{token.kind}'"


class Parser:
    """calcvm parser."""

    def __init__(self, lexer: Lexer):
        """
        Initialize the parser and read the first token.

        Parameters:
            lexer (Lexer): The token source.
        """
        self.lexer = lexer
        self.curr_token = self.lexer.next_token()

    def advance(self) -> None:
        """
        Replace the current token with the next one from the lexer.
        """
        self.curr_token = self.lexer.next_token()

    def eat(self, token_kind: str, expected: str | None = None) -> Token:
        """
        Consume the current token if it matches the expected kind.

        Parameters:
            token_kind (str): The expected token kind.
            expected (str): Wording for the error message.

        Returns:
            Token: The consumed token.

        Raises:
            SyntaxException: If the token does not match the expected kind.
        """
        token = self.curr_token
        if token.kind != token_kind:
            raise SyntaxException(
                expected or f"'{token_kind}'",
                describe(token),
                token.start,
            )
        self.advance()
        return token

    # Expression wrappers
    def atom(self) -> tuple:
        """
        Parse an integer literal.
        """
        return _expr.parse_atom(self)

    def unary(self) -> tuple:
        """
        Parse a chain of prefix '~' operators.
        """
        return _expr.parse_unary(self)

    def term(self) -> tuple:
        """
        Parse multiplication and division.
        """
        return _expr.parse_term(self)

    def sum(self) -> tuple:
        """
        Parse addition and subtraction.
        """
        return _expr.parse_sum(self)

    def parse(self, strict: bool = True) -> tuple:
        """
        Parse a full expression.

        Parameters:
            strict (bool): Reject input left over after the expression.

        Returns:
            tuple: The root node of the AST.
        """
        tree = self.sum()
        if strict and self.curr_token.kind != END:
            raise SyntaxException(
                "end of input",
                describe(self.curr_token),
                self.curr_token.start,
            )
        return tree


def parse_source(source: str, strict: bool = True) -> tuple:
    """
    Parse an expression string and return its AST.
    """
    return Parser(Lexer(source)).parse(strict)
