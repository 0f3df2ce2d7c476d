"""Lexer for calcvm.

The lexer walks the source text one character at a time and yields a
:class:`Token` per call to :meth:`Lexer.next_token`. Only three shapes of
input are recognised:

- a maximal run of decimal digits, which becomes an ``INTEGER`` token
  carrying its value;
- the space character, which is skipped;
- any other character, which becomes a one-character token whose kind is
  the character itself (operators such as ``+`` or ``~``, but also anything
  unrecognised, left for the parser to reject).

The end of the text is reported as a token of kind :data:`END`. Once the
cursor reaches the end it stays there, so asking for more tokens keeps
returning the terminator.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass

from calcvm.exceptions import SyntaxException

INTEGER = "INTEGER"
END = "\0"

# Largest literal that still fits the signed 32-bit PUSH_INT operand.
INT32_MAX = 2**31 - 1

DIGITS = "0123456789"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token with a kind, source span and value.

    ``value`` is only set for ``INTEGER`` tokens.
    """
    kind: str
    start: int
    end: int
    value: int | None = None

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        if self.kind == INTEGER:
            return f"Token({self.kind}, {self.value}, span={self.start}:{self.end})"
        return f"Token({self.kind!r}, span={self.start}:{self.end})"


class Lexer:
    """Character cursor over an expression string."""

    def __init__(self, text: str):
        """
        Initialize the lexer at the start of ``text``.

        Parameters:
            text (str): The expression source.
        """
        self.text = text
        self.position = 0

    @property
    def current_char(self) -> str:
        """
        The character under the cursor, or :data:`END` past the last one.
        """
        if self.position >= len(self.text):
            return END
        return self.text[self.position]

    def next_token(self) -> Token:
        """
        Advance the cursor and produce one token.

        Returns:
            Token: The next token in the input.

        Raises:
            SyntaxException: If an integer literal exceeds the int32 range.
        """
        while self.current_char == " ":
            self.position += 1

        start = self.position
        char = self.current_char

        if char in DIGITS:
            value = 0
            while self.current_char in DIGITS:
                value = value * 10 + ord(self.current_char) - ord("0")
                self.position += 1
            if value > INT32_MAX:
                raise SyntaxException(
                    f"integer literal no greater than {INT32_MAX}",
                    self.text[start:self.position],
                    start,
                )
            return Token(INTEGER, start, self.position, value)

        if char == END:
            return Token(END, start, start)

        self.position += 1
        return Token(char, start, self.position)


def tokenize(text: str) -> list[Token]:
    """
    Convert an expression string into a list of tokens.

    Parameters:
        text (str): The expression source.

    Returns:
        list[Token]: Every token in order, ending with the :data:`END` token.
    """
    lexer = Lexer(text)
    tokens = []
    while True:
        token = lexer.next_token()
        tokens.append(token)
        if token.kind == END:
            return tokens
