"""
Expression parsing utilities for calcvm.

These functions operate on a `calcvm.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, maintaining
operator precedence and associativity.

Grammar, lowest precedence last:

    atom  := INTEGER
    unary := '~' unary | atom
    term  := unary (('*' | '/') unary)*
    sum   := term (('+' | '-') term)*
"""

from typing import TYPE_CHECKING

from calcvm.lexer import INTEGER
from calcvm.operations import Op

if TYPE_CHECKING:
    from calcvm.parser import Parser


# ---- Highest precedence ----

def parse_atom(parser: 'Parser') -> tuple:
    """Parse an integer literal into a leaf node."""
    tok = parser.eat(INTEGER, "integer")
    return ('number', tok.value, tok.start)


def parse_unary(parser: 'Parser') -> tuple:
    """Parse prefix '~' operators; the chain nests to the right.

    The tildes are counted in a loop and wrapped around the atom afterwards,
    innermost first, so long chains do not recurse.
    """
    tildes = []
    while parser.curr_token.kind == Op.NOT_BITS.value:
        tildes.append(parser.curr_token.start)
        parser.advance()
    node = parser.atom()
    for start in reversed(tildes):
        node = ('unary', Op.NOT_BITS, node, start)
    return node


def parse_term(parser: 'Parser') -> tuple:
    """Parse multiplication and division expressions."""
    result = parser.unary()
    while parser.curr_token.kind in ('*', '/'):
        op_tok = parser.curr_token
        parser.advance()
        op_map = {
            '*': Op.MUL,
            '/': Op.DIV,
        }
        result = (op_map[op_tok.kind], result, parser.unary(), op_tok.start)
    return result


# ---- Entry point ----

def parse_sum(parser: 'Parser') -> tuple:
    """Parse addition and subtraction expressions."""
    result = parser.term()
    while parser.curr_token.kind in ('+', '-'):
        tok = parser.curr_token
        parser.advance()
        op_map = {
            '+': Op.ADD,
            '-': Op.SUB,
        }
        result = (op_map[tok.kind], result, parser.term(), tok.start)
    return result
