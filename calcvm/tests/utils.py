"""
Utility functions shared across calcvm tests.
"""
import random

from calcvm.operations import Op


def to_int32(value: int) -> int:
    """
    Two's complement reduction used by the reference evaluator.
    """
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def reference_eval(node: tuple) -> int:
    """
    Evaluate an AST directly in Python with 32-bit C semantics.

    Raises:
        ZeroDivisionError: If a division by zero is evaluated.
    """
    op = node[0]
    if op == "number":
        return node[1]
    if op == "unary":
        return ~reference_eval(node[2])
    left = reference_eval(node[1])
    right = reference_eval(node[2])
    if op == Op.ADD:
        return to_int32(left + right)
    if op == Op.SUB:
        return to_int32(left - right)
    if op == Op.MUL:
        return to_int32(left * right)
    if right == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(left) // abs(right)
    return to_int32(-quotient if (left < 0) != (right < 0) else quotient)


def tree_depth(node: tuple) -> int:
    """
    Number of nodes on the longest root-to-leaf path.
    """
    op = node[0]
    if op == "number":
        return 1
    if op == "unary":
        return 1 + tree_depth(node[2])
    return 1 + max(tree_depth(node[1]), tree_depth(node[2]))


def random_tree(rng: random.Random, depth: int) -> tuple:
    """
    Build a random AST no deeper than ``depth`` nodes.
    """
    if depth <= 1 or rng.random() < 0.2:
        return ('number', rng.randint(0, 2**31 - 1 if rng.random() < 0.1 else 9), 0)
    if rng.random() < 0.15:
        return ('unary', Op.NOT_BITS, random_tree(rng, depth - 1), 0)
    op = rng.choice([Op.ADD, Op.SUB, Op.MUL, Op.DIV])
    return (op, random_tree(rng, depth - 1), random_tree(rng, depth - 1), 0)
