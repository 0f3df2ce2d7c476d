"""
End-to-end tests: source text in, integer out.
"""
import logging

import pytest

from calcvm.arena import MemoryArena
from calcvm.exceptions import (
    AllocationException,
    DivisionByZeroException,
    SyntaxException,
)
from calcvm.pipeline import evaluate, self_check


@pytest.mark.parametrize(
    "source, expected",
    [
        ("20-5", 15),
        ("20+5", 25),
        ("20*5", 100),
        ("20/5", 4),
        ("12*34+45/56+25", 433),
        ("2+3*4", 14),
        ("20-5-3", 12),
        ("100/10/5", 2),
        ("2 * 3 + 4 * 5", 26),
        ("~5", -6),
        ("~~5", 5),
        ("~~~5", -6),
        ("2*~3", -8),
        ("~6/2", -3),
        ("0-7/2", -3),
        ("7", 7),
        ("2147483647+1", -2147483648),
        ("2147483647*2", -2),
    ],
)
def test_evaluate(source: str, expected: int) -> None:
    assert evaluate(source) == expected


def test_arena_is_reset_after_each_run():
    arena = MemoryArena()
    assert evaluate("1+2+3+4+5+6+7+8", arena) == 36
    assert arena.used == 0
    assert evaluate("9*9", arena) == 81
    assert arena.used == 0


def test_reused_arena_leaves_no_trace_of_previous_program():
    """
    Test that a short program compiled over a longer one's leftover bytes
    runs only its own instructions.
    """
    arena = MemoryArena(64)
    assert evaluate("11*11*11*11+1", arena) == 14642
    leftovers = bytes(arena.base[:30])
    assert evaluate("3-1", arena) == 2
    assert bytes(arena.base[12:30]) == leftovers[12:30]


def test_arena_is_reset_when_a_stage_fails():
    arena = MemoryArena()
    with pytest.raises(DivisionByZeroException):
        evaluate("1/0", arena)
    assert arena.used == 0
    with pytest.raises(SyntaxException):
        evaluate("1+", arena)
    assert arena.used == 0


def test_allocation_failure_is_distinguishable():
    arena = MemoryArena(8)
    with pytest.raises(AllocationException):
        evaluate("1+2", arena)
    assert arena.used == 0


def test_strict_and_lenient_trailing_input():
    with pytest.raises(SyntaxException):
        evaluate("1+2 3")
    assert evaluate("1+2 3", strict=False) == 3


def test_self_check_passes():
    self_check()


def test_self_check_reuses_supplied_arena():
    arena = MemoryArena(32)
    self_check(arena)
    assert arena.used == 0


def test_long_sum_evaluates_without_recursion_limit():
    """
    Test that a left spine far deeper than the interpreter's recursion
    limit still compiles and runs.
    """
    assert evaluate("+".join(["1"] * 5000)) == 5000
    assert evaluate(" - ".join(["3"] * 5000)) == 3 - 3 * 4999


def test_long_tilde_chain_evaluates_without_recursion_limit():
    assert evaluate("~" * 5000 + "5") == 5
    assert evaluate("~" * 5001 + "5") == -6
    assert evaluate("2*" + "~" * 4999 + "3") == -8


def test_tree_is_only_rendered_for_debug_logging(monkeypatch, caplog):
    def fail(tree):
        raise AssertionError("format_tree called")

    monkeypatch.setattr("calcvm.pipeline.format_tree", fail)
    caplog.set_level(logging.WARNING, logger="calcvm.pipeline")
    assert evaluate("2+3") == 5


def test_tree_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="calcvm.pipeline")
    assert evaluate("2+3*4") == 14
    assert "(+ 2 (* 3 4))" in caplog.text
