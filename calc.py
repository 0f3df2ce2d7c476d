"""
calcvm command line

Evaluate integer expressions with the calcvm compiler and virtual machine.

Workflow:
1. Each expression given on the command line is parsed into an AST.
2. The AST is compiled into bytecode inside a shared memory arena.
3. The virtual machine executes the bytecode and the result is printed.

With no expressions an interactive prompt is started. Set ``CALCDEBUG`` in
the environment to log tokens, trees and bytecode sizes.
"""
import argparse
import logging
import os
import sys

from calcvm.arena import MemoryArena
from calcvm.compiler import Compiler, disassemble
from calcvm.exceptions import CalcException
from calcvm.lexer import Lexer, tokenize
from calcvm.parser import Parser
from calcvm.pipeline import self_check
from calcvm.printer import format_tree
from calcvm.vm import VirtualMachine

logger = logging.getLogger("calcvm")


def configure_logging() -> None:
    """
    Route log output to stderr, verbosely when CALCDEBUG is set.
    """
    level = logging.DEBUG if os.environ.get("CALCDEBUG") else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="calc",
        description="Compile and run integer expressions on a stack VM.",
    )
    parser.add_argument("expressions", nargs="*", metavar="EXPR",
                        help="expression to evaluate, e.g. '2 + 3 * 4'")
    parser.add_argument("--tree", action="store_true",
                        help="print the syntax tree of each expression")
    parser.add_argument("--disasm", action="store_true",
                        help="print the bytecode of each expression")
    parser.add_argument("--lenient", action="store_true",
                        help="ignore input left over after a complete expression")
    parser.add_argument("--self-check", action="store_true",
                        help="run the built-in checks and exit")
    return parser


def run_expression(source: str, arena: MemoryArena, vm: VirtualMachine,
                   args: argparse.Namespace) -> None:
    """
    Evaluate one expression and print the requested output.
    """
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("tokens: %s", tokenize(source))
    tree = Parser(Lexer(source)).parse(strict=not args.lenient)
    if args.tree:
        print(format_tree(tree))
    try:
        code = Compiler(arena).compile(tree)
        if args.disasm:
            print(disassemble(code))
        print(vm.execute(code))
    finally:
        arena.reset()


def run_repl(arena: MemoryArena, vm: VirtualMachine, args: argparse.Namespace) -> None:
    """
    Run the interactive REPL
    """
    print("calcvm - REPL")
    print("Type `exit` or `quit` to leave.")
    while True:
        try:
            line = input(">>> ")
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break
        if line.strip() in {"exit", "quit"}:
            break
        if not line.strip():
            continue
        try:
            run_expression(line, arena, vm, args)
        except CalcException as e:
            print(f"{type(e).__name__}: {e}")


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.
    """
    args = build_parser().parse_args(argv)
    configure_logging()

    arena = MemoryArena()
    vm = VirtualMachine()

    if args.self_check:
        try:
            self_check(arena)
        except (AssertionError, CalcException) as e:
            print(f"{type(e).__name__}: {e}")
            return 1
        print("self check passed")
        return 0

    if not args.expressions:
        run_repl(arena, vm, args)
        return 0

    for source in args.expressions:
        try:
            run_expression(source, arena, vm, args)
        except CalcException as e:
            print(f"{type(e).__name__}: {e}")
            return 1
    return 0


def cli() -> int:
    """
    Console script entry point.
    """
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())
