"""act command-line entry point.

Usage:
    act lex FILE                        Display the token stream
    act parse FILE                      Display the untyped syntax tree
    act type FILE                       Print the typed claims as JSON
    act prove FILE [--solver NAME] [--smttimeout MS] [--debug]
                                        Prove every invariant
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from . import __version__
from .claims import dumps
from .errors import ActError, ConfigurationError, render_error
from .solver import DEFAULT_TIMEOUT_MS, SUPPORTED_SOLVERS, SolverConfig
from .checker import lex_source, parse_source, prove_source, typecheck_source
from .verification import all_proved, render_report

logger = logging.getLogger("act")

SOLVER_ENV_VAR = "ACT_SMT_SOLVER"


class LevelPrefixFormatter(logging.Formatter):
    def __init__(self, msg_fmt: str = "%(name)s - %(message)s") -> None:
        super().__init__(msg_fmt)

    def format(self, record: logging.LogRecord) -> str:
        return record.levelname + ": " + super().format(record)


def setup_logging(debug: bool = False) -> None:
    root = logging.getLogger("act")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(LevelPrefixFormatter())
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.WARNING)


@dataclass(frozen=True)
class LexCommand:
    file: str

    def validate(self) -> None:
        pass


@dataclass(frozen=True)
class ParseCommand:
    file: str

    def validate(self) -> None:
        pass


@dataclass(frozen=True)
class TypeCommand:
    file: str

    def validate(self) -> None:
        pass


@dataclass(frozen=True)
class ProveCommand:
    file: str
    solver: str = "z3"
    smttimeout: int = DEFAULT_TIMEOUT_MS
    debug: bool = False

    @property
    def solver_config(self) -> SolverConfig:
        return SolverConfig(self.solver, self.smttimeout, self.debug)

    def validate(self) -> None:
        self.solver_config.validate()


Command = Union[LexCommand, ParseCommand, TypeCommand, ProveCommand]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="act",
        description="Type check act specifications and prove their invariants.",
    )
    parser.add_argument("--version", action="version", version=f"act {__version__}")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    for name, help_text in (("lex", "display the token stream"),
                            ("parse", "display the untyped syntax tree"),
                            ("type", "print the typed claims as JSON")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", metavar="FILE")

    prove = sub.add_parser("prove", help="prove every invariant")
    prove.add_argument("file", metavar="FILE")
    prove.add_argument(
        "--solver",
        default=os.environ.get(SOLVER_ENV_VAR, "z3"),
        help=f"SMT backend, one of {', '.join(SUPPORTED_SOLVERS)} "
             f"(default: ${SOLVER_ENV_VAR} or z3)",
    )
    prove.add_argument(
        "--smttimeout",
        type=int,
        default=DEFAULT_TIMEOUT_MS,
        metavar="MS",
        help=f"per-query timeout in milliseconds (default: {DEFAULT_TIMEOUT_MS})",
    )
    prove.add_argument("--debug", action="store_true", help="log queries and solver output")
    return parser


def parse_command(argv: Optional[list[str]] = None) -> Command:
    args = build_parser().parse_args(argv)
    if args.command == "lex":
        return LexCommand(args.file)
    if args.command == "parse":
        return ParseCommand(args.file)
    if args.command == "type":
        return TypeCommand(args.file)
    return ProveCommand(args.file, args.solver, args.smttimeout, args.debug)


def run(command: Command) -> int:
    """Validate and execute one command, printing its output.

    Returns:
        Process exit status
    """
    try:
        command.validate()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 1

    path = Path(command.file)
    if not path.exists():
        print(f"Error: file not found: {path}", file=sys.stderr)
        return 1
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return 1

    try:
        if isinstance(command, LexCommand):
            for tok in lex_source(source):
                print(repr(tok))
            return 0
        if isinstance(command, ParseCommand):
            for behv in parse_source(source).behaviours:
                print(repr(behv))
            return 0
        if isinstance(command, TypeCommand):
            print(dumps(typecheck_source(source)))
            return 0

        verdicts = prove_source(source, command.solver_config)
        print(render_report(verdicts))
        return 0 if all_proved(verdicts) else 1
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 1
    except ActError as e:
        print(render_error(source, e), file=sys.stderr)
        return 1


def main(argv: Optional[list[str]] = None) -> int:
    command = parse_command(argv)
    setup_logging(getattr(command, "debug", False))
    logger.debug("running %s", command)
    return run(command)


def entry() -> None:
    sys.exit(main())
