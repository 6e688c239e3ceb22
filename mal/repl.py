"""Command-line front end: interactive REPL and script runner."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

try:
    import readline
except ImportError:  # not available on every platform
    readline = None

from mal import config
from mal.errors import MalError, MalThrown
from mal.interpreter import Interpreter
from mal.printer import pr_str


def format_error(err: Exception) -> str:
    """Render an evaluation error the way the REPL reports it."""
    if isinstance(err, MalThrown):
        return pr_str(err.value, True)
    if isinstance(err, MalError):
        return f"EOF: {err.message}"
    return f"EOF: {err}"


class Repl:
    """Read-eval-print loop over a single Interpreter."""

    def __init__(
        self,
        interpreter: Interpreter,
        prompt: str | None = None,
        history_file: Path | None = None,
    ):
        self._logger = logging.getLogger("MalRepl")
        self.interpreter = interpreter
        self.prompt = prompt if prompt is not None else config.get_prompt()
        self.history_file = history_file

    def _load_history(self) -> None:
        if readline is None or self.history_file is None:
            return
        try:
            readline.read_history_file(self.history_file)
        except OSError:
            self._logger.debug("no history at %s", self.history_file)

    def _save_history(self) -> None:
        if readline is None or self.history_file is None:
            return
        try:
            readline.write_history_file(self.history_file)
        except OSError as e:
            self._logger.warning("cannot write history to %s: %s", self.history_file, e)

    def run(
        self,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        """Loop until end of input; every error is reported and the loop resumes."""
        self._load_history()
        try:
            while True:
                try:
                    line = read_line(self.prompt)
                except (EOFError, KeyboardInterrupt):
                    write("")
                    return
                try:
                    output = self.interpreter.rep(line)
                except Exception as e:
                    self._logger.debug("evaluation failed", exc_info=True)
                    write(format_error(e))
                    continue
                if output is not None:
                    write(output)
        finally:
            self._save_history()


def run_file(interpreter: Interpreter, path: str, argv: Sequence[str]) -> int:
    """Load and run a source file; returns a process exit status."""
    try:
        interpreter.load_file(path, argv)
    except Exception as e:
        logging.getLogger("MalRepl").debug("running %s failed", path, exc_info=True)
        print(format_error(e), file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mal',
        description='A small Lisp interpreter',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start the interactive REPL
  mal

  # Run a program; remaining arguments are bound to *ARGV*
  mal program.mal one two
"""
    )
    parser.add_argument(
        'file',
        nargs='?',
        help='Source file to run (starts the REPL when omitted)'
    )
    parser.add_argument(
        'args',
        nargs=argparse.REMAINDER,
        help='Arguments made available to the program as *ARGV*'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: $MAL_LOG_LEVEL or WARNING)'
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the mal command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=config.get_log_level(args.log_level),
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    interpreter = Interpreter()
    if args.file:
        return run_file(interpreter, args.file, args.args)

    Repl(interpreter, history_file=config.get_history_file()).run()
    return 0
