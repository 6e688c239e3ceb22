from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from mal import SExpression, MalValue
from mal.builtin.core_builtin import register
from mal.errors import MalArityError
from mal.evaluation.evaluator import evaluate
from mal.printer import pr_str
from mal.reader.parser import TokenStream, lex, read_str
from mal.types.environment import Environment
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.tail_call import TailCall
from mal.types.values import List

# Evaluated once per interpreter, in order, through the normal entry point
BOOTSTRAP: tuple[str, ...] = (
    "(def! not (fn* (a) (if a false true)))",
    '(def! load-file (fn* (f) (eval (read-string (str "(do " (slurp f) "\\nnil)")))))',
)


class Interpreter:
    """
    Orchestrates reading, evaluating and printing mal code.
    Owns the root Environment, which persists across calls.
    """

    def __init__(
        self,
        eval_fn: Callable[[SExpression, Environment], MalValue] | None = None,
        argv: Iterable[str] = (),
    ):
        self._logger = logging.getLogger("MalInterpreter")
        self.eval_fn = eval_fn or evaluate

        self.env: Environment = Environment()
        register(self.env)
        self.env.set("eval", self._eval_builtin)
        self.set_argv(argv)

        for code in BOOTSTRAP:
            self._logger.debug("bootstrap: %s", code)
            self.read_eval(code)

    def _eval_builtin(self, env: Environment, args: list[MalValue]) -> TailCall:
        """(eval form) evaluates `form` in the root environment, not the caller's.

        The form is handed back to the evaluator loop, so `eval` in tail
        position does not nest Python frames.
        """
        if len(args) != 1:
            raise MalArityError(f"eval requires exactly 1 argument, got {len(args)}")
        return TailCall(args[0], env.root())

    def set_argv(self, argv: Iterable[str]) -> None:
        self.env.set("*ARGV*", List(str(a) for a in argv))

    def read_eval(self, code: str) -> MalValue | None:
        """Read one form and evaluate it; None when `code` holds no form."""
        expr = read_str(code)
        if expr is None:
            return None
        return self.eval_fn(expr, self.env)

    def eval(self, code: str) -> MalValue:
        """Evaluate all forms in `code`; returns the single result, a list of results, or nil."""
        stream = TokenStream(lex(code))
        results: list[MalValue] = []
        while (expr := stream.parse_expr()) is not None:
            results.append(self.eval_fn(expr, self.env))
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results

    def rep(self, code: str) -> str | None:
        """Read, evaluate and print one form readably."""
        result = self.read_eval(code)
        if result is None:
            return None
        return pr_str(result, True)

    def load_file(self, path: str | Path, argv: Iterable[str] = ()) -> MalValue:
        """Run a source file through the `load-file` bootstrap function."""
        argv = list(argv)
        self._logger.debug("loading %s with argv %s", path, argv)
        self.set_argv(argv)
        return self.eval_fn(List([Symbol("load-file"), str(path)]), self.env)
