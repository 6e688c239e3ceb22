"""Closure representation and argument binding for mal."""

from __future__ import annotations

from io import StringIO
from typing import Optional, Sequence

from mal import SExpression, MalValue
from mal.errors import MalArityError
from mal.types.environment import Environment
from mal.types.values import List


class Closure:
    """A first-class function: parameter names, unevaluated body, defining env."""

    __slots__ = ("params", "variadic", "body", "env")

    def __init__(
        self,
        params: Sequence[str],
        body: SExpression,
        env: Environment,
        variadic: Optional[str] = None,
    ):
        self.params: tuple[str, ...] = tuple(params)
        self.variadic: Optional[str] = variadic
        self.body: SExpression = body
        # Shared with every other closure created in the same frame
        self.env: Environment = env

    def __str__(self) -> str:
        from mal.printer import pr_str
        with StringIO() as buffer:
            buffer.write("(fn* (")
            names = list(self.params)
            if self.variadic is not None:
                names += ["&", self.variadic]
            buffer.write(" ".join(names))
            buffer.write(") ")
            buffer.write(pr_str(self.body, True))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Closure {self}>"

    def extend_env(self, args: Sequence[MalValue]) -> Environment:
        """
        Bind argument values to this closure's parameters and return the new
        frame for evaluating the body.

        The frame's parent is the captured environment, not the caller's:
        that is what makes scoping lexical.
        """
        frame = self.env.new_child()
        if self.variadic is None:
            return frame.bind(self.params, args)

        fixed = len(self.params)
        if len(args) < fixed:
            raise MalArityError(
                f"Expected at least {fixed} argument(s), got {len(args)}"
            )
        frame.bind(self.params, args[:fixed])
        frame.set(self.variadic, List(args[fixed:]))
        return frame
