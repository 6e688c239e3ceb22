from mal import SExpression
from mal.types.environment import Environment


class TailCall:
    """The next (expression, environment) pair for the evaluator loop."""

    __slots__ = ("expr", "env")

    def __init__(self, expr: SExpression, env: Environment):
        self.expr = expr
        self.env = env

    def __repr__(self) -> str:
        return f"TailCall({self.expr!r})"
