from typing import Sequence

from mal import EvaluatorFn
from mal import SExpression, MalValue
from mal.errors import MalArityError, MalSyntaxError
from mal.types.closure import Closure
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.values import is_sequential

VARIADIC_MARKER = Symbol("&")


def make_closure(params: SExpression, body: SExpression, env: Environment) -> Closure:
    """Validate a parameter spec and capture `env` in a new Closure.

    `&` may appear once, as the second-to-last entry; the name after it
    collects the remaining call arguments.
    """
    if not is_sequential(params):
        raise MalSyntaxError("fn* parameters must be a list or vector")
    if not all(isinstance(p, Symbol) for p in params):
        raise MalSyntaxError("fn* parameters must be symbols")

    names = list(params)
    if VARIADIC_MARKER not in names:
        return Closure([p.name for p in names], body, env)

    marker_at = names.index(VARIADIC_MARKER)
    if marker_at != len(names) - 2:
        raise MalSyntaxError("fn* '&' must be followed by exactly one parameter name")
    variadic = names[-1]
    if variadic == VARIADIC_MARKER:
        raise MalSyntaxError("fn* variadic parameter name cannot be '&'")
    return Closure([p.name for p in names[:marker_at]], body, env, variadic=variadic.name)


def fn_form(
    tail: Sequence[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> MalValue:
    """(fn* (params...) body) creates a closure over the current environment."""
    if len(tail) != 2:
        raise MalArityError(f"fn* requires exactly 2 arguments, got {len(tail)}")
    params, body = tail
    return make_closure(params, body, env)
