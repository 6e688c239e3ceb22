from typing import Sequence

from mal import EvaluatorFn
from mal import SExpression, MalValue
from mal.errors import MalArityError, MalInvalidSymbol
from mal.types.environment import Environment
from mal.types.symbol import Symbol


def def_form(
    tail: Sequence[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> MalValue:
    """
    (def! name value)
    Binds in the current frame only and returns the bound value.
    """
    if len(tail) != 2:
        raise MalArityError(f"def! requires exactly 2 arguments, got {len(tail)}")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise MalInvalidSymbol(f"def! binding name must be a symbol, got {name!r}")
    value = evaluate_fn(val_expr, env)
    return env.set(name, value)
