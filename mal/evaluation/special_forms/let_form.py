from typing import Sequence

from mal import EvaluatorFn
from mal import SExpression
from mal.errors import MalArityError, MalSyntaxError
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.tail_call import TailCall
from mal.types.values import is_sequential


def let_form(
    tail: Sequence[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> TailCall:
    """
    (let* (name expr ...) body)

    Each expression is evaluated in the frame built so far, so later bindings
    see earlier ones. The body is handed back to the evaluator loop together
    with the new frame.
    """
    if len(tail) != 2:
        raise MalArityError(f"let* requires exactly 2 arguments, got {len(tail)}")

    bindings, body = tail
    if not is_sequential(bindings):
        raise MalSyntaxError("let* needs a binding list")
    if len(bindings) % 2 != 0:
        raise MalSyntaxError("let* bindings must be balanced")

    let_env = env.new_child()
    for name, val_expr in zip(bindings[::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise MalSyntaxError(f"let* binding names must be symbols, got {name!r}")
        let_env.set(name, evaluate_fn(val_expr, let_env))

    return TailCall(body, let_env)
