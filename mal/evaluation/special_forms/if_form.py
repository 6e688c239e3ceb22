from typing import Sequence

from mal import EvaluatorFn
from mal import SExpression
from mal.errors import MalArityError
from mal.types.environment import Environment
from mal.types.nil import Nil
from mal.types.tail_call import TailCall
from mal.types.values import is_truthy


def if_form(
    tail: Sequence[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> TailCall:
    if len(tail) not in (2, 3):
        raise MalArityError(f"if requires 2 or 3 arguments, got {len(tail)}")

    cond = evaluate_fn(tail[0], env)
    if is_truthy(cond):
        return TailCall(tail[1], env)
    if len(tail) == 3:
        return TailCall(tail[2], env)
    return TailCall(Nil, env)
