from typing import Sequence

from mal import EvaluatorFn
from mal import SExpression
from mal.errors import MalArityError
from mal.types.environment import Environment
from mal.types.tail_call import TailCall


def do_form(
    tail: Sequence[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> TailCall:
    if not tail:
        raise MalArityError("do requires at least 1 argument")
    for e in tail[:-1]:
        evaluate_fn(e, env)
    # The last form is left for the evaluator loop
    return TailCall(tail[-1], env)
