"""Application engine for mal.

Decides what happens to a fully evaluated application:
- a Closure is not run here; its body and a freshly bound frame are handed
  back to the evaluator loop as a TailCall, so recursion does not grow the
  Python stack;
- a builtin (any Python callable) is invoked with the runtime env and the
  argument list, and its result is final;
- anything else is an error.
"""

from __future__ import annotations

from typing import Sequence

from mal import MalValue, EvaluatorFn
from mal.errors import MalNotCallable
from mal.printer import pr_str
from mal.types.closure import Closure
from mal.types.environment import Environment
from mal.types.tail_call import TailCall


def apply(
    head: MalValue,
    args: Sequence[MalValue],
    env: Environment,
) -> MalValue | TailCall:
    """Apply either a Closure or a Python callable to evaluated arguments."""
    if isinstance(head, Closure):
        return TailCall(head.body, head.extend_env(args))
    elif callable(head):
        return head(env, list(args))
    else:
        raise MalNotCallable(f"{pr_str(head, True)} is not callable")


def call(
    fn: MalValue,
    args: Sequence[MalValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> MalValue:
    """Apply `fn` and run any resulting TailCall to a concrete value.

    For builtins that need to call back into user functions.
    """
    result = apply(fn, args, env)
    if isinstance(result, TailCall):
        return evaluate_fn(result.expr, result.env)
    return result
