"""Core evaluator and trampoline for the mal interpreter.

`evaluate` is a loop over two pieces of state, the current expression and the
current environment. Special forms in tail position (`let*`, `do`, `if`) and
closure application do not recurse: they hand the next (expression,
environment) pair back as a TailCall and the loop continues with it, so
self-recursive functions run in constant Python stack space.
"""

from __future__ import annotations

from mal import SExpression, MalValue
from mal.evaluation.apply import apply
from mal.evaluation.special_forms import SPECIAL_FORMS
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.tail_call import TailCall
from mal.types.values import HashMap, List, Vector


def evaluate(expr: SExpression, env: Environment) -> MalValue:
    """
    Trampoline evaluator: tail-call aware evaluation.
    """
    while True:
        if not isinstance(expr, List) or not expr:
            return eval_ast(expr, env)

        head = expr[0]
        if isinstance(head, Symbol) and head in SPECIAL_FORMS:
            result = SPECIAL_FORMS[head](expr[1:], env, evaluate)
        else:
            evaluated = eval_ast(expr, env)
            result = apply(evaluated[0], evaluated[1:], env)

        if not isinstance(result, TailCall):
            return result
        expr, env = result.expr, result.env


def eval_ast(expr: SExpression, env: Environment) -> MalValue:
    """Structural evaluation: look up symbols, evaluate collection elements.

    Elements are evaluated left to right, so side effects inside them are
    observed in source order. Collections keep their shape.
    """
    match expr:
        case Symbol():
            return env.get(expr)
        case List():
            return List([evaluate(e, env) for e in expr])
        case Vector():
            return Vector([evaluate(e, env) for e in expr])
        case HashMap():
            return HashMap({k: evaluate(v, env) for k, v in expr.items()})

    # --- Atoms return as-is ---
    return expr
