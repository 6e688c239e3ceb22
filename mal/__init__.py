# Core type aliases for the mal data model.
# Runtime values use plain Python types where they fit (int, bool, str) and a
# handful of small classes where they don't (Symbol, Nil, List, Vector, HashMap,
# Closure). Builtins are plain Python callables taking (env, args).
#
# Naming guidance:
# - SExpression: Use in reader code to denote syntactic forms (code-as-data).
# - MalValue:    Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; forms and values share one representation.

from typing import Any, Callable

# Runtime value alias
MalValue = Any
# Forms alias (reader output is evaluated as-is)
SExpression = MalValue

# Evaluator function type: passed into special forms so they can recurse
EvaluatorFn = Callable[..., MalValue]
