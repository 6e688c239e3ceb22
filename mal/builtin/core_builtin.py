"""Built-in functions for the mal runtime environment.

This module defines core arithmetic, comparison, sequence, predicate, string
and I/O builtins exposed to mal code. Every builtin takes the calling
environment and the list of already evaluated arguments.
"""
from __future__ import annotations

from pathlib import Path

from mal import MalValue
from mal.errors import MalArityError, MalError, MalThrown, MalTypeError
from mal.evaluation.apply import call
from mal.evaluation.evaluator import evaluate
from mal.printer import pr_join
from mal.reader.parser import read_str
from mal.types.closure import Closure
from mal.types.environment import Environment
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.values import (
    HashMap,
    List,
    Vector,
    is_keyword,
    is_number,
    is_sequential,
    is_string,
    keyword,
)


def _expect(name: str, args: list[MalValue], n: int) -> None:
    if len(args) != n:
        raise MalArityError(f"{name} requires exactly {n} argument(s), got {len(args)}")


def _numbers(name: str, args: list[MalValue]) -> list[int]:
    for a in args:
        if not is_number(a):
            raise MalTypeError(f"All arguments to {name} must be numbers")
    return args


# -------------------------------
# Equality
# -------------------------------
def is_equal(a: MalValue, b: MalValue) -> bool:
    """Structural equality: lists and vectors compare element-wise with each other."""
    if is_sequential(a) and is_sequential(b):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, HashMap) and isinstance(b, HashMap):
        if a.keys() != b.keys():
            return False
        return all(is_equal(a[k], b[k]) for k in a)
    if type(a) != type(b):
        return False
    return a == b


def equals(env: Environment, args: list[MalValue]) -> bool:
    """(= a b) -> true if a and b are structurally equal."""
    _expect("=", args, 2)
    return is_equal(args[0], args[1])


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[MalValue]) -> int:
    """Return the sum of all arguments."""
    return sum(_numbers("+", args))


def sub(env: Environment, args: list[MalValue]) -> int:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not args:
        raise MalArityError("- requires at least 1 argument")
    first, *rest = _numbers("-", args)
    if not rest:
        return -first
    for x in rest:
        first -= x
    return first


def mul(env: Environment, args: list[MalValue]) -> int:
    """Return the product of all arguments."""
    result = 1
    for x in _numbers("*", args):
        result *= x
    return result


def div(env: Environment, args: list[MalValue]) -> int:
    """Integer division left-to-right, truncating toward zero."""
    if len(args) < 2:
        raise MalArityError("/ requires at least 2 arguments")
    result, *rest = _numbers("/", args)
    for x in rest:
        if x == 0:
            raise MalError("Division by zero")
        q = abs(result) // abs(x)
        result = q if (result >= 0) == (x > 0) else -q
    return result


# -------------------------------
# Comparison
# -------------------------------
def lt(env: Environment, args: list[MalValue]) -> bool:
    _expect("<", args, 2)
    a, b = _numbers("<", args)
    return a < b


def lte(env: Environment, args: list[MalValue]) -> bool:
    _expect("<=", args, 2)
    a, b = _numbers("<=", args)
    return a <= b


def gt(env: Environment, args: list[MalValue]) -> bool:
    _expect(">", args, 2)
    a, b = _numbers(">", args)
    return a > b


def gte(env: Environment, args: list[MalValue]) -> bool:
    _expect(">=", args, 2)
    a, b = _numbers(">=", args)
    return a >= b


# -------------------------------
# Sequences and maps
# -------------------------------
def list_builtin(env: Environment, args: list[MalValue]) -> List:
    """Construct a list from the provided arguments."""
    return List(args)


def is_list(env: Environment, args: list[MalValue]) -> bool:
    _expect("list?", args, 1)
    return isinstance(args[0], List)


def vector_builtin(env: Environment, args: list[MalValue]) -> Vector:
    return Vector(args)


def is_vector(env: Environment, args: list[MalValue]) -> bool:
    _expect("vector?", args, 1)
    return isinstance(args[0], Vector)


def hash_map(env: Environment, args: list[MalValue]) -> HashMap:
    """(hash-map k v ...) -> new map; keys must be strings or keywords."""
    if len(args) % 2 != 0:
        raise MalArityError("hash-map requires an even number of arguments")
    result = HashMap()
    for k, v in zip(args[::2], args[1::2]):
        if not isinstance(k, str):
            raise MalTypeError("hash-map keys must be strings or keywords")
        result[k] = v
    return result


def is_map(env: Environment, args: list[MalValue]) -> bool:
    _expect("map?", args, 1)
    return isinstance(args[0], HashMap)


def is_empty(env: Environment, args: list[MalValue]) -> bool:
    """(empty? x) -> true for nil and for collections with no elements."""
    _expect("empty?", args, 1)
    x = args[0]
    if x is Nil:
        return True
    if is_sequential(x) or isinstance(x, HashMap):
        return len(x) == 0
    raise MalTypeError("empty? expects a collection")


def count(env: Environment, args: list[MalValue]) -> int:
    """(count x) -> number of elements; nil counts as 0."""
    _expect("count", args, 1)
    x = args[0]
    if x is Nil:
        return 0
    if is_sequential(x) or isinstance(x, HashMap):
        return len(x)
    raise MalTypeError("count expects a collection")


def apply_builtin(env: Environment, args: list[MalValue]) -> MalValue:
    """(apply f a b (c d)) calls f with a, b, c, d."""
    if len(args) < 2:
        raise MalArityError("apply requires a function and a list of arguments")
    fn, *leading, last = args
    if not is_sequential(last):
        raise MalTypeError("Last argument to apply must be a list or vector")
    return call(fn, leading + list(last), env, evaluate)


def map_builtin(env: Environment, args: list[MalValue]) -> List:
    """(map f xs) -> list of (f x) for each x in xs."""
    _expect("map", args, 2)
    fn, xs = args
    if not is_sequential(xs):
        raise MalTypeError("map expects a list or vector")
    return List([call(fn, [x], env, evaluate) for x in xs])


# -------------------------------
# Predicates
# -------------------------------
def is_nil(env: Environment, args: list[MalValue]) -> bool:
    _expect("nil?", args, 1)
    return args[0] is Nil


def is_true(env: Environment, args: list[MalValue]) -> bool:
    _expect("true?", args, 1)
    return args[0] is True


def is_false(env: Environment, args: list[MalValue]) -> bool:
    _expect("false?", args, 1)
    return args[0] is False


def is_symbol(env: Environment, args: list[MalValue]) -> bool:
    _expect("symbol?", args, 1)
    return isinstance(args[0], Symbol)


def is_string_builtin(env: Environment, args: list[MalValue]) -> bool:
    _expect("string?", args, 1)
    return is_string(args[0])


def keyword_builtin(env: Environment, args: list[MalValue]) -> str:
    _expect("keyword", args, 1)
    if not isinstance(args[0], str):
        raise MalTypeError("keyword expects a string")
    return keyword(args[0])


def is_keyword_builtin(env: Environment, args: list[MalValue]) -> bool:
    _expect("keyword?", args, 1)
    return is_keyword(args[0])


def is_fn(env: Environment, args: list[MalValue]) -> bool:
    _expect("fn?", args, 1)
    return isinstance(args[0], Closure) or callable(args[0])


# -------------------------------
# Strings and I/O
# -------------------------------
def pr_str_builtin(env: Environment, args: list[MalValue]) -> str:
    """(pr-str ...) -> readable representations joined by spaces."""
    return pr_join(args, True, " ")


def str_builtin(env: Environment, args: list[MalValue]) -> str:
    """(str ...) -> raw representations concatenated."""
    return pr_join(args, False, "")


def prn(env: Environment, args: list[MalValue]) -> MalValue:
    """Print readable representations joined by spaces; returns nil."""
    print(pr_join(args, True, " "))
    return Nil


def println(env: Environment, args: list[MalValue]) -> MalValue:
    """Print raw representations joined by spaces; returns nil."""
    print(pr_join(args, False, " "))
    return Nil


def read_string(env: Environment, args: list[MalValue]) -> MalValue:
    """(read-string "text") -> the first form in text, or nil when there is none."""
    _expect("read-string", args, 1)
    if not is_string(args[0]):
        raise MalTypeError("read-string expects a string")
    form = read_str(args[0])
    return Nil if form is None else form


def slurp(env: Environment, args: list[MalValue]) -> str:
    """(slurp "path") -> file contents as a string."""
    _expect("slurp", args, 1)
    if not is_string(args[0]):
        raise MalTypeError("slurp expects a file name")
    try:
        return Path(args[0]).read_text(encoding="utf-8")
    except OSError as e:
        raise MalError(f"slurp: cannot read {args[0]}: {e.strerror or e}") from e


def throw(env: Environment, args: list[MalValue]) -> MalValue:
    """(throw value) raises value to the caller of the evaluation."""
    _expect("throw", args, 1)
    raise MalThrown(args[0])


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    """Register all builtin functions into the given environment."""
    env.update(
        {
            Symbol("+"): add,
            Symbol("-"): sub,
            Symbol("*"): mul,
            Symbol("/"): div,
            Symbol("="): equals,
            Symbol("<"): lt,
            Symbol("<="): lte,
            Symbol(">"): gt,
            Symbol(">="): gte,
            Symbol("list"): list_builtin,
            Symbol("list?"): is_list,
            Symbol("vector"): vector_builtin,
            Symbol("vector?"): is_vector,
            Symbol("hash-map"): hash_map,
            Symbol("map?"): is_map,
            Symbol("empty?"): is_empty,
            Symbol("count"): count,
            Symbol("apply"): apply_builtin,
            Symbol("map"): map_builtin,
            Symbol("nil?"): is_nil,
            Symbol("true?"): is_true,
            Symbol("false?"): is_false,
            Symbol("symbol?"): is_symbol,
            Symbol("string?"): is_string_builtin,
            Symbol("keyword"): keyword_builtin,
            Symbol("keyword?"): is_keyword_builtin,
            Symbol("fn?"): is_fn,
            Symbol("pr-str"): pr_str_builtin,
            Symbol("str"): str_builtin,
            Symbol("prn"): prn,
            Symbol("println"): println,
            Symbol("read-string"): read_string,
            Symbol("slurp"): slurp,
            Symbol("throw"): throw,
        }
    )
