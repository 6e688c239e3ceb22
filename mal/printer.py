"""Render mal values back into source text.

`pr_str(value, readably=True)` is the inverse of the reader for data: with
`readably` set, strings are quoted and escaped so that reading the output
yields an equal value. With `readably` unset strings are written raw, which is
what `str` and `println` want.
"""

from __future__ import annotations

from mal import MalValue
from mal.types.closure import Closure
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.values import KEYWORD_PREFIX, HashMap, List, Vector

_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n"})


def escape(text: str) -> str:
    return '"' + text.translate(_ESCAPES) + '"'


def _pr_seq(items, opener: str, closer: str, readably: bool) -> str:
    return opener + " ".join(pr_str(item, readably) for item in items) + closer


def pr_str(value: MalValue, readably: bool = True) -> str:
    if value is Nil:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    match value:
        case Symbol():
            return value.name
        case str() if value.startswith(KEYWORD_PREFIX):
            return ":" + value[len(KEYWORD_PREFIX):]
        case str():
            return escape(value) if readably else value
        case int():
            return str(value)
        case List():
            return _pr_seq(value, "(", ")", readably)
        case Vector():
            return _pr_seq(value, "[", "]", readably)
        case HashMap():
            parts = []
            for k, v in value.items():
                parts.append(pr_str(k, readably))
                parts.append(pr_str(v, readably))
            return "{" + " ".join(parts) + "}"
        case Closure():
            return "#<function>"
        case _ if callable(value):
            return "#<builtin>"
    return str(value)


def pr_join(values, readably: bool, sep: str) -> str:
    """Print each value and join them, as `pr-str`, `str`, `prn` and `println` do."""
    return sep.join(pr_str(v, readably) for v in values)
