"""Compound value shapes and value-level predicates.

Lists and vectors are tuple subclasses: they are immutable, and "copying" one
is just handing out another reference to the same backing tuple. Slicing a
List returns a plain tuple, so callers wrap slices explicitly.
"""

from __future__ import annotations

from typing import Iterable

from mal import MalValue
from mal.types.nil import Nil

# Keywords are strings tagged with a leading marker character, so that they
# can be used as hash-map keys alongside plain strings.
KEYWORD_PREFIX = "ʞ"


class List(tuple):
    """An ordered sequence that is evaluated as an application."""

    __slots__ = ()

    def __new__(cls, items: Iterable[MalValue] = ()):
        return super().__new__(cls, items)

    def __repr__(self) -> str:
        return f"List({list(self)!r})"


class Vector(tuple):
    """An ordered sequence that evaluates element-wise and never applies."""

    __slots__ = ()

    def __new__(cls, items: Iterable[MalValue] = ()):
        return super().__new__(cls, items)

    def __repr__(self) -> str:
        return f"Vector({list(self)!r})"


class HashMap(dict):
    """String-keyed mapping. The evaluator only ever builds new maps."""

    def __repr__(self) -> str:
        return f"HashMap({dict(self)!r})"


def keyword(name: str) -> str:
    """Return the keyword value for `name` (idempotent on keywords)."""
    if is_keyword(name):
        return name
    return KEYWORD_PREFIX + name


def is_keyword(value: MalValue) -> bool:
    return isinstance(value, str) and value.startswith(KEYWORD_PREFIX)


def is_string(value: MalValue) -> bool:
    return isinstance(value, str) and not value.startswith(KEYWORD_PREFIX)


def is_number(value: MalValue) -> bool:
    # bool is a subclass of int; it is not a number here
    return isinstance(value, int) and not isinstance(value, bool)


def is_sequential(value: MalValue) -> bool:
    return isinstance(value, (List, Vector))


def is_truthy(value: MalValue) -> bool:
    """Only `false` and `nil` are falsy; 0, "" and empty collections are true."""
    return not (value is Nil or value is False)
