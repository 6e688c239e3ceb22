"""Runtime environment for mal.

An Environment is one frame of the scope chain: a mapping of names to
evaluated values plus a link to the frame it was created under. Frames only
ever point at their parent, never at their children, so ordinary reference
counting reclaims them as soon as no closure, child frame or pending
evaluation holds on to them.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Optional

from mal import MalValue
from mal.errors import MalArityError, MalInvalidSymbol, MalUnboundSymbol
from mal.types.symbol import Symbol


def _key(name: Symbol | str) -> str:
    if isinstance(name, Symbol):
        return name.name
    if isinstance(name, str):
        return name
    raise MalInvalidSymbol(f"Cannot bind {name!r}, expected a symbol")


class Environment:
    """Hierarchical mapping from names to mal values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, MalValue] = {}
        self.outer: Environment | None = outer

    def new_child(self) -> Environment:
        """Return a fresh, empty frame whose parent is this frame."""
        return Environment(outer=self)

    def set(self, name: Symbol | str, value: MalValue) -> MalValue:
        """Bind `name` to `value` in this frame only and return `value`.

        Ancestor frames are never touched, so an inner binding shadows an
        outer one instead of overwriting it.
        """
        self.vars[_key(name)] = value
        return value

    def find(self, name: Symbol | str) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `name`, or None."""
        key = _key(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: Symbol | str) -> MalValue:
        """Look up the value bound to `name`, walking outwards to the root.

        Raises MalUnboundSymbol if no frame binds it.
        """
        env = self.find(name)
        if env is None:
            raise MalUnboundSymbol(f"'{_key(name)}' not found")
        return env.vars[_key(name)]

    def bind(self, names: Iterable[Symbol | str], values: Iterable[MalValue]) -> Environment:
        """Pair positional names with positional values in this frame."""
        names = list(names)
        values = list(values)
        if len(names) != len(values):
            raise MalArityError(
                f"Expected {len(names)} argument(s), got {len(values)}"
            )
        for name, value in zip(names, values):
            self.set(name, value)
        return self

    def update(self, mapping: dict[Symbol | str, MalValue]) -> None:
        """Bulk-define a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.set(k, v)

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Frame count and local names, for debugging."""
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"<Environment depth={depth} names={sorted(self.vars)}>"
