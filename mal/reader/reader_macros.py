from __future__ import annotations

from typing import Callable, TYPE_CHECKING

from mal import SExpression
from mal.errors import MalSyntaxError
from mal.types.symbol import Symbol
from mal.types.values import List

if TYPE_CHECKING:
    from mal.reader.parser import TokenStream

ReaderMacroFn = Callable[["TokenStream"], SExpression]


class ReaderMacros:
    """
    Registry of reader macros.
    Maps prefix tokens (like ', `, ~, @) to functions that consume the
    following form(s) from the TokenStream and return the expanded form.
    """

    def __init__(self):
        self.macros: dict[str, ReaderMacroFn] = {}

    def define(self, token: str, fn: ReaderMacroFn) -> None:
        """Register a reader macro for a given prefix token."""
        self.macros[token] = fn

    def dispatch(self, token: str, stream: "TokenStream") -> SExpression:
        if token not in self.macros:
            raise MalSyntaxError(f"No reader macro defined for {token!r}")
        return self.macros[token](stream)


def _wrap(name: Symbol) -> ReaderMacroFn:
    """'x style shorthand: (name x)."""
    def expand(stream: "TokenStream") -> SExpression:
        return List([name, stream.parse_nested()])
    return expand


def _with_meta(stream: "TokenStream") -> SExpression:
    # ^meta form => (with-meta form meta)
    meta = stream.parse_nested()
    form = stream.parse_nested()
    return List([Symbol("with-meta"), form, meta])


# -------------------------
# Single global instance
# -------------------------
reader_macros: ReaderMacros = ReaderMacros()

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    "~": Symbol("unquote"),
    "~@": Symbol("splice-unquote"),
    "@": Symbol("deref"),
}

for key, name in QUOTE_FORMS.items():
    reader_macros.define(key, _wrap(name))

reader_macros.define("^", _with_meta)
