"""
  mal Reader: Lexer and Parser

- Streaming, lazy parsing
- Emits the runtime value shapes directly, code is data:

    - nil -> Nil
    - true / false -> bool
    - integers -> int
    - "strings" -> str
    - :keywords -> str tagged with KEYWORD_PREFIX
    - ( ... ) -> List
    - [ ... ] -> Vector
    - { ... } -> HashMap (string or keyword keys only)
    - anything else -> Symbol
    - 'x `x ~x ~@x @x ^m x -> reader macro expansions, e.g. (quote x)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from mal import SExpression
from mal.errors import MalIncompleteInput, MalSyntaxError
from mal.reader.reader_macros import reader_macros
from mal.types.nil import Nil
from mal.types.symbol import Symbol
from mal.types.values import HashMap, List, Vector, keyword


TOKEN_RE = re.compile(
    r"[\s,]*(?:"  # whitespace and commas are separators
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<splice>~@)"  # ~@
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<macro>['`~^@])"  # single-character reader macros
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<bad_string>"(?:\\.|[^\\"])*)'  # string running into end of input
    r'|(?P<atom>[^\s\[\]{}()\'"`,;~^@]+)'  # numbers, symbols, keywords
    r")",
    re.DOTALL,
)

INT_RE = re.compile(r"-?\d+")

CLOSERS: dict[str, str] = {
    "lparen": "rparen",
    "lbracket": "rbracket",
    "lbrace": "rbrace",
}

CLOSER_TEXT: dict[str, str] = {
    "rparen": ")",
    "rbracket": "]",
    "rbrace": "}",
}

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "\\": "\\",
    '"': '"',
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            # Only trailing separators remain
            break
        pos = m.end()
        kind = m.lastgroup
        if kind is None or kind == "comment":
            continue
        if kind == "bad_string":
            raise MalIncompleteInput("expected '\"', got EOF")
        if kind == "splice":
            yield "macro", m.group(kind)
            continue
        yield kind, m.group(kind)


def unescape(token: str) -> str:
    """Strip the quotes from a string token and resolve backslash escapes."""
    return re.sub(
        r"\\(.)",
        lambda m: STRING_ESCAPES.get(m.group(1), m.group(1)),
        token[1:-1],
        flags=re.DOTALL,
    )


def read_atom(token: str) -> SExpression:
    if INT_RE.fullmatch(token):
        return int(token)
    if token == "nil":
        return Nil
    if token == "true":
        return True
    if token == "false":
        return False
    if token.startswith(":"):
        return keyword(token[1:])
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[SExpression]:
        """Parse the next top-level form, or return None at end of input."""
        if self.peek()[0] is None:
            return None
        return self.parse_nested()

    def parse_nested(self) -> SExpression:
        """Parse a form that must be present (inside a collection or macro)."""
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise MalIncompleteInput("expected form, got EOF")

        if tok_type == "macro":
            return reader_macros.dispatch(tok_val, self)

        if tok_type in CLOSERS:
            items = self._parse_seq(CLOSERS[tok_type])
            if tok_type == "lparen":
                return List(items)
            if tok_type == "lbracket":
                return Vector(items)
            return self._make_hash_map(items)

        if tok_type in CLOSER_TEXT:
            raise MalSyntaxError(f"unexpected '{tok_val}'")

        if tok_type == "string":
            return unescape(tok_val)

        if tok_type == "atom":
            return read_atom(tok_val)

        raise MalSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def _parse_seq(self, closer: str) -> list[SExpression]:
        items: list[SExpression] = []
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                raise MalIncompleteInput(f"expected '{CLOSER_TEXT[closer]}', got EOF")
            if tok_type == closer:
                self.advance()
                return items
            items.append(self.parse_nested())

    @staticmethod
    def _make_hash_map(items: list[SExpression]) -> HashMap:
        if len(items) % 2 != 0:
            raise MalSyntaxError("hash-map literal needs an even number of forms")
        result = HashMap()
        for k, v in zip(items[::2], items[1::2]):
            if not isinstance(k, str):
                raise MalSyntaxError(f"hash-map keys must be strings or keywords, got {k!r}")
            result[k] = v
        return result

    def parse_all(self) -> Iterator[SExpression]:
        while (expr := self.parse_expr()) is not None:
            yield expr


def read_str(source: str) -> Optional[SExpression]:
    """Read exactly one form from `source`; None if it holds only comments/blanks."""
    return TokenStream(lex(source)).parse_expr()


def read_all(source: str) -> list[SExpression]:
    return list(TokenStream(lex(source)).parse_all())
