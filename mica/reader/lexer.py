"""
  Lexer: source text -> flat token stream

Scans character by character, keeping a pending token plus two flags
(inside a string, escaping the next character):

- a backslash copies the following character into the pending token as-is,
  inside or outside a string; there are no escape codes such as \\n
- a double quote opens a string (flushing any pending atom first) or closes
  one, emitting a "string" token
- ( ) , ' ` . outside a string flush the pending atom and emit their own token
- whitespace outside a string flushes the pending atom
- anything else extends the pending token

At end of input a pending token is flushed, as a string when the string was
never closed. The lexer itself never fails.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple

from mica.types.sexpr import Literal, Number, OPERATORS, make_atom

LPAREN = "lparen"
RPAREN = "rparen"
OP = "op"
STRING = "string"
NUMBER = "number"
SYMBOL = "symbol"
LITERAL = "literal"

_ATOM_KINDS = {Literal: LITERAL, Number: NUMBER}


class Token(NamedTuple):
    kind: str
    lexeme: str


def _atom_token(text: str) -> Token:
    return Token(_ATOM_KINDS.get(type(make_atom(text)), SYMBOL), text)


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token(kind, lexeme) tuples."""
    current: list[str] = []
    in_string = False
    escaping = False

    for c in source:
        if escaping:
            current.append(c)
            escaping = False
        elif c == "\\":
            escaping = True
        elif c == '"':
            if in_string:
                yield Token(STRING, "".join(current))
                in_string = False
            else:
                if current:
                    yield _atom_token("".join(current))
                in_string = True
            current = []
        elif in_string:
            current.append(c)
        elif c in OPERATORS or c in "()":
            if current:
                yield _atom_token("".join(current))
                current = []
            if c == "(":
                yield Token(LPAREN, c)
            elif c == ")":
                yield Token(RPAREN, c)
            else:
                yield Token(OP, c)
        elif c.isspace():
            if current:
                yield _atom_token("".join(current))
                current = []
        else:
            current.append(c)

    if current:
        text = "".join(current)
        yield Token(STRING, text) if in_string else _atom_token(text)
