"""
  Reader: tokens -> S-expression trees

Grammar, consuming tokens left to right:

    sexpr    := "(" cons_tail | Op sexpr | atom
    cons_tail:= "." sexpr ")"       dotted pair, consumes the closing paren
              | ")"                 end of list => nil
              | sexpr cons_tail     proper cons
    atom     := string | number | symbol | literal

An operator token read in datum position becomes a one-argument prefix form:
'x reads as (' . x), and likewise for ` , and .; the evaluator recognises
these shapes, the reader does not expand them.

List elements are collected iteratively; only nesting consumes stack, and
nesting depth is bounded by the runtime depth guard.
"""

from __future__ import annotations

from typing import Iterator, Iterable, Optional

from mica.errors import MicaSyntaxError
from mica.reader.lexer import (
    LITERAL, LPAREN, NUMBER, OP, RPAREN, STRING, SYMBOL, Token, lex,
)
from mica.runtime_context import nesting
from mica.types.sexpr import (
    DOT, Cons, Literal, NIL, Number, Operator, Sexpr, String, Symbol, make_list,
)

_ATOMS = {
    STRING: String,
    NUMBER: Number,
    SYMBOL: Symbol,
    LITERAL: Literal,
}


class TokenStream:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens = iter(tokens)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> Optional[Sexpr]:
        """Read one datum; None when the stream is exhausted."""
        tok = self.advance()
        if tok is None:
            return None

        with nesting("reading"):
            if tok.kind == LPAREN:
                return self._parse_cons_tail()

            if tok.kind == OP:
                operand = self.parse_expr()
                if operand is None:
                    raise MicaSyntaxError(f"Nothing follows the '{tok.lexeme}' operator")
                return Cons(Operator(tok.lexeme), operand)

            if tok.kind == RPAREN:
                raise MicaSyntaxError("Unexpected ')'")

            return _ATOMS[tok.kind](tok.lexeme)

    def _parse_cons_tail(self) -> Sexpr:
        items: list[Sexpr] = []
        while True:
            tok = self.peek()
            if tok is None:
                raise MicaSyntaxError("Unmatched '(': input ended inside a list")

            if tok.kind == RPAREN:
                self.advance()
                return make_list(items, NIL)

            if tok.kind == OP and tok.lexeme == DOT:
                self.advance()
                tail = self.parse_expr()
                if tail is None:
                    raise MicaSyntaxError("Unmatched '(': input ended after '.'")
                closing = self.advance()
                if closing is None or closing.kind != RPAREN:
                    raise MicaSyntaxError(f"Expected ')' after dotted cdr {tail}")
                return make_list(items, tail)

            items.append(self.parse_expr())

    def parse_all(self) -> Iterator[Sexpr]:
        while self.peek() is not None:
            yield self.parse_expr()


def read(source: str) -> list[Sexpr]:
    """Read every top-level form in `source`."""
    return list(TokenStream(lex(source)).parse_all())
