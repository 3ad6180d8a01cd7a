"""Pretty printer: render any Sexpr back to source-like text.

A cons chain prints as "(e1 e2 ...)": after the first element the printer
stays "inside the list", emitting one leading space per further element
instead of a new "(". A non-nil, non-cons tail prints as " . tail" before the
closing paren, and the nil terminator prints nothing. Standalone atoms print
their lexeme; strings get their surrounding quotes back and functions are
prefixed with #' (or #macro' for macros).
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from mica.types.sexpr import Cons, Function, Sexpr, String, NIL, is_nil


def _atom(sexpr: Sexpr) -> str:
    if isinstance(sexpr, Function):
        prefix = "#macro'" if sexpr.is_macro else "#'"
        return prefix + sexpr.name
    if isinstance(sexpr, String):
        return f'"{sexpr.lexeme}"'
    return sexpr.lexeme


def pretty_print(sexpr: Optional[Sexpr]) -> str:
    if sexpr is None:
        sexpr = NIL
    if not isinstance(sexpr, Cons):
        return _atom(sexpr)

    with StringIO() as buffer:
        buffer.write("(")
        buffer.write(pretty_print(sexpr.car))
        node = sexpr.cdr
        while isinstance(node, Cons):
            buffer.write(" ")
            buffer.write(pretty_print(node.car))
            node = node.cdr
        if not is_nil(node):
            buffer.write(" . ")
            buffer.write(_atom(node))
        buffer.write(")")
        return buffer.getvalue()
