"""S-expression value model for mica.

Every value the reader produces or the evaluator computes is one of a closed set
of immutable node types:

- Literal   the truth constants ``t`` and ``nil``; ``nil`` also ends proper lists
- Number    numeric atom, carrying its lexeme
- Symbol    name atom, resolved through an Environment
- String    string atom (lexeme excludes the surrounding quotes)
- Operator  one of the reader operators ``' ` , .``
- Cons      an ordered pair
- Function  a named native body plus its argument-evaluation mode

Atoms keep their source lexeme; numeric arithmetic converts on demand.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, Protocol, TYPE_CHECKING

from mica.errors import MicaRecursionError

if TYPE_CHECKING:
    from mica.types.environment import Environment


NUMBER_RE = re.compile(r"-?[0-9]*\.?[0-9]+")
CONSTANTS = frozenset(("t", "nil"))

QUOTE = "'"
QUASIQUOTE = "`"
UNQUOTE = ","
DOT = "."
OPERATORS = frozenset((QUOTE, QUASIQUOTE, UNQUOTE, DOT))


class Specialness(Enum):
    NORMAL = "normal"  # arguments evaluated left to right before the call
    LAZY = "lazy"      # raw argument forms handed to the body
    MACRO = "macro"    # raw forms, body substitutes and evaluates itself


class Sexpr:
    """Common base of all node types."""

    __slots__ = ()

    def __str__(self) -> str:
        from mica.debug_utils.pprint import pretty_print
        return pretty_print(self)


@dataclass(frozen=True, slots=True)
class Atom(Sexpr):
    lexeme: str

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.lexeme!r})"


@dataclass(frozen=True, slots=True, repr=False)
class Literal(Atom):
    pass


@dataclass(frozen=True, slots=True, repr=False)
class Number(Atom):

    @property
    def value(self) -> int | float:
        if "." in self.lexeme:
            return float(self.lexeme)
        try:
            return int(self.lexeme)
        except ValueError as e:
            raise MicaRecursionError(f"Number too large to convert: {e}") from e

    @staticmethod
    def from_value(value: int | float) -> Number:
        if isinstance(value, float):
            if not math.isfinite(value):
                raise MicaRecursionError(f"Numeric result out of range: {value}")
            # positional notation only, "1e-07" would read back as a symbol
            text = format(Decimal(repr(value)), "f")
            return Number(text if "." in text else text + ".0")
        try:
            return Number(str(value))
        except ValueError as e:
            raise MicaRecursionError(f"Numeric result too large: {e}") from e


@dataclass(frozen=True, slots=True, repr=False)
class Symbol(Atom):
    pass


@dataclass(frozen=True, slots=True, repr=False)
class String(Atom):
    pass


@dataclass(frozen=True, slots=True, repr=False)
class Operator(Atom):
    pass


@dataclass(frozen=True, slots=True)
class Cons(Sexpr):
    car: Sexpr
    cdr: Sexpr

    def __iter__(self):
        """Iterate the elements of the proper-list prefix (a dotted tail is skipped)."""
        node: Sexpr = self
        while isinstance(node, Cons):
            yield node.car
            node = node.cdr


class NativeBody(Protocol):
    """Capability invoked when a Function is applied.

    Receives the caller's environment and the argument list: evaluated for
    normal functions, raw forms for lazy functions and macros.
    """

    def __call__(self, env: Environment, args: Sexpr) -> Sexpr: ...


@dataclass(frozen=True, eq=False, slots=True)
class Function(Sexpr):
    name: str
    body: NativeBody = field(repr=False)
    special: Specialness = Specialness.NORMAL

    @property
    def lexeme(self) -> str:
        return self.name

    @property
    def is_macro(self) -> bool:
        return self.special is Specialness.MACRO


NIL = Literal("nil")
T = Literal("t")


def make_atom(text: str) -> Atom:
    """Classify a bare token: truth constant, then number, else symbol."""
    if text in CONSTANTS:
        return Literal(text)
    if NUMBER_RE.fullmatch(text):
        return Number(text)
    return Symbol(text)


def boolean(cond: bool) -> Literal:
    return T if cond else NIL


def is_nil(expr: Sexpr | None) -> bool:
    return expr is None or expr == NIL


def make_list(items: Iterable[Sexpr], tail: Sexpr = NIL) -> Sexpr:
    """Build a right-nested cons chain from `items`, ending in `tail`."""
    result = tail
    for item in reversed(list(items)):
        result = Cons(item, result)
    return result


def list_items(expr: Sexpr) -> tuple[list[Sexpr], Sexpr]:
    """Split a cons chain into its elements and its terminator."""
    items = []
    while isinstance(expr, Cons):
        items.append(expr.car)
        expr = expr.cdr
    return items, expr
