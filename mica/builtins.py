"""Eager primitives over S-expression data.

Every primitive takes the caller's environment and the already-evaluated
argument list (a cons chain) and returns a Sexpr.
"""
from __future__ import annotations

import math

from mica import LispValue, SExpression
from mica.errors import MicaRecursionError, MicaTypeError
from mica.types.bind import split_args
from mica.types.environment import Environment
from mica.types.sexpr import (
    Atom, Cons, Function, NIL, Number, Sexpr, boolean, list_items, make_list,
)


def _numeric(value: Sexpr, name: str) -> int | float:
    if not isinstance(value, Number):
        raise MicaTypeError(f"All arguments to {name} must be numbers, got {value}")
    return value.value


def _numbers(args: SExpression, name: str) -> list[int | float]:
    return [_numeric(v, name) for v in list_items(args)[0]]


# -------------------------------
# List operations
# -------------------------------
def car(env: Environment, args: SExpression) -> LispValue:
    (pair,) = split_args(args, "car", 1)
    if not isinstance(pair, Cons):
        raise MicaTypeError(f"car requires a cons, got {pair}")
    return pair.car


def cdr(env: Environment, args: SExpression) -> LispValue:
    (pair,) = split_args(args, "cdr", 1)
    if not isinstance(pair, Cons):
        raise MicaTypeError(f"cdr requires a cons, got {pair}")
    return pair.cdr


def cons(env: Environment, args: SExpression) -> LispValue:
    head, tail = split_args(args, "cons", 2)
    return Cons(head, tail)


# -------------------------------
# Arithmetic
# -------------------------------
def _fold(op, args: SExpression, name: str) -> Number:
    try:
        return Number.from_value(op(_numbers(args, name)))
    except OverflowError as e:
        # int operands too large to mix with a float
        raise MicaRecursionError(f"{name}: numeric result out of range") from e


def add(env: Environment, args: SExpression) -> LispValue:
    return _fold(sum, args, "+")


def mul(env: Environment, args: SExpression) -> LispValue:
    return _fold(math.prod, args, "*")


def neg(env: Environment, args: SExpression) -> LispValue:
    """Negate every argument, returning them as a list: (neg 1 2) -> (-1 -2)."""
    return make_list([Number.from_value(-n) for n in _numbers(args, "neg")])


# -------------------------------
# Comparison and predicates
# -------------------------------
def lt(env: Environment, args: SExpression) -> LispValue:
    a, b = split_args(args, "<", 2)
    return boolean(_numeric(a, "<") < _numeric(b, "<"))


def eq(env: Environment, args: SExpression) -> LispValue:
    """Identity on atoms: same node type and lexeme. Cons cells are never eq."""
    a, b = split_args(args, "eq", 2)
    if isinstance(a, Cons) or type(a) is not type(b):
        return NIL
    if isinstance(a, Function):
        return boolean(a.name == b.name)
    return boolean(isinstance(a, Atom) and a.lexeme == b.lexeme)


def consp(env: Environment, args: SExpression) -> LispValue:
    (value,) = split_args(args, "consp", 1)
    return boolean(isinstance(value, Cons))


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    env.update({
        name: Function(name, fn)
        for name, fn in (
            ("car", car),
            ("cdr", cdr),
            ("cons", cons),
            ("+", add),
            ("*", mul),
            ("neg", neg),
            ("<", lt),
            ("eq", eq),
            ("consp", consp),
        )
    })
