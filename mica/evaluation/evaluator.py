"""Core evaluator for the mica interpreter.

Dispatches on the node type of the expression:

- (' . x)        quote: x is returned unevaluated
- (` . x)        quasiquote: x is rebuilt, (, . y) holes are evaluated
- (f . args)     application: f must evaluate to a Function; normal
                 functions receive their arguments evaluated left to right,
                 lazy functions and macros receive the raw forms
- symbol         lookup through the environment chain
- anything else  self-evaluating

The result of a function body is returned as-is; macros perform their own
substitute-then-evaluate step (see mica.types.lambda_fn.Macro).

Recursion is bounded by mica.runtime_context.nesting; list spines are walked
iteratively so only nesting depth costs stack.
"""

from __future__ import annotations

from mica import SExpression, LispValue
from mica.errors import MicaNotAFunction, MicaRecursionError, MicaUnboundSymbol
from mica.debug_utils.pprint import pretty_print
from mica.reader.parser import read
from mica.runtime_context import nesting
from mica.types.environment import Environment
from mica.types.sexpr import (
    QUASIQUOTE, QUOTE, UNQUOTE, NIL, Cons, Function, Operator, Sexpr, Specialness,
    Symbol, list_items, make_list,
)


def _is_operator_form(expr: Sexpr, op: str) -> bool:
    return isinstance(expr, Cons) and isinstance(expr.car, Operator) and expr.car.lexeme == op


def evaluate(env: Environment, expr: SExpression) -> LispValue:
    """Evaluate a single expression in `env`."""
    with nesting():
        if isinstance(expr, Cons):
            head = expr.car
            if isinstance(head, Operator):
                if head.lexeme == QUOTE:
                    return expr.cdr
                if head.lexeme == QUASIQUOTE:
                    return eval_quasiquote(env, expr.cdr)

            fn = evaluate(env, head)
            if not isinstance(fn, Function):
                raise MicaNotAFunction(
                    f"{pretty_print(head)} did not evaluate to a function: {pretty_print(fn)}"
                )
            if fn.special is Specialness.NORMAL:
                args = eval_list(env, expr.cdr)
            else:
                args = expr.cdr
            return fn.body(env, args)

        if isinstance(expr, Symbol):
            value = env.lookup(expr.lexeme)
            if value is None:
                raise MicaUnboundSymbol(f"The symbol '{expr.lexeme}' is not defined")
            return value

        # --- Atoms return as-is ---
        return expr


def eval_list(env: Environment, args: SExpression) -> LispValue:
    """Evaluate each element of a cons chain, left to right; the tail is kept as-is."""
    items, tail = list_items(args)
    return make_list([evaluate(env, item) for item in items], tail)


def eval_quasiquote(env: Environment, expr: SExpression) -> LispValue:
    """Rebuild `expr`, replacing each (, . x) hole with the value of x."""
    with nesting():
        if not isinstance(expr, Cons):
            return expr
        if _is_operator_form(expr, UNQUOTE):
            return evaluate(env, expr.cdr)

        items = []
        node: Sexpr = expr
        while isinstance(node, Cons) and not _is_operator_form(node, UNQUOTE):
            items.append(eval_quasiquote(env, node.car))
            node = node.cdr
        # `(a . ,b) leaves an unquote form as the tail
        tail = evaluate(env, node.cdr) if isinstance(node, Cons) else node
        return make_list(items, tail)


def apply_env(env: Environment, expr: SExpression) -> SExpression:
    """Substitute bound symbols in `expr` with their values; nothing is evaluated."""
    with nesting("macro substitution"):
        if isinstance(expr, Symbol):
            value = env.lookup(expr.lexeme)
            return expr if value is None else value
        if not isinstance(expr, Cons):
            return expr
        items, tail = list_items(expr)
        return make_list([apply_env(env, item) for item in items], apply_env(env, tail))


def evaluate_program(env: Environment, forms: list[SExpression]) -> LispValue:
    """Evaluate top-level forms in order; the value of the last one (nil if none)."""
    result: LispValue = NIL
    for form in forms:
        result = evaluate(env, form)
    return result


def evaluate_source(env: Environment, source: str) -> LispValue:
    """Run the full read -> evaluate pipeline over `source` in `env`."""
    try:
        return evaluate_program(env, read(source))
    except RecursionError as e:
        raise MicaRecursionError("Python stack exhausted while evaluating") from e
