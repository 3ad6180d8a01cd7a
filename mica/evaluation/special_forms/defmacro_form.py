"""Special form: defmacro.

(defmacro name params body...) builds a macro Function and binds it under
`name` in the caller's most local frame.

Expansion is unhygienic: parameters are bound to the raw argument
forms in an isolated environment that sees neither the defining nor the calling
scope, every symbol of the body that names a parameter is replaced by its
argument form, and the result is evaluated in the caller's environment.
"""

from __future__ import annotations

import logging

from mica import SExpression, LispValue
from mica.errors import MicaArityError, MicaTypeError
from mica.evaluation.evaluator import apply_env, evaluate
from mica.types.environment import Environment
from mica.types.lambda_fn import Macro
from mica.types.sexpr import Cons, Function, Specialness, Symbol

log = logging.getLogger(__name__)


def defmacro_form(env: Environment, args: SExpression) -> LispValue:
    """Register a macro named by the first argument with params/body in the rest."""
    if not isinstance(args, Cons) or not isinstance(args.cdr, Cons):
        raise MicaArityError("defmacro requires a name and parameter list")

    macro_name = args.car
    if not isinstance(macro_name, Symbol):
        raise MicaTypeError(f"Macro name must be a symbol, got {macro_name}")

    params = args.cdr.car
    body = args.cdr.cdr
    if not isinstance(body, Cons):
        raise MicaArityError(f"Macro body of {macro_name.lexeme} cannot be empty")

    macro = Macro(macro_name.lexeme, params, body, evaluate, apply_env)
    fn = Function(macro.name, macro, Specialness.MACRO)
    log.debug("defining macro %s", macro_name.lexeme)
    return env.define(macro_name.lexeme, fn)
