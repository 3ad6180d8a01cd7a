from mica import SExpression, LispValue
from mica.errors import MicaTypeError
from mica.evaluation.evaluator import evaluate
from mica.types.bind import split_args
from mica.types.environment import Environment
from mica.types.sexpr import Symbol


def setq_form(env: Environment, args: SExpression) -> LispValue:
    var_sym, val_expr = split_args(args, "setq", 2)
    if not isinstance(var_sym, Symbol):
        raise MicaTypeError(f"setq first argument must be a symbol, got {var_sym}")
    value = evaluate(env, val_expr)
    # always the caller's most local frame, shadowing rather than updating outer bindings
    return env.define(var_sym.lexeme, value)
