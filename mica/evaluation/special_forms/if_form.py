from mica import SExpression, LispValue
from mica.evaluation.evaluator import evaluate
from mica.types.bind import split_args
from mica.types.environment import Environment
from mica.types.sexpr import NIL


def if_form(env: Environment, args: SExpression) -> LispValue:
    parts = split_args(args, "if", 2, 3)

    cond = evaluate(env, parts[0])
    # Only the literal nil is false; t, numbers (even 0), strings and lists are true.
    if cond != NIL:
        return evaluate(env, parts[1])
    elif len(parts) > 2:
        return evaluate(env, parts[2])
    else:
        return NIL
