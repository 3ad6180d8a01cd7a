from mica import SExpression, LispValue
from mica.errors import MicaArityError
from mica.evaluation.evaluator import evaluate
from mica.types.environment import Environment
from mica.types.lambda_fn import Lambda
from mica.types.sexpr import Cons, Function


def lambda_form(env: Environment, args: SExpression) -> LispValue:
    """(lambda params body...) -> a normal Function closing over `env`.

    Zero or more body forms; several forms run in order and the last value is
    returned, no forms yields nil.
    """
    if not isinstance(args, Cons):
        raise MicaArityError("lambda requires at least a parameter list")

    closure = Lambda(args.car, args.cdr, env, evaluate)
    return Function(closure.name, closure)
