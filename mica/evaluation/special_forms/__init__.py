"""Registry of lazy primitives (special forms) for the mica evaluator.

Each handler receives the caller's environment and its *unevaluated* argument
forms, and is installed in the global frame as a lazy Function.
"""

from mica.evaluation.special_forms.defmacro_form import defmacro_form
from mica.evaluation.special_forms.if_form import if_form
from mica.evaluation.special_forms.lambda_form import lambda_form
from mica.evaluation.special_forms.set_form import setq_form
from mica.types.environment import Environment
from mica.types.sexpr import Function, Specialness

SPECIAL_FORMS = {
    "lambda": lambda_form,
    "setq": setq_form,
    "if": if_form,
    "defmacro": defmacro_form,
}


def register(env: Environment) -> None:
    env.update({
        name: Function(name, handler, Specialness.LAZY)
        for name, handler in SPECIAL_FORMS.items()
    })
