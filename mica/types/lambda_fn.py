"""Native bodies for user-defined functions and macros.

Both classes implement the NativeBody capability, `(env, args) -> Sexpr`, and
are wrapped in a Function node by the `lambda` and `defmacro` primitives. The
evaluator is injected rather than imported so the type layer stays free of
evaluation logic.
"""

from __future__ import annotations

from mica import EvaluatorFn, LispValue, SExpression
from mica.debug_utils.pprint import pretty_print
from mica.types.bind import bind_params
from mica.types.environment import Environment
from mica.types.sexpr import NIL, Sexpr, list_items, make_list


class Lambda:
    """A closure: formal parameters, body forms, and the defining environment."""

    __slots__ = ("formals", "body", "env", "evaluate_fn", "name")

    def __init__(
        self,
        formals: SExpression,
        body: SExpression,
        env: Environment,
        evaluate_fn: EvaluatorFn,
    ):
        self.formals = formals
        self.body = body
        self.env = env
        self.evaluate_fn = evaluate_fn
        self.name = f"(lambda {pretty_print(formals)} {_body_text(body)})"

    def __call__(self, caller_env: Environment, args: Sexpr) -> LispValue:
        # Closures see the defining scope, never the caller's.
        local_env = bind_params(self.env, self.formals, args, self.name)
        result: LispValue = NIL
        for form in list_items(self.body)[0]:
            result = self.evaluate_fn(local_env, form)
        return result

    def __repr__(self) -> str:
        return self.name


class Macro:
    """A substitution macro.

    Invocation binds the formals to the *raw* argument forms in a frame built
    on a fresh, empty base environment (not the defining scope), substitutes
    those bindings into the body without evaluating anything, then evaluates
    the substituted forms in the caller's environment.
    """

    __slots__ = ("macro_name", "formals", "body", "evaluate_fn", "substitute_fn", "name")

    def __init__(
        self,
        macro_name: str,
        formals: SExpression,
        body: SExpression,
        evaluate_fn: EvaluatorFn,
        substitute_fn: EvaluatorFn,
    ):
        self.macro_name = macro_name
        self.formals = formals
        self.body = body
        self.evaluate_fn = evaluate_fn
        self.substitute_fn = substitute_fn
        self.name = (
            f"(defmacro {macro_name} {pretty_print(formals)} {_body_text(body)})"
        )

    def expand(self, args: Sexpr) -> list[Sexpr]:
        """Return the body forms with the raw arguments substituted in."""
        bindings = bind_params(Environment(), self.formals, args, self.macro_name)
        return [self.substitute_fn(bindings, form) for form in list_items(self.body)[0]]

    def __call__(self, caller_env: Environment, args: Sexpr) -> LispValue:
        result: LispValue = NIL
        for form in self.expand(args):
            result = self.evaluate_fn(caller_env, form)
        return result

    def __repr__(self) -> str:
        return self.name


def _body_text(body: SExpression) -> str:
    forms = list_items(body)[0]
    if not forms:
        return "nil"
    if len(forms) == 1:
        return pretty_print(forms[0])
    # several forms print as a list would, minus the parens
    return pretty_print(make_list(forms))[1:-1]
