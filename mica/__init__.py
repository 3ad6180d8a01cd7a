# Core type aliases and public entry points for mica.
#
# Code and data share one closed value type, `Sexpr` (see mica.types.sexpr):
# atoms, cons cells and functions. Environments map symbol text to Sexpr values.
#
# Naming guidance:
# - SExpression: use in reader/printer code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both are the same type; the split only documents intent.

from typing import Any, Callable

__version__ = "0.3.0"

# Runtime value alias
LispValue = Any
SExpression = LispValue

# Evaluator function type: (env, expr) -> value, handed to closures and macros
EvaluatorFn = Callable[..., LispValue]

from mica.interpreter import (  # noqa: E402
    Interpreter,
    evaluate_source,
    new_global_environment,
    pretty_print,
)
