"""Built-in functions that reach back into the evaluator or the host.

`eval` re-enters the evaluator, `load` pulls a script through the host's
read_file capability, and `echo` writes a rendered value to the host's output
sink. The capabilities are bound at registration time, so different
interpreters in one process can use different hosts.
"""
from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Optional

from mica import LispValue, SExpression
from mica.debug_utils.pprint import pretty_print
from mica.errors import MicaTypeError
from mica.evaluation.evaluator import evaluate, evaluate_source
from mica.modules.loader import ReadFile, read_file as default_read_file, read_script
from mica.types.bind import split_args
from mica.types.environment import Environment
from mica.types.sexpr import Function, String, Symbol, T

echo_log = logging.getLogger("mica.echo")

Output = Callable[[str], None]


def eval_builtin(env: Environment, args: SExpression) -> LispValue:
    """Strings are read and evaluated as program text; anything else is evaluated again."""
    (value,) = split_args(args, "eval", 1)
    if isinstance(value, String):
        return evaluate_source(env, value.lexeme)
    return evaluate(env, value)


def load_builtin(reader: ReadFile, env: Environment, args: SExpression) -> LispValue:
    """Evaluate a script file in the current environment and return t."""
    (name,) = split_args(args, "load", 1)
    if not isinstance(name, (String, Symbol)):
        raise MicaTypeError(f"load requires a file name, got {name}")
    evaluate_source(env, read_script(reader, name.lexeme))
    return T


def echo_builtin(output: Optional[Output], env: Environment, args: SExpression) -> LispValue:
    (value,) = split_args(args, "echo", 1)
    text = pretty_print(value)
    if output is None:
        echo_log.info(text)
    else:
        output(text)
    return T


def register(
    env: Environment,
    read_file: Optional[ReadFile] = None,
    output: Optional[Output] = None,
) -> None:
    env.update({
        "eval": Function("eval", eval_builtin),
        "load": Function("load", partial(load_builtin, read_file or default_read_file)),
        "echo": Function("echo", partial(echo_builtin, output)),
    })
