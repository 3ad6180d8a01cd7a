from __future__ import annotations

import logging
from typing import Literal, Optional

from mica import LispValue
from mica.builtin.env_builtin import Output, register as register_env_builtins
from mica.builtins import register as register_builtins
from mica.debug_utils.pprint import pretty_print
from mica.errors import MicaBootstrapError, MicaError
from mica.evaluation.evaluator import evaluate_source
from mica.evaluation.special_forms import register as register_special_forms
from mica.modules.loader import ReadFile, load_prelude, read_file as default_read_file, read_script
from mica.types.environment import Environment

log = logging.getLogger(__name__)

__all__ = [
    "Interpreter",
    "evaluate_source",
    "new_global_environment",
    "pretty_print",
    "primitive_environment",
]


def primitive_environment(
    read_file: Optional[ReadFile] = None,
    output: Optional[Output] = None,
) -> Environment:
    """A single-frame environment holding only the native primitives."""
    env = Environment()
    register_builtins(env)
    register_special_forms(env)
    register_env_builtins(env, read_file, output)
    return env


def new_global_environment(
    read_file: Optional[ReadFile] = None,
    output: Optional[Output] = None,
) -> Environment:
    """Primitives plus the bootstrap library, all in frame 0."""
    return Interpreter(read_file=read_file, output=output).env


class Interpreter:
    """
    Reads and evaluates mica code against one global environment that persists
    across calls.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        read_file: Optional[ReadFile] = None,
        output: Optional[Output] = None,
    ):
        self.read_file: ReadFile = read_file or default_read_file
        self.env: Environment = primitive_environment(self.read_file, output)

        if prelude is None:
            pass  # explicit: primitives only
        elif prelude == 'auto':
            self._bootstrap(lambda: load_prelude(self))
        else:
            self._bootstrap(lambda: self.eval_prelude(prelude))

    def _bootstrap(self, run) -> None:
        try:
            run()
        except MicaError as e:
            # No partially initialised environment escapes: the constructor fails.
            raise MicaBootstrapError(f"Bootstrap program failed: {e}") from e
        log.debug("bootstrap complete, %d global bindings", len(self.env.global_frame))

    def eval_prelude(self, code: str) -> None:
        evaluate_source(self.env, code)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; the value of the last one (nil if none)."""
        return evaluate_source(self.env, code)

    def run_file(self, name: str) -> LispValue:
        """Evaluate a script through the read_file capability, skipping a #! line."""
        return evaluate_source(self.env, read_script(self.read_file, name))
