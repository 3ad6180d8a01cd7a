"""Script and prelude loading.

`read_file` is the single host capability the interpreter consumes: given a
script name, return its full text. The default implementation reads from the
filesystem, resolving relative names against the directories of
MICA_LOAD_PATH. Hosts may pass any callable with the same contract.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Protocol

from mica.config import get_load_roots, get_prelude_root
from mica.errors import MicaIOError

log = logging.getLogger(__name__)

BOOTSTRAP_FILE = "bootstrap.lisp"

ReadFile = Callable[[str], str]


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def resolve_script(name: str) -> Path:
    path = Path(name)
    if path.is_absolute():
        return path
    for root in get_load_roots():
        candidate = root / path
        if candidate.is_file():
            return candidate
    return path


def read_file(name: str) -> str:
    """Default capability: read a script from disk, raising MicaIOError on failure."""
    path = resolve_script(name)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MicaIOError(f"Cannot read script '{name}': {e}") from e


def strip_shebang(code: str) -> str:
    """Drop one leading #! line, if present."""
    if code.startswith("#!"):
        _, _, rest = code.partition("\n")
        return rest
    return code


def read_script(reader: ReadFile, name: str) -> str:
    log.debug("loading script %s", name)
    return strip_shebang(reader(name))


def bootstrap_source() -> str:
    path = get_prelude_root() / BOOTSTRAP_FILE
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise MicaIOError(f"Cannot read bootstrap program {path}: {e}") from e


def load_prelude(itp: _HasEvalPrelude) -> None:
    itp.eval_prelude(bootstrap_source())
