from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


# Resolve installation dir (mica package directory)
_MICA_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _MICA_DIR / 'prelude'
_DEFAULT_LOAD_DIRS = [Path('.')]
DEFAULT_MAX_DEPTH = 300


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_load_roots() -> List[Path]:
    return paths_from_env('MICA_LOAD_PATH', _DEFAULT_LOAD_DIRS)


def get_prelude_root() -> Path:
    roots = paths_from_env('MICA_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; if a file path is set, return its parent
    p = roots[0]
    return p if p.is_dir() else p.parent


def get_max_depth() -> int:
    raw = os.environ.get('MICA_MAX_DEPTH', '').strip()
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"MICA_MAX_DEPTH must be an integer, got {raw!r}")
    if limit < 1:
        raise ValueError(f"MICA_MAX_DEPTH must be positive, got {limit}")
    return limit
