"""Run a mica script: python -m mica SCRIPT

Echo output goes to stdout; errors are logged and turn into exit status 1.
There is no interactive mode.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from mica.errors import MicaError
from mica.interpreter import Interpreter
from mica.runtime_context import get_depth_limit, set_max_depth

log = logging.getLogger("mica")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="mica", description="Run a mica script.")
    parser.add_argument("script", help="script file to evaluate")
    parser.add_argument("--max-depth", type=int, default=None,
                        help="recursion depth limit (default: MICA_MAX_DEPTH or 300)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.environ.get("MICA_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.max_depth is not None:
        if args.max_depth < 1:
            parser.error(f"--max-depth must be positive, got {args.max_depth}")
        set_max_depth(args.max_depth)
    else:
        try:
            get_depth_limit()
        except ValueError as e:
            parser.error(str(e))

    try:
        Interpreter(output=print).run_file(args.script)
    except MicaError as e:
        log.error("%s: %s", type(e).__name__, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
