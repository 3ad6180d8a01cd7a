"""Runtime environment for mica.

An Environment is an ordered chain of scope frames, frame 0 being the global
scope and the last frame the most local one. Each frame maps symbol text to an
evaluated value.

Environments are persistent: `extend` returns a new Environment whose frame
tuple shares every parent frame and appends one fresh frame, so binding
parameters never changes what the parent can see. The only mutation is
`define`, which always writes into the most local frame of the Environment it
is called on.
"""

from __future__ import annotations

from io import StringIO
from typing import Mapping, Optional

from mica.types.sexpr import Sexpr

Frame = dict[str, Sexpr]


class Environment:
    """Ordered chain of frames with most-local-first lookup."""

    __slots__ = ("frames",)

    def __init__(self, frames: Optional[tuple[Frame, ...]] = None):
        self.frames: tuple[Frame, ...] = frames if frames else ({},)

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def global_frame(self) -> Frame:
        return self.frames[0]

    @property
    def local_frame(self) -> Frame:
        return self.frames[-1]

    def lookup(self, name: str) -> Optional[Sexpr]:
        """Return the value bound to `name` in the nearest frame, or None when absent."""
        for frame in reversed(self.frames):
            value = frame.get(name)
            if value is not None:
                return value
        return None

    def define(self, name: str, value: Sexpr) -> Sexpr:
        """Bind `name` in the most local frame and return `value`."""
        self.frames[-1][name] = value
        return value

    def extend(self, frame: Optional[Mapping[str, Sexpr]] = None) -> Environment:
        """Return a child Environment with one new frame appended; self is untouched."""
        return Environment(self.frames + (dict(frame or {}),))

    def update(self, mapping: Mapping[str, Sexpr]) -> None:
        """Bulk-define a mapping of name -> value in the most local frame."""
        self.frames[-1].update(mapping)

    def _write_frame(self, frame: Frame, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in frame.items()))
        buffer.write("}")

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __str__(self) -> str:
        """Most local frame only, with an indicator for parents."""
        with StringIO() as buffer:
            self._write_frame(self.local_frame, buffer)
            if self.depth > 1:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"<Environment depth={self.depth}: ")
            for i, frame in enumerate(reversed(self.frames)):
                if i:
                    buffer.write(" -> ")
                if frame is self.global_frame:
                    buffer.write(f"{{global: {len(frame)} bindings}}")
                else:
                    self._write_frame(frame, buffer)
            buffer.write(">")
            return buffer.getvalue()
