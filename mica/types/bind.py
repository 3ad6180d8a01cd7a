"""Binding of actual arguments to formal parameter lists.

The formal list is walked while it is a cons cell, pairing each formal symbol
with the actual argument in the same position. The result is a single new
frame, appended to the given environment via `Environment.extend`.

Rules:
- fewer actuals than formals -> MicaArityError
- more actuals than formals -> MicaArityError, unless the formal list ends in
  a symbol tail, `(a b . rest)`, or is a bare symbol, in which case the
  remaining actuals are bound to it as a list
- every formal must be a Symbol -> otherwise MicaTypeError
"""

from __future__ import annotations

from mica.errors import MicaArityError, MicaTypeError
from mica.types.environment import Environment, Frame
from mica.types.sexpr import Cons, Sexpr, Symbol, is_nil


def bind_frame(formals: Sexpr, actuals: Sexpr, name: str = "function") -> Frame:
    """Pair formals with actuals positionally and return the resulting frame."""
    frame: Frame = {}
    wanted = 0
    f, a = formals, actuals
    while isinstance(f, Cons):
        param = f.car
        if not isinstance(param, Symbol):
            raise MicaTypeError(f"{name}: formal parameter must be a symbol, got {param}")
        wanted += 1
        if not isinstance(a, Cons):
            raise MicaArityError(
                f"{name}: too few arguments, missing a value for '{param.lexeme}'"
            )
        frame[param.lexeme] = a.car
        f, a = f.cdr, a.cdr

    if isinstance(f, Symbol):
        # rest parameter collects whatever is left
        frame[f.lexeme] = a
    elif not is_nil(f):
        raise MicaTypeError(f"{name}: malformed parameter list tail {f}")
    elif isinstance(a, Cons):
        extra = sum(1 for _ in a)
        raise MicaArityError(
            f"{name}: too many arguments, expected {wanted} but got {wanted + extra}"
        )
    return frame


def bind_params(env: Environment, formals: Sexpr, actuals: Sexpr, name: str = "function") -> Environment:
    """Return `env` extended with one frame binding `formals` to `actuals`."""
    return env.extend(bind_frame(formals, actuals, name))


def split_args(args: Sexpr, name: str, minimum: int, maximum: int | None = -1) -> list[Sexpr]:
    """Unpack a primitive's argument chain into a Python list, checking its length.

    `maximum` defaults to `minimum`; pass None for variadic primitives.
    """
    items = []
    while isinstance(args, Cons):
        items.append(args.car)
        args = args.cdr
    if maximum == -1:
        maximum = minimum
    if len(items) < minimum or (maximum is not None and len(items) > maximum):
        if minimum == maximum:
            expected = f"exactly {minimum}"
        elif maximum is None:
            expected = f"at least {minimum}"
        else:
            expected = f"{minimum} to {maximum}"
        raise MicaArityError(f"{name} requires {expected} argument(s), got {len(items)}")
    return items
