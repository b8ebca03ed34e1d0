"""Walking the chain of nested errors."""

from __future__ import annotations

from typing import Iterator, TypeVar

from .nilerror import NilError

_E = TypeVar("_E", bound=BaseException)


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the error wrapped by err, or None.

    Uses err's ``unwrap()`` method if it has one, else its ``__cause__``.
    """
    if err is None:
        return None
    method = getattr(err, "unwrap", None)
    if callable(method):
        return method()
    return err.__cause__


def _chain(err: BaseException | None) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = unwrap(err)


def is_(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether any error in err's chain equals target."""
    if err is None or target is None:
        return err is target
    for item in _chain(err):
        if item is target:
            return True
        try:
            if item == target:
                return True
        except Exception:
            continue
    return False


def as_(err: BaseException | None, target_type: type[_E]) -> _E | None:
    """Return the first error in err's chain of the given type, or None."""
    for item in _chain(err):
        if isinstance(item, target_type):
            return item
    return None


def unwrap_all(err: BaseException | None) -> BaseException:
    """Return the innermost error of err's chain; NilError if err is None."""
    if err is None:
        return NilError()
    last = err
    for item in _chain(err):
        last = item
    return last