"""Creating, inspecting and comparing structured errors."""

from __future__ import annotations

from typing import Any, Callable

from .error import Error, settings
from .kind import K, Kind
from .nilerror import NilError

_LOG_MESSAGE = "errorkit.log function call returned error"


def e(*args: Any) -> Error:
    """Create an error from an optional op, kind, cause and key-value fields.

    A stack trace of the caller is captured when stack capture is enabled.
    """
    err = Error(*args)
    if settings.populate_stacktrace:
        err.populate_stack(1)
    return err


def no_trace(*args: Any) -> Error:
    """Create an error like ``e`` but without a stack trace."""
    return Error(*args)


class TemplateFn:
    """A callable that creates errors from a base set of fields."""

    __slots__ = ("_args", "_trace")

    def __init__(self, args: tuple = (), trace: bool = True) -> None:
        self._args = tuple(args)
        self._trace = trace

    def _create(self, args: tuple, skip: int) -> Error:
        err = Error(*self._args, *args)
        if self._trace and settings.populate_stacktrace:
            err.populate_stack(skip + 1)
        return err

    def __call__(self, *args: Any) -> Error:
        """Create an error from the template fields followed by ``args``."""
        return self._create(args, 1)

    def if_not_nil(self, err: BaseException | None, *args: Any) -> Error | None:
        """Create an error with cause ``err`` if it is not None; else None."""
        if err is None:
            return None
        return self._create((*args, err), 1)

    def add(self, *args: Any) -> TemplateFn:
        """Return a template with ``args`` added to this one's fields."""
        return TemplateFn((*self._args, *args), self._trace)

    def fields(self, *args: Any) -> list[Any]:
        """Return the template's extra fields (no op, kind, cause) plus ``args``."""
        return [*Error(*self._args).fields(), *args]

    def to_json(self) -> str:
        """Serialise the error this template creates without extra fields."""
        return self._create((), 1).to_json()

    def __str__(self) -> str:
        return str(self._create((), 1))

    def __repr__(self) -> str:
        return f"TemplateFn({self._args!r}, trace={self._trace!r})"


def template(*args: Any) -> TemplateFn:
    """Return a template that creates errors with stack traces."""
    return TemplateFn(args, True)


def t(*args: Any) -> TemplateFn:
    """Alias for ``template``."""
    return TemplateFn(args, True)


def template_no_trace(*args: Any) -> TemplateFn:
    """Return a template that creates errors without stack traces."""
    return TemplateFn(args, False)


def t_no_trace(*args: Any) -> TemplateFn:
    """Alias for ``template_no_trace``."""
    return TemplateFn(args, False)


def _deep_equal(a: Any, b: Any) -> bool:
    if a is b:
        return True
    try:
        if a == b:
            return True
    except Exception:
        return False
    if isinstance(a, BaseException) and isinstance(b, BaseException):
        return (
            type(a) is type(b)
            and a.args == b.args
            and getattr(a, "__dict__", {}) == getattr(b, "__dict__", {})
        )
    return False


def match(err1: BaseException | None, err2: BaseException | None) -> bool:
    """Report whether every set element of ``err1`` equals the one in ``err2``.

    Plain errors are compared by value; a plain ``err1`` is also compared
    with the cause of an Error ``err2``. Nested errors are matched recursively.
    """
    if err1 is None:
        return err2 is None
    if err2 is None:
        return False
    if not isinstance(err1, Error):
        if not isinstance(err2, Error):
            return _deep_equal(err1, err2)
        return match(err1, err2.cause())
    if not isinstance(err2, Error):
        return False

    if err1.op() and err1.op() != err2.op():
        return False
    if err1._kind and err1._kind != err2.kind():
        return False

    for key, val1 in err1._fields.items():
        if key not in err2._fields:
            return False
        val2 = err2._fields[key]
        if isinstance(val1, BaseException):
            if isinstance(val2, BaseException):
                return match(val1, val2)
            return False
        if not _deep_equal(val1, val2):
            return False

    if err1.cause() is not None:
        return match(err1.cause(), err2.cause())
    return True


def is_kind(expected: Kind, err: Any) -> bool:
    """Report whether err or a nested Error has the given kind."""
    while isinstance(err, Error):
        if err.kind() == expected:
            return True
        err = err.cause()
    return False


def is_not_exist(err: Any) -> bool:
    """Report whether err or a nested Error has kind NOT_EXIST."""
    return is_kind(K.NOT_EXIST, err)


def get_root(err: Any) -> Error | None:
    """Return the innermost nested Error, or None if err is not an Error."""
    root = None
    while isinstance(err, Error):
        root = err
        err = err.cause()
    return root


def get_root_cause(err: BaseException | None) -> BaseException:
    """Return the first nested error that is not an Error, else NilError."""
    while err is not None:
        if not isinstance(err, Error):
            return err
        if err.cause() is None:
            return NilError()
        err = err.cause()
    return NilError()


def get_field(err: Any, key: str) -> str | None:
    """Return a field of an Error as text, or None."""
    if not isinstance(err, Error):
        return None
    return err.get_field(key)


def field(err: Any, key: str) -> Any:
    """Return a field of an Error, or None."""
    if not isinstance(err, Error):
        return None
    return err.field(key)


def clear_stacktrace(err: Any) -> Any:
    """Return a copy of an Error without stack traces; other values as is."""
    if isinstance(err, Error):
        return err.clear_stacktrace()
    return err


def _call(f: Callable[[], Any]) -> BaseException | None:
    try:
        result = f()
    except Exception as exc:
        return exc
    return result if isinstance(result, BaseException) else None


def ignore(f: Callable[[], Any] | None) -> None:
    """Call f and ignore any error it raises or returns."""
    if f is None:
        return
    _call(f)


def _function_name(f: Callable[..., Any]) -> str:
    qualname = getattr(f, "__qualname__", None)
    if qualname is None:
        return "unknown"
    module = getattr(f, "__module__", None)
    return f"{module}.{qualname}" if module else qualname


def log(
    f: Callable[[], Any] | None,
    log_fn: Callable[..., Any] | None,
) -> None:
    """Call f and log any error it raises or returns.

    Errors are passed to ``log_fn(msg, "function", name, "error", err)``, or
    printed to stdout if ``log_fn`` is None.
    """
    if f is None:
        return
    err = _call(f)
    if err is None:
        return
    name = _function_name(f)
    if log_fn is None:
        print(f"{_LOG_MESSAGE}: function={name} error={err}")
    else:
        log_fn(_LOG_MESSAGE, "function", name, "error", err)


def wrap(err: BaseException | None, *args: Any) -> Error | None:
    """Wrap err in an Error unless it is one; add ``args`` as fields."""
    if err is None:
        return None
    if isinstance(err, Error):
        wrapped = err
    else:
        wrapped = Error(err)
        if settings.populate_stacktrace:
            wrapped.populate_stack(1)
    if args:
        wrapped.with_(*args)
    return wrapped


def type_of(val: Any) -> str:
    """Return the name of the type of val; "<nil>" for None."""
    if val is None:
        return "<nil>"
    cls = type(val)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"