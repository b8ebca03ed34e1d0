"""The structured error type: op, kind, cause, fields and a call stack."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .kind import DefaultKind, K, Kind
from .orderedmap import OrderedFields, to_string
from .stack import Call, capture_stack, combine_call_stacks, format_stack, stacktrace_to_array


@dataclass
class Settings:
    """Process-wide switches for capturing, printing and serialising errors.

    ``default_field_order`` lists field keys in output order. The first
    empty string stands for all unlisted fields in insertion order (with
    "op" and "kind" first and "cause" last). ``None`` means
    ``["op", "kind", "", "cause"]``.
    """

    populate_stacktrace: bool = True
    print_stacktrace: bool = True
    print_stacktrace_pretty: bool = True
    marshal_stacktrace: bool = True
    marshal_stacktrace_as_array: bool = True
    default_field_order: list[str] | None = None
    separator: str = ":\n\t"


settings = Settings()


class StrError(Exception):
    """A plain error carrying only a message; equal to others of same text."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text

    def __str__(self) -> str:
        return self.text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StrError):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash((StrError, self.text))

    def __repr__(self) -> str:
        return f"StrError({self.text!r})"


def str_error(text: str) -> StrError:
    """Create a plain error with the given message."""
    return StrError(text)


def _sprint(val: Any) -> str:
    if val is None:
        return "<nil>"
    if isinstance(val, bool):
        return "true" if val else "false"
    return str(val)


def _is_op(val: Any) -> bool:
    return isinstance(val, str) and not isinstance(val, (Kind, DefaultKind))


def _find_error(err: Any) -> Error | None:
    """Return the first Error in the unwrap chain of err."""
    while err is not None:
        if isinstance(err, Error):
            return err
        unwrap = getattr(err, "unwrap", None)
        err = unwrap() if callable(unwrap) else None
    return None


def _convert_for_json(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, BaseException):
        return str(obj)
    return obj


def _flatten_args(args: tuple) -> tuple:
    if len(args) == 1 and isinstance(args[0], list):
        return tuple(args[0])
    return args


class Error(Exception):
    """An error with an operation, a kind, an optional cause and fields.

    ``Error(*args)`` builds an error without a stack trace: a leading plain
    string is the op, the remaining arguments are handled as by ``with_``.
    """

    def __init__(self, *args: Any) -> None:
        super().__init__()
        self._op = ""
        self._kind = Kind("")
        self._default_kind = Kind("")
        self._cause: BaseException | None = None
        self._fields = OrderedFields()
        self._stack: list[Call] | None = None
        self._ignore_stack = False
        self._unmarshalled_stacktrace = ""

        args = _flatten_args(args)
        if args and _is_op(args[0]):
            self.with_op(args[0])
            args = args[1:]
        self.with_(*args)

    # accessors

    def op(self) -> str:
        """Return the operation, or "" if none is set."""
        return self._op

    def kind(self) -> Kind:
        """Return the effective kind, K.OTHER if none applies."""
        return self._effective_kind(K.OTHER)

    def cause(self) -> BaseException | None:
        """Return the cause, or None."""
        return self._cause

    def unwrap(self) -> BaseException | None:
        """Return the cause, or None."""
        return self._cause

    @property
    def unmarshalled_stacktrace(self) -> str:
        """The stacktrace read from JSON, if any."""
        return self._unmarshalled_stacktrace

    # builders

    def with_op(self, op: str) -> Error:
        """Set the op (ignored if empty)."""
        if op:
            self._op = op
        return self

    def with_kind(self, kind: Kind) -> Error:
        """Set the kind (ignored if empty)."""
        if kind:
            self._kind = Kind(kind)
        return self

    def with_default_kind(self, kind: Kind) -> Error:
        """Set the kind used when no other kind applies."""
        self._default_kind = Kind(kind)
        return self

    def with_cause(self, err: BaseException | None) -> Error:
        """Set the cause (ignored if None)."""
        if err is not None:
            self._cause = err
        return self

    def with_(self, *args: Any) -> Error:
        """Add kinds, causes and key-value fields."""
        args = _flatten_args(args)
        it = iter(args)
        for key in it:
            if key is None:
                continue
            if isinstance(key, Kind):
                self.with_kind(key)
                continue
            if isinstance(key, DefaultKind):
                self.with_default_kind(Kind(key))
                continue
            if isinstance(key, BaseException):
                self.with_cause(key)
                continue
            try:
                val = next(it)
            except StopIteration:
                self._fields.append(key)
                break
            if key == "op":
                if _is_op(val):
                    self.with_op(val)
                continue
            if key == "kind":
                self.with_kind(val if isinstance(val, Kind) else Kind(to_string(val)))
                continue
            if key == "cause":
                if val is not None:
                    self.with_cause(val if isinstance(val, BaseException) else StrError(to_string(val)))
                continue
            self._fields.append(key, val)
        return self

    # field lookup

    def _is_zero(self) -> bool:
        return not self._op and not self._kind and self._cause is None and not self._fields

    def _field(self, key: str) -> tuple[bool, Any]:
        if key == "op":
            return (True, self._op) if self._op else (False, None)
        if key == "kind":
            return True, self.kind()
        if key == "cause":
            return (True, self._cause) if self._cause is not None else (False, None)
        if key in self._fields:
            return True, self._fields[key]
        return False, None

    def _lookup(self, key: str) -> tuple[bool, Any]:
        err: Any = self
        while isinstance(err, Error):
            found, val = err._field(key)
            if found:
                return True, val
            err = err._cause
        return False, None

    def field(self, key: str) -> Any:
        """Return a field of this error or its nested errors, or None."""
        return self._lookup(key)[1]

    def get_field(self, key: str) -> str | None:
        """Return a field as text, searching nested errors; None if absent."""
        found, val = self._lookup(key)
        return to_string(val) if found else None

    def fields(self) -> list[Any]:
        """Return the extra fields as a flat key, value list."""
        return [x for key, val in self._fields.items() for x in (key, val)]

    def _effective_kind(self, default: Kind) -> Kind:
        if self._kind:
            return self._kind
        if self._default_kind:
            default = self._default_kind
        elif not default:
            default = K.OTHER
        nested = _find_error(self._cause)
        if nested is not None:
            return nested._effective_kind(default)
        return default

    # stack

    def populate_stack(self, skip: int = 0) -> Error:
        """Capture the stack of the caller, dropping ``skip`` more frames."""
        self._stack = capture_stack(skip + 1)
        return self

    def drop_stack_frames(self, n: int) -> Error:
        """Drop the top n frames of the captured stack."""
        if self._stack is not None and len(self._stack) > n:
            self._stack = self._stack[n:]
        return self

    def has_stack(self) -> bool:
        """Whether this error or a nested Error holds a stack."""
        if self._stack is not None:
            return True
        return isinstance(self._cause, Error) and self._cause.has_stack()

    def _coalesce_stack(self) -> list[Call]:
        own = self._stack or []
        if isinstance(self._cause, Error):
            return combine_call_stacks(own, self._cause._coalesce_stack())
        return list(own)

    def _format_stack(self) -> str:
        return format_stack(self._coalesce_stack(), settings.print_stacktrace_pretty)

    # text

    def __str__(self) -> str:
        return self._to_string(True)

    def __repr__(self) -> str:
        return f"Error({self.error_no_trace()!r})"

    def error_no_trace(self) -> str:
        """Return the error text without stacktrace."""
        return self._to_string(False)

    def format_error(self, print_stack: bool, *args: str) -> str:
        """Return the error text with fields in the given order."""
        return self._to_string(print_stack, args)

    def _to_string(self, print_stack: bool, field_order: Iterable[str] = ()) -> str:
        order = list(field_order) or list(settings.default_field_order or [])
        parts: list[str] = []

        def write(key: Any, val: Any) -> None:
            if key == "cause" and isinstance(self._cause, Error):
                if not self._cause._is_zero():
                    if parts:
                        parts.append(" ")
                    parts.extend(("cause", settings.separator, self._cause._to_string(False)))
                return
            if parts:
                parts.append(" ")
            parts.append(f"{key} [{_sprint(val)}]")

        self._write_fields(order, write)
        if print_stack and settings.print_stacktrace and not self._ignore_stack and self.has_stack():
            parts.append("\n")
            parts.append(self._format_stack())
        return "".join(parts)

    def _write_fields(self, order: list[str], write: Callable[[Any, Any], None]) -> None:
        def unreferenced(key: Any) -> bool:
            if key == "stacktrace" and not settings.print_stacktrace:
                return False
            return key not in order

        done = False

        def others() -> None:
            nonlocal done
            if done:
                return
            done = True
            if self._op and unreferenced("op"):
                write("op", self._op)
            if unreferenced("kind"):
                write("kind", self.kind())
            for key, val in self._fields.items():
                if unreferenced(key):
                    write(key, val)
            if self._cause is not None and unreferenced("cause"):
                write("cause", self._cause)

        for key in order:
            if key == "":
                others()
            else:
                found, val = self._field(key)
                if found:
                    write(key, val)
        others()

    def clear_stacktrace(self) -> Error:
        """Return a copy without stacktraces, also in nested errors."""
        clone = Error()
        clone.__dict__.update(self.__dict__)
        clone._fields = self._fields.copy()
        clone._stack = None
        clone._fields.delete("stacktrace")
        clone._fields.delete("remote_stack")
        clone._unmarshalled_stacktrace = ""
        if isinstance(clone._cause, Error):
            clone._cause = clone._cause.clear_stacktrace()
        return clone

    # JSON

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict of this error's fields."""
        return self._to_dict(True)

    def _to_dict(self, with_stack: bool) -> dict[str, Any]:
        out: dict[str, Any] = {}

        def write(key: Any, val: Any) -> None:
            if key == "cause":
                out[key] = val._to_dict(False) if isinstance(val, Error) else _convert_for_json(val)
            else:
                out[to_string(key)] = _convert_for_json(val) if hasattr(val, "to_dict") else val

        self._write_fields(list(settings.default_field_order or []), write)
        if (
            with_stack
            and settings.marshal_stacktrace
            and not self._ignore_stack
            and self.has_stack()
        ):
            text = self._format_stack()
            out["stacktrace"] = (
                stacktrace_to_array(text) if settings.marshal_stacktrace_as_array else text
            )
        return out

    def to_json(self) -> str:
        """Serialise this error as a JSON object."""
        return json.dumps(self.to_dict(), separators=(",", ":"), default=str)

    @classmethod
    def from_json(cls, data: str | bytes) -> Error:
        """Parse an error from a JSON object; raises ValueError if invalid."""
        parsed = json.loads(data)
        if not isinstance(parsed, dict):
            raise ValueError("JSON error must be an object")
        return cls.from_dict(parsed)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Error:
        """Build an error from a dict, keeping the order of its keys."""
        err = cls()
        for key, val in data.items():
            if isinstance(val, dict):
                val = cls.from_dict(val)
            if key == "stacktrace":
                if isinstance(val, list):
                    err._unmarshalled_stacktrace = "\n".join("\t" + to_string(line) for line in val)
                else:
                    err._unmarshalled_stacktrace = to_string(val)
            else:
                err.with_(key, val)
        return err