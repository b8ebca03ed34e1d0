"""Collecting several errors into one."""

from __future__ import annotations

import json
from typing import Any, Iterable, Iterator

from .error import Error, StrError
from .orderedmap import to_string


def _convert_for_json(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, BaseException):
        return str(obj)
    return obj


def _element_as_error(elem: Any) -> BaseException | None:
    """Turn one JSON list element into an error; None for empty elements."""
    if isinstance(elem, dict):
        return Error.from_dict(elem) if elem else None
    if elem is None:
        return None
    return StrError(to_string(elem))


class ErrorList(Exception):
    """A collection of errors, itself usable as an error."""

    def __init__(self, errors: Iterable[BaseException] = ()) -> None:
        super().__init__()
        self.errors: list[BaseException] = list(errors)

    def append(self, *args: BaseException | None) -> None:
        """Add errors, skipping None and flattening nested lists."""
        for err in args:
            if isinstance(err, ErrorList):
                self.errors.extend(err.errors)
            elif err is not None:
                self.errors.append(err)

    def error_or_nil(self) -> BaseException | None:
        """Return None if empty, the single error if one, else this list."""
        if not self.errors:
            return None
        if len(self.errors) == 1:
            return self.errors[0]
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict: ``{"errors": [...]}``."""
        return {"errors": [_convert_for_json(err) for err in list(self.errors)]}

    def to_json(self) -> str:
        """Serialise this list as a JSON object."""
        return json.dumps(self.to_dict(), separators=(",", ":"), default=str)

    @classmethod
    def from_json(cls, data: str | bytes) -> ErrorList:
        """Parse a list from ``{"errors": [...]}``.

        Objects become Error instances, other values plain errors; empty
        objects and nulls are skipped. Raises ValueError on invalid input.
        """
        parsed = json.loads(data)
        result = cls()
        if parsed is None:
            return result
        if not isinstance(parsed, dict):
            raise ValueError("JSON error list must be an object")
        elems = parsed.get("errors")
        if elems is None:
            return result
        if not isinstance(elems, list):
            raise ValueError('"errors" must be a JSON array')
        for elem in elems:
            err = _element_as_error(elem)
            if err is not None:
                result.append(err)
        return result

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorList):
            return NotImplemented
        return self.errors == other.errors

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        if not self.errors:
            return ""
        if len(self.errors) == 1:
            return str(self.errors[0])
        lines = [f"error-list count [{len(self.errors)}]\n"]
        lines.extend(f"\t{idx}: {err}\n" for idx, err in enumerate(self.errors))
        return "".join(lines)

    def __repr__(self) -> str:
        return f"ErrorList({self.errors!r})"


def append(err: BaseException | None, *args: BaseException | None) -> BaseException | None:
    """Append errors to err and return the result.

    If err is an ErrorList it is extended in place; otherwise a new list is
    made holding err. None values are ignored, nested lists flattened. A
    result of a single error is returned as that error, an empty one as None.
    """
    rest = list(args)
    while rest and rest[0] is None:
        rest.pop(0)
    if not rest:
        return err
    if isinstance(err, ErrorList):
        target = err
    else:
        target = ErrorList()
        target.append(err)
    target.append(*rest)
    return target.error_or_nil()


def unmarshal_json_error_list(data: str | bytes) -> ErrorList:
    """Parse a JSON error list; see ErrorList.from_json."""
    return ErrorList.from_json(data)