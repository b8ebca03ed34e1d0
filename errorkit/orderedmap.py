"""A small insertion-ordered map of error fields."""

from __future__ import annotations

from typing import Any, Iterator, ItemsView

MISSING_VALUE = "<missing>"


def to_string(val: Any) -> str:
    """Convert a value to text; None becomes the empty string."""
    if val is None:
        return ""
    return str(val)


class OrderedFields:
    """Key-value fields kept in insertion order.

    Setting an existing key replaces its value in place; new keys go last.
    """

    __slots__ = ("_data",)

    def __init__(self, *args: Any) -> None:
        self._data: dict[str, Any] = {}
        self.append(*args)

    def append(self, *args: Any) -> None:
        """Add alternating keys and values.

        Keys are converted to text. A trailing key without a value gets the
        value ``"<missing>"``.
        """
        for key, val in zip(args[0::2], args[1::2]):
            self.set(to_string(key), val)
        if len(args) % 2:
            self.set(to_string(args[-1]), MISSING_VALUE)

    def set(self, key: str, val: Any) -> None:
        """Set the value of a key, keeping its position if it exists."""
        self._data[key] = val

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        self._data.pop(key, None)

    def clear(self) -> None:
        """Remove all fields."""
        self._data.clear()

    def get(self, key: str) -> Any:
        """Return the value of a key, or None if it is absent."""
        return self._data.get(key)

    def items(self) -> ItemsView[str, Any]:
        """Return the key-value pairs in order."""
        return self._data.items()

    def copy(self) -> OrderedFields:
        """Return an independent copy of these fields."""
        clone = OrderedFields()
        clone._data = dict(self._data)
        return clone

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedFields):
            return NotImplemented
        return list(self._data.items()) == list(other._data.items())

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        body = ", ".join(f"{key}:{val}" for key, val in self._data.items())
        return "{" + body + "}"

    def __repr__(self) -> str:
        return f"OrderedFields({list(self._data.items())!r})"