"""Error kinds: the category an error belongs to."""

from __future__ import annotations


class Kind(str):
    """The kind (category) of an error."""

    __slots__ = ()

    def default(self) -> DefaultKind:
        """Return this kind as a default kind.

        A default kind is only used when an error has no explicit kind of its
        own and inherits none from a nested error.
        """
        return DefaultKind(self)

    def __repr__(self) -> str:
        return f"Kind({str.__repr__(self)})"


class DefaultKind(str):
    """A kind that applies only when no other kind is set."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"DefaultKind({str.__repr__(self)})"


class K:
    """The predefined error kinds."""

    OTHER = Kind("unclassified error")
    NOT_IMPLEMENTED = Kind("not implemented")
    INVALID = Kind("invalid")
    PERMISSION = Kind("permission denied")
    IO = Kind("I/O error")
    EXIST = Kind("item already exists")
    NOT_EXIST = Kind("item does not exist")
    NOT_FOUND = Kind("item cannot be found")
    # Declared without a text of its own; an empty kind counts as "not set".
    NOT_DIR = Kind("")
    FINALIZED = Kind("item is already finalized")
    NOT_FINALIZED = Kind("item is not finalized")
    NO_NET_ROUTE = Kind("no route found")
    INTERNAL = Kind("internal error")
    AV_PROCESSING = Kind("a/v processing error")
    AV_INPUT = Kind("a/v input error")
    NO_MEDIA_MATCH = Kind("no media type match")
    UNAVAILABLE = Kind("service unavailable")
    CANCELLED = Kind("operation cancelled")
    TIMEOUT = Kind("operation timed out")
    WARN = Kind("warning")

    def __init__(self) -> None:
        raise TypeError("K is a namespace and cannot be instantiated")