"""An error value that stands for "no error"."""

from __future__ import annotations


class NilError(Exception):
    """The "nil" error: a real error object whose message is empty.

    There is a single instance; it is falsy.
    """

    _instance: NilError | None = None

    def __new__(cls) -> NilError:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return ""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NilError()"