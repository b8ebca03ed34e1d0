"""Structured errors with operation, kind, cause, ordered fields, stacktraces and error lists."""

__version__ = "1.0.0"