"""Call stack capture, merging and formatting for errors."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import PurePath
from types import FrameType
from typing import Iterable, Sequence


@dataclass(frozen=True)
class Call:
    """One frame of a captured call stack."""

    file: str
    line: int
    function: str
    module: str = ""


def _call_from_frame(frame: FrameType) -> Call:
    code = frame.f_code
    return Call(
        file=code.co_filename,
        line=frame.f_lineno or 0,
        function=getattr(code, "co_qualname", code.co_name),
    )


def _location(call: Call) -> str:
    """Return ``directory/file.py:line`` for a call."""
    path = PurePath(call.file)
    parts = path.parts
    name = "/".join(parts[-2:]) if len(parts) >= 2 else path.name
    if call.module and call.module != "__main__":
        names = call.module.split(".")
        expected = names + ["__init__"] if path.stem == "__init__" else names
        count = len(expected)
        if count <= len(parts) and [*parts[len(parts) - count:-1], path.stem] == expected:
            name = "/".join(parts[len(parts) - count:])
    return f"{name}:{call.line}"


def capture_stack(skip: int = 0) -> list[Call]:
    """Capture the current call stack, innermost call first.

    The first entry is the caller of this function; ``skip`` drops that many
    further frames.
    """
    try:
        frame: FrameType | None = sys._getframe(skip + 1)
    except ValueError:
        return []
    calls = []
    while frame is not None:
        calls.append(_call_from_frame(frame))
        frame = frame.f_back
    return calls


def combine_call_stacks(
    c1: Sequence[Call] | None, c2: Sequence[Call] | None
) -> list[Call]:
    """Merge an outer stack ``c1`` with an inner stack ``c2``.

    The frames the two stacks share at their base are kept once; the inner
    stack's own frames come first.
    """
    if not c1:
        return list(c2 or [])
    if not c2:
        return list(c1)
    common = 0
    for a, b in zip(reversed(c1), reversed(c2)):
        if a != b:
            break
        common += 1
    return list(c2[: len(c2) - common]) + list(c1)


def format_stack(calls: Iterable[Call], pretty: bool = True) -> str:
    """Format calls one per line, each line indented with a tab.

    In pretty mode the function names are aligned after the longest location.
    """
    calls = list(calls)
    locations = [_location(call) for call in calls]
    if pretty:
        width = max(map(len, locations), default=0)
        return "".join(
            f"\t{loc:<{width}} {call.function}()\n"
            for loc, call in zip(locations, calls)
        )
    return "".join(
        f"\t{loc}\t{call.function}()\n" for loc, call in zip(locations, calls)
    )


def stacktrace_to_array(s: str) -> list[str]:
    """Split a formatted stacktrace into trimmed, non-blank-ended lines."""
    s = s.strip("\n\t ")
    if not s:
        return []
    return [line.strip("\t\n ") for line in s.split("\n")]