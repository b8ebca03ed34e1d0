import sys

import pytest

from errorkit.stack import (
    Call,
    capture_stack,
    combine_call_stacks,
    format_stack,
    stacktrace_to_array,
)


@pytest.mark.parametrize(
    "stacktrace, want",
    [
        ("", []),
        ("\t  \t  ", []),
        ("abc", ["abc"]),
        ("\n", []),
        ("\t\n\t \t", []),
        ("a\nb\nc", ["a", "b", "c"]),
        ("\ta\n   b   \t \n\tc\n\n\t\n", ["a", "b", "c"]),
        (
            "\texample.com/project/errors_pkg_test.go:123 someError()\n"
            "\texample.com/project/errors_test.go:921     createNestedError()\n"
            "\texample.com/project/errors_test.go:922     createNestedError()\n"
            "\texample.com/project/errors_test.go:604     TestError_MarshalJSON()\n",
            [
                "example.com/project/errors_pkg_test.go:123 someError()",
                "example.com/project/errors_test.go:921     createNestedError()",
                "example.com/project/errors_test.go:922     createNestedError()",
                "example.com/project/errors_test.go:604     TestError_MarshalJSON()",
            ],
        ),
    ],
)
def test_stacktrace_to_array(stacktrace, want):
    assert stacktrace_to_array(stacktrace) == want


def _helper(skip):
    return capture_stack(skip)


def test_capture_stack_starts_at_caller():
    line = sys._getframe().f_lineno + 1
    calls = capture_stack()
    assert calls[0].function == "test_capture_stack_starts_at_caller"
    assert calls[0].line == line
    assert calls[0].file.endswith("test_stack.py")


def test_capture_stack_skip():
    calls = _helper(0)
    assert calls[0].function == "_helper"
    assert calls[1].function == "test_capture_stack_skip"

    skipped = _helper(1)
    assert skipped[0].function == "test_capture_stack_skip"
    assert len(skipped) == len(calls) - 1


def test_capture_stack_beyond_depth_is_empty():
    assert capture_stack(100000) == []


def test_captured_stack_formats_with_location():
    text = format_stack(_helper(0)[:1], pretty=False)
    assert text.startswith("\t")
    assert "test_stack.py:" in text
    assert text.endswith("\t_helper()\n")


def _call(name, line=1):
    return Call(file=f"/src/pkg/{name}.py", line=line, function=name, module=f"pkg.{name}")


def test_combine_call_stacks_drops_common_base():
    a, b, c, x, y = (_call(n) for n in "abcxy")
    outer = [a, x, y]
    inner = [b, c, x, y]
    assert combine_call_stacks(outer, inner) == [b, c, a, x, y]


def test_combine_call_stacks_differing_lines_not_shared():
    outer = [_call("a"), _call("x", 5)]
    inner = [_call("b"), _call("x", 6)]
    assert combine_call_stacks(outer, inner) == inner + outer


def test_combine_call_stacks_with_missing_stack():
    c = [_call("a"), _call("b")]
    assert combine_call_stacks(None, c) == c
    assert combine_call_stacks(c, None) == c
    assert combine_call_stacks(None, None) == []


def test_format_stack_regular():
    calls = [Call("/home/dev/proj/pkg/mod.py", 12, "f", "pkg.mod")]
    assert format_stack(calls, pretty=False) == "\tpkg/mod.py:12\tf()\n"


def test_format_stack_pretty_aligns_functions():
    calls = [
        Call("/x/pkg/mod.py", 12, "f", "pkg.mod"),
        Call("/x/pkg/longer_module.py", 7, "T.g", "pkg.longer_module"),
    ]
    lines = format_stack(calls, pretty=True).splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("\tpkg/mod.py:12 ")
    assert lines[1] == "\tpkg/longer_module.py:7 T.g()"
    assert lines[0].index("f()") == lines[1].index("T.g()")


def test_format_stack_empty():
    assert format_stack([], pretty=True) == ""
    assert format_stack([], pretty=False) == ""


def test_format_then_split_round_trip():
    calls = [Call("/x/pkg/mod.py", 12, "f", "pkg.mod"), Call("/x/pkg/b.py", 3, "h", "pkg.b")]
    assert stacktrace_to_array(format_stack(calls, pretty=False)) == [
        "pkg/mod.py:12\tf()",
        "pkg/b.py:3\th()",
    ]