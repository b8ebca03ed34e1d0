import pytest

from errorkit.api import e as E
from errorkit.error import settings, str_error
from errorkit.kind import K
from errorkit.nilerror import NilError
from errorkit.wrap import as_, is_, unwrap, unwrap_all

EOF = str_error("EOF")
UNEXPECTED_EOF = str_error("unexpected EOF")


@pytest.fixture(autouse=True)
def _settings(monkeypatch):
    monkeypatch.setattr(settings, "print_stacktrace", False)


def create_nested_error():
    err = E("connect", K.IO, str_error("network unreachable"), "k1", "v1")
    return E("send email", err)


def test_unwrap():
    assert unwrap(None) is None

    err = create_nested_error()
    assert "send email" in str(err)

    err = unwrap(err)
    assert "connect" in str(err)

    err = unwrap(err)
    assert str(err) == "network unreachable"

    assert unwrap(E("noop")) is None
    assert unwrap(EOF) is None


def test_unwrap_follows_python_cause():
    inner = KeyError("inner")
    try:
        try:
            raise inner
        except KeyError as exc:
            raise ValueError("outer") from exc
    except ValueError as outer:
        assert unwrap(outer) is inner


def test_unwrap_all():
    assert unwrap_all(None) is NilError()
    assert str(unwrap_all(None)) == ""
    assert not unwrap_all(None)

    err = create_nested_error()
    assert "send email" in str(err)
    assert str(unwrap_all(err)) == "network unreachable"
    assert unwrap_all(EOF) is EOF


def test_as():
    err = FileNotFoundError("missing")
    assert as_(err, OSError) is err
    assert as_(E("read", err), FileNotFoundError) is err
    assert as_(EOF, KeyError) is None
    assert as_(None, KeyError) is None


def test_is():
    assert is_(E(EOF), EOF) is True
    assert is_(E(EOF), UNEXPECTED_EOF) is False
    assert is_(E("outer", E("inner", EOF)), EOF) is True
    assert is_(None, EOF) is False
    assert is_(None, None) is True