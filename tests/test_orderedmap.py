from errorkit.orderedmap import OrderedFields, to_string

EOF = EOFError("EOF")


def _flat(fields):
    return [x for pair in fields.items() for x in pair]


def test_basic():
    am = OrderedFields()
    assert _flat(am) == []

    am.append("key1", 1, "key2", "2", "key3", EOF)
    assert _flat(am) == ["key1", 1, "key2", "2", "key3", EOF]

    am.append("key4", 4)
    assert _flat(am) == ["key1", 1, "key2", "2", "key3", EOF, "key4", 4]

    am.delete("key2")
    am.delete("key4")
    assert _flat(am) == ["key1", 1, "key3", EOF]

    am.set("key3", 3)
    assert _flat(am) == ["key1", 1, "key3", 3]

    am.set("key4", 4)
    assert _flat(am) == ["key1", 1, "key3", 3, "key4", 4]


def test_append_odd_values():
    am = OrderedFields()
    am.append("a single value")
    assert _flat(am) == ["a single value", "<missing>"]

    am.clear()
    am.append("k1", "v1", "k2", "v2", "k3", "v3", "k4", "v4", "k5")
    assert _flat(am) == [
        "k1", "v1", "k2", "v2", "k3", "v3", "k4", "v4", "k5", "<missing>",
    ]


def test_string():
    am = OrderedFields()
    am.append("k1", "v1", "k2", "v2")
    assert str(am) == "{k1:v1, k2:v2}"

    am.append(3, "v3")
    assert str(am) == "{k1:v1, k2:v2, 3:v3}"

    am.append(None, "v4")
    assert str(am) == "{k1:v1, k2:v2, 3:v3, :v4}"


def test_get_and_contains():
    am = OrderedFields("k1", "v1", "k2", None)
    assert am.get("k1") == "v1"
    assert am.get("absent") is None
    assert "k2" in am
    assert "absent" not in am
    assert am["k1"] == "v1"
    assert len(am) == 2


def test_delete_missing_key_is_noop():
    am = OrderedFields("k1", "v1")
    am.delete("nope")
    assert _flat(am) == ["k1", "v1"]


def test_copy_is_independent():
    am = OrderedFields("k1", "v1")
    clone = am.copy()
    clone.set("k2", "v2")
    clone.delete("k1")
    assert _flat(am) == ["k1", "v1"]
    assert _flat(clone) == ["k2", "v2"]


def test_equality_respects_order():
    assert OrderedFields("a", 1, "b", 2) == OrderedFields("a", 1, "b", 2)
    assert not OrderedFields("a", 1, "b", 2) == OrderedFields("b", 2, "a", 1)


def test_to_string():
    assert to_string(None) == ""
    assert to_string("abc") == "abc"
    assert to_string(7) == "7"
    assert to_string(EOF) == "EOF"