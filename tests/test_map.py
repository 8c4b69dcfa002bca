# tests/test_map.py
import pytest

from bptree_map.comparators import by_key, reverse_order
from bptree_map.config import DEFAULT_ORDER
from bptree_map.errors import (
    ConfigurationError,
    NoSuchKeyError,
    UnsupportedOperationError,
)
from bptree_map.map import BPlusTreeMap, Entry


def _round_trip_map():
    m = BPlusTreeMap(order=4)
    for k in [10, 20, 5, 15, 25, 1, 30]:
        m.put(k, f"v{k}")
    return m


def test_round_trip_scenario():
    m = _round_trip_map()
    assert m.size() == 7
    assert [e.key for e in m.entry_set()] == [1, 5, 10, 15, 20, 25, 30]
    assert m.get(15) == "v15"
    assert m.contains_key(99) is False
    assert m.check_consistency() == 7


def test_collections_are_ordered():
    m = _round_trip_map()
    assert list(m.key_set()) == [1, 5, 10, 15, 20, 25, 30]
    assert m.values() == ["v1", "v5", "v10", "v15", "v20", "v25", "v30"]
    assert list(m) == [1, 5, 10, 15, 20, 25, 30]
    assert list(m.entry_set())[0] == Entry(1, "v1")


def test_lookup_and_dunder_protocol():
    m = BPlusTreeMap(order=5)
    for k in range(100):
        m[k] = k * k
    assert len(m) == 100
    assert all(m[k] == k * k for k in range(100))
    assert 42 in m
    assert 100 not in m
    assert m.height() > 1


def test_put_returns_value_and_overwrites():
    m = BPlusTreeMap(order=4)
    assert m.put("k", 1) == 1
    assert m.put("k", 2) == 2
    assert m.size() == 1
    assert m.get("k") == 2
    assert m.values() == [2]


def test_overwrite_after_splits_keeps_size():
    m = _round_trip_map()
    for k in [1, 15, 30]:
        m.put(k, "new")
    assert m.size() == 7
    assert m.get(15) == "new"
    assert m.height() == 2


def test_empty_map():
    m = BPlusTreeMap()
    assert m.is_empty()
    assert m.size() == 0
    assert m.height() == 0
    assert m.contains_key(1) is False
    assert list(m.key_set()) == []
    assert m.values() == []
    assert len(m.entry_set()) == 0
    assert list(m) == []
    with pytest.raises(NoSuchKeyError):
        m.get(1)


def test_missing_key_is_key_error():
    m = _round_trip_map()
    with pytest.raises(KeyError):
        m[99]
    with pytest.raises(NoSuchKeyError) as exc:
        m.get(99)
    assert exc.value.key == 99


def test_none_values_are_distinct_from_missing():
    m = BPlusTreeMap(order=4)
    m.put("a", None)
    assert m.contains_key("a")
    assert m.get("a") is None
    assert m.get_or_default("a", "default") is None
    assert m.get_or_default("b", "default") == "default"


@pytest.mark.parametrize("populated", [False, True])
def test_unsupported_operations(populated):
    m = _round_trip_map() if populated else BPlusTreeMap()
    calls = [
        ("remove", lambda: m.remove(10)),
        ("put_all", lambda: m.put_all({1: 2})),
        ("contains_value", lambda: m.contains_value("v10")),
        ("remove", lambda: m.__delitem__(10)),
        ("put_all", lambda: m.update({1: 2})),
        ("remove", lambda: m.pop(10)),
        ("remove", lambda: m.popitem()),
    ]
    for name, call in calls:
        with pytest.raises(UnsupportedOperationError) as exc:
            call()
        assert exc.value.operation == name
        assert name in str(exc.value)
    assert m.size() == (7 if populated else 0)


def test_unsupported_is_not_implemented_error():
    with pytest.raises(NotImplementedError):
        BPlusTreeMap().remove(1)


def test_clear_is_idempotent_and_resets():
    m = BPlusTreeMap(order=4)
    m.clear()
    assert m.is_empty()

    m = _round_trip_map()
    m.clear()
    assert m.size() == 0
    assert m.is_empty()
    m.clear()
    assert m.is_empty()

    m.put(3, "c")
    assert m.tree.root.is_leaf
    assert m.tree.root.keys == [3]
    assert m.size() == 1
    assert m.order == 4


def test_construction():
    assert BPlusTreeMap().order == DEFAULT_ORDER
    assert BPlusTreeMap(order=3).order == 3
    with pytest.raises(ConfigurationError):
        BPlusTreeMap(order=2)
    with pytest.raises(ValueError):
        BPlusTreeMap(reverse_order, 1)


def test_reverse_comparator():
    m = BPlusTreeMap(reverse_order, order=4)
    for k in range(10):
        m.put(k, k)
    assert list(m.key_set()) == list(range(9, -1, -1))
    assert m.check_consistency() == 10


def test_case_insensitive_comparator():
    m = BPlusTreeMap(by_key(str.lower), order=3)
    m.put("Apple", 1)
    m.put("banana", 2)
    m.put("APPLE", 3)
    m.put("Cherry", 4)
    assert m.size() == 3
    assert m.get("apple") == 3
    keys = m.key_set()
    # la clave guardada es la primera que se insertó
    assert list(keys) == ["Apple", "banana", "Cherry"]
    assert "BANANA" in keys
    assert ("cherry", 4) in m.entry_set()


def test_key_set_and_entry_set_membership():
    m = _round_trip_map()
    keys = m.key_set()
    assert keys == {1, 5, 10, 15, 20, 25, 30}
    assert 10 in keys and 11 not in keys
    entries = m.entry_set()
    assert Entry(15, "v15") in entries
    assert (15, "wrong") not in entries
    assert "junk" not in entries
    assert keys & {1, 2, 3} == {1}


def test_key_set_is_a_snapshot():
    m = _round_trip_map()
    keys = m.key_set()
    m.put(99, "v99")
    assert 99 not in keys
    assert 99 in m.key_set()


def test_failing_comparator_leaves_map_untouched():
    class Boom(Exception):
        pass

    def cmp(a, b):
        if a == "bad" or b == "bad":
            raise Boom()
        return (a > b) - (a < b)

    m = BPlusTreeMap(cmp, order=4)
    for k in ["a", "b", "c", "d", "e"]:
        m.put(k, k.upper())
    before = [tuple(e) for e in m.entry_set()]
    with pytest.raises(Boom):
        m.put("bad", 1)
    with pytest.raises(Boom):
        m.contains_key("bad")
    assert [tuple(e) for e in m.entry_set()] == before
    assert m.size() == 5
    assert m.check_consistency() == 5


def test_repr():
    m = BPlusTreeMap(order=4)
    m.put(2, "b")
    m.put(1, "a")
    assert repr(m) == "BPlusTreeMap({1: 'a', 2: 'b'})"
    assert repr(BPlusTreeMap()) == "BPlusTreeMap({})"


def test_iteration_is_lazy():
    m = _round_trip_map()
    it = iter(m)
    assert next(it) == 1
    assert next(it) == 5


def test_key_set_equality_uses_comparator():
    m = BPlusTreeMap(by_key(str.lower))
    m.put("Apple", 1)
    keys = m.key_set()
    assert "apple" in keys
    assert keys == {"apple"}
    assert {"APPLE"} == keys
    assert keys != {"apple", "banana"}
    assert keys <= {"aPPle", "banana"}
    assert keys < {"aPPle", "banana"}
    assert not keys <= {"banana"}
    assert keys >= {"APPLE"}


def test_entry_set_equality_uses_comparator():
    m = BPlusTreeMap(by_key(str.lower), order=3)
    m.put("Apple", 1)
    m.put("banana", 2)
    entries = m.entry_set()
    assert entries == {("apple", 1), ("BANANA", 2)}
    assert entries != {("apple", 1), ("BANANA", 3)}
    assert entries >= {("APPLE", 1)}
    assert {("APPLE", 1)} <= entries


def test_membership_with_foreign_key_type_is_false():
    m = _round_trip_map()
    keys = m.key_set()
    assert None not in keys
    assert "a" not in keys
    assert ("a", 1) not in m.entry_set()
    assert keys != {"a", "b", 1, 5, 10, 15, 20}
