import random

import pytest

from fixedmap.datastructures import HashMap, create
from fixedmap.datastructures import hash_map, linked_list


def chain_total(hm):
    return sum(len(bucket) for _, bucket in hm.slots())


def test_hash_map_create():
    hm = HashMap(5)
    assert hm.capacity == 5
    assert hm.size == 0
    assert len(list(hm.slots())) == 5
    assert all(bucket.is_empty for _, bucket in hm.slots())


def test_zero_capacity_rejected():
    with pytest.raises(ValueError):
        HashMap(0)
    with pytest.raises(ValueError):
        create(-3)


def test_create_returns_none_on_allocation_failure(monkeypatch):
    def boom(capacity):
        raise MemoryError

    monkeypatch.setattr(HashMap, "_allocate_buckets", staticmethod(boom))
    assert create(5) is None


def test_get():
    hm = HashMap(5)
    hm.put("foo", "bar")
    assert hm.get("foo") == (True, "bar")
    assert hm.get("nope") == (False, None)


def test_contains():
    hm = HashMap(5)
    hm.put("foo", "bar")
    assert hm.contains("foo") is True
    assert hm.contains("baz") is False
    assert "foo" in hm
    assert 42 not in hm


def test_locate_entry():
    hm = HashMap(5)
    hm.put("foo", "bar")
    entry = hm.locate_entry("foo")
    assert entry.key == "foo"
    assert entry.value == "bar"
    assert hm.locate_entry("baz") is None


def test_put_replaces_value_without_growing():
    hm = HashMap(5)
    assert hm.put("foo", "bar") is True
    assert hm.get("foo") == (True, "bar")
    assert hm.size == 1
    assert hm.put("foo", "baz") is True
    assert hm.get("foo") == (True, "baz")
    assert hm.size == 1


def test_returned_value_survives_mutation():
    hm = HashMap(5)
    hm.put("foo", "bar")
    _, value = hm.get("foo")
    hm.put("foo", "baz")
    hm.remove("foo")
    assert value == "bar"


def test_entry_for_key():
    hm = HashMap(5)
    hm.put("foo", "bar")
    assert hm.entry_for_key("foo").key == "foo"

    fresh = hm.entry_for_key("baz")
    assert fresh.key is None
    # the new entry is linked into the key's chain
    bucket = dict(hm.slots())[hm.index("baz")]
    assert any(e is fresh for e in bucket.entries())


def test_entry_for_key_allocation_failure(monkeypatch):
    def boom():
        raise MemoryError

    monkeypatch.setattr(hash_map, "create_entry", boom)
    hm = HashMap(5)
    assert hm.entry_for_key("foo") is None
    assert hm.put("foo", "bar") is False
    assert hm.size == 0
    assert chain_total(hm) == 0


def test_put_population_failure_keeps_size_consistent(monkeypatch):
    hm = HashMap(5)
    hm.put("a", "1")

    def failing_own(text, what):
        raise MemoryError

    monkeypatch.setattr(linked_list, "_own", failing_own)
    assert hm.put("f", "2") is False  # same bucket as "a"
    assert hm.size == 1
    assert chain_total(hm) == 1
    assert not hm.contains("f")

    # replacement failure keeps the old value
    assert hm.put("a", "3") is False
    assert hm.get("a") == (True, "1")

    monkeypatch.undo()
    assert hm.put("f", "2") is True
    assert hm.size == 2


def test_put_rejects_non_string_value():
    hm = HashMap(5)
    with pytest.raises(TypeError):
        hm.put("foo", 1)  # type: ignore[arg-type]
    assert hm.size == 0
    assert chain_total(hm) == 0


def test_remove():
    hm = HashMap(5)
    assert hm.remove("foo") is False

    hm.put("foo", "bar")
    assert hm.contains("foo")
    assert hm.size == 1

    assert hm.remove("foo") is True
    assert not hm.contains("foo")
    assert hm.size == 0
    assert hm.remove("foo") is False
    assert hm.size == 0


def test_collisions_coexist_and_remove_in_either_order():
    for order in (("a", "f", "k"), ("k", "f", "a"), ("f", "a", "k")):
        hm = HashMap(5)
        for k in ("a", "f", "k"):
            hm.put(k, k.upper())
        assert hm.index("a") == hm.index("f") == hm.index("k")
        bucket = dict(hm.slots())[0]
        assert [e.key for e in bucket.entries()] == ["a", "f", "k"]

        remaining = ["a", "f", "k"]
        for k in order:
            assert hm.remove(k) is True
            remaining.remove(k)
            for other in remaining:
                assert hm.get(other) == (True, other.upper())
            assert [e.key for e in bucket.entries()] == remaining
            assert hm.size == len(remaining)


def test_clear():
    hm = HashMap(5)
    hm.put("foo", "bar")
    hm.put("baz", "boo")
    hm.clear()
    assert hm.size == 0
    assert hm.capacity == 5
    assert not hm.contains("foo")
    assert not hm.contains("baz")
    assert all(bucket.is_empty for _, bucket in hm.slots())


def test_clear_index():
    hm = HashMap(5)
    hm.put("a", "test")
    hm.clear_index(0)
    assert hm.size == 0
    assert not hm.contains("a")


def test_clear_index_only_touches_one_bucket():
    hm = HashMap(5)
    for k in "abcdefg":  # a,f -> 0; b,g -> 1
        hm.put(k, k)
    hm.clear_index(1)
    assert hm.size == 5
    assert not hm.contains("b") and not hm.contains("g")
    for k in "acdef":
        assert hm.contains(k)


def test_clear_index_out_of_range():
    hm = HashMap(5)
    with pytest.raises(IndexError):
        hm.clear_index(5)
    with pytest.raises(IndexError):
        hm.clear_index(-1)


def test_destroy_makes_map_unusable():
    hm = HashMap(5)
    hm.put("foo", "bar")
    hm.destroy()
    assert hm.destroyed
    assert hm.size == 0
    with pytest.raises(RuntimeError):
        hm.get("foo")
    with pytest.raises(RuntimeError):
        hm.put("foo", "bar")


def test_random_workload_keeps_size_invariant():
    rng = random.Random(1234)
    for capacity in (1, 3, 17):
        hm = HashMap(capacity)
        shadow = {}
        for _ in range(500):
            k = f"k{rng.randint(0, 60)}"
            op = rng.random()
            if op < 0.6:
                v = str(rng.random())
                assert hm.put(k, v) is True
                shadow[k] = v
            elif op < 0.9:
                assert hm.remove(k) is (k in shadow)
                shadow.pop(k, None)
            else:
                i = hm.index(k)
                hm.clear_index(i)
                shadow = {sk: sv for sk, sv in shadow.items() if hm.index(sk) != i}
            assert hm.size == len(shadow) == chain_total(hm)
        assert dict(hm.items()) == shadow
        for k, v in shadow.items():
            assert hm.get(k) == (True, v)
        assert not hm.contains("never-inserted")
        hm.clear()
        assert hm.size == 0
        assert not any(hm.contains(k) for k in shadow)


def test_iteration_and_load_factor():
    hm = HashMap(4)
    for k in ("x", "y", "z"):
        hm.put(k, k * 2)
    assert sorted(hm) == ["x", "y", "z"]
    assert sorted(hm.values()) == ["xx", "yy", "zz"]
    assert len(hm) == 3
    assert hm.load_factor == 0.75


def test_clear_after_unpopulated_entry_keeps_size_at_zero():
    hm = HashMap(1)
    hm.put("a", "1")
    hm.entry_for_key("b")
    hm.clear()
    assert hm.size == 0
    assert chain_total(hm) == 0


def test_clear_index_skips_unpopulated_entry_in_size():
    hm = HashMap(5)
    hm.put("a", "1")
    hm.put("b", "2")
    hm.entry_for_key("f")  # bucket 0, next to "a"
    hm.clear_index(0)
    assert hm.size == 1
    assert hm.get("b") == (True, "2")


def test_entry_for_key_reuses_unpopulated_entry():
    hm = HashMap(1)
    hm.put("a", "1")
    first = hm.entry_for_key("b")
    assert hm.entry_for_key("b") is first
    assert hm.entry_for_key("c") is first
    assert hm.put("b", "v") is True
    bucket = dict(hm.slots())[0]
    assert [e.key for e in bucket.entries()] == ["a", "b"]
    assert hm.size == chain_total(hm) == 2
