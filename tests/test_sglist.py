import pytest

from sgrelay.sglist import SgList, SgListError, SgListFull


def test_add_assigns_sequential_keys():
    lst = SgList(4)
    first = lst.add("a")
    second = lst.add("b")
    assert first == 0
    assert second == first + 1
    assert lst.get(second) == "b"
    assert len(lst) == 2


def test_add_raises_when_full():
    lst = SgList(1)
    lst.add("a")
    with pytest.raises(SgListFull):
        lst.add("b")


def test_add_after_max_key_fails():
    lst = SgList(4)
    lst.put(0xFFFFFFFF, "top")
    with pytest.raises(SgListError):
        lst.add("more")


def test_put_keeps_keys_sorted():
    lst = SgList(10)
    for key in (30, 10, 20, 5):
        lst.put(key, str(key))
    keys = [k for k, _ in lst]
    assert keys == sorted(keys)
    assert lst.get(20) == "20"


def test_put_replaces_existing():
    lst = SgList(3)
    index = lst.put(7, "old")
    assert lst.put(7, "new") == index
    assert lst.get(7) == "new"
    assert len(lst) == 1


def test_put_when_full_raises_even_for_existing_key():
    lst = SgList(1)
    lst.put(3, "x")
    with pytest.raises(SgListFull):
        lst.put(3, "y")


def test_put_rejects_out_of_range_key():
    lst = SgList(2)
    with pytest.raises(ValueError):
        lst.put(-1, "x")


def test_get_missing_and_none_items():
    lst = SgList(3)
    lst.put(1, None)
    with pytest.raises(KeyError):
        lst.get(1)
    with pytest.raises(KeyError):
        lst.get(2)


def test_get_repeat_uses_hint_and_falls_back():
    lst = SgList(5)
    for key in (2, 4, 6):
        lst.put(key, key * 10)
    index, item = lst.get_repeat(4, 1)
    assert (index, item) == (1, 40)
    index, item = lst.get_repeat(6, 0)
    assert item == 60
    assert list(lst)[index] == (6, 60)
    with pytest.raises(KeyError):
        lst.get_repeat(5, 0)


def test_first_and_empty():
    lst = SgList(3)
    with pytest.raises(KeyError):
        lst.first()
    lst.put(9, "nine")
    lst.put(3, "three")
    assert lst.first() == (3, "three")


def test_next_after_walks_all_entries():
    lst = SgList(5)
    for key in (1, 5, 9):
        lst.put(key, f"v{key}")
    key, item = lst.first()
    seen = [(key, item)]
    while True:
        try:
            key, item = lst.next_after(key)
        except KeyError:
            break
        seen.append((key, item))
    assert seen == list(lst)


def test_next_after_below_first_key_not_found():
    lst = SgList(3)
    lst.put(10, "x")
    with pytest.raises(KeyError):
        lst.next_after(3)


def test_nearest_finds_exact_or_higher():
    lst = SgList(5)
    for key in (2, 8):
        lst.put(key, key)
    assert lst.nearest(8) == (8, 8)
    assert lst.nearest(5) == (8, 8)
    assert lst.nearest(0) == (2, 2)
    with pytest.raises(KeyError):
        lst.nearest(9)
    with pytest.raises(KeyError):
        lst.nearest(1)


def test_delete_removes_item():
    lst = SgList(3)
    lst.put(1, "a")
    lst.put(2, "b")
    assert lst.delete(1) == "a"
    assert list(lst) == [(2, "b")]
    with pytest.raises(KeyError):
        lst.delete(1)


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        SgList(-1)