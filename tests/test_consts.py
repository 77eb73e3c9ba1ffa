import pytest

from erdraft.consts import bindex, compare


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (1, 2, -1),
        (2, 1, 1),
        (3, 3, 0),
        (1.5, 1.5, 0),
        (-2.5, 1.0, -1),
    ],
)
def test_compare_numbers(a, b, expected):
    assert compare(a, b) == expected


def test_compare_strings_ignores_case():
    assert compare("Table", "tABLE") == 0
    assert compare("alpha", "Beta") == -1
    assert compare("Zeta", "beta") == 1


def test_compare_is_antisymmetric():
    pairs = [(1, 5), ("a", "B"), (2.0, -3.0)]
    for a, b in pairs:
        assert compare(a, b) == -compare(b, a)


def test_bindex_finds_existing_item():
    items = [1, 3, 5, 7, 9]
    for value in items:
        index, insert = bindex(items, value)
        assert index == items.index(value)
        assert insert == index


def test_bindex_missing_item_reports_insert_position():
    items = [1, 3, 5, 7, 9]
    index, insert = bindex(items, 4)
    assert index == -1
    merged = items[:insert] + [4] + items[insert:]
    assert merged == sorted(merged)


def test_bindex_empty_sequence():
    assert bindex([], 10) == (-1, 0)


def test_bindex_with_key_and_case_insensitive_strings():
    items = [{"name": "apple"}, {"name": "Banana"}, {"name": "cherry"}]
    index, _ = bindex(items, {"name": "BANANA"}, key=lambda item: item["name"])
    assert index == 1
    index, insert = bindex(items, {"name": "blueberry"}, key=lambda item: item["name"])
    assert index == -1
    assert insert == 2