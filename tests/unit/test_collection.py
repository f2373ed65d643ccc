from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from fulcrum.core.collection import Collection, parse_datetime
from fulcrum.core.record import Record


def _items(*values, attr="name"):
    return [SimpleNamespace(**{attr: value, "tag": index}) for index, value in enumerate(values)]


def test_len_and_count_prefers_total_count():
    collection = Collection(_items("a", "b"), total_count=40)
    assert len(collection) == 2
    assert collection.count() == 40
    assert Collection(_items("a")).count() == 1


def test_add_appends_or_prepends():
    collection = Collection()
    collection.add("b")
    collection.add("c")
    collection.add("a", prepend=True)
    assert list(collection) == ["a", "b", "c"]
    assert collection[0] == "a"


def test_order_by_ascending_and_descending():
    collection = Collection(_items("pear", "apple", "fig"))
    assert [item.name for item in collection.order_by("name")] == ["apple", "fig", "pear"]
    assert [item.name for item in collection.order_by("name", "desc")] == ["pear", "fig", "apple"]


def test_order_by_is_stable_for_equal_keys():
    collection = Collection(_items("b", "a", "b", "a"))
    collection.order_by("name")
    assert [(item.name, item.tag) for item in collection] == [("a", 1), ("a", 3), ("b", 0), ("b", 2)]


def test_order_by_datetime_kind():
    collection = Collection(
        _items("2014-03-05T19:41:44Z", "2013-01-01T00:00:00Z", "2014-03-05T08:00:00-05:00", attr="updated_at")
    )
    collection.order_by("updated_at", kind="datetime")
    assert [item.tag for item in collection] == [1, 2, 0]


def test_order_by_custom_key_wins_over_kind():
    collection = Collection(_items("10", "9", "100"))
    collection.order_by("name", key=int, kind="datetime")
    assert [item.name for item in collection] == ["9", "10", "100"]


def test_parse_datetime_normalizes_to_utc():
    assert parse_datetime("2014-03-05T19:41:44Z") == datetime(2014, 3, 5, 19, 41, 44, tzinfo=timezone.utc)
    assert parse_datetime("2014-03-05T19:41:44").tzinfo == timezone.utc
    assert parse_datetime(None) == datetime.min.replace(tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "page, first, last",
    [(1, 1, 10), (2, 11, 20), (3, 21, 25)],
)
def test_paging_indexes(page, first, last):
    collection = Collection(range(25))
    assert collection.first_index(page, 10) == first
    assert collection.last_index(page, 10) == last
    assert collection.page(page, 10) == list(range(first - 1, last))


def test_last_page():
    assert Collection(range(25)).last_page(10) == 3
    assert Collection(range(20)).last_page(10) == 2
    assert Collection().last_page(10) == 1


def test_order_by_places_missing_values_first_ascending_last_descending():
    collection = Collection(
        [
            Record({"id": "1", "status": "open"}),
            Record({"id": "2", "status": None}),
            Record({"id": "3", "status": "done"}),
            Record({"id": "4"}),
        ]
    )

    collection.order_by("status")
    assert [record.id for record in collection] == ["2", "4", "3", "1"]

    collection.order_by("status", "desc")
    assert [record.id for record in collection] == ["1", "3", "2", "4"]


def test_order_by_missing_values_with_named_and_custom_keys():
    collection = Collection(_items("2014-01-01T00:00:00Z", None, "2013-01-01T00:00:00Z", attr="updated_at"))
    collection.order_by("updated_at", kind="datetime")
    assert [item.tag for item in collection] == [1, 2, 0]

    collection = Collection(_items("10", None, "9"))
    collection.order_by("name", "desc", key=int)
    assert [item.name for item in collection] == ["10", "9", None]


@pytest.mark.parametrize("per_page", [0, -5])
def test_paging_rejects_non_positive_page_size(per_page):
    collection = Collection(range(5))
    with pytest.raises(ValueError, match="per_page"):
        collection.last_page(per_page)
    with pytest.raises(ValueError, match="per_page"):
        collection.page(1, per_page)
