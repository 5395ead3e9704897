# tests/test_query.py

"""Tests for list parameter parsing and the paginated list query."""

import pytest

from catalog_service.model import Product, db
from catalog_service.query import (
    PRODUCT_LIST,
    REVIEW_LIST,
    ListParams,
    parse_positive_int,
)


@pytest.mark.parametrize("value, expected", [
    (None, 10),
    ("", 10),
    ("abc", 10),
    ("0", 10),
    ("-4", 10),
    ("2.5", 10),
    ("25", 25),
    ("+7", 7),
    (" 5 ", 10),
    ("1_0", 10),
    ("\u0665", 10),
    ("9223372036854775807", 9223372036854775807),
    ("9223372036854775808", 10),
])
def test_parse_positive_int(value, expected):
    assert parse_positive_int(value, 10) == expected


def test_parse_defaults():
    params = PRODUCT_LIST.parse({})
    assert (params.limit, params.page, params.sort, params.order, params.search) == (
        10, 1, "created_at", "desc", "")
    assert params.offset == 0


def test_parse_accepts_allowed_values():
    params = PRODUCT_LIST.parse({"limit": "5", "page": "3", "sort": "price",
                                 "order": "asc", "search": "wid"})
    assert params.limit == 5
    assert params.page == 3
    assert params.offset == 10
    assert params.sort == "price"
    assert params.order == "asc"
    assert params.search == "wid"


def test_parse_rejects_unknown_sort_and_order():
    params = PRODUCT_LIST.parse({"sort": "id; DROP TABLE products", "order": "sideways"})
    assert params.sort == "created_at"
    assert params.order == "desc"


def test_review_sort_keys_differ_from_products():
    assert REVIEW_LIST.parse({"sort": "content"}).sort == "content"
    assert REVIEW_LIST.parse({"sort": "price"}).sort == "created_at"


def test_review_list_ignores_search():
    assert REVIEW_LIST.parse({"search": "x"}).search == ""


def test_parse_uses_given_default_limit():
    assert PRODUCT_LIST.parse({}, default_limit=25).limit == 25
    assert PRODUCT_LIST.parse({"limit": "0"}, default_limit=25).limit == 25


def _seed(names):
    for i, name in enumerate(names, start=1):
        db.session.add(Product(name=name, price=float(i)))
    db.session.commit()


def test_run_pagination_totals(app):
    with app.app_context():
        _seed([f"Item {i}" for i in range(7)])
        rows, pagination = PRODUCT_LIST.run(Product.query, ListParams(limit=3, page=3))
        assert len(rows) == 1
        assert pagination == {"total": 7, "page": 3, "limit": 3, "pages": 3}


def test_run_page_past_end_is_empty(app):
    with app.app_context():
        _seed(["a", "b"])
        rows, pagination = PRODUCT_LIST.run(Product.query, ListParams(limit=10, page=5))
        assert rows == []
        assert pagination["total"] == 2
        assert pagination["pages"] == 1


def test_run_sorts_by_price_ascending(app):
    with app.app_context():
        _seed(["a", "b", "c"])
        rows, _ = PRODUCT_LIST.run(Product.query, ListParams(sort="price", order="asc"))
        assert [r.price for r in rows] == [1.0, 2.0, 3.0]


def test_run_search_is_case_insensitive_substring(app):
    with app.app_context():
        _seed(["Blue Widget", "widget pro", "Gadget"])
        rows, pagination = PRODUCT_LIST.run(Product.query, ListParams(search="WIDGET", sort="name", order="asc"))
        assert [r.name for r in rows] == ["Blue Widget", "widget pro"]
        assert pagination["total"] == 2


def test_run_search_treats_wildcards_literally(app):
    with app.app_context():
        _seed(["100% cotton", "cotton"])
        rows, _ = PRODUCT_LIST.run(Product.query, ListParams(search="%"))
        assert [r.name for r in rows] == ["100% cotton"]


def test_run_skips_soft_deleted_rows(app):
    with app.app_context():
        _seed(["kept", "gone"])
        gone = Product.query.filter_by(name="gone").one()
        gone.deleted_at = gone.created_at
        db.session.commit()
        rows, pagination = PRODUCT_LIST.run(Product.query, ListParams())
        assert [r.name for r in rows] == ["kept"]
        assert pagination["total"] == 1


def test_parse_resets_page_when_offset_overflows():
    params = PRODUCT_LIST.parse({"limit": "1000", "page": "9223372036854775807"})
    assert params.limit == 1000
    assert params.page == 1
    assert params.offset == 0
