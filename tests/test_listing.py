import pytest

from frontend.listing import (
    clamp_page,
    derive_listing,
    filter_properties,
    paginate,
    sort_properties,
    total_pages,
)

PROPERTIES = [
    {"id": "1", "name": "Luxury Villa", "address": "12 Ocean Drive, Miami", "price": 300000},
    {"id": "2", "name": "Beach House", "address": "4 Shore Road, Miami", "price": 450000},
    {"id": "3", "name": "City Loft", "address": "88 Main Street, New York", "price": 650000},
    {"id": "4", "name": "Country Cottage", "address": "7 Mill Lane, Austin", "price": 120000},
    {"id": "5", "name": "Apartment", "address": "1 Oak Road, Miami", "price": 450000},
]


def ids(items):
    return [p["id"] for p in items]


def test_no_filters_keeps_everything_in_order():
    assert filter_properties(PROPERTIES) == PROPERTIES


def test_name_and_address_are_case_insensitive_substrings():
    assert ids(filter_properties(PROPERTIES, name="VILLA")) == ["1"]
    assert ids(filter_properties(PROPERTIES, address="miAMI")) == ["1", "2", "5"]
    assert ids(filter_properties(PROPERTIES, name="o", address="road")) == ["2"]


def test_blank_text_filters_are_ignored():
    assert filter_properties(PROPERTIES, name="  ", address="") == PROPERTIES


def test_price_bounds_are_inclusive():
    assert ids(filter_properties(PROPERTIES, min_price=300000, max_price=450000)) == ["1", "2", "5"]


def test_inverted_price_bounds_are_empty():
    assert filter_properties(PROPERTIES, min_price=500000, max_price=100000) == []


@pytest.mark.parametrize(
    "sort_by, expected",
    [
        ("", ["1", "2", "3", "4", "5"]),
        (None, ["1", "2", "3", "4", "5"]),
        ("price-asc", ["4", "1", "2", "5", "3"]),
        ("price-desc", ["3", "2", "5", "1", "4"]),
        ("name-asc", ["5", "2", "3", "4", "1"]),
        ("name-desc", ["1", "4", "3", "2", "5"]),
    ],
)
def test_sort_options(sort_by, expected):
    assert ids(sort_properties(PROPERTIES, sort_by)) == expected


def test_unknown_sort_option_raises():
    with pytest.raises(ValueError):
        sort_properties(PROPERTIES, "size-asc")


@pytest.mark.parametrize(
    "total, size, expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 5, 3), (11, 10, 2), (1000, 1, 1000)],
)
def test_total_pages(total, size, expected):
    assert total_pages(total, size) == expected


def test_paginate_slices_and_clips():
    assert ids(paginate(PROPERTIES, 1, 2)) == ["1", "2"]
    assert ids(paginate(PROPERTIES, 3, 2)) == ["5"]
    assert paginate(PROPERTIES, 4, 2) == []


@pytest.mark.parametrize("page_number, page_size", [(0, 10), (1, 0), (-1, 5)])
def test_paginate_rejects_non_positive_inputs(page_number, page_size):
    with pytest.raises(ValueError):
        paginate(PROPERTIES, page_number, page_size)


def test_derive_listing_totals_cover_filtered_set():
    page = derive_listing(PROPERTIES, address="miami", sort_by="price-desc", page_number=2, page_size=2)

    assert ids(page.properties) == ["1"]
    assert page.total_count == 3
    assert page.total_pages == 2


def test_derive_listing_page_beyond_last():
    page = derive_listing(PROPERTIES, page_number=10, page_size=2)
    assert page.properties == []
    assert page.total_count == 5
    assert page.total_pages == 3


def test_derive_listing_empty_snapshot():
    page = derive_listing([], name="anything", page_number=3, page_size=5)
    assert page.properties == []
    assert page.total_count == 0
    assert page.total_pages == 0


@pytest.mark.parametrize(
    "page_number, page_count, expected",
    [(3, 5, 3), (9, 2, 2), (0, 5, 1), (4, 0, 1), (1, 0, 1)],
)
def test_clamp_page(page_number, page_count, expected):
    assert clamp_page(page_number, page_count) == expected


def test_page_left_past_the_end_after_a_shrinking_refresh_is_clamped():
    page = derive_listing(PROPERTIES, page_number=3, page_size=2)
    assert ids(page.properties) == ["5"]

    shrunk = derive_listing(PROPERTIES[:2], page_number=3, page_size=2)
    assert shrunk.properties == []

    page_number = clamp_page(3, shrunk.total_pages)
    assert page_number == 1
    assert ids(derive_listing(PROPERTIES[:2], page_number=page_number, page_size=2).properties) == ["1", "2"]
