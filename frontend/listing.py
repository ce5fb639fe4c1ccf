"""
Client-side filtering, sorting and pagination of the bulk snapshot.

Mirrors the server's listing rules (blank filters ignored, case-insensitive
substring matching, inclusive price bounds) so local browsing agrees with
what the API would return, and adds a user-selectable sort.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

PropertyDict = Dict[str, Any]

SORT_OPTIONS: Dict[str, str] = {
    "": "No sort",
    "price-asc": "Price: low to high",
    "price-desc": "Price: high to low",
    "name-asc": "Name: A to Z",
    "name-desc": "Name: Z to A",
}


@dataclass
class ListingPage:
    """One page of the locally derived listing."""

    properties: List[PropertyDict] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    page_number: int = 1
    page_size: int = 10


def _contains(value: str, needle: Optional[str]) -> bool:
    if not needle or not needle.strip():
        return True
    return needle.lower() in value.lower()


def filter_properties(
    properties: List[PropertyDict],
    name: Optional[str] = None,
    address: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List[PropertyDict]:
    """Keep the properties matching every supplied constraint, in input order."""
    result = []
    for prop in properties:
        if not _contains(prop.get("name", ""), name):
            continue
        if not _contains(prop.get("address", ""), address):
            continue
        price = prop.get("price", 0)
        if min_price is not None and price < min_price:
            continue
        if max_price is not None and price > max_price:
            continue
        result.append(prop)
    return result


def sort_properties(properties: List[PropertyDict], sort_by: Optional[str]) -> List[PropertyDict]:
    """
    Sort properties by one of the SORT_OPTIONS keys.

    An empty key keeps input order. Sorting is stable, so equal keys keep
    their relative order.
    """
    if not sort_by:
        return list(properties)
    if sort_by == "price-asc":
        return sorted(properties, key=lambda p: p.get("price", 0))
    if sort_by == "price-desc":
        return sorted(properties, key=lambda p: p.get("price", 0), reverse=True)
    if sort_by == "name-asc":
        return sorted(properties, key=lambda p: p.get("name", ""))
    if sort_by == "name-desc":
        return sorted(properties, key=lambda p: p.get("name", ""), reverse=True)
    raise ValueError(f"Unknown sort option: {sort_by!r}")


def _check_paging(page_number: int, page_size: int) -> None:
    if page_number < 1:
        raise ValueError("page_number must be at least 1")
    if page_size < 1:
        raise ValueError("page_size must be at least 1")


def total_pages(total_count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return math.ceil(total_count / page_size)


def clamp_page(page_number: int, page_count: int) -> int:
    """Bring a page number back into 1..page_count (page 1 when there are no pages)."""
    return max(1, min(page_number, max(1, page_count)))


def paginate(properties: List[PropertyDict], page_number: int, page_size: int) -> List[PropertyDict]:
    """
    Return the requested page of an ordered list.

    Pages past the end are empty rather than an error.
    """
    _check_paging(page_number, page_size)
    start = (page_number - 1) * page_size
    return properties[start:start + page_size]


def derive_listing(
    snapshot: List[PropertyDict],
    name: Optional[str] = None,
    address: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    sort_by: Optional[str] = "",
    page_number: int = 1,
    page_size: int = 10,
) -> ListingPage:
    """
    Filter, sort and paginate the snapshot.

    Args:
        snapshot: Bulk list of property dicts, treated as the full catalog.
        name: Optional name substring.
        address: Optional address substring.
        min_price: Optional inclusive lower price bound.
        max_price: Optional inclusive upper price bound.
        sort_by: One of the SORT_OPTIONS keys.
        page_number: 1-based page number.
        page_size: Number of properties per page.

    Returns:
        ListingPage whose totals describe the whole filtered set.
    """
    if not snapshot:
        _check_paging(page_number, page_size)
        return ListingPage(page_number=page_number, page_size=page_size)

    filtered = filter_properties(snapshot, name, address, min_price, max_price)
    ordered = sort_properties(filtered, sort_by)
    return ListingPage(
        properties=paginate(ordered, page_number, page_size),
        total_count=len(ordered),
        total_pages=total_pages(len(ordered), page_size),
        page_number=page_number,
        page_size=page_size,
    )
