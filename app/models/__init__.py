from .property import (
    ListingFilter,
    ListingResult,
    Property,
    PropertyDetail,
    PropertyIn,
)

__all__ = [
    "ListingFilter",
    "ListingResult",
    "Property",
    "PropertyDetail",
    "PropertyIn",
]
