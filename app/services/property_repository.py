"""
MongoDB repository for property documents.

Translates ListingFilter objects into document-store queries and performs
the single-record reads and writes. Each method awaits the driver call to
completion; nothing here retries or swallows driver errors.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING

from app.models.property import ListingFilter

logger = logging.getLogger(__name__)

# Compound index backing the name/address/price filters
LISTING_INDEX = [("name", ASCENDING), ("address", ASCENDING), ("price", ASCENDING)]

# Fixed listing order; _id breaks ties between equal names
LISTING_SORT = [("name", ASCENDING), ("_id", ASCENDING)]


def _contains(text: str) -> Dict[str, str]:
    """Case-insensitive, unanchored substring match on literal text."""
    return {"$regex": re.escape(text), "$options": "i"}


def build_query(listing_filter: ListingFilter) -> Dict[str, Any]:
    """
    Build the MongoDB query document for a listing filter.

    The same document is used for the page fetch and for the count, so the
    two can never disagree on which records match.

    Args:
        listing_filter: Search constraints to apply.

    Returns:
        Query document; an empty document matches every property.
    """
    conditions: List[Dict[str, Any]] = []

    if listing_filter.name:
        conditions.append({"name": _contains(listing_filter.name)})
    if listing_filter.address:
        conditions.append({"address": _contains(listing_filter.address)})

    # Inclusive price bounds
    if listing_filter.min_price is not None:
        conditions.append({"price": {"$gte": listing_filter.min_price}})
    if listing_filter.max_price is not None:
        conditions.append({"price": {"$lte": listing_filter.max_price}})

    if not conditions:
        return {}
    return {"$and": conditions}


def _object_id(property_id: str) -> Optional[ObjectId]:
    if not ObjectId.is_valid(property_id):
        return None
    return ObjectId(property_id)


class PropertyRepository:
    """Document-store access for the properties collection."""

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        """
        Initialize the repository.

        Args:
            collection: Motor collection holding property documents.
        """
        self.collection = collection

    async def ensure_indexes(self) -> None:
        """Create the listing index if it does not exist yet."""
        name = await self.collection.create_index(LISTING_INDEX)
        logger.info("Ensured index %s on %s", name, self.collection.name)

    async def find_page(self, listing_filter: ListingFilter) -> List[Dict[str, Any]]:
        """
        Fetch one page of matching properties, ordered by name.

        Args:
            listing_filter: Search constraints and page parameters.

        Returns:
            Raw property documents for the requested page.
        """
        query = build_query(listing_filter)
        logger.debug("Listing query: %s", query)

        cursor = (
            self.collection.find(query)
            .sort(LISTING_SORT)
            .skip(listing_filter.skip)
            .limit(listing_filter.page_size)
        )
        return await cursor.to_list(length=listing_filter.page_size)

    async def count(self, listing_filter: ListingFilter) -> int:
        """Count every property matching the filter, ignoring pagination."""
        return await self.collection.count_documents(build_query(listing_filter))

    async def get_by_id(self, property_id: str) -> Optional[Dict[str, Any]]:
        """Return the stored document, or None if the id does not resolve."""
        oid = _object_id(property_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Persist a new property document.

        Returns:
            The document including its store-assigned ``_id``.
        """
        document = dict(document)
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def replace(self, property_id: str, document: Dict[str, Any]) -> Tuple[bool, bool]:
        """
        Replace the stored document, keeping its identifier.

        Returns:
            (matched, modified) as reported by the store.
        """
        oid = _object_id(property_id)
        if oid is None:
            return False, False
        replacement = {k: v for k, v in document.items() if k != "_id"}
        result = await self.collection.replace_one({"_id": oid}, replacement)
        return result.matched_count > 0, result.modified_count > 0

    async def delete(self, property_id: str) -> bool:
        """Delete a property; returns whether the store removed a document."""
        oid = _object_id(property_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
