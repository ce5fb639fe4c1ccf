"""
Property service: maps between API models and stored documents.

Every public method returns a result variant (Success, NotFound,
ValidationFailure or StoreFailure) instead of raising, so the HTTP layer
is the only place that decides on status codes.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import Request
from pymongo.errors import PyMongoError

from app.models.property import (
    ListingFilter,
    ListingResult,
    Property,
    PropertyDetail,
    PropertyIn,
)
from app.services.property_repository import PropertyRepository
from app.services.results import (
    NotFound,
    ServiceResult,
    StoreFailure,
    Success,
    ValidationFailure,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _not_found(property_id: str) -> NotFound:
    return NotFound(message=f"Property with ID {property_id} not found")


def to_property(document: Dict[str, Any]) -> Property:
    """Project a stored document onto the listing shape."""
    return Property(
        id=str(document["_id"]),
        id_owner=document.get("id_owner", ""),
        name=document["name"],
        address=document["address"],
        price=document["price"],
        image_url=document.get("image_url", ""),
    )


def to_property_detail(document: Dict[str, Any]) -> PropertyDetail:
    """Project a stored document onto the detail shape, timestamps included."""
    return PropertyDetail(
        **to_property(document).model_dump(),
        created_at=document["created_at"],
        updated_at=document["updated_at"],
    )


class PropertyService:
    """Service layer between the HTTP routes and the repository."""

    def __init__(self, repository: PropertyRepository, max_page_size: int = 1000) -> None:
        """
        Initialize the property service.

        Args:
            repository: Document-store access for properties.
            max_page_size: Largest page size a listing request may ask for.
        """
        self.repository = repository
        self.max_page_size = max_page_size

    async def list_properties(self, listing_filter: ListingFilter) -> ServiceResult[ListingResult]:
        """
        Fetch one page of matching properties plus the total match count.

        Args:
            listing_filter: Search constraints and page parameters.

        Returns:
            Success(ListingResult), ValidationFailure for an oversized page,
            or StoreFailure.
        """
        if listing_filter.page_size > self.max_page_size:
            return ValidationFailure(
                message="Invalid pagination parameters",
                errors=[f"pageSize must be at most {self.max_page_size}"],
            )

        try:
            documents = await self.repository.find_page(listing_filter)
            total_count = await self.repository.count(listing_filter)
        except PyMongoError as e:
            logger.exception("Failed to list properties")
            return StoreFailure(message="Error retrieving properties", error=str(e))

        logger.info(
            "Listed %d of %d properties (page %d, size %d)",
            len(documents),
            total_count,
            listing_filter.page_number,
            listing_filter.page_size,
        )
        return Success(
            ListingResult(
                data=[to_property(d) for d in documents],
                total_count=total_count,
                page_number=listing_filter.page_number,
                page_size=listing_filter.page_size,
            )
        )

    async def get_property(self, property_id: str) -> ServiceResult[PropertyDetail]:
        try:
            document = await self.repository.get_by_id(property_id)
        except PyMongoError as e:
            logger.exception("Failed to get property %s", property_id)
            return StoreFailure(message="Error retrieving the property", error=str(e))

        if document is None:
            return _not_found(property_id)
        return Success(to_property_detail(document))

    async def create_property(self, body: PropertyIn) -> ServiceResult[Property]:
        """
        Persist a new property with server-assigned timestamps.

        Both timestamps are set to the same instant on creation.
        """
        now = _utcnow()
        document = body.model_dump()
        document["created_at"] = now
        document["updated_at"] = now

        try:
            created = await self.repository.insert(document)
        except PyMongoError as e:
            logger.exception("Failed to create property")
            return StoreFailure(message="Error creating the property", error=str(e))

        logger.info("Created property %s", created["_id"])
        return Success(to_property(created))

    async def update_property(self, property_id: str, body: PropertyIn) -> ServiceResult[bool]:
        """
        Overwrite the mutable fields of an existing property.

        The creation timestamp is preserved and the update timestamp
        refreshed. No write happens when the id does not resolve.

        Returns:
            Success(modified) where modified is what the store reported,
            NotFound, or StoreFailure.
        """
        try:
            existing = await self.repository.get_by_id(property_id)
            if existing is None:
                return _not_found(property_id)

            document = body.model_dump()
            document["created_at"] = existing["created_at"]
            document["updated_at"] = _utcnow()

            matched, modified = await self.repository.replace(property_id, document)
        except PyMongoError as e:
            logger.exception("Failed to update property %s", property_id)
            return StoreFailure(message="Error updating the property", error=str(e))

        # Deleted between the read and the replace
        if not matched:
            return _not_found(property_id)

        logger.info("Updated property %s (modified=%s)", property_id, modified)
        return Success(modified)

    async def delete_property(self, property_id: str) -> ServiceResult[bool]:
        try:
            existing = await self.repository.get_by_id(property_id)
            if existing is None:
                return _not_found(property_id)
            deleted = await self.repository.delete(property_id)
        except PyMongoError as e:
            logger.exception("Failed to delete property %s", property_id)
            return StoreFailure(message="Error deleting the property", error=str(e))

        if not deleted:
            return _not_found(property_id)

        logger.info("Deleted property %s", property_id)
        return Success(deleted)


def get_property_service(request: Request) -> PropertyService:
    """
    FastAPI dependency returning the service built during application startup.

    Tests replace this dependency through ``app.dependency_overrides``.
    """
    return request.app.state.property_service
