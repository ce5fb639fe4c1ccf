"""
API routes for the property catalog.
"""

import logging
from typing import Annotated, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from app.models.property import (
    ListingFilter,
    ListingResult,
    Property,
    PropertyDetail,
    PropertyIn,
)
from app.services.property_service import PropertyService, get_property_service
from app.services.results import NotFound, StoreFailure, Success, ValidationFailure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["properties"])

ServiceDep = Annotated[PropertyService, Depends(get_property_service)]


def error_response(result: Union[NotFound, ValidationFailure, StoreFailure]) -> JSONResponse:
    """Translate a failed service result into its HTTP response."""
    if isinstance(result, NotFound):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": result.message},
        )
    if isinstance(result, ValidationFailure):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": result.message, "errors": result.errors},
        )
    logger.error("Store failure: %s (%s)", result.message, result.error)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": result.message, "error": result.error},
    )


@router.get(
    "/Properties",
    response_model=ListingResult,
    summary="List properties",
    description="List properties matching optional name, address and price filters, one page at a time.",
)
async def list_properties(
    service: ServiceDep,
    name: Annotated[Optional[str], Query(description="Case-insensitive name substring")] = None,
    address: Annotated[Optional[str], Query(description="Case-insensitive address substring")] = None,
    min_price: Annotated[Optional[float], Query(alias="minPrice")] = None,
    max_price: Annotated[Optional[float], Query(alias="maxPrice")] = None,
    page_number: Annotated[int, Query(alias="pageNumber", ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1)] = 10,
):
    """
    List properties ordered by name.

    Args:
        service: Injected property service.
        name: Optional name substring.
        address: Optional address substring.
        min_price: Optional inclusive lower price bound.
        max_price: Optional inclusive upper price bound.
        page_number: 1-based page number.
        page_size: Number of properties per page.

    Returns:
        ListingResult with the page and total counts.
    """
    listing_filter = ListingFilter(
        name=name,
        address=address,
        min_price=min_price,
        max_price=max_price,
        page_number=page_number,
        page_size=page_size,
    )
    result = await service.list_properties(listing_filter)
    if isinstance(result, Success):
        return result.value
    return error_response(result)


@router.get(
    "/Properties/{property_id}",
    response_model=PropertyDetail,
    summary="Get a property",
    responses={404: {"description": "Property not found"}},
)
async def get_property(property_id: str, service: ServiceDep):
    """Get a single property, including its timestamps."""
    result = await service.get_property(property_id)
    if isinstance(result, Success):
        return result.value
    return error_response(result)


@router.post(
    "/Properties",
    response_model=Property,
    status_code=status.HTTP_201_CREATED,
    summary="Create a property",
)
async def create_property(
    body: PropertyIn,
    request: Request,
    response: Response,
    service: ServiceDep,
):
    """
    Create a property.

    The response carries a Location header pointing at the detail endpoint.
    """
    result = await service.create_property(body)
    if not isinstance(result, Success):
        return error_response(result)

    created = result.value
    response.headers["Location"] = str(request.url_for("get_property", property_id=created.id))
    return created


@router.put(
    "/Properties/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace a property",
    responses={404: {"description": "Property not found"}},
)
async def update_property(property_id: str, body: PropertyIn, service: ServiceDep):
    """Overwrite every mutable field of an existing property."""
    result = await service.update_property(property_id, body)
    if not isinstance(result, Success):
        return error_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/Properties/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a property",
    responses={404: {"description": "Property not found"}},
)
async def delete_property(property_id: str, service: ServiceDep):
    result = await service.delete_property(property_id)
    if not isinstance(result, Success):
        return error_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
