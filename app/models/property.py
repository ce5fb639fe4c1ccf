"""
Pydantic models for the property catalog.

These models define the data structures used throughout the application
for API requests, responses, and internal data representation. Fields are
snake_case in Python and camelCase on the wire.
"""

import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PropertyIn(CamelModel):
    """
    Request body for creating or replacing a property.

    The identifier and the timestamps are owned by the server and are
    never accepted from the client.
    """

    id_owner: str = Field(description="Identifier of the owner")
    name: str = Field(min_length=1, max_length=200, description="Listing name")
    address: str = Field(min_length=1, max_length=300, description="Street address")
    price: float = Field(ge=0, description="Asking price")
    image_url: str = Field(default="", description="Main image URL")

    @field_validator("name", "address")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class Property(CamelModel):
    """Property projection returned by listings and by create."""

    id: str = Field(description="Store-assigned identifier")
    id_owner: str
    name: str
    address: str
    price: float
    image_url: str = ""


class PropertyDetail(Property):
    """Full property record, including timestamps."""

    created_at: datetime
    updated_at: datetime


class ListingFilter(CamelModel):
    """
    Search constraints plus pagination parameters for a listing query.

    Blank name or address values impose no constraint.
    """

    name: Optional[str] = None
    address: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)

    @field_validator("name", "address")
    @classmethod
    def blank_as_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def skip(self) -> int:
        return (self.page_number - 1) * self.page_size


class ListingResult(CamelModel):
    """A page of matching properties plus total count and page metadata."""

    data: List[Property] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)
    page_number: int
    page_size: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)
