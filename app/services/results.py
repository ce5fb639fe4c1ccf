"""
Result variants returned by the service layer.

Routes translate these into HTTP status codes; nothing below the API
layer knows about HTTP.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    message: str


@dataclass(frozen=True)
class ValidationFailure:
    message: str
    errors: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class StoreFailure:
    """A lower-layer fault (connectivity, timeout, constraint violation)."""

    message: str
    error: str


ServiceResult = Union[Success[T], NotFound, ValidationFailure, StoreFailure]
