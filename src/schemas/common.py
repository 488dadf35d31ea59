"""Response envelopes shared by all endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """``{"success": true, "data": ...}``"""

    success: bool = True
    data: T


class ListEnvelope(BaseModel, Generic[T]):
    """``{"success": true, "count": n, "data": [...]}``"""

    success: bool = True
    count: int
    data: list[T]


class MessageResponse(BaseModel):
    success: bool = True
    message: str
