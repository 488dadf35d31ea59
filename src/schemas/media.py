"""Media schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MediaResponse(BaseModel):
    """Media response."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    owner_id: int
    press_kit_id: int
    type: str
    title: str
    description: str | None
    file_url: str
    thumbnail_url: str | None
    file_size: int | None
    duration: float | None
    metadata: dict[str, Any] | None = Field(None, validation_alias="extra")
    created_at: datetime
