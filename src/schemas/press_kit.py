"""Press kit schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.enums import SectionType
from src.schemas.media import MediaResponse


class ColorPalette(BaseModel):
    primary: str = "#1976d2"
    secondary: str = "#9c27b0"
    text: str = "#212121"
    background: str = "#ffffff"


class FontChoice(BaseModel):
    heading: str = "Roboto"
    body: str = "Roboto"


class Customization(BaseModel):
    """Page styling. Missing keys fall back to the defaults."""

    colors: ColorPalette = Field(default_factory=ColorPalette)
    fonts: FontChoice = Field(default_factory=FontChoice)


class Section(BaseModel):
    """A typed content block. ``content`` is free-form and rendered by the client."""

    type: SectionType
    title: str = Field(..., min_length=1, max_length=255)
    content: Any = None
    order: int = 0
    is_visible: bool = True

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Section title is required")
        return value


def _required_text(value: str | None, label: str) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


class PressKitCreate(BaseModel):
    """Create a press kit. The slug is always derived from the title."""

    title: str = Field(..., max_length=255)
    template: str = Field(..., max_length=100)
    customization: Customization | None = None
    is_published: bool = False
    is_password_protected: bool = False
    password: str | None = Field(None, min_length=1, max_length=128)
    sections: list[Section] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_required(cls, value: str) -> str:
        return _required_text(value, "Title")

    @field_validator("template")
    @classmethod
    def template_required(cls, value: str) -> str:
        return _required_text(value, "Template")


class PressKitUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: str | None = Field(None, max_length=255)
    template: str | None = Field(None, max_length=100)
    customization: Customization | None = None
    is_published: bool | None = None
    is_password_protected: bool | None = None
    password: str | None = Field(None, min_length=1, max_length=128)
    sections: list[Section] | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str | None) -> str | None:
        return _required_text(value, "Title")

    @field_validator("template")
    @classmethod
    def template_not_blank(cls, value: str | None) -> str | None:
        return _required_text(value, "Template")


class PressKitResponse(BaseModel):
    """Press kit response. The access password is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    title: str
    slug: str
    template: str
    customization: dict[str, Any]
    is_published: bool
    is_password_protected: bool
    sections: list[dict[str, Any]]
    last_published_at: datetime | None
    created_at: datetime
    updated_at: datetime


class PressKitDetailResponse(PressKitResponse):
    """Press kit together with its media."""

    media: list[MediaResponse] = Field(default_factory=list)
