"""Enums for model fields."""

from enum import Enum


class SectionType(str, Enum):
    """Kinds of content block a press kit page can contain."""

    BIO = "bio"
    MUSIC = "music"
    VIDEOS = "videos"
    PHOTOS = "photos"
    PRESS = "press"
    TOUR = "tour"
    CONTACT = "contact"


class MediaType(str, Enum):
    """Kinds of uploaded asset."""

    AUDIO = "audio"
    VIDEO = "video"
    IMAGE = "image"
    DOCUMENT = "document"

    @property
    def folder(self) -> str:
        """Storage folder for this media type, e.g. ``images``."""
        return f"{self.value}s"
