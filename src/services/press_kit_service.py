"""Press kit service: ownership-scoped CRUD, media lifecycle and cascade delete."""

import logging
import os
import secrets
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    ValidationFailed,
)
from src.models.analytics import Analytics
from src.models.enums import MediaType
from src.models.media import Media
from src.models.press_kit import PressKit, merge_customization
from src.models.user import User
from src.schemas.media import MediaResponse
from src.schemas.press_kit import PressKitDetailResponse
from src.services.auth import get_password_hash, verify_password
from src.services.storage import StorageService

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = frozenset(
    {".jpeg", ".jpg", ".png", ".gif", ".mp3", ".mp4", ".wav", ".pdf", ".doc", ".docx"}
)

ALLOWED_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/gif",
        "audio/mpeg",
        "audio/mp3",
        "audio/wav",
        "audio/wave",
        "audio/x-wav",
        "video/mp4",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)


class PressKitService:
    """Service for press kit operations."""

    def __init__(self, db: Session, storage: StorageService | None = None):
        self.db = db
        self.storage = storage or StorageService()
        self.max_upload_bytes = get_settings().max_upload_bytes

    # Lookups

    def get(self, press_kit_id: int) -> PressKit:
        press_kit = self.db.query(PressKit).filter(PressKit.id == press_kit_id).first()
        if not press_kit:
            raise NotFoundError(f"Press kit not found with id of {press_kit_id}")
        return press_kit

    def list_owned(self, owner_id: int) -> list[PressKit]:
        """All press kits of one owner. No paging or filtering."""
        return (
            self.db.query(PressKit)
            .filter(PressKit.owner_id == owner_id)
            .order_by(PressKit.id)
            .all()
        )

    def list_media(self, press_kit_id: int) -> list[Media]:
        return (
            self.db.query(Media)
            .filter(Media.press_kit_id == press_kit_id)
            .order_by(Media.id)
            .all()
        )

    def get_with_media(self, press_kit: PressKit) -> PressKitDetailResponse:
        """Press kit fields merged with its media list."""
        detail = PressKitDetailResponse.model_validate(press_kit)
        detail.media = [MediaResponse.model_validate(m) for m in self.list_media(press_kit.id)]
        return detail

    def get_public_by_slug(self, slug: str, password: str | None = None) -> PressKit:
        """Look up a published press kit. Drafts are indistinguishable from missing."""
        press_kit = (
            self.db.query(PressKit)
            .filter(PressKit.slug == slug.lower(), PressKit.is_published.is_(True))
            .first()
        )
        if not press_kit:
            raise NotFoundError(f"Press kit not found with slug of {slug}")

        if press_kit.is_password_protected:
            stored = press_kit.access_password_hash
            if not stored or not password or not verify_password(password, stored):
                raise UnauthorizedError("This press kit is password protected")

        return press_kit

    # Writes

    def create(self, owner: User, fields: dict[str, Any]) -> PressKit:
        """Create a press kit for ``owner``. Title and template must be present."""
        for required in ("title", "template"):
            if not fields.get(required):
                raise ValidationFailed(f"{required.capitalize()} is required")

        press_kit = PressKit(owner_id=owner.id)
        press_kit.apply_changes(self._prepare(fields))
        self._check_slug(press_kit)
        self._check_protection(press_kit)

        self.db.add(press_kit)
        self._commit_unique_slug(press_kit)
        logger.info(f"Created press kit {press_kit.id} ({press_kit.slug}) for user {owner.id}")
        return press_kit

    def update(self, press_kit: PressKit, fields: dict[str, Any]) -> PressKit:
        """Partial update; derived fields are recomputed by PressKit.apply_changes."""
        changes = self._prepare(fields)
        if "customization" in changes:
            changes["customization"] = merge_customization(
                press_kit.customization, changes["customization"]
            )

        old_slug = press_kit.slug
        press_kit.apply_changes(changes)
        try:
            if press_kit.slug != old_slug:
                self._check_slug(press_kit)
            self._check_protection(press_kit)
        except (ConflictError, ValidationFailed):
            self.db.rollback()
            raise

        self._commit_unique_slug(press_kit)
        return press_kit

    def delete(self, press_kit: PressKit) -> list[str]:
        """Delete a press kit with its media (local and remote) and analytics.

        Storage objects go first. A failed object delete is logged, handed to
        the purge task for retry, and does not stop the rest of the cleanup.
        The row deletes are idempotent, so repeating the call after a crash
        finishes the job. Returns the storage keys that could not be removed.
        """
        press_kit_id = press_kit.id
        orphaned = self._delete_objects(self.list_media(press_kit_id))

        self.db.query(Media).filter(Media.press_kit_id == press_kit_id).delete(
            synchronize_session=False
        )
        self.db.query(Analytics).filter(Analytics.press_kit_id == press_kit_id).delete(
            synchronize_session=False
        )
        self.db.delete(press_kit)
        self.db.commit()

        if orphaned:
            self._schedule_purge(orphaned)
        logger.info(f"Deleted press kit {press_kit_id} ({len(orphaned)} storage orphans)")
        return orphaned

    def delete_uploads_by(self, user_id: int) -> list[str]:
        """Delete every media item a user uploaded, wherever it lives.

        Admins can upload into kits they do not own, so these rows outlive the
        cascade over the user's own kits and must go before the user does.
        """
        uploads = self.db.query(Media).filter(Media.owner_id == user_id).order_by(Media.id).all()
        orphaned = self._delete_objects(uploads)

        self.db.query(Media).filter(Media.owner_id == user_id).delete(synchronize_session=False)
        self.db.commit()

        if orphaned:
            self._schedule_purge(orphaned)
        return orphaned

    # Media

    def upload_media(
        self,
        press_kit: PressKit,
        uploader: User,
        media_type: str,
        title: str,
        description: str | None,
        filename: str | None,
        content_type: str | None,
        data: bytes | None,
    ) -> Media:
        """Validate an upload, push it to storage and record it.

        Every check runs before the storage write, so a rejected file never
        reaches the bucket.
        """
        try:
            kind = MediaType(media_type)
        except ValueError:
            raise ValidationFailed("Invalid media type") from None

        if not title or not title.strip():
            raise ValidationFailed("Title is required")
        if not filename or data is None:
            raise ValidationFailed("Please upload a file")

        extension = os.path.splitext(filename)[1].lower()
        if extension not in ALLOWED_EXTENSIONS or content_type not in ALLOWED_MIME_TYPES:
            raise ValidationFailed("File type not supported")
        if len(data) > self.max_upload_bytes:
            raise ValidationFailed(
                f"File too large. Maximum size is {self.max_upload_bytes // (1024 * 1024)}MB."
            )

        key = f"press-kits/{press_kit.id}/{kind.folder}/{secrets.token_hex(16)}{extension}"
        file_url = self.storage.upload(key, data, content_type)

        media = Media(
            owner_id=uploader.id,
            press_kit_id=press_kit.id,
            type=kind.value,
            title=title.strip(),
            description=description.strip() if description else None,
            file_url=file_url,
            storage_key=key,
            file_size=len(data),
        )
        self.db.add(media)
        self.db.commit()
        self.db.refresh(media)
        return media

    def delete_media(self, press_kit: PressKit, media_id: int) -> None:
        """Delete one media item of this press kit, remote object first."""
        media = (
            self.db.query(Media)
            .filter(Media.id == media_id, Media.press_kit_id == press_kit.id)
            .first()
        )
        if not media:
            raise NotFoundError(f"Media not found with id of {media_id}")

        if media.storage_key:
            self.storage.delete(media.storage_key)

        self.db.delete(media)
        self.db.commit()

    # Helpers

    @staticmethod
    def _prepare(fields: dict[str, Any]) -> dict[str, Any]:
        """Map API fields onto model columns (the access password is hashed)."""
        changes = dict(fields)
        if "password" in changes:
            password = changes.pop("password")
            changes["access_password_hash"] = get_password_hash(password) if password else None
        return changes

    def _check_slug(self, press_kit: PressKit) -> None:
        if not press_kit.slug:
            raise ValidationFailed("Title must contain at least one letter or number")

        query = self.db.query(PressKit.id).filter(PressKit.slug == press_kit.slug)
        if press_kit.id is not None:
            query = query.filter(PressKit.id != press_kit.id)
        with self.db.no_autoflush:
            taken = query.first()
        if taken:
            raise ConflictError(f"A press kit with the slug '{press_kit.slug}' already exists")

    def _delete_objects(self, media_items: list[Media]) -> list[str]:
        """Remove the stored objects behind media rows; return the keys that failed."""
        orphaned: list[str] = []
        for media in media_items:
            if not media.storage_key:
                continue
            try:
                self.storage.delete(media.storage_key)
            except StorageError:
                logger.warning(
                    f"Media {media.id}: could not delete {media.storage_key}, continuing"
                )
                orphaned.append(media.storage_key)
        return orphaned

    @staticmethod
    def _check_protection(press_kit: PressKit) -> None:
        if press_kit.is_password_protected and not press_kit.access_password_hash:
            raise ValidationFailed("A password is required to protect this press kit")

    def _commit_unique_slug(self, press_kit: PressKit) -> None:
        # A concurrent writer can still claim the slug between check and commit.
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(
                f"A press kit with the slug '{press_kit.slug}' already exists"
            ) from None
        self.db.refresh(press_kit)

    @staticmethod
    def _schedule_purge(keys: list[str]) -> None:
        from src.tasks.storage import purge_storage_objects

        try:
            purge_storage_objects.delay(keys)
        except Exception as e:
            logger.error(f"Could not queue purge of {len(keys)} storage objects: {e}")

