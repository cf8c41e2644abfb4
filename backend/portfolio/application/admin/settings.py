import logging
from typing import Any, Dict

from portfolio.domain.exceptions import ValidationError
from portfolio.utils.media import check_upload, unique_filename
from .screen import UploadTarget

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = ("logo_url", "hero_image_url", "resume_url")

ASSET_TARGETS = {
    "logo": UploadTarget(bucket="assets", prefix="logo", field="logo_url"),
    "hero": UploadTarget(bucket="assets", prefix="hero", field="hero_image_url"),
    "resume": UploadTarget(bucket="resumes", prefix="resume", field="resume_url"),
}


class SettingsService:
    """
    Site-wide assets stored on the single site_settings row.

    Unlike the other screens, an upload here is persisted immediately:
    upload -> public URL -> update the row (or insert it if missing).
    """

    collection = "site_settings"

    def __init__(self, client):
        self.client = client

    def get(self) -> Dict[str, Any]:
        row = self._current()
        return {field: (row or {}).get(field) for field in SETTINGS_FIELDS}

    def upload_asset(self, kind: str, filename: str, data: bytes) -> Dict[str, Any]:
        target = self._target(kind)
        check_upload(filename, target.bucket)

        path = unique_filename(target.prefix, filename)
        self.client.upload(target.bucket, path, data)
        public_url = self.client.get_public_url(target.bucket, path)

        logger.info("Uploaded %s to %s/%s", kind, target.bucket, path)
        return self._save({target.field: public_url})

    def remove_asset(self, kind: str) -> Dict[str, Any]:
        target = self._target(kind)
        if self._current() is None:
            return self.get()
        return self._save({target.field: None})

    def _save(self, changes):
        row = self._current()
        if row:
            self.client.update(self.collection, row["id"], changes)
        else:
            self.client.insert(self.collection, changes)
        return self.get()

    def _current(self):
        rows = self.client.select(self.collection, order_by="created_at", limit=1)
        return rows[0] if rows else None

    @staticmethod
    def _target(kind):
        try:
            return ASSET_TARGETS[kind]
        except KeyError:
            raise ValidationError(
                f"Unknown asset '{kind}' (expected one of: {', '.join(ASSET_TARGETS)})",
                fields=["kind"]
            ) from None
