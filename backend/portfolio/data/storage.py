import logging
import os

from werkzeug.security import safe_join

from portfolio.domain.exceptions import UploadError

logger = logging.getLogger(__name__)


class ObjectStorage:
    """
    Public file buckets on local disk.

    Each bucket is a directory under ``root``; objects are readable at
    ``{public_url}/{bucket}/{path}``.
    """

    def __init__(self, root, public_url, buckets):
        self.root = root
        self.public_url = public_url.rstrip("/")
        self.buckets = frozenset(buckets)

    @classmethod
    def from_config(cls, config):
        return cls(
            root=config["STORAGE_ROOT"],
            public_url=config["PUBLIC_STORAGE_URL"],
            buckets=config["STORAGE_BUCKETS"],
        )

    def bucket_path(self, bucket):
        if bucket not in self.buckets:
            raise UploadError(f'Bucket "{bucket}" does not exist or is not public')
        return os.path.join(self.root, bucket)

    def upload(self, bucket, path, data):
        directory = self.bucket_path(bucket)
        target = safe_join(directory, path)
        if target is None:
            raise UploadError(f"Invalid object path: {path}")

        if os.path.exists(target):
            raise UploadError(f"Object {bucket}/{path} already exists")

        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            logger.error("Failed to store %s/%s: %s", bucket, path, exc)
            raise UploadError(f"Failed to store {bucket}/{path}") from exc

        logger.info("Stored %s/%s (%d bytes)", bucket, path, len(data))

    def get_public_url(self, bucket, path):
        return f"{self.public_url}/{bucket}/{path}"
