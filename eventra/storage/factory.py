import logging

from eventra.settings import settings
from eventra.storage.base import StorageBackend

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("local", "s3")


def get_storage() -> StorageBackend:
    """Build the invoice storage backend selected by ``EVENTRA_STORAGE_BACKEND``."""
    backend = settings.storage_backend.strip().lower()

    if backend == "local":
        from eventra.storage.local import LocalStorage

        logger.info("Using storage backend: local path=%s", settings.storage_local_path)
        return LocalStorage(settings.storage_local_path)

    if backend == "s3":
        from eventra.storage.s3 import S3Storage

        if not settings.s3_bucket:
            raise ValueError("EVENTRA_S3_BUCKET must be set for the s3 storage backend")
        logger.info("Using storage backend: s3 bucket=%s", settings.s3_bucket)
        return S3Storage(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            endpoint_url=settings.s3_endpoint_url,
            presigned_expiry=settings.s3_presigned_expiry,
        )

    raise ValueError(f"Unsupported storage backend: {backend} (expected one of {', '.join(SUPPORTED_BACKENDS)})")
