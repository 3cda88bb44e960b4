from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Where exported invoice PDFs live, addressed by ``invoices/<uuid>.pdf``-style keys."""

    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        """Write an invoice file under ``key``; returns the path or object key recorded as ``pdf_path``."""
        ...

    @abstractmethod
    def get(self, key: str) -> bytes: ...

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Link handed to the user for download: presigned on S3, a filesystem path locally."""
        ...
