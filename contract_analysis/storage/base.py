from abc import ABC, abstractmethod
from typing import BinaryIO


class BaseObjectStore(ABC):
    """Contract for durable key/blob storage adapters."""

    @abstractmethod
    def put(self, bucket: str, key: str, stream: BinaryIO, size: int) -> None:
        """Store ``size`` bytes read from ``stream`` under ``bucket/key``.

        Raises:
            StorageError: if the object could not be written.
        """

    @abstractmethod
    def get(self, bucket: str, key: str) -> bytes:
        """Return the object's bytes.

        Raises:
            ObjectNotFoundError: if the key does not exist.
            StorageError: on any other failure.
        """

    @abstractmethod
    def delete(self, bucket: str, key: str) -> None:
        """Remove the object; deleting a missing key is not an error."""

    @abstractmethod
    def list(self, bucket: str, prefix: str = "") -> list[str]:
        """Return keys under ``prefix`` in lexicographic order."""

    @abstractmethod
    def exists(self, bucket: str, key: str) -> bool:
        """Return True if the object exists."""


def require_bucket_and_key(bucket: str, key: str) -> None:
    if not bucket or not bucket.strip():
        raise ValueError("Bucket name cannot be empty")
    if not key or not key.strip():
        raise ValueError("Object key cannot be empty")
