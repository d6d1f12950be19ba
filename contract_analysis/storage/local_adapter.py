import shutil
from pathlib import Path
from typing import BinaryIO

from contract_analysis.storage.base import BaseObjectStore, require_bucket_and_key
from contract_analysis.storage.exceptions import ObjectNotFoundError, StorageError


def object_file_path(root: Path, bucket: str, key: str) -> Path:
    """Build path to an object file: {root}/{bucket}/{key}"""
    path = (root / bucket / key).resolve()
    if not path.is_relative_to(root.resolve()):
        raise ValueError(f"Object key escapes storage root: {key}")
    return path


class LocalObjectStore(BaseObjectStore):
    """Stores objects as files under a root directory, one folder per bucket."""

    DEFAULT_ROOT = Path("/app/files")

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else self.DEFAULT_ROOT

    def put(self, bucket: str, key: str, stream: BinaryIO, size: int) -> None:
        require_bucket_and_key(bucket, key)
        path = object_file_path(self._root, bucket, key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as fh:
                shutil.copyfileobj(stream, fh)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        written = path.stat().st_size
        if written != size:
            path.unlink(missing_ok=True)
            raise StorageError(f"Wrote {written} bytes to {path}, expected {size}")

    def get(self, bucket: str, key: str) -> bytes:
        require_bucket_and_key(bucket, key)
        path = object_file_path(self._root, bucket, key)
        if not path.is_file():
            raise ObjectNotFoundError(f"File not found: {path}")
        return path.read_bytes()

    def delete(self, bucket: str, key: str) -> None:
        require_bucket_and_key(bucket, key)
        object_file_path(self._root, bucket, key).unlink(missing_ok=True)

    def list(self, bucket: str, prefix: str = "") -> list[str]:
        bucket_root = self._root / bucket
        if not bucket_root.is_dir():
            return []
        keys = (
            path.relative_to(bucket_root).as_posix()
            for path in bucket_root.rglob("*")
            if path.is_file()
        )
        return sorted(key for key in keys if key.startswith(prefix))

    def exists(self, bucket: str, key: str) -> bool:
        require_bucket_and_key(bucket, key)
        return object_file_path(self._root, bucket, key).is_file()
