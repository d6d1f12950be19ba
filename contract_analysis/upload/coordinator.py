"""Concurrent upload of validated pages to object storage."""

import io
from collections.abc import Sequence
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait

from contract_analysis.logging.logger import Log
from contract_analysis.processor.models import PageFile
from contract_analysis.storage.base import BaseObjectStore
from contract_analysis.upload.exceptions import PutFailedError

MAX_UPLOAD_WORKERS = 10


def page_storage_key(key_prefix: str, contract_id: str, page_number: int) -> str:
    """Build the key of one page: {prefix}{contract_id}/{NNN}.jpg"""
    return f"{key_prefix}{contract_id}/{page_number:03d}.jpg"


class UploadCoordinator:
    """Stores every page of a submission in parallel and returns ordered keys.

    Keys are computed from page position before any I/O starts. Each worker
    writes its key into its own slot of a pre-sized list, so completion order
    never affects the result order.
    """

    def __init__(
        self,
        store: BaseObjectStore,
        *,
        bucket: str,
        key_prefix: str,
        max_workers: int = MAX_UPLOAD_WORKERS,
    ) -> None:
        self._store = store
        self._bucket = bucket
        self._key_prefix = key_prefix
        self._max_workers = max(1, min(max_workers, MAX_UPLOAD_WORKERS))

    def storage_keys(self, contract_id: str, page_count: int) -> list[str]:
        return [
            page_storage_key(self._key_prefix, contract_id, number)
            for number in range(1, page_count + 1)
        ]

    def upload(self, contract_id: str, pages: Sequence[PageFile]) -> list[str]:
        """Upload all pages; abort on the first failed put.

        Raises:
            PutFailedError: carrying the 1-based index of the first failure seen.
        """
        keys = self.storage_keys(contract_id, len(pages))
        if not pages:
            return keys
        uploaded: list[str | None] = [None] * len(pages)
        workers = min(len(pages), self._max_workers)
        Log.info("Uploading pages", contract_id=contract_id, pages=len(pages), workers=workers)

        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="page-upload")
        failed = False
        try:
            futures: dict[Future[None], int] = {
                executor.submit(self._put_page, uploaded, i, keys[i], page): i
                for i, page in enumerate(pages)
            }
            pending = set(futures)
            while pending:
                done, pending = wait(pending, return_when=FIRST_EXCEPTION)
                for future in done:
                    exc = future.exception()
                    if exc is None:
                        continue
                    failed = True
                    index = futures[future]
                    Log.error(
                        f"Failed to upload page {index + 1} for contract {contract_id}: {exc}"
                    )
                    raise PutFailedError(index + 1, keys[index], str(exc)) from exc
        finally:
            executor.shutdown(wait=not failed, cancel_futures=failed)

        Log.info("All pages uploaded", contract_id=contract_id, pages=len(pages))
        return [key for key in uploaded if key is not None]

    def _put_page(
        self,
        uploaded: list[str | None],
        index: int,
        key: str,
        page: PageFile,
    ) -> None:
        Log.debug(f"Uploading page {index + 1} to {self._bucket}/{key}")
        self._store.put(self._bucket, key, io.BytesIO(page.content), page.size_bytes)
        uploaded[index] = key
