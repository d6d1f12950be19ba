"""Submission checks run before any identifier or storage work."""

from collections.abc import Sequence

from contract_analysis.logging.logger import Log
from contract_analysis.processor.models import PageFile
from contract_analysis.validation.exceptions import (
    ExpectedCountMismatchError,
    FilesMissingError,
    FileTooLargeError,
    TooManyFilesError,
    UnsupportedFileTypeError,
)

MAX_FILE_COUNT = 10
MAX_FILE_SIZE_BYTES = 20 * 1024 * 1024
ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png"})

EXPECTED_COUNT_POLICIES = ("warn", "strict")


class FileValidator:
    """Enforces count, size and content-type limits on submitted pages."""

    def __init__(
        self,
        *,
        max_file_count: int = MAX_FILE_COUNT,
        max_file_size_bytes: int = MAX_FILE_SIZE_BYTES,
        allowed_content_types: Sequence[str] = tuple(ALLOWED_CONTENT_TYPES),
        expected_count_policy: str = "warn",
    ) -> None:
        policy = expected_count_policy.lower()
        if policy not in EXPECTED_COUNT_POLICIES:
            raise ValueError(
                f"Unknown expected count policy '{expected_count_policy}'. "
                f"Choose from: {list(EXPECTED_COUNT_POLICIES)}"
            )
        self._max_file_count = max_file_count
        self._max_file_size_bytes = max_file_size_bytes
        self._allowed_content_types = frozenset(t.lower() for t in allowed_content_types)
        self._expected_count_policy = policy

    def validate(self, pages: Sequence[PageFile]) -> None:
        """Check the page list; the first violation wins.

        Raises:
            FilesMissingError: no pages, or a page with an empty body.
            TooManyFilesError: more pages than the configured limit.
            FileTooLargeError: a page larger than the size limit.
            UnsupportedFileTypeError: a page that is not a JPEG or PNG image.
        """
        if not pages:
            raise FilesMissingError()
        if len(pages) > self._max_file_count:
            raise TooManyFilesError(len(pages), self._max_file_count)
        for index, page in enumerate(pages, start=1):
            self._validate_page(index, page)
        Log.debug(f"File validation passed: count={len(pages)}")

    def check_expected_count(self, expected: int | None, actual: int) -> None:
        """Compare the client's declared page count with what arrived."""
        if expected is None or expected == actual:
            return
        if self._expected_count_policy == "strict":
            raise ExpectedCountMismatchError(expected, actual)
        Log.warning(f"Expected {expected} pages but received {actual}, continuing")

    def _validate_page(self, index: int, page: PageFile) -> None:
        if page.size_bytes > self._max_file_size_bytes:
            raise FileTooLargeError(index, page.size_bytes, self._max_file_size_bytes)
        content_type = (page.content_type or "").lower()
        if content_type not in self._allowed_content_types:
            raise UnsupportedFileTypeError(index, page.content_type)
        if not page.content:
            raise FilesMissingError(index)
