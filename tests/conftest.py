from collections.abc import Callable

import pytest

from contract_analysis.processor.models import PageFile

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-page"


@pytest.fixture()
def make_page() -> Callable[..., PageFile]:
    """Build a PageFile whose size matches its content unless overridden."""

    def _make(
        content: bytes = JPEG_BYTES,
        content_type: str = "image/jpeg",
        size_bytes: int | None = None,
        filename: str | None = None,
    ) -> PageFile:
        return PageFile(
            content=content,
            content_type=content_type,
            size_bytes=len(content) if size_bytes is None else size_bytes,
            filename=filename,
        )

    return _make
