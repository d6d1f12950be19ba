from dataclasses import dataclass, field


@dataclass(frozen=True)
class PageFile:
    """A single submitted contract page image."""

    content: bytes
    content_type: str
    size_bytes: int
    filename: str | None = None


@dataclass(frozen=True)
class AnalysisRequest:
    """Pages plus optional client metadata for one analysis submission."""

    pages: list[PageFile] = field(default_factory=list)
    client_id: str | None = None
    client_token: str | None = None
    expected_count: int | None = None
    user_id: str | None = None
