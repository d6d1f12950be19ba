from dataclasses import dataclass, field


@dataclass(frozen=True)
class OcrPage:
    """Extracted text of one uploaded page."""

    page: int
    text: str = ""
    source_key: str = ""


@dataclass(frozen=True)
class Commentary:
    """Narrative commentary on the whole contract."""

    overall: str | None = None
    warning: str | None = None
    advice: str | None = None


@dataclass(frozen=True)
class ToxicClause:
    """A clause flagged as risky, with severity 1 (low) to 3 (high)."""

    title: str | None = None
    clause: str | None = None
    reason: str | None = None
    reason_reference: str | None = None
    warn_level: int | None = None


@dataclass(frozen=True)
class NormalizationWarning:
    """An upstream anomaly that was recovered from instead of failing."""

    field: str
    message: str


@dataclass(frozen=True)
class AnalysisResult:
    """Strictly typed outcome of one contract analysis."""

    contract_id: str
    storage_keys: list[str] = field(default_factory=list)
    client_id: str | None = None
    client_token: str | None = None
    pages: list[OcrPage] = field(default_factory=list)
    origin_content: str | None = None
    summary: str | None = None
    commentary: Commentary | None = None
    clauses: list[ToxicClause] = field(default_factory=list)
    warnings: list[NormalizationWarning] = field(default_factory=list)
