"""Per-field decoders for the loosely typed workflow output.

Every decoder accepts whatever shape upstream produced, returns the strict
value, and reports anything it had to repair or drop through ``warn``. None of
them raise: a bad optional field degrades to ``None`` or an empty list.
"""

import json
from collections.abc import Callable, Mapping
from typing import Any

from contract_analysis.normalization.models import Commentary, OcrPage, ToxicClause

Warn = Callable[[str, str], None]

WARN_LEVEL_TOKENS = {"HIGH": 3, "MEDIUM": 2, "LOW": 1}
MIN_WARN_LEVEL = 1
MAX_WARN_LEVEL = 3
UNKNOWN_WARN_LEVEL = MIN_WARN_LEVEL


def first_present(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the value of the first key present in ``data``, else None."""
    for key in keys:
        if key in data:
            return data[key]
    return None


def decode_json_text(raw: str, field: str, warn: Warn) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        warn(field, f"invalid JSON string: {exc}")
    except RecursionError:
        warn(field, "JSON string is nested too deeply to decode")
    return None


def decode_optional_str(raw: Any, field: str, warn: Warn) -> str | None:
    if raw is None or isinstance(raw, str):
        return raw
    warn(field, f"expected a string, got {type(raw).__name__}")
    return None


def decode_storage_keys(raw: Any, warn: Warn) -> list[str]:
    if raw is None:
        warn("storageKeys", "missing from workflow output")
        return []
    if isinstance(raw, str):
        return [raw]
    if not isinstance(raw, list):
        warn("storageKeys", f"expected a list, got {type(raw).__name__}")
        return []
    keys: list[str] = []
    for i, item in enumerate(raw):
        if isinstance(item, str):
            keys.append(item)
        else:
            warn(f"storageKeys[{i}]", f"expected a string, got {type(item).__name__}")
    return keys


def decode_analysis_payload(raw: Any, warn: Warn) -> tuple[dict[str, Any], bool]:
    """Unwrap the analysis sub-result.

    Accepts a nested object, an object whose ``body`` is a JSON string (the
    relayed response of another pipeline stage), or a bare JSON string. A
    ``{"status": ..., "data": {...}}`` wrapper is unwrapped to ``data``.

    Returns:
        ``(payload, failed)``; ``failed`` is True when the analysis stage
        reported ``status == "error"``.
    """
    if raw is None:
        warn("bedrockResults", "analysis result missing from workflow output")
        return {}, False

    body = raw
    if isinstance(body, str):
        body = decode_json_text(body, "bedrockResults", warn)
    if isinstance(body, dict) and "body" in body:
        inner = body["body"]
        if isinstance(inner, str):
            body = decode_json_text(inner, "bedrockResults.body", warn)
        elif isinstance(inner, dict):
            body = inner
        else:
            warn("bedrockResults.body", f"unexpected body type {type(inner).__name__}")
            return {}, False
    if body is None:
        return {}, False
    if not isinstance(body, dict):
        warn("bedrockResults", f"expected an object, got {type(body).__name__}")
        return {}, False

    status = body.get("status")
    if isinstance(status, str) and status.lower() == "error":
        warn("bedrockResults.status", f"analysis stage reported an error: {body.get('error')}")
        return {}, True

    if "data" not in body:
        return body, False
    data = body["data"]
    if isinstance(data, str):
        data = decode_json_text(data, "bedrockResults.data", warn)
    if isinstance(data, dict):
        return data, False
    if data is not None:
        warn("bedrockResults.data", f"expected an object, got {type(data).__name__}")
    else:
        warn("bedrockResults.data", "no analysis data in analysis response")
    return {}, False


def decode_origin_content(raw: Any, warn: Warn) -> str | None:
    """Keep a plain string, or the first element's ``text`` of a list."""
    if raw is None or isinstance(raw, str):
        return raw
    if not isinstance(raw, list):
        warn("originContent", f"expected a string or list, got {type(raw).__name__}")
        return None
    if not raw:
        return None
    first = raw[0]
    if isinstance(first, str):
        return first
    if isinstance(first, dict):
        return decode_optional_str(first.get("text"), "originContent[0].text", warn)
    warn("originContent[0]", f"expected an object, got {type(first).__name__}")
    return None


def parse_page_number(raw: Any) -> int:
    """Turn ``3``, ``3.0`` or ``"003"`` into ``3``.

    Raises:
        ValueError: for anything that is not a whole number.
    """
    if isinstance(raw, bool):
        raise ValueError(f"page must be a number, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        return int(raw.strip())
    raise ValueError(f"page must be a number, got {raw!r}")


def decode_pages(raw: Any, warn: Warn) -> list[OcrPage]:
    if raw is None:
        return []
    entries = [raw] if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        warn("ocrResults", f"expected a list, got {type(raw).__name__}")
        return []
    pages: list[OcrPage] = []
    for i, entry in enumerate(entries):
        page = _decode_page(entry, f"ocrResults[{i}]", warn)
        if page is not None:
            pages.append(page)
    return pages


def _decode_page(entry: Any, field: str, warn: Warn) -> OcrPage | None:
    if not isinstance(entry, dict):
        warn(field, f"expected an object, got {type(entry).__name__}; skipped")
        return None
    try:
        number = parse_page_number(entry.get("page"))
    except ValueError as exc:
        warn(f"{field}.page", f"{exc}; skipped")
        return None
    text = decode_optional_str(entry.get("text"), f"{field}.text", warn)
    source_key = decode_optional_str(
        first_present(entry, "sourceKey", "s3Key", "storageKey"),
        f"{field}.sourceKey",
        warn,
    )
    return OcrPage(page=number, text=text or "", source_key=source_key or "")


def decode_commentary(raw: Any, warn: Warn) -> Commentary | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = decode_json_text(raw, "ddobakCommentary", warn)
        if raw is None:
            return None
    if not isinstance(raw, dict):
        warn("ddobakCommentary", f"expected an object, got {type(raw).__name__}")
        return None
    return Commentary(
        overall=decode_optional_str(
            first_present(raw, "overallComment", "overall"), "ddobakCommentary.overall", warn
        ),
        warning=decode_optional_str(
            first_present(raw, "warningComment", "warning"), "ddobakCommentary.warning", warn
        ),
        advice=decode_optional_str(raw.get("advice"), "ddobakCommentary.advice", warn),
    )


def decode_warn_level(raw: Any, field: str, warn: Warn) -> int | None:
    """Map a severity to 1..3.

    Integers pass through (out-of-range values are clamped), ``HIGH``,
    ``MEDIUM`` and ``LOW`` map to 3, 2 and 1 in any case, and anything else,
    numeric strings included, becomes 1. Absent stays None.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        token = raw.strip().upper()
        if token in WARN_LEVEL_TOKENS:
            return WARN_LEVEL_TOKENS[token]
    elif isinstance(raw, int) and not isinstance(raw, bool):
        return _clamp_warn_level(raw, field, warn)
    elif isinstance(raw, float) and raw.is_integer():
        return _clamp_warn_level(int(raw), field, warn)
    warn(field, f"unknown warn level {raw!r}, defaulting to {UNKNOWN_WARN_LEVEL}")
    return UNKNOWN_WARN_LEVEL


def _clamp_warn_level(level: int, field: str, warn: Warn) -> int:
    clamped = max(MIN_WARN_LEVEL, min(MAX_WARN_LEVEL, level))
    if clamped != level:
        warn(field, f"warn level {level} out of range, clamped to {clamped}")
    return clamped


def decode_clauses(raw: Any, warn: Warn) -> list[ToxicClause]:
    if raw is None:
        return []
    entries = [raw] if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        warn("toxics", f"expected a list, got {type(raw).__name__}")
        return []
    clauses: list[ToxicClause] = []
    for i, entry in enumerate(entries):
        field = f"toxics[{i}]"
        if not isinstance(entry, dict):
            warn(field, f"expected an object, got {type(entry).__name__}; skipped")
            continue
        clauses.append(
            ToxicClause(
                title=decode_optional_str(entry.get("title"), f"{field}.title", warn),
                clause=decode_optional_str(entry.get("clause"), f"{field}.clause", warn),
                reason=decode_optional_str(entry.get("reason"), f"{field}.reason", warn),
                reason_reference=decode_optional_str(
                    entry.get("reasonReference"), f"{field}.reasonReference", warn
                ),
                warn_level=decode_warn_level(entry.get("warnLevel"), f"{field}.warnLevel", warn),
            )
        )
    return clauses
