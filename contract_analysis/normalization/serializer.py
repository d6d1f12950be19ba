from typing import Any

from contract_analysis.normalization.models import AnalysisResult, Commentary, OcrPage, ToxicClause


def result_to_payload(result: AnalysisResult) -> dict[str, Any]:
    """Render a result with the camelCase field names clients expect."""
    return {
        "contractId": result.contract_id,
        "s3Keys": list(result.storage_keys),
        "clientId": result.client_id,
        "clientToken": result.client_token,
        "ocrResults": [_page_to_dict(p) for p in result.pages],
        "bedrockResults": {
            "originContent": result.origin_content,
            "summary": result.summary,
            "ddobakCommentary": _commentary_to_dict(result.commentary),
            "toxics": [_clause_to_dict(c) for c in result.clauses],
        },
    }


def _page_to_dict(page: OcrPage) -> dict[str, Any]:
    return {"page": page.page, "text": page.text, "s3Key": page.source_key}


def _commentary_to_dict(commentary: Commentary | None) -> dict[str, str | None] | None:
    if commentary is None:
        return None
    return {
        "overallComment": commentary.overall,
        "warningComment": commentary.warning,
        "advice": commentary.advice,
    }


def _clause_to_dict(clause: ToxicClause) -> dict[str, Any]:
    return {
        "title": clause.title,
        "clause": clause.clause,
        "reason": clause.reason,
        "reasonReference": clause.reason_reference,
        "warnLevel": clause.warn_level,
    }
