"""Turns the workflow engine's raw output into an AnalysisResult."""

from typing import Any

from contract_analysis.ids.generator import CONTRACT_PREFIX, is_valid_entity_id
from contract_analysis.logging.logger import Log
from contract_analysis.normalization.exceptions import MalformedEnvelopeError
from contract_analysis.normalization.fields import (
    decode_analysis_payload,
    decode_clauses,
    decode_commentary,
    decode_optional_str,
    decode_origin_content,
    decode_pages,
    decode_storage_keys,
    first_present,
)
from contract_analysis.normalization.models import AnalysisResult, NormalizationWarning


class ResultNormalizer:
    """Builds a strict AnalysisResult from untrusted workflow output.

    Only a missing or unusable ``contractId`` is fatal. Every other anomaly is
    logged, recorded on ``AnalysisResult.warnings`` and degrades the affected
    field to ``None`` or an empty list.
    """

    ANALYSIS_KEYS = ("bedrockResults", "analysisResults")

    def normalize(self, output: Any) -> AnalysisResult:
        """Normalize one workflow output envelope.

        Raises:
            MalformedEnvelopeError: if the envelope is not an object or has no
                usable ``contractId``.
        """
        if not isinstance(output, dict):
            raise MalformedEnvelopeError(
                f"Workflow output must be an object, got {type(output).__name__}"
            )
        contract_id = output.get("contractId")
        if not isinstance(contract_id, str) or not contract_id.strip():
            raise MalformedEnvelopeError("Workflow output is missing 'contractId'")

        warnings: list[NormalizationWarning] = []

        def warn(field: str, message: str) -> None:
            Log.warning(f"Contract {contract_id}: {field}: {message}")
            warnings.append(NormalizationWarning(field=field, message=message))

        if not is_valid_entity_id(contract_id, CONTRACT_PREFIX):
            warn("contractId", f"'{contract_id}' is not a well-formed contract id")

        payload, analysis_failed = decode_analysis_payload(
            first_present(output, *self.ANALYSIS_KEYS), warn
        )
        # Analysis fields override same-named envelope fields.
        fields = {**output, **payload}

        result = AnalysisResult(
            contract_id=contract_id,
            storage_keys=decode_storage_keys(first_present(output, "storageKeys", "s3Keys"), warn),
            client_id=decode_optional_str(output.get("clientId"), "clientId", warn),
            client_token=decode_optional_str(output.get("clientToken"), "clientToken", warn),
            pages=decode_pages(fields.get("ocrResults"), warn),
            origin_content=decode_origin_content(fields.get("originContent"), warn),
            summary=decode_optional_str(fields.get("summary"), "summary", warn),
            commentary=None
            if analysis_failed
            else decode_commentary(first_present(fields, "ddobakCommentary", "commentary"), warn),
            clauses=[]
            if analysis_failed
            else decode_clauses(first_present(fields, "toxics", "clauses"), warn),
            warnings=warnings,
        )
        Log.info(
            f"Normalized contract {contract_id}: {len(result.pages)} pages, "
            f"{len(result.clauses)} clauses, {len(warnings)} warnings"
        )
        return result
