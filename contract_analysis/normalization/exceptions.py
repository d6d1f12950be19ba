from contract_analysis.exceptions import ContractAnalysisError, ErrorCode


class NormalizationError(ContractAnalysisError):
    """Raised when workflow output cannot be turned into a result."""

    error_code = ErrorCode.ANALYSIS_RESULT_PARSING_FAILED


class MalformedEnvelopeError(NormalizationError):
    """Raised when mandatory envelope fields are missing or unusable."""
