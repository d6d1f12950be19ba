from contract_analysis.exceptions import ContractAnalysisError, ErrorCode


class UploadError(ContractAnalysisError):
    """Base exception for page upload failures."""

    error_code = ErrorCode.ANALYSIS_UPLOAD_FAILED


class PutFailedError(UploadError):
    """Raised when storing one page fails; aborts the whole submission."""

    def __init__(self, index: int, key: str, reason: str = "") -> None:
        self.index = index
        self.key = key
        message = f"Upload failed for page {index} ({key})"
        super().__init__(f"{message}: {reason}" if reason else message)
