"""Error taxonomy shared by every stage of the analysis pipeline.

Each concrete error carries an ``ErrorCode`` so the HTTP layer in front of
this package can map it to a status code and a stable numeric code without
inspecting messages.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes (3xxx range: document processing)."""

    ANALYSIS_INVALID_REQUEST = (400, 3100, "Invalid analysis request format")
    ANALYSIS_FILE_MISSING = (400, 3101, "Image file is missing")
    ANALYSIS_UNSUPPORTED_FILE_TYPE = (400, 3102, "Unsupported file type")
    ANALYSIS_FILE_TOO_LARGE = (400, 3103, "File size exceeds limit")
    ANALYSIS_TOO_MANY_FILES = (400, 3107, "Too many files in one request")
    ANALYSIS_UPLOAD_FAILED = (500, 3150, "Analysis processing failed")
    WORKFLOW_FAILED = (500, 3250, "Workflow execution failed")
    WORKFLOW_TIMEOUT = (408, 3251, "Analysis timeout")
    WORKFLOW_UNAVAILABLE = (503, 3253, "Analysis server unavailable")
    ANALYSIS_RESULT_PARSING_FAILED = (500, 3254, "Analysis result parsing failed")

    def __init__(self, http_status: int, code: int, message: str) -> None:
        self.http_status = http_status
        self.code = code
        self.message = message


class ContractAnalysisError(Exception):
    """Base exception for all contract analysis errors."""

    error_code: ErrorCode = ErrorCode.ANALYSIS_INVALID_REQUEST
