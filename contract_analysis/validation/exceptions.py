from contract_analysis.exceptions import ContractAnalysisError, ErrorCode


class ValidationError(ContractAnalysisError):
    """Base exception for rejected submissions."""

    error_code = ErrorCode.ANALYSIS_INVALID_REQUEST


class FilesMissingError(ValidationError):
    """Raised when no pages were submitted or a page body is empty."""

    error_code = ErrorCode.ANALYSIS_FILE_MISSING

    def __init__(self, index: int | None = None) -> None:
        self.index = index
        if index is None:
            super().__init__("No files were submitted")
        else:
            super().__init__(f"File for page {index} is empty")


class TooManyFilesError(ValidationError):
    error_code = ErrorCode.ANALYSIS_TOO_MANY_FILES

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(f"File count {count} exceeds limit {limit}")


class FileTooLargeError(ValidationError):
    error_code = ErrorCode.ANALYSIS_FILE_TOO_LARGE

    def __init__(self, index: int, size_bytes: int, limit: int) -> None:
        self.index = index
        self.size_bytes = size_bytes
        self.limit = limit
        super().__init__(
            f"File for page {index} is {size_bytes} bytes, limit is {limit}"
        )


class UnsupportedFileTypeError(ValidationError):
    error_code = ErrorCode.ANALYSIS_UNSUPPORTED_FILE_TYPE

    def __init__(self, index: int, content_type: str | None) -> None:
        self.index = index
        self.content_type = content_type
        super().__init__(
            f"File for page {index} has unsupported content type '{content_type}'"
        )


class ExpectedCountMismatchError(ValidationError):
    """Raised under the strict policy when expectedCount disagrees with the pages."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} pages, received {actual}")
