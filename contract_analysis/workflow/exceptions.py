from contract_analysis.exceptions import ContractAnalysisError, ErrorCode


class WorkflowError(ContractAnalysisError):
    """Base exception for workflow invocation failures."""

    error_code = ErrorCode.WORKFLOW_FAILED


class WorkflowDomainError(WorkflowError):
    """Raised when the workflow ran but reported a failed terminal state."""

    def __init__(
        self,
        message: str,
        *,
        status: str = "FAILED",
        error: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.error = error
        self.cause = cause
        if status == "TIMED_OUT":
            self.error_code = ErrorCode.WORKFLOW_TIMEOUT


class WorkflowInfrastructureError(WorkflowError):
    """Raised when the workflow engine could not be reached or answered garbage."""

    error_code = ErrorCode.WORKFLOW_UNAVAILABLE
