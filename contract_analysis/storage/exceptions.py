from contract_analysis.exceptions import ContractAnalysisError


class StorageError(ContractAnalysisError):
    """Raised when an object storage operation fails."""


class ObjectNotFoundError(StorageError):
    """Raised when a requested object does not exist."""
