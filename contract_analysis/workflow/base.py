from abc import ABC, abstractmethod
from typing import Any


class BaseWorkflowInvoker(ABC):
    """Contract for synchronous workflow engine adapters."""

    @abstractmethod
    def start_sync(self, workflow_name: str, input: dict[str, Any]) -> dict[str, Any]:
        """Start the named workflow and block until it terminates.

        Args:
            workflow_name: Logical workflow name, resolved by the adapter.
            input: JSON-compatible workflow input.

        Returns:
            The workflow's raw terminal output as a JSON-compatible dict.

        Raises:
            WorkflowDomainError: the workflow reported a failed terminal state.
            WorkflowInfrastructureError: transport or configuration failure.
        """
