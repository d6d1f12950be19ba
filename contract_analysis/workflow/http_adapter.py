import json
from typing import Any

import httpx

from contract_analysis.logging.logger import Log
from contract_analysis.workflow.base import BaseWorkflowInvoker
from contract_analysis.workflow.exceptions import (
    WorkflowDomainError,
    WorkflowInfrastructureError,
)


class HttpWorkflowInvoker(BaseWorkflowInvoker):
    """Workflow adapter for engines exposing a synchronous HTTP execution endpoint.

    ``POST {base_url}/workflows/{name}/executions`` with ``{"input": ...}``;
    the engine answers ``{"status": ..., "output": ..., "error": ..., "cause": ...}``
    once the execution has terminated.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int,
        api_key: str = "",
        client: httpx.Client | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=headers,
        )

    def start_sync(self, workflow_name: str, input: dict[str, Any]) -> dict[str, Any]:
        Log.info(f"Starting HTTP sync execution of workflow '{workflow_name}'")
        try:
            response = self._client.post(
                f"/workflows/{workflow_name}/executions",
                json={"input": input},
            )
            response.raise_for_status()
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise WorkflowInfrastructureError(
                f"Workflow engine network error: {exc}"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise WorkflowInfrastructureError(
                f"Workflow engine returned HTTP {exc.response.status_code} "
                f"for '{workflow_name}'"
            ) from exc
        except httpx.HTTPError as exc:
            raise WorkflowInfrastructureError(f"Workflow engine error: {exc}") from exc

        try:
            body = response.json()
        except (ValueError, RecursionError) as exc:
            raise WorkflowInfrastructureError(
                f"Workflow engine returned invalid JSON for '{workflow_name}'"
            ) from exc
        if not isinstance(body, dict):
            raise WorkflowInfrastructureError("Workflow engine response must be an object")

        status = str(body.get("status", "")).upper()
        if status != "SUCCEEDED":
            raise WorkflowDomainError(
                f"Workflow '{workflow_name}' ended with status {status or 'UNKNOWN'}: "
                f"{body.get('error')}",
                status=status or "FAILED",
                error=body.get("error"),
                cause=body.get("cause"),
            )
        return _output_of(workflow_name, body.get("output"))


def _output_of(workflow_name: str, output: Any) -> dict[str, Any]:
    if output is None:
        return {}
    if isinstance(output, str):
        try:
            output = json.loads(output)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise WorkflowInfrastructureError(
                f"Workflow '{workflow_name}' returned invalid JSON output: {exc}"
            ) from exc
    if not isinstance(output, dict):
        raise WorkflowInfrastructureError(
            f"Workflow '{workflow_name}' output must be a JSON object"
        )
    return output
