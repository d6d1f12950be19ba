import json
import time
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from contract_analysis.ids.generator import BaseIdGenerator, SecureIdGenerator
from contract_analysis.logging.logger import Log
from contract_analysis.workflow.base import BaseWorkflowInvoker
from contract_analysis.workflow.exceptions import (
    WorkflowDomainError,
    WorkflowInfrastructureError,
)


class StepFunctionsWorkflowInvoker(BaseWorkflowInvoker):
    """Runs AWS Step Functions express workflows with StartSyncExecution."""

    def __init__(
        self,
        *,
        state_machines: dict[str, str],
        region_name: str,
        timeout_seconds: int,
        endpoint_url: str | None = None,
        id_generator: BaseIdGenerator | None = None,
        client: Any | None = None,
    ) -> None:
        self._state_machines = dict(state_machines)
        self._id_generator = id_generator or SecureIdGenerator()
        self._client = client or boto3.client(
            "stepfunctions",
            region_name=region_name,
            endpoint_url=endpoint_url,
            config=Config(read_timeout=timeout_seconds, retries={"max_attempts": 0}),
        )

    def start_sync(self, workflow_name: str, input: dict[str, Any]) -> dict[str, Any]:
        state_machine_arn = self._state_machines.get(workflow_name)
        if not state_machine_arn:
            raise WorkflowInfrastructureError(
                f"State machine configuration not found: {workflow_name}"
            )
        execution_name = f"{workflow_name}-{self._id_generator.new_trace_id()}"
        Log.info(f"Starting sync execution {execution_name} of {state_machine_arn}")
        started = time.monotonic()

        try:
            response = self._client.start_sync_execution(
                stateMachineArn=state_machine_arn,
                name=execution_name,
                input=json.dumps(input),
            )
        except (BotoCoreError, ClientError) as exc:
            raise WorkflowInfrastructureError(
                f"Step Functions sync execution of '{workflow_name}' failed: {exc}"
            ) from exc

        elapsed_ms = int((time.monotonic() - started) * 1000)
        status = str(response.get("status", ""))
        Log.info(
            "Sync execution finished",
            execution=execution_name,
            status=status,
            elapsed_ms=elapsed_ms,
        )

        if status != "SUCCEEDED":
            error = response.get("error")
            cause = response.get("cause")
            raise WorkflowDomainError(
                f"Workflow '{workflow_name}' ended with status {status}: {error}",
                status=status or "FAILED",
                error=error,
                cause=cause,
            )
        return _parse_output(workflow_name, response.get("output"))


def _parse_output(workflow_name: str, raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        output = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise WorkflowInfrastructureError(
            f"Workflow '{workflow_name}' returned invalid JSON output: {exc}"
        ) from exc
    if not isinstance(output, dict):
        raise WorkflowInfrastructureError(
            f"Workflow '{workflow_name}' output must be a JSON object"
        )
    return output
