from contract_analysis.config.settings import Settings
from contract_analysis.workflow.base import BaseWorkflowInvoker
from contract_analysis.workflow.example_adapter import ExampleWorkflowInvoker
from contract_analysis.workflow.http_adapter import HttpWorkflowInvoker
from contract_analysis.workflow.stepfunctions_adapter import StepFunctionsWorkflowInvoker


class WorkflowInvokerFactory:
    """Creates the configured workflow engine adapter."""

    PROVIDERS = ("stepfunctions", "http", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseWorkflowInvoker:
        provider = settings.workflow_provider.lower()
        if provider == "example":
            return ExampleWorkflowInvoker()
        if provider == "stepfunctions":
            return StepFunctionsWorkflowInvoker(
                state_machines=settings.workflow_state_machines,
                region_name=settings.aws_region,
                timeout_seconds=settings.workflow_timeout_seconds,
                endpoint_url=settings.aws_endpoint_url,
            )
        if provider == "http":
            base_url = settings.workflow_base_url.strip()
            if not base_url:
                raise ValueError("workflow_base_url is required for workflow_provider=http")
            return HttpWorkflowInvoker(
                base_url=base_url,
                timeout_seconds=settings.workflow_timeout_seconds,
                api_key=settings.workflow_api_key,
            )
        raise ValueError(
            f"Unknown workflow provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
