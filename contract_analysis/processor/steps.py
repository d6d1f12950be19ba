from typing import Any

from contract_analysis.ids.generator import BaseIdGenerator
from contract_analysis.logging.logger import Log
from contract_analysis.normalization.normalizer import ResultNormalizer
from contract_analysis.processor.pipeline import AnalysisState, PipelineContext, PipelineStep
from contract_analysis.upload.coordinator import UploadCoordinator
from contract_analysis.validation.validator import FileValidator
from contract_analysis.workflow.base import BaseWorkflowInvoker

REDACTED_FIELDS = ("clientToken",)


def redact(payload: dict[str, Any]) -> dict[str, Any]:
    """Copy of a workflow payload with client credentials masked for logging."""
    return {
        key: "***" if key in REDACTED_FIELDS and value is not None else value
        for key, value in payload.items()
    }


class ValidateFilesStep(PipelineStep):
    state = AnalysisState.VALIDATING

    def __init__(self, validator: FileValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        pages = context.request.pages
        self._validator.validate(pages)
        self._validator.check_expected_count(context.request.expected_count, len(pages))
        return context


class AssignContractIdStep(PipelineStep):
    state = AnalysisState.ID_ASSIGNED

    def __init__(self, id_generator: BaseIdGenerator) -> None:
        self._id_generator = id_generator

    def run(self, context: PipelineContext) -> PipelineContext:
        context.contract_id = self._id_generator.new_contract_id()
        Log.info(
            f"Generated contract ID {context.contract_id} for user {context.request.user_id}"
        )
        return context


class UploadPagesStep(PipelineStep):
    state = AnalysisState.UPLOADING

    def __init__(self, coordinator: UploadCoordinator) -> None:
        self._coordinator = coordinator

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.contract_id:
            raise ValueError("PipelineContext.contract_id must be set before upload")
        context.storage_keys = self._coordinator.upload(
            context.contract_id, context.request.pages
        )
        return context


class InvokeWorkflowStep(PipelineStep):
    state = AnalysisState.INVOKING

    def __init__(self, invoker: BaseWorkflowInvoker, workflow_name: str) -> None:
        self._invoker = invoker
        self._workflow_name = workflow_name

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        context.workflow_input = {
            "contractId": context.contract_id,
            "storageKeys": list(context.storage_keys),
            "clientId": request.client_id if request.client_id is not None else request.user_id,
            "clientToken": request.client_token,
        }
        Log.debug(f"Workflow input: {redact(context.workflow_input)}")
        context.workflow_output = self._invoker.start_sync(
            self._workflow_name, context.workflow_input
        )
        Log.info(
            f"Workflow '{self._workflow_name}' completed for contract {context.contract_id}"
        )
        Log.debug(f"Workflow output: {redact(context.workflow_output)}")
        return context


class NormalizeResultStep(PipelineStep):
    state = AnalysisState.NORMALIZING

    def __init__(self, normalizer: ResultNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        result = self._normalizer.normalize(context.workflow_output)
        if result.contract_id != context.contract_id:
            Log.warning(
                f"Workflow answered for contract {result.contract_id}, "
                f"submitted {context.contract_id}"
            )
        context.result = result
        return context
