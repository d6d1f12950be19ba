from collections.abc import Sequence

from contract_analysis.config.settings import Settings
from contract_analysis.ids.generator import BaseIdGenerator, SecureIdGenerator
from contract_analysis.logging.logger import Log
from contract_analysis.normalization.models import AnalysisResult
from contract_analysis.normalization.normalizer import ResultNormalizer
from contract_analysis.processor.models import AnalysisRequest
from contract_analysis.processor.pipeline import AnalysisState, PipelineContext, PipelineStep
from contract_analysis.processor.steps import (
    AssignContractIdStep,
    InvokeWorkflowStep,
    NormalizeResultStep,
    UploadPagesStep,
    ValidateFilesStep,
)
from contract_analysis.storage.base import BaseObjectStore
from contract_analysis.storage.factory import ObjectStoreFactory
from contract_analysis.upload.coordinator import UploadCoordinator
from contract_analysis.validation.validator import FileValidator
from contract_analysis.workflow.base import BaseWorkflowInvoker
from contract_analysis.workflow.factory import WorkflowInvokerFactory


class AnalysisOrchestrator:
    """Runs one submission through validate -> id -> upload -> invoke -> normalize.

    Steps run strictly in order. The first exception moves the context to
    FAILED and is re-raised unchanged; nothing is retried or resumed.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def submit(self, request: AnalysisRequest) -> AnalysisResult:
        """Analyze the submitted pages and return the normalized result."""
        context = self.run(PipelineContext(request=request))
        if context.result is None:
            raise RuntimeError("Pipeline finished without producing a result")
        return context.result

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.info(
            f"Starting analysis of {len(context.request.pages)} pages "
            f"for user {context.request.user_id}"
        )
        for step in self._steps:
            context.state = step.state
            try:
                context = step.run(context)
            except Exception as exc:
                self._fail(context, exc)
                raise
        context.state = AnalysisState.DONE
        Log.info(f"Analysis workflow completed for contract {context.contract_id}")
        return context

    @staticmethod
    def _fail(context: PipelineContext, exc: Exception) -> None:
        context.failed_state = context.state
        context.state = AnalysisState.FAILED
        context.error_message = str(exc)
        Log.error(
            f"Analysis failed while {context.failed_state.value}"
            f" (contract {context.contract_id or 'unassigned'}): {exc}"
        )


def build_orchestrator(
    settings: Settings,
    *,
    id_generator: BaseIdGenerator | None = None,
    store: BaseObjectStore | None = None,
    invoker: BaseWorkflowInvoker | None = None,
) -> AnalysisOrchestrator:
    """Build an AnalysisOrchestrator with the adapters named in settings."""
    Log.configure(settings.log_level)
    validator = FileValidator(
        max_file_count=settings.max_file_count,
        max_file_size_bytes=settings.max_file_size_bytes,
        allowed_content_types=settings.allowed_content_types,
        expected_count_policy=settings.expected_count_policy,
    )
    coordinator = UploadCoordinator(
        store if store is not None else ObjectStoreFactory.create(settings),
        bucket=settings.storage_bucket,
        key_prefix=settings.storage_key_prefix,
        max_workers=settings.upload_max_workers,
    )
    steps: list[PipelineStep] = [
        ValidateFilesStep(validator),
        AssignContractIdStep(id_generator or SecureIdGenerator()),
        UploadPagesStep(coordinator),
        InvokeWorkflowStep(
            invoker if invoker is not None else WorkflowInvokerFactory.create(settings),
            settings.workflow_name,
        ),
        NormalizeResultStep(ResultNormalizer()),
    ]
    return AnalysisOrchestrator(steps)
