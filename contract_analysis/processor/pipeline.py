from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from contract_analysis.normalization.models import AnalysisResult
from contract_analysis.processor.models import AnalysisRequest


class AnalysisState(Enum):
    VALIDATING = "validating"
    ID_ASSIGNED = "id_assigned"
    UPLOADING = "uploading"
    INVOKING = "invoking"
    NORMALIZING = "normalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineContext:
    request: AnalysisRequest
    state: AnalysisState = AnalysisState.VALIDATING
    contract_id: str = ""
    storage_keys: list[str] = field(default_factory=list)
    workflow_input: dict[str, Any] = field(default_factory=dict)
    workflow_output: dict[str, Any] = field(default_factory=dict)
    result: AnalysisResult | None = None
    failed_state: AnalysisState | None = None
    error_message: str = ""


class PipelineStep(ABC):
    state: ClassVar[AnalysisState]

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
