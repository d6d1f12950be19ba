from contract_analysis.normalization.models import AnalysisResult
from contract_analysis.normalization.normalizer import ResultNormalizer
from contract_analysis.normalization.serializer import result_to_payload

__all__ = ["AnalysisResult", "ResultNormalizer", "result_to_payload"]
