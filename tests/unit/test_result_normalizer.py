import json
from typing import Any
from unittest.mock import patch

import pytest

from contract_analysis.exceptions import ErrorCode
from contract_analysis.normalization.exceptions import MalformedEnvelopeError
from contract_analysis.normalization.models import Commentary, OcrPage, ToxicClause
from contract_analysis.normalization.normalizer import ResultNormalizer


def _envelope(analysis: Any = None, **overrides: Any) -> dict[str, Any]:
    output: dict[str, Any] = {
        "contractId": "C1234567",
        "storageKeys": ["p/C1234567/001.jpg", "p/C1234567/002.jpg"],
        "clientId": "client-1",
        "clientToken": "token-1",
    }
    if analysis is not None:
        output["bedrockResults"] = analysis
    output.update(overrides)
    return output


def _relayed(payload: dict[str, Any]) -> dict[str, Any]:
    """Wrap an analysis payload the way the pipeline relays it."""
    return {"statusCode": 200, "body": json.dumps(payload)}


class TestMandatoryEnvelope:
    def test_missing_contract_id_is_fatal(self) -> None:
        output = _envelope()
        del output["contractId"]
        with pytest.raises(MalformedEnvelopeError) as exc_info:
            ResultNormalizer().normalize(output)
        assert exc_info.value.error_code is ErrorCode.ANALYSIS_RESULT_PARSING_FAILED

    def test_blank_contract_id_is_fatal(self) -> None:
        with pytest.raises(MalformedEnvelopeError):
            ResultNormalizer().normalize(_envelope(contractId="  "))

    def test_non_string_contract_id_is_fatal(self) -> None:
        with pytest.raises(MalformedEnvelopeError):
            ResultNormalizer().normalize(_envelope(contractId=1234567))

    def test_non_object_output_is_fatal(self) -> None:
        with pytest.raises(MalformedEnvelopeError, match="list"):
            ResultNormalizer().normalize([])

    def test_copies_identifiers(self) -> None:
        result = ResultNormalizer().normalize(_envelope())
        assert result.contract_id == "C1234567"
        assert result.storage_keys == ["p/C1234567/001.jpg", "p/C1234567/002.jpg"]
        assert result.client_id == "client-1"
        assert result.client_token == "token-1"

    def test_accepts_s3_keys_alias(self) -> None:
        output = _envelope()
        output["s3Keys"] = output.pop("storageKeys")
        result = ResultNormalizer().normalize(output)
        assert result.storage_keys == ["p/C1234567/001.jpg", "p/C1234567/002.jpg"]

    def test_malformed_contract_id_only_warns(self) -> None:
        result = ResultNormalizer().normalize(_envelope(contractId="contract-1"))
        assert result.contract_id == "contract-1"
        assert any(w.field == "contractId" for w in result.warnings)


class TestAnalysisPayload:
    def test_relayed_body_with_high_warn_level(self) -> None:
        output = {
            "contractId": "C1234567",
            "bedrockResults": {
                "body": '{"status":"ok","data":{"toxics":[{"title":"t","warnLevel":"HIGH"}]}}'
            },
        }
        result = ResultNormalizer().normalize(output)
        assert result.clauses[0].title == "t"
        assert result.clauses[0].warn_level == 3

    def test_nested_object_used_directly(self) -> None:
        output = _envelope({"status": "ok", "data": {"summary": "Lease for 2 years"}})
        assert ResultNormalizer().normalize(output).summary == "Lease for 2 years"

    def test_payload_without_data_wrapper(self) -> None:
        output = _envelope({"summary": "flat"})
        assert ResultNormalizer().normalize(output).summary == "flat"

    def test_analysis_results_alias(self) -> None:
        output = _envelope(analysisResults=_relayed({"status": "ok", "data": {"summary": "s"}}))
        assert ResultNormalizer().normalize(output).summary == "s"

    def test_undecodable_body_degrades_to_empty_analysis(self) -> None:
        output = _envelope(
            {"body": "{broken"},
            ocrResults=[{"page": 1, "text": "first page", "s3Key": "p/C1234567/001.jpg"}],
        )
        result = ResultNormalizer().normalize(output)
        assert result.contract_id == "C1234567"
        assert result.pages == [OcrPage(page=1, text="first page", source_key="p/C1234567/001.jpg")]
        assert result.summary is None
        assert result.commentary is None
        assert result.clauses == []
        assert any(w.field == "bedrockResults.body" for w in result.warnings)

    def test_deeply_nested_body_degrades_to_empty_analysis(self) -> None:
        output = {"contractId": "C1234567", "bedrockResults": {"body": "[" * 100_000}}
        result = ResultNormalizer().normalize(output)
        assert result.contract_id == "C1234567"
        assert result.clauses == []
        assert any(w.field == "bedrockResults.body" for w in result.warnings)

    def test_deeply_nested_data_degrades(self) -> None:
        output = _envelope({"status": "ok", "data": "[" * 100_000})
        result = ResultNormalizer().normalize(output)
        assert result.summary is None
        assert any(w.field == "bedrockResults.data" for w in result.warnings)

    def test_missing_analysis_degrades(self) -> None:
        result = ResultNormalizer().normalize(_envelope())
        assert result.clauses == []
        assert any(w.field == "bedrockResults" for w in result.warnings)

    def test_error_status_empties_commentary_and_clauses(self) -> None:
        payload = {
            "status": "error",
            "error": "model overloaded",
            "data": {
                "ddobakCommentary": {"overallComment": "x"},
                "toxics": [{"title": "t"}],
            },
        }
        with patch("contract_analysis.normalization.normalizer.Log") as mock_log:
            result = ResultNormalizer().normalize(_envelope(_relayed(payload)))
        assert result.commentary is None
        assert result.clauses == []
        assert any("model overloaded" in c.args[0] for c in mock_log.warning.call_args_list)

    def test_string_data_is_decoded(self) -> None:
        payload = {"status": "ok", "data": json.dumps({"summary": "double"})}
        assert ResultNormalizer().normalize(_envelope(_relayed(payload))).summary == "double"


class TestOriginContent:
    def test_keeps_first_text_of_list(self) -> None:
        payload = {"data": {"originContent": [{"text": "hello"}, {"text": "world"}]}}
        result = ResultNormalizer().normalize(_envelope(_relayed(payload)))
        assert result.origin_content == "hello"

    def test_plain_string(self) -> None:
        payload = {"data": {"originContent": "full text"}}
        assert ResultNormalizer().normalize(_envelope(payload)).origin_content == "full text"

    def test_empty_list_is_none(self) -> None:
        payload = {"data": {"originContent": []}}
        assert ResultNormalizer().normalize(_envelope(payload)).origin_content is None


class TestOcrPages:
    def test_numeric_string_pages(self) -> None:
        output = _envelope(
            ocrResults=[
                {"page": "001", "text": "a", "s3Key": "k1"},
                {"page": 2, "text": "b", "sourceKey": "k2"},
            ]
        )
        assert ResultNormalizer().normalize(output).pages == [
            OcrPage(page=1, text="a", source_key="k1"),
            OcrPage(page=2, text="b", source_key="k2"),
        ]

    def test_bad_page_is_skipped_not_fatal(self) -> None:
        output = _envelope(
            ocrResults=[
                {"page": "one", "text": "a"},
                {"page": 2, "text": "b"},
            ]
        )
        result = ResultNormalizer().normalize(output)
        assert [p.page for p in result.pages] == [2]
        assert any(w.field == "ocrResults[0].page" for w in result.warnings)

    def test_single_object_is_one_page(self) -> None:
        output = _envelope(ocrResults={"page": 1, "text": "only"})
        assert ResultNormalizer().normalize(output).pages == [OcrPage(page=1, text="only")]


class TestClauses:
    def test_unknown_warn_level_defaults_to_one(self) -> None:
        payload = {"data": {"toxics": [{"title": "t", "warnLevel": "UNKNOWN_TOKEN"}]}}
        with patch("contract_analysis.normalization.normalizer.Log") as mock_log:
            result = ResultNormalizer().normalize(_envelope(_relayed(payload)))
        assert result.clauses[0].warn_level == 1
        assert any("UNKNOWN_TOKEN" in c.args[0] for c in mock_log.warning.call_args_list)

    @pytest.mark.parametrize("raw", ["--3", "+-1", "\u00b2", "3"])
    def test_malformed_warn_level_string_degrades_to_one(self, raw: str) -> None:
        body = json.dumps({"status": "ok", "data": {"toxics": [{"title": "t", "warnLevel": raw}]}})
        result = ResultNormalizer().normalize(_envelope({"body": body}))
        assert result.clauses[0].warn_level == 1
        assert any(w.field == "toxics[0].warnLevel" for w in result.warnings)

    def test_absent_warn_level_is_none(self) -> None:
        payload = {"data": {"toxics": [{"title": "t"}]}}
        assert ResultNormalizer().normalize(_envelope(payload)).clauses[0].warn_level is None

    def test_full_clause(self) -> None:
        payload = {
            "data": {
                "toxics": [
                    {
                        "title": "Deposit",
                        "clause": "Deposit is non-refundable",
                        "reason": "Unfair term",
                        "reasonReference": "Housing Lease Protection Act art. 3",
                        "warnLevel": 2,
                    }
                ]
            }
        }
        assert ResultNormalizer().normalize(_envelope(payload)).clauses == [
            ToxicClause(
                title="Deposit",
                clause="Deposit is non-refundable",
                reason="Unfair term",
                reason_reference="Housing Lease Protection Act art. 3",
                warn_level=2,
            )
        ]

    def test_commentary(self) -> None:
        payload = {
            "data": {
                "ddobakCommentary": {
                    "overallComment": "Mostly fine",
                    "warningComment": "Check clause 4",
                    "advice": "Negotiate",
                }
            }
        }
        assert ResultNormalizer().normalize(_envelope(payload)).commentary == Commentary(
            overall="Mostly fine", warning="Check clause 4", advice="Negotiate"
        )


class TestLogging:
    def test_logs_summary_in_info(self) -> None:
        with patch("contract_analysis.normalization.normalizer.Log") as mock_log:
            ResultNormalizer().normalize(_envelope({"data": {}}))
        info_calls = mock_log.info.call_args_list
        assert any("Normalized contract C1234567" in c.args[0] for c in info_calls)
