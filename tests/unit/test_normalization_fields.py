from typing import Any

import pytest

from contract_analysis.normalization.fields import (
    decode_analysis_payload,
    decode_commentary,
    decode_json_text,
    decode_origin_content,
    decode_storage_keys,
    decode_warn_level,
    first_present,
    parse_page_number,
)


class _Warnings:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def __call__(self, field: str, message: str) -> None:
        self.calls.append((field, message))


class TestFirstPresent:
    def test_prefers_earlier_key(self) -> None:
        assert first_present({"a": 1, "b": 2}, "a", "b") == 1

    def test_present_none_wins(self) -> None:
        assert first_present({"a": None, "b": 2}, "a", "b") is None

    def test_missing_is_none(self) -> None:
        assert first_present({}, "a") is None


class TestParsePageNumber:
    @pytest.mark.parametrize("raw, expected", [(3, 3), (3.0, 3), ("003", 3), (" 7 ", 7)])
    def test_accepts_whole_numbers(self, raw: Any, expected: int) -> None:
        assert parse_page_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, True, 2.5, "two", ""])
    def test_rejects_other_values(self, raw: Any) -> None:
        with pytest.raises(ValueError):
            parse_page_number(raw)


class TestDecodeWarnLevel:
    @pytest.mark.parametrize(
        "raw, expected",
        [("HIGH", 3), ("medium", 2), (" Low ", 1), (1, 1), (3, 3), (2.0, 2)],
    )
    def test_maps_known_values(self, raw: Any, expected: int) -> None:
        warn = _Warnings()
        assert decode_warn_level(raw, "warnLevel", warn) == expected
        assert warn.calls == []

    def test_none_stays_none(self) -> None:
        assert decode_warn_level(None, "warnLevel", _Warnings()) is None

    @pytest.mark.parametrize(
        "raw", ["CRITICAL", "", True, [3], "3", "7", "--3", "+-1", "\u00b2", "2.0"]
    )
    def test_unknown_defaults_to_one_with_warning(self, raw: Any) -> None:
        warn = _Warnings()
        assert decode_warn_level(raw, "warnLevel", warn) == 1
        assert warn.calls[0][0] == "warnLevel"
        assert "unknown warn level" in warn.calls[0][1]

    @pytest.mark.parametrize("raw, expected", [(5, 3), (0, 1), (-2, 1), (7.0, 3)])
    def test_out_of_range_is_clamped(self, raw: Any, expected: int) -> None:
        warn = _Warnings()
        assert decode_warn_level(raw, "warnLevel", warn) == expected
        assert "clamped" in warn.calls[0][1]


class TestDecodeStorageKeys:
    def test_single_string_is_wrapped(self) -> None:
        assert decode_storage_keys("k1", _Warnings()) == ["k1"]

    def test_non_string_items_dropped(self) -> None:
        warn = _Warnings()
        assert decode_storage_keys(["k1", 2, "k3"], warn) == ["k1", "k3"]
        assert warn.calls[0][0] == "storageKeys[1]"

    def test_missing_warns(self) -> None:
        warn = _Warnings()
        assert decode_storage_keys(None, warn) == []
        assert warn.calls


class TestDecodeAnalysisPayload:
    def test_bare_json_string(self) -> None:
        payload, failed = decode_analysis_payload('{"data": {"summary": "s"}}', _Warnings())
        assert payload == {"summary": "s"}
        assert failed is False

    def test_dict_body(self) -> None:
        payload, _ = decode_analysis_payload({"body": {"data": {"summary": "s"}}}, _Warnings())
        assert payload == {"summary": "s"}

    def test_error_status(self) -> None:
        payload, failed = decode_analysis_payload({"status": "ERROR"}, _Warnings())
        assert payload == {}
        assert failed is True

    def test_non_object_body(self) -> None:
        warn = _Warnings()
        payload, failed = decode_analysis_payload({"body": 42}, warn)
        assert (payload, failed) == ({}, False)
        assert warn.calls[0][0] == "bedrockResults.body"

    def test_null_data(self) -> None:
        warn = _Warnings()
        payload, _ = decode_analysis_payload({"status": "ok", "data": None}, warn)
        assert payload == {}
        assert warn.calls


class TestDecodeOriginContent:
    def test_list_of_strings(self) -> None:
        assert decode_origin_content(["a", "b"], _Warnings()) == "a"

    def test_wrong_type_warns(self) -> None:
        warn = _Warnings()
        assert decode_origin_content(42, warn) is None
        assert warn.calls[0][0] == "originContent"


class TestDecodeCommentary:
    def test_json_string(self) -> None:
        commentary = decode_commentary('{"overall": "ok"}', _Warnings())
        assert commentary is not None
        assert commentary.overall == "ok"
        assert commentary.warning is None

    def test_wrong_type_is_none(self) -> None:
        warn = _Warnings()
        assert decode_commentary(["x"], warn) is None
        assert warn.calls


class TestDecodeJsonText:
    def test_valid_json(self) -> None:
        assert decode_json_text('{"a": 1}', "body", _Warnings()) == {"a": 1}

    def test_invalid_json_warns(self) -> None:
        warn = _Warnings()
        assert decode_json_text("{broken", "body", warn) is None
        assert "invalid JSON" in warn.calls[0][1]

    def test_deeply_nested_json_warns(self) -> None:
        warn = _Warnings()
        assert decode_json_text("[" * 100_000, "body", warn) is None
        assert warn.calls == [("body", "JSON string is nested too deeply to decode")]
