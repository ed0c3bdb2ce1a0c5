"""Tests for response decoding and the error code table."""

import json

import pytest

from bitkubsdk.client.envelope import (
    Pagination,
    decode_bare,
    decode_envelope,
    peek_error_code,
)
from bitkubsdk.client.error_codes import (
    ERROR_CODES,
    ErrorCategory,
    ErrorCode,
    error_text,
    lookup_error,
)
from bitkubsdk.client.errors import (
    APIError,
    ErrorKind,
    MalformedResponseError,
    ProtocolError,
)
from bitkubsdk.models.market import MarketSymbol


class TestDecodeEnvelope:
    """Test suite for enveloped responses."""

    def test_success_returns_result(self):
        result = {"THB": 1000.5, "BTC": 0.1}
        envelope = decode_envelope(json.dumps({"error": 0, "result": result}))
        assert envelope.error == 0
        assert envelope.result == result
        assert envelope.pagination is None

    def test_insufficient_balance(self):
        with pytest.raises(APIError) as exc_info:
            decode_envelope('{"error": 18, "result": null}')

        err = exc_info.value
        assert err.code == 18
        assert err.message == "Insufficient balance"
        assert err.category is ErrorCategory.RESOURCE_STATE
        assert err.kind is ErrorKind.APPLICATION
        assert str(err) == "[18] Insufficient balance"

    def test_error_keeps_partial_result(self):
        with pytest.raises(APIError) as exc_info:
            decode_envelope('{"error": 21, "result": {"id": "1"}}')
        assert exc_info.value.result == {"id": "1"}

    def test_unknown_code_does_not_crash(self):
        with pytest.raises(APIError) as exc_info:
            decode_envelope('{"error": 9999}')
        assert exc_info.value.category is ErrorCategory.UNKNOWN
        assert "9999" in exc_info.value.message

    def test_bytes_body(self):
        assert decode_envelope(b'{"error":0,"result":5}').result == 5

    def test_parser_applied(self):
        body = '{"error":0,"result":[{"id":1,"symbol":"THB_BTC","info":"Thai Baht to Bitcoin"}]}'
        envelope = decode_envelope(body, parser=lambda r: [MarketSymbol.from_api(s) for s in r])
        assert envelope.result == [MarketSymbol(1, "THB_BTC", "Thai Baht to Bitcoin")]

    def test_pagination(self):
        body = '{"error":0,"result":[],"pagination":{"page":2,"last":5,"next":3,"prev":1}}'
        envelope = decode_envelope(body)
        assert envelope.pagination == Pagination(page=2, last=5, next=3, prev=1)
        assert envelope.pagination.has_next

    def test_invalid_json_is_malformed_not_api_error(self):
        with pytest.raises(MalformedResponseError) as exc_info:
            decode_envelope("<html>502 Bad Gateway</html>")
        assert exc_info.value.kind is ErrorKind.PROTOCOL
        assert exc_info.value.body == "<html>502 Bad Gateway</html>"

    def test_missing_error_field_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            decode_envelope('{"result": 1}')

    def test_array_is_malformed_for_envelope(self):
        with pytest.raises(MalformedResponseError):
            decode_envelope("[1, 2, 3]")

    def test_parser_failure_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            decode_envelope('{"error":0,"result":[{"symbol":"THB_BTC"}]}',
                            parser=lambda r: [MarketSymbol.from_api(s) for s in r])

    def test_malformed_is_protocol_error(self):
        assert issubclass(MalformedResponseError, ProtocolError)


class TestDecodeBare:
    """Test suite for responses without an envelope."""

    def test_plain_array(self):
        body = '[{"name":"Non-secure endpoints","status":"ok","message":""}]'
        assert decode_bare(body)[0]["status"] == "ok"

    def test_plain_object(self):
        body = '{"asks":[[1250100,0.1]],"bids":[[1249900,0.5]]}'
        assert decode_bare(body)["asks"][0][0] == 1250100

    def test_scalar_with_parser(self):
        assert decode_bare("1699381086593", parser=int) == 1699381086593

    def test_invalid_json(self):
        with pytest.raises(MalformedResponseError):
            decode_bare("not json")


class TestPeekErrorCode:
    def test_envelope(self):
        assert peek_error_code('{"error":6}') == 6

    def test_not_json(self):
        assert peek_error_code("Bad Gateway") is None

    def test_no_error_field(self):
        assert peek_error_code("[]") is None


class TestErrorCodes:
    """Test suite for the error code table."""

    def test_known_codes(self):
        assert error_text(0) == "No error"
        assert error_text(18) == "Insufficient balance"
        assert error_text(90) == "Server error (please contact support)"
        assert error_text(55) == "Cancel only mode"

    def test_numbers_are_stable(self):
        assert ErrorCode.INVALID_JSON_PAYLOAD == 1
        assert ErrorCode.MISSING_INVALID_SIGNATURE == 6
        assert ErrorCode.KYC_LEVEL_1_REQUIRED == 25
        assert ErrorCode.LIMIT_EXCEEDS == 30
        assert ErrorCode.PENDING_WITHDRAWAL_EXISTS == 40
        assert ErrorCode.SUSPENDED_FROM_SELLING == 57
        assert ErrorCode.SERVER_ERROR == 90

    def test_every_enum_member_has_an_entry(self):
        assert set(ERROR_CODES) == {int(c) for c in ErrorCode}

    @pytest.mark.parametrize(
        "code,category",
        [
            (1, ErrorCategory.MALFORMED_INPUT),
            (6, ErrorCategory.MALFORMED_INPUT),
            (8, ErrorCategory.MALFORMED_INPUT),
            (3, ErrorCategory.AUTHORIZATION),
            (4, ErrorCategory.AUTHORIZATION),
            (5, ErrorCategory.AUTHORIZATION),
            (11, ErrorCategory.VALIDATION),
            (22, ErrorCategory.VALIDATION),
            (46, ErrorCategory.VALIDATION),
            (18, ErrorCategory.RESOURCE_STATE),
            (40, ErrorCategory.RESOURCE_STATE),
            (24, ErrorCategory.RESOURCE_STATE),
            (30, ErrorCategory.POLICY),
            (55, ErrorCategory.POLICY),
            (56, ErrorCategory.POLICY),
            (90, ErrorCategory.SERVER),
        ],
    )
    def test_categories(self, code, category):
        assert lookup_error(code).category is category

    def test_unknown_code(self):
        info = lookup_error(9999)
        assert info.code == 9999
        assert not info.is_known
        assert info.message == "Unrecognized error code 9999"

    def test_gap_in_table_is_unknown(self):
        assert not lookup_error(26).is_known
