"""
Error Taxonomy Unit Tests
"""

from claude_messages.common.errors import (
    ApiError,
    ClaudeMessagesError,
    ConfigurationError,
    DecodeError,
    ProtocolOrderError,
    StreamOptionMismatch,
    TransportError,
    TruncatedStreamError,
    ValidationError,
)
from claude_messages.domain.response import ErrorResponseBody
from claude_messages.providers.base import parse_api_error


def test_all_errors_share_base_and_are_not_value_errors():
    errors = [
        ValidationError("temperature", "too high"),
        ConfigurationError("missing key"),
        ApiError(status_code=400),
        TransportError("refused"),
        DecodeError("bad json"),
        ProtocolOrderError("out of order"),
        TruncatedStreamError(b"event: ping"),
        StreamOptionMismatch("wrong call"),
    ]
    for error in errors:
        assert isinstance(error, ClaudeMessagesError)
        assert not isinstance(error, ValueError)
    assert len({error.error_type for error in errors}) == len(errors)


def test_validation_error_to_dict():
    error = ValidationError("temperature", "must be between 0.0 and 1.0", value=1.5, expected="0.0 <= temperature <= 1.0")
    assert error.to_dict() == {
        "error": {
            "message": "Validation error for 'temperature': must be between 0.0 and 1.0",
            "type": "validation_error",
            "details": {
                "field": "temperature",
                "value": "1.5",
                "expected": "0.0 <= temperature <= 1.0",
            },
        }
    }


def test_api_error_from_body():
    body = ErrorResponseBody.model_validate(
        {"type": "error", "error": {"type": "invalid_request_error", "message": "max_tokens: field required"}}
    )
    error = ApiError(status_code=400, error=body)
    assert error.api_error_type == "invalid_request_error"
    assert not error.is_server_error
    assert "max_tokens: field required" in str(error)
    assert error.details == {"status_code": 400, "api_error_type": "invalid_request_error"}
    assert str(error) == "API error (400) invalid_request_error: max_tokens: field required"


def test_api_error_without_status_omits_it():
    body = ErrorResponseBody.model_validate(
        {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}
    )
    error = ApiError(status_code=None, error=body)
    assert str(error) == "API error overloaded_error: Overloaded"
    assert "None" not in error.message
    assert error.details == {"status_code": None, "api_error_type": "overloaded_error"}


class TestParseApiError:
    def test_structured_body(self):
        error = parse_api_error(
            429, '{"type": "error", "error": {"type": "rate_limit_error", "message": "slow down"}}'
        )
        assert error.status_code == 429
        assert error.api_error_type == "rate_limit_error"
        assert error.error.error.message == "slow down"

    def test_unknown_error_type(self):
        error = parse_api_error(
            400, '{"type": "error", "error": {"type": "brand_new_error", "message": "?"}}'
        )
        assert error.api_error_type == "brand_new_error"

    def test_not_json(self):
        error = parse_api_error(500, "Internal Server Error")
        assert error.error is None
        assert error.body_text == "Internal Server Error"
        assert error.is_server_error
