from core.errors import ErrorCode
from core.response_envelope import error_payload, http_exception_response, success_payload
from core.storage.errors import SigningError, gateway_error_to_app_exception


def test_success_payload_includes_request_id():
    payload = success_payload(data={"value": 1}, message="ok", request_id="req-123")

    assert payload["success"] is True
    assert payload["data"] == {"value": 1}
    assert payload["requestId"] == "req-123"


def test_error_payload_includes_request_id():
    payload = error_payload(message="failed", data={"code": "X"}, request_id="req-999")

    assert payload["success"] is False
    assert payload["data"]["code"] == "X"
    assert payload["requestId"] == "req-999"


def test_gateway_error_renders_code_and_retry_hint():
    exc = gateway_error_to_app_exception(SigningError("Could not sign", details={"key": "a.png"}))

    response = http_exception_response(exc)

    assert response.status_code == 502
    assert exc.detail["code"] == ErrorCode.STORAGE_SIGNING_FAILED.value
    assert b'"retryable":true' in response.body
    assert b'"message":"Could not sign"' in response.body


def test_gateway_error_can_withhold_backend_reason():
    err = SigningError("Could not sign", details={"key": "a.png", "reason": "Unable to locate credentials"})

    exc = gateway_error_to_app_exception(err, include_reason=False)

    assert exc.detail["details"]["details"] == {"key": "a.png"}
    assert err.details["reason"] == "Unable to locate credentials"
