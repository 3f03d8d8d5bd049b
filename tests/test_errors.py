import pytest

from cloudstore.errors import (
    ErrorList,
    GoogleError,
    GoogleErrorResponse,
    GoogleStorageError,
    Reason,
    SerializationError,
    StorageError,
    parse_google_response,
)


def _error_doc(reason="invalid", code=400, message="Invalid argument"):
    return {
        "error": {
            "errors": [
                {
                    "domain": "global",
                    "reason": reason,
                    "message": message,
                    "location_type": "parameter",
                    "location": "project",
                }
            ],
            "code": code,
            "message": message,
        }
    }


@pytest.mark.parametrize("reason", list(Reason))
def test_reason_round_trip(reason):
    assert Reason.parse(reason.value) is reason


@pytest.mark.parametrize(
    "wire, member",
    [
        ("push.channelIdInvalid", Reason.PUSH_CHANNEL_ID_INVALID),
        ("UsageLimits.accessNotConfigured", Reason.USAGE_LIMITS_ACCESS_NOT_CONFIGURED),
        ("usageLimits.rateLimitExceeded", Reason.USAGE_LIMITS_RATE_LIMIT_EXCEEDED),
        ("AuthenticationRequiredRequesterPays", Reason.AUTHENTICATION_REQUIRED_REQUESTER_PAYS),
    ],
)
def test_reason_renamed_values(wire, member):
    assert Reason.parse(wire) is member


def test_reason_unknown_raises():
    with pytest.raises(SerializationError):
        Reason.parse("noSuchReason")


def test_reason_non_string_raises():
    with pytest.raises(SerializationError):
        Reason.parse(42)


def test_google_error_from_json():
    entry = GoogleError.from_json(_error_doc()["error"]["errors"][0])
    assert entry.domain == "global"
    assert entry.reason is Reason.INVALID
    assert entry.message == "Invalid argument"
    assert entry.location_type == "parameter"
    assert entry.location == "project"
    assert str(entry) == "Invalid argument"


def test_google_error_optional_fields_absent():
    entry = GoogleError.from_json({"domain": "global", "reason": "required", "message": "m"})
    assert entry.location_type is None
    assert entry.location is None


def test_google_error_is_reason():
    entry = GoogleError.from_json(_error_doc(reason="notFound")["error"]["errors"][0])
    assert entry.is_reason(Reason.NOT_FOUND)
    assert not entry.is_reason(Reason.INVALID)


def test_google_error_missing_field():
    with pytest.raises(SerializationError):
        GoogleError.from_json({"domain": "global", "message": "m"})


def test_error_list_from_json():
    errors = ErrorList.from_json(_error_doc(code=404)["error"])
    assert errors.code == 404
    assert len(errors.errors) == 1
    assert errors.message == "Invalid argument"


def test_error_list_rejects_bad_code():
    doc = _error_doc()["error"]
    doc["code"] = "400"
    with pytest.raises(SerializationError):
        ErrorList.from_json(doc)


def test_error_response_errors_and_reason():
    response = GoogleErrorResponse.from_json(_error_doc(reason="forbidden", code=403))
    assert [e.reason for e in response.errors()] == [Reason.FORBIDDEN]
    assert response.errors_has_reason(Reason.FORBIDDEN)
    assert not response.errors_has_reason(Reason.NOT_FOUND)


def test_error_response_requires_error_key():
    with pytest.raises(SerializationError):
        GoogleErrorResponse.from_json({"items": []})


def test_parse_google_response_success():
    result = parse_google_response({"name": "bucket"}, lambda d: d["name"])
    assert result == "bucket"


def test_parse_google_response_raises_google_error():
    with pytest.raises(GoogleStorageError) as info:
        parse_google_response(_error_doc(reason="conflict", code=409), lambda d: d["name"])
    assert info.value.response.error.code == 409
    assert info.value.errors_has_reason(Reason.CONFLICT)
    assert isinstance(info.value, StorageError)


def test_parse_google_response_neither_shape():
    with pytest.raises(SerializationError):
        parse_google_response({"other": 1}, lambda d: d["name"])