"""Error types raised by the storage client and the error documents the API returns."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, TypeVar

T = TypeVar("T")


class StorageError(Exception):
    """Base class of every error raised by this package."""


class SerializationError(StorageError):
    """A response from the API could not be turned into the expected structure."""


class GoogleStorageError(StorageError):
    """The API answered with an error document."""

    def __init__(self, response: GoogleErrorResponse) -> None:
        self.response = response
        super().__init__(f"{response.error.code}: {response.error.message}")

    def errors_has_reason(self, reason: Reason) -> bool:
        """Whether any of the reported errors carries ``reason``."""
        return self.response.errors_has_reason(reason)


class Reason(Enum):
    """Reasons the API reports for a failure; the list is not exhaustive."""

    MEDIA_DOWNLOAD_REDIRECT = "mediaDownloadRedirect"
    NOT_MODIFIED = "notModified"
    TEMPORARY_REDIRECT = "temporaryRedirect"
    INVALID = "invalid"
    BAD_REQUEST = "badRequest"
    BAD_REQUEST_EXCEPTION = "badRequestException"
    CLOUD_KMS_BAD_KEY = "cloudKmsBadKey"
    CLOUD_KMS_CANNOT_CHANGE_KEY_NAME = "cloudKmsCannotChangeKeyName"
    CLOUD_KMS_DECRYPTION_KEY_NOT_FOUND = "cloudKmsDecryptionKeyNotFound"
    CLOUD_KMS_DISABLED_KEY = "cloudKmsDisabledKey"
    CLOUD_KMS_ENCRYPTION_KEY_NOT_FOUND = "cloudKmsEncryptionKeyNotFound"
    CLOUD_KMS_KEY_LOCATION_NOT_ALLOWED = "cloudKmsKeyLocationNotAllowed"
    CUSTOMER_ENCRYPTION_ALGORITHM_IS_INVALID = "customerEncryptionAlgorithmIsInvalid"
    CUSTOMER_ENCRYPTION_KEY_FORMAT_IS_INVALID = "customerEncryptionKeyFormatIsInvalid"
    CUSTOMER_ENCRYPTION_KEY_IS_INCORRECT = "customerEncryptionKeyIsIncorrect"
    CUSTOMER_ENCRYPTION_KEY_SHA256_IS_INVALID = "customerEncryptionKeySha256IsInvalid"
    INVALID_ALT_VALUE = "invalidAltValue"
    INVALID_ARGUMENT = "invalidArgument"
    INVALID_PARAMETER = "invalidParameter"
    NOT_DOWNLOAD = "notDownload"
    NOT_UPLOAD = "notUpload"
    PARSE_ERROR = "parseError"
    PUSH_CHANNEL_ID_INVALID = "push.channelIdInvalid"
    PUSH_CHANNEL_ID_NOT_UNIQUE = "push.channelIdNotUnique"
    PUSH_WEBHOOK_URL_NO_HOST_OR_ADDRESS = "push.webhookUrlNoHostOrAddress"
    PUSH_WEBHOOK_URL_NOT_HTTPS = "push.webhookUrlNotHttps"
    REQUIRED = "required"
    RESOURCE_IS_ENCRYPTED_WITH_CUSTOMER_ENCRYPTION_KEY = (
        "resourceIsEncryptedWithCustomerEncryptionKey"
    )
    RESOURCE_NOT_ENCRYPTED_WITH_CUSTOMER_ENCRYPTION_KEY = (
        "resourceNotEncryptedWithCustomerEncryptionKey"
    )
    TURNED_DOWN = "turnedDown"
    USER_PROJECT_INCONSISTENT = "userProjectInconsistent"
    USER_PROJECT_INVALID = "userProjectInvalid"
    USER_PROJECT_MISSING = "userProjectMissing"
    WRONG_URL_FOR_UPLOAD = "wrongUrlForUpload"
    AUTHENTICATION_REQUIRED_REQUESTER_PAYS = "AuthenticationRequiredRequesterPays"
    AUTH_ERROR = "authError"
    LOCKED_DOMAIN_EXPIRED = "lockedDomainExpired"
    PUSH_WEBHOOK_URL_UNAUTHORIZED = "push.webhookUrlUnauthorized"
    ACCOUNT_DISABLED = "accountDisabled"
    COUNTRY_BLOCKED = "countryBlocked"
    FORBIDDEN = "forbidden"
    INSUFFICIENT_PERMISSIONS = "insufficientPermissions"
    OBJECT_UNDER_ACTIVE_HOLD = "objectUnderActiveHold"
    RATE_LIMIT_EXCEEDED = "rateLimitExceeded"
    RETENTION_POLICY_NOT_MET = "retentionPolicyNotMet"
    SSL_REQUIRED = "sslRequired"
    STOP_CHANNEL_CALLER_NOT_OWNER = "stopChannelCallerNotOwner"
    USAGE_LIMITS_ACCESS_NOT_CONFIGURED = "UsageLimits.accessNotConfigured"
    USER_PROJECT_ACCESS_DENIED = "UserProjectAccessDenied"
    USER_PROJECT_ACCOUNT_PROBLEM = "UserProjectAccountProblem"
    USER_RATE_LIMIT_EXCEEDED = "userRateLimitExceeded"
    QUOTA_EXCEEDED = "quotaExceeded"
    NOT_FOUND = "notFound"
    METHOD_NOT_ALLOWED = "methodNotAllowed"
    UPLOAD_BROKEN_CONNECTION = "uploadBrokenConnection"
    CONFLICT = "conflict"
    GONE = "gone"
    CONDITION_NOT_MET = "conditionNotMet"
    ORG_POLICY_CONSTRAINT_FAILED = "orgPolicyConstraintFailed"
    UPLOAD_TOO_LARGE = "uploadTooLarge"
    REQUESTED_RANGE_NOT_SATISFIABLE = "requestedRangeNotSatisfiable"
    USAGE_LIMITS_RATE_LIMIT_EXCEEDED = "usageLimits.rateLimitExceeded"
    BACKEND_ERROR = "backendError"
    INTERNAL_ERROR = "internalError"
    GATEWAY_TIMEOUT = "gatewayTimeout"

    @classmethod
    def parse(cls, value: Any) -> Reason:
        """Turn the wire name of a reason into a member."""
        if not isinstance(value, str):
            raise SerializationError(f"expected a string for `Reason`, got {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise SerializationError(f"unknown `Reason`: {value}") from None


def _field(data: Any, key: str, kind: type, what: str) -> Any:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object for `{what}`, got {data!r}")
    if key not in data:
        raise SerializationError(f"missing field `{key}` in `{what}`")
    value = data[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SerializationError(f"invalid type for `{key}` in `{what}`: {value!r}")
    return value


def _optional_str(data: dict, *keys: str) -> str | None:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise SerializationError(f"invalid type for `{key}`: {value!r}")
        return value
    return None


@dataclass
class GoogleError:
    """A single error entry of an error document."""

    domain: str
    reason: Reason
    message: str
    location_type: str | None = None
    location: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> GoogleError:
        """Build an entry from its decoded JSON object."""
        domain = _field(data, "domain", str, "GoogleError")
        reason = Reason.parse(_field(data, "reason", str, "GoogleError"))
        message = _field(data, "message", str, "GoogleError")
        return cls(
            domain=domain,
            reason=reason,
            message=message,
            location_type=_optional_str(data, "location_type", "locationType"),
            location=_optional_str(data, "location"),
        )

    def is_reason(self, reason: Reason) -> bool:
        """Whether this entry was caused by ``reason``."""
        return self.reason == reason

    def __str__(self) -> str:
        return self.message


@dataclass
class ErrorList:
    """The container of error details in an error document."""

    errors: list[GoogleError] = field(default_factory=list)
    code: int = 0
    message: str = ""

    @classmethod
    def from_json(cls, data: Any) -> ErrorList:
        """Build the container from its decoded JSON object."""
        raw_errors = _field(data, "errors", list, "ErrorList")
        code = _field(data, "code", int, "ErrorList")
        if not 0 <= code <= 0xFFFF:
            raise SerializationError(f"status code out of range: {code}")
        message = _field(data, "message", str, "ErrorList")
        return cls(
            errors=[GoogleError.from_json(item) for item in raw_errors],
            code=code,
            message=message,
        )


@dataclass
class GoogleErrorResponse:
    """An error document as returned by the API."""

    error: ErrorList

    @classmethod
    def from_json(cls, data: Any) -> GoogleErrorResponse:
        """Build the document from its decoded JSON object."""
        if not isinstance(data, dict) or "error" not in data:
            raise SerializationError("missing field `error` in `GoogleErrorResponse`")
        return cls(error=ErrorList.from_json(data["error"]))

    def errors(self) -> list[GoogleError]:
        """The individual errors reported."""
        return self.error.errors

    def errors_has_reason(self, reason: Reason) -> bool:
        """Whether any reported error carries ``reason``."""
        return any(entry.is_reason(reason) for entry in self.errors())

    def __str__(self) -> str:
        return repr(self)


_PARSE_FAILURES = (StorageError, KeyError, TypeError, ValueError, AttributeError)


def parse_google_response(data: Any, parser: Callable[[Any], T]) -> T:
    """Parse ``data`` with ``parser``, or raise the error document it holds.

    The success shape is tried first; if it does not fit, the data is read as
    an error document and raised as :class:`GoogleStorageError`.
    """
    try:
        return parser(data)
    except _PARSE_FAILURES as success_failure:
        try:
            response = GoogleErrorResponse.from_json(data)
        except SerializationError:
            raise SerializationError(
                f"response matches neither the expected shape nor an error: {success_failure}"
            ) from success_failure
    raise GoogleStorageError(response)