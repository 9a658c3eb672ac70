"""Error types surfaced through the HTTP API."""

from enum import Enum
from typing import Optional


class ApiError(Exception):
    """Exception carrying the HTTP status and payload of an API failure."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        """Render the JSON error envelope."""
        body = {"success": False, "error": self.message}
        if self.details is not None:
            body["details"] = self.details
        if self.code is not None:
            body["code"] = self.code
        return body


class ConfigurationError(ApiError):
    """Raised when a required endpoint or credential is not configured."""

    def __init__(self, message: str = "Server configuration error."):
        super().__init__(message, status_code=500, code="CONFIGURATION_MISSING")


class NotFoundError(ApiError):
    """Raised when a requested record does not exist."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404, code="NOT_FOUND")


class ConflictError(ApiError):
    """Raised when a record already exists."""

    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="CONFLICT")


class AuthenticationError(ApiError):
    """Raised on missing, invalid or expired credentials."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401, code="UNAUTHORIZED")


class UpstreamError(ApiError):
    """Raised when a proxied third-party service fails."""

    def __init__(self, message: str, status_code: int = 502, details: Optional[str] = None):
        super().__init__(message, status_code=status_code, code="UPSTREAM_ERROR", details=details)


class DepositErrorKind(str, Enum):
    """Failure classes of the deposit pipeline, fixed at the failing step."""

    INVALID_ARGUMENT = "invalid_argument"
    CONFIGURATION_MISSING = "configuration_missing"
    TOKEN_QUERY_FAILED = "token_query_failed"
    RESERVE_NOT_FOUND = "reserve_not_found"
    MARKET_LISTING_FAILED = "market_listing_failed"
    QUOTE_SERVICE_FAILED = "quote_service_failed"


DEFAULT_STATUS = {
    DepositErrorKind.INVALID_ARGUMENT: 400,
    DepositErrorKind.CONFIGURATION_MISSING: 500,
    DepositErrorKind.TOKEN_QUERY_FAILED: 400,
    DepositErrorKind.RESERVE_NOT_FOUND: 404,
    DepositErrorKind.MARKET_LISTING_FAILED: 502,
    DepositErrorKind.QUOTE_SERVICE_FAILED: 502,
}


class DepositError(ApiError):
    """A failed deposit build.

    The kind is set where the failure happens; the HTTP status defaults
    from the kind but the quote step passes the upstream status through.
    """

    def __init__(
        self,
        kind: DepositErrorKind,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ):
        super().__init__(
            message,
            status_code=status_code or DEFAULT_STATUS[kind],
            code=kind.name,
            details=details,
        )
        self.kind = kind

    def __repr__(self) -> str:
        return f"DepositError(kind={self.kind.value}, status={self.status_code}, message={self.message!r})"
