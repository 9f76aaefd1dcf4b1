"""Custom exception hierarchy for open-finance."""


class OpenFinanceError(Exception):
    """Base exception for all open-finance errors."""


class DomainValidationError(OpenFinanceError, ValueError):
    """Raised when a domain object violates one of its invariants."""


class InvalidIdentifierError(DomainValidationError):
    """Raised when an identifier does not match the expected format."""


class InvalidAmountError(DomainValidationError):
    """Raised when an amount cannot be built from the given value or currency."""


class CurrencyMismatchError(DomainValidationError):
    """Raised when combining amounts expressed in different currencies."""


class AccountValidationError(DomainValidationError):
    """Raised when an account is built in an invalid state."""


class TransactionValidationError(DomainValidationError):
    """Raised when a transaction is built in an invalid state."""


class ReferentialIntegrityError(OpenFinanceError):
    """Raised when a referenced entity does not exist."""


class RequestError(OpenFinanceError):
    """Base class for errors surfaced to API consumers.

    Each subclass carries the error code, title and HTTP status used when
    the error is rendered into a response envelope.
    """

    code = "INTERNAL_ERROR"
    title = "Internal error"
    status_code = 500


class RateLimitExceededError(RequestError):
    """Raised when the organization exhausted its request budget."""

    code = "RATE_LIMIT_EXCEEDED"
    title = "Too many requests"
    status_code = 429


class OperationalLimitExceededError(RateLimitExceededError):
    """Raised when a consent used up its monthly calls to an endpoint."""

    code = "OPERATIONAL_LIMIT_EXCEEDED"


class UnauthorizedError(RequestError):
    """Raised when the consent is unknown, not authorised or expired."""

    code = "INVALID_CONSENT"
    title = "Unauthorized"
    status_code = 401


class ForbiddenError(RequestError):
    """Raised when the consent lacks a required permission."""

    code = "PERMISSION_DENIED"
    title = "Forbidden"
    status_code = 403


class InvalidInputError(RequestError):
    """Raised when a request parameter is malformed or out of range."""

    code = "INVALID_PARAMETER"
    title = "Invalid parameter"
    status_code = 400


class UpstreamFailureError(RequestError):
    """Raised when the account provider or another collaborator fails."""

    code = "UPSTREAM_FAILURE"
    title = "Upstream failure"
    status_code = 500


class ConfigurationError(OpenFinanceError):
    """Raised when configuration is invalid or missing."""


class SinkError(OpenFinanceError):
    """Raised when a sink operation fails."""
