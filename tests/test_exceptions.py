"""Tests for the exception hierarchy."""

import pytest

from open_finance.exceptions import (
    AccountValidationError,
    ConfigurationError,
    CurrencyMismatchError,
    DomainValidationError,
    ForbiddenError,
    InvalidAmountError,
    InvalidIdentifierError,
    InvalidInputError,
    OpenFinanceError,
    OperationalLimitExceededError,
    RateLimitExceededError,
    ReferentialIntegrityError,
    RequestError,
    SinkError,
    TransactionValidationError,
    UnauthorizedError,
    UpstreamFailureError,
)


class TestHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidIdentifierError,
            InvalidAmountError,
            CurrencyMismatchError,
            AccountValidationError,
            TransactionValidationError,
        ],
    )
    def test_domain_errors(self, exc_class: type) -> None:
        """Test domain errors are validation errors and ValueErrors."""
        assert issubclass(exc_class, DomainValidationError)
        assert issubclass(exc_class, ValueError)
        assert issubclass(exc_class, OpenFinanceError)

    @pytest.mark.parametrize(
        "exc_class",
        [ReferentialIntegrityError, ConfigurationError, SinkError, RequestError],
    )
    def test_infrastructure_errors(self, exc_class: type) -> None:
        """Test other errors share the base class."""
        assert issubclass(exc_class, OpenFinanceError)
        assert not issubclass(exc_class, DomainValidationError)

    def test_catch_with_base(self) -> None:
        """Test catching a request error with the base class."""
        with pytest.raises(OpenFinanceError):
            raise UnauthorizedError("consent expired")


class TestRequestErrors:
    """Tests for error codes and status codes."""

    @pytest.mark.parametrize(
        ("exc_class", "code", "status"),
        [
            (RateLimitExceededError, "RATE_LIMIT_EXCEEDED", 429),
            (OperationalLimitExceededError, "OPERATIONAL_LIMIT_EXCEEDED", 429),
            (UnauthorizedError, "INVALID_CONSENT", 401),
            (ForbiddenError, "PERMISSION_DENIED", 403),
            (InvalidInputError, "INVALID_PARAMETER", 400),
            (UpstreamFailureError, "UPSTREAM_FAILURE", 500),
        ],
    )
    def test_codes(self, exc_class: type, code: str, status: int) -> None:
        """Test each request error carries its wire code and HTTP status."""
        error = exc_class("detail")

        assert isinstance(error, RequestError)
        assert error.code == code
        assert error.status_code == status
        assert error.title
        assert str(error) == "detail"

    def test_base_defaults(self) -> None:
        """Test RequestError defaults to an internal error."""
        assert RequestError.code == "INTERNAL_ERROR"
        assert RequestError.status_code == 500

    def test_operational_limit_is_rate_limit(self) -> None:
        """Test monthly limit rejections are caught as rate limit errors."""
        with pytest.raises(RateLimitExceededError):
            raise OperationalLimitExceededError("monthly limit reached")
