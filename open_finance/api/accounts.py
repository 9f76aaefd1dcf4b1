"""Transport-agnostic "list accounts" operation.

``AccountsApi.list_accounts`` takes raw request values (query parameters
may arrive as strings), validates them, runs the use case and returns an
:class:`ApiResponse` carrying the status code, response headers and the
JSON-ready body. Mounting it on an HTTP framework is left to the caller.
"""

import ipaddress
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from open_finance.api.mapper import to_account_list_response, to_error_response
from open_finance.config import OpenFinanceConfig
from open_finance.exceptions import ConfigurationError, InvalidInputError, RequestError
from open_finance.models.financial import AccountType
from open_finance.pagination import PaginationLinkBuilder
from open_finance.services.operational_limits import InMemoryOperationalLimits
from open_finance.services.pagination_key import SignedPaginationKeyService
from open_finance.services.ports import AccountProvider, ConsentService, EventSink
from open_finance.services.rate_limit import SlidingWindowRateLimiter
from open_finance.usecases.accounts import ENDPOINT, GetAccountsInput, GetAccountsUseCase

logger = logging.getLogger(__name__)

INTERACTION_ID_HEADER = "x-fapi-interaction-id"
MAX_HEADER_LENGTH = 100
MAX_CONSENT_ID_LENGTH = 100
MAX_PAGINATION_KEY_LENGTH = 2048

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
FAPI_AUTH_DATE_PATTERN = re.compile(
    r"^(Mon|Tue|Wed|Thu|Fri|Sat|Sun), \d{2} "
    r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) \d{4} "
    r"\d{2}:\d{2}:\d{2} (GMT|UTC)$"
)


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)


def _parse_int(name: str, value: int | str | None, default: int) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"{name} must be an integer, got {value!r}") from None


def _parse_account_type(value: str | AccountType | None) -> AccountType | None:
    if value is None or isinstance(value, AccountType):
        return value
    if not value.strip():
        return None
    try:
        return AccountType(value.strip().upper())
    except ValueError:
        raise InvalidInputError(f"Unknown accountType {value!r}") from None


def _validate_interaction_id(value: str) -> None:
    if not UUID_PATTERN.match(value):
        raise InvalidInputError(f"{INTERACTION_ID_HEADER} must be a UUID, got {value!r}")


def _validate_fapi_headers(
    fapi_auth_date: str | None,
    customer_ip_address: str | None,
    customer_user_agent: str | None,
) -> None:
    """Check the optional FAPI audit headers.

    ``x-fapi-auth-date`` must be an RFC 7231 IMF-fixdate, the customer IP a
    well-formed IPv4 or IPv6 address, and both free-text headers at most
    ``MAX_HEADER_LENGTH`` characters long.
    """
    if fapi_auth_date and fapi_auth_date.strip():
        if not FAPI_AUTH_DATE_PATTERN.match(fapi_auth_date.strip()):
            raise InvalidInputError(
                f"x-fapi-auth-date must be an RFC 7231 date, got {fapi_auth_date!r}"
            )
    if customer_ip_address and customer_ip_address.strip():
        if len(customer_ip_address) > MAX_HEADER_LENGTH:
            raise InvalidInputError(
                f"x-fapi-customer-ip-address cannot exceed {MAX_HEADER_LENGTH} characters"
            )
        try:
            ipaddress.ip_address(customer_ip_address.strip())
        except ValueError:
            raise InvalidInputError(
                f"x-fapi-customer-ip-address is not an IP address: {customer_ip_address!r}"
            ) from None
    if customer_user_agent and len(customer_user_agent) > MAX_HEADER_LENGTH:
        raise InvalidInputError(
            f"x-customer-user-agent cannot exceed {MAX_HEADER_LENGTH} characters"
        )


class AccountsApi:
    """Accounts listing endpoint.

    Parameters
    ----------
    use_case : GetAccountsUseCase
        Pipeline that serves validated requests.
    default_page_size : int
        Page size used when the caller sends none.
    max_page_size : int
        Largest page size accepted.
    """

    def __init__(
        self,
        use_case: GetAccountsUseCase,
        default_page_size: int = 25,
        max_page_size: int = 1000,
    ) -> None:
        self.use_case = use_case
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    @classmethod
    def from_config(
        cls,
        config: OpenFinanceConfig,
        account_provider: AccountProvider,
        consent_service: ConsentService,
        event_sink: EventSink | None = None,
    ) -> "AccountsApi":
        """Wire the reference limiters and pagination key service.

        Raises
        ------
        ConfigurationError
            If the configuration is invalid.
        """
        config.validate()
        link_builder = PaginationLinkBuilder(config.api.base_url, config.api.accounts_path)
        if not link_builder.is_valid_base_url():
            raise ConfigurationError(f"Invalid base URL for links: {config.api.base_url!r}")
        use_case = GetAccountsUseCase(
            rate_limit_service=SlidingWindowRateLimiter(
                limit=config.rate_limit.requests_per_window,
                window_seconds=config.rate_limit.window_seconds,
                event_sink=event_sink,
            ),
            consent_service=consent_service,
            pagination_key_service=SignedPaginationKeyService(
                secret=config.pagination.key_secret,
                ttl_minutes=config.pagination.key_ttl_minutes,
            ),
            account_provider=account_provider,
            link_builder=link_builder,
            event_sink=event_sink,
            operational_limit_service=InMemoryOperationalLimits(
                monthly_limits={ENDPOINT: config.rate_limit.accounts_monthly_limit}
            ),
        )
        return cls(
            use_case,
            default_page_size=config.pagination.default_page_size,
            max_page_size=config.pagination.max_page_size,
        )

    def list_accounts(
        self,
        consent_id: str,
        organization_id: str,
        interaction_id: str | None,
        page: int | str | None = None,
        page_size: int | str | None = None,
        account_type: str | None = None,
        pagination_key: str | None = None,
        fapi_auth_date: str | None = None,
        customer_ip_address: str | None = None,
        customer_user_agent: str | None = None,
    ) -> ApiResponse:
        """Serve ``GET /accounts``.

        A missing interaction id is replaced by a fresh UUID so every
        response can be correlated. A supplied one must be a UUID and is
        echoed back even when it is rejected.
        """
        interaction_id = (interaction_id or "").strip() or str(uuid.uuid4())
        headers = {
            INTERACTION_ID_HEADER: interaction_id,
            "Content-Type": "application/json",
        }

        try:
            request = self._build_input(
                consent_id,
                organization_id,
                interaction_id,
                page,
                page_size,
                account_type,
                pagination_key,
                fapi_auth_date,
                customer_ip_address,
                customer_user_agent,
            )
        except InvalidInputError as exc:
            logger.warning(
                "Rejected accounts request: %s",
                exc,
                extra={"extra": {"interaction_id": interaction_id}},
            )
            return self._error(exc, headers)

        try:
            output = self.use_case.execute(request)
        except RequestError as exc:
            return self._error(exc, headers)
        except Exception as exc:
            logger.exception(
                "Unexpected error listing accounts",
                extra={"extra": {"interaction_id": interaction_id}},
            )
            return self._error(exc, headers)

        return ApiResponse(200, headers, to_account_list_response(output))

    def _build_input(
        self,
        consent_id: str,
        organization_id: str,
        interaction_id: str,
        page: int | str | None,
        page_size: int | str | None,
        account_type: str | None,
        pagination_key: str | None,
        fapi_auth_date: str | None,
        customer_ip_address: str | None,
        customer_user_agent: str | None,
    ) -> GetAccountsInput:
        page_number = _parse_int("page", page, 1)
        size = _parse_int("page-size", page_size, self.default_page_size)
        if page_number < 1:
            raise InvalidInputError("page must be at least 1")
        if not 1 <= size <= self.max_page_size:
            raise InvalidInputError(f"page-size must be between 1 and {self.max_page_size}")
        _validate_interaction_id(interaction_id)
        if consent_id and len(consent_id.strip()) > MAX_CONSENT_ID_LENGTH:
            raise InvalidInputError(
                f"consentId cannot exceed {MAX_CONSENT_ID_LENGTH} characters"
            )
        if pagination_key and len(pagination_key) > MAX_PAGINATION_KEY_LENGTH:
            raise InvalidInputError(
                f"pagination-key cannot exceed {MAX_PAGINATION_KEY_LENGTH} characters"
            )
        _validate_fapi_headers(fapi_auth_date, customer_ip_address, customer_user_agent)
        return GetAccountsInput(
            consent_id=consent_id,
            organization_id=organization_id,
            interaction_id=interaction_id,
            page=page_number,
            page_size=size,
            account_type=_parse_account_type(account_type),
            pagination_key=pagination_key,
            fapi_auth_date=fapi_auth_date,
            customer_ip_address=customer_ip_address,
            customer_user_agent=customer_user_agent,
        )

    def _error(self, error: Exception, headers: dict[str, str]) -> ApiResponse:
        status = error.status_code if isinstance(error, RequestError) else 500
        body = to_error_response(error, datetime.now(timezone.utc))
        return ApiResponse(status, dict(headers), body)
