"""Account listing pipeline.

``GetAccountsUseCase.execute`` runs a fixed sequence of stages over a
request-scoped :class:`AccountsRequestContext`:

1. rate-limit gate
2. consent gate
3. permission gate
4. pagination key resolution
5. monthly operational limit gate, skipped when continuing with a valid key
6. fetch accounts and count the filtered total
7. compute pagination and build links
8. record rate-limit and operational limit usage
9. publish the access event

Stages are plain functions ``context -> context``. Timing and upstream
error translation are applied by wrapping stages, and access logging wraps
the whole run. Gates raise :class:`~open_finance.exceptions.RequestError`
subclasses and leave no trace besides a log line.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from open_finance.exceptions import (
    ForbiddenError,
    InvalidInputError,
    OpenFinanceError,
    OperationalLimitExceededError,
    RateLimitExceededError,
    UnauthorizedError,
    UpstreamFailureError,
)
from open_finance.models.events import AccountAccessedEvent
from open_finance.models.financial import Account, AccountType, Permission
from open_finance.pagination import PaginationInfo, PaginationLinkBuilder, calculate_total_pages
from open_finance.services.consent import PermissionValidator
from open_finance.services.ports import (
    AccountProvider,
    ConsentService,
    EventSink,
    OperationalLimitService,
    PaginationKeyService,
    RateLimitService,
)

logger = logging.getLogger(__name__)

ENDPOINT = "/accounts"
OPERATION = "GET_ACCOUNTS"
DEFAULT_PAGE_SIZE = 25


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


@dataclass(frozen=True)
class GetAccountsInput:
    """Parameters of one account listing request.

    ``page`` is 1-based. Blank optional strings are stored as ``None``.
    The FAPI audit fields are format-checked by the API layer and carried
    for logging.
    """

    consent_id: str
    organization_id: str
    interaction_id: str
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    account_type: AccountType | None = None
    pagination_key: str | None = None
    fapi_auth_date: str | None = None
    customer_ip_address: str | None = None
    customer_user_agent: str | None = None

    def __post_init__(self) -> None:
        for name in ("consent_id", "organization_id", "interaction_id"):
            value = _blank_to_none(getattr(self, name))
            if value is None:
                raise InvalidInputError(f"{name} is required")
            object.__setattr__(self, name, value)
        for name in (
            "pagination_key",
            "fapi_auth_date",
            "customer_ip_address",
            "customer_user_agent",
        ):
            object.__setattr__(self, name, _blank_to_none(getattr(self, name)))
        if self.page < 1:
            raise InvalidInputError("page must be at least 1")
        if self.page_size < 1:
            raise InvalidInputError("page-size must be at least 1")

    @property
    def zero_based_page(self) -> int:
        return self.page - 1

    @property
    def has_pagination_key(self) -> bool:
        return self.pagination_key is not None


@dataclass(frozen=True)
class GetAccountsOutput:
    accounts: list[Account]
    pagination: PaginationInfo
    request_date_time: datetime


@dataclass
class AccountsRequestContext:
    """Mutable state threaded through the stages of a single request."""

    request: GetAccountsInput
    request_date_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    pagination_key: str | None = None
    is_pagination_call: bool = False
    accounts: list[Account] = field(default_factory=list)
    total_records: int = 0
    total_pages: int = 0
    pagination: PaginationInfo | None = None
    stage_timings: dict[str, float] = field(default_factory=dict)

    def log_context(self) -> dict:
        request = self.request
        return {
            "operation": OPERATION,
            "consent_id": request.consent_id,
            "interaction_id": request.interaction_id,
            "organization_id": request.organization_id,
            "page": request.page,
            "page_size": request.page_size,
            "account_type": request.account_type.value if request.account_type else None,
        }


Stage = Callable[[AccountsRequestContext], AccountsRequestContext]


def timed(name: str, stage: Stage) -> Stage:
    """Record the stage's elapsed milliseconds in the context."""

    def run(context: AccountsRequestContext) -> AccountsRequestContext:
        started = time.perf_counter()
        try:
            return stage(context)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            context.stage_timings[name] = elapsed_ms
            logger.debug("Stage %s took %.2fms", name, elapsed_ms)

    return run


def translating_upstream_errors(name: str, stage: Stage) -> Stage:
    """Re-raise anything but ``UpstreamFailureError`` as ``UpstreamFailureError``.

    Package errors raised past the gates, such as a provider rejecting a
    malformed row or a sink failing, are wrapped as well.
    """

    def run(context: AccountsRequestContext) -> AccountsRequestContext:
        try:
            return stage(context)
        except UpstreamFailureError:
            raise
        except Exception as exc:
            raise UpstreamFailureError(f"Failed to {name}: {exc}") from exc

    return run


def with_access_logging(pipeline: Stage) -> Stage:
    """Log start, outcome and elapsed time of a whole request.

    Gate rejections are logged as warnings, upstream failures as errors
    with their traceback.
    """

    def run(context: AccountsRequestContext) -> AccountsRequestContext:
        log_context = context.log_context()
        logger.info("Listing accounts", extra={"extra": log_context})
        started = time.perf_counter()
        try:
            context = pipeline(context)
        except OpenFinanceError as exc:
            elapsed_ms = (time.perf_counter() - started) * 1000
            failure_context = {
                **log_context,
                "error": type(exc).__name__,
                "elapsed_ms": round(elapsed_ms, 2),
            }
            if isinstance(exc, UpstreamFailureError):
                logger.error(
                    "Listing accounts failed: %s",
                    exc,
                    exc_info=True,
                    extra={"extra": failure_context},
                )
            else:
                logger.warning(
                    "Listing accounts rejected: %s", exc, extra={"extra": failure_context}
                )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "Listed %d of %d accounts in %.2fms",
            len(context.accounts),
            context.total_records,
            elapsed_ms,
            extra={"extra": {**log_context, "elapsed_ms": round(elapsed_ms, 2)}},
        )
        return context

    return run


class GetAccountsUseCase:
    """List the accounts a consent gives access to, one page at a time.

    Parameters
    ----------
    rate_limit_service : RateLimitService
        Per-organization request budget.
    consent_service : ConsentService
        Consent validity and permission lookups.
    pagination_key_service : PaginationKeyService
        Validates supplied keys and issues fresh ones.
    account_provider : AccountProvider
        Source of account records and the filtered total.
    link_builder : PaginationLinkBuilder
        Builds navigation links for the response.
    event_sink : EventSink | None
        Receives one ``AccountAccessedEvent`` per successful request.
    permission_validator : PermissionValidator | None
        Converts a missing permission into ``ForbiddenError``.
    operational_limit_service : OperationalLimitService | None
        Monthly per-consent budget. Calls continuing a listing with a valid
        pagination key are neither checked nor counted.
    """

    def __init__(
        self,
        rate_limit_service: RateLimitService,
        consent_service: ConsentService,
        pagination_key_service: PaginationKeyService,
        account_provider: AccountProvider,
        link_builder: PaginationLinkBuilder,
        event_sink: EventSink | None = None,
        permission_validator: PermissionValidator | None = None,
        operational_limit_service: OperationalLimitService | None = None,
    ) -> None:
        self.rate_limit_service = rate_limit_service
        self.consent_service = consent_service
        self.pagination_key_service = pagination_key_service
        self.account_provider = account_provider
        self.link_builder = link_builder
        self.event_sink = event_sink
        self.permission_validator = permission_validator or PermissionValidator()
        self.operational_limit_service = operational_limit_service

        gates: list[tuple[str, Stage]] = [
            ("check rate limit", self.check_rate_limit),
            ("check consent", self.check_consent),
            ("check permission", self.check_permission),
            ("resolve pagination key", self.resolve_pagination_key),
            ("check operational limit", self.check_operational_limit),
        ]
        upstream: list[tuple[str, Stage]] = [
            ("fetch accounts", self.fetch_accounts),
            ("build pagination", self.build_pagination),
            ("record usage", self.record_usage),
            ("publish access event", self.publish_access_event),
        ]
        self.stages: list[Stage] = [timed(name, stage) for name, stage in gates] + [
            timed(name, translating_upstream_errors(name, stage)) for name, stage in upstream
        ]

        self._pipeline = with_access_logging(self._run_stages)

    def _run_stages(self, context: AccountsRequestContext) -> AccountsRequestContext:
        for stage in self.stages:
            context = stage(context)
        return context

    def execute(self, request: GetAccountsInput) -> GetAccountsOutput:
        context = self._pipeline(AccountsRequestContext(request=request))
        return GetAccountsOutput(
            accounts=list(context.accounts),
            pagination=context.pagination,
            request_date_time=context.request_date_time,
        )

    # Stages

    def check_rate_limit(self, context: AccountsRequestContext) -> AccountsRequestContext:
        organization_id = context.request.organization_id
        if not self.rate_limit_service.is_within_limit(organization_id, ENDPOINT):
            raise RateLimitExceededError(
                f"Rate limit exceeded for organization {organization_id}"
            )
        return context

    def check_consent(self, context: AccountsRequestContext) -> AccountsRequestContext:
        consent_id = context.request.consent_id
        if not self.consent_service.is_valid(consent_id):
            raise UnauthorizedError(f"Consent {consent_id} is not valid")
        return context

    def check_permission(self, context: AccountsRequestContext) -> AccountsRequestContext:
        granted = self.consent_service.has_permission(
            context.request.consent_id, Permission.ACCOUNTS_READ.value
        )
        self.permission_validator.validate_accounts_read(granted)
        return context

    def resolve_pagination_key(self, context: AccountsRequestContext) -> AccountsRequestContext:
        request = context.request
        if request.has_pagination_key and self.pagination_key_service.is_valid(
            request.pagination_key
        ):
            context.pagination_key = request.pagination_key
            context.is_pagination_call = True
            return context
        if request.has_pagination_key:
            logger.warning(
                "Ignoring invalid or expired pagination key",
                extra={"extra": {"interaction_id": request.interaction_id}},
            )
        context.pagination_key = self.pagination_key_service.generate(
            request.interaction_id, request.page, request.page_size
        )
        return context

    def check_operational_limit(self, context: AccountsRequestContext) -> AccountsRequestContext:
        if self.operational_limit_service is None or context.is_pagination_call:
            return context
        request = context.request
        if not self.operational_limit_service.is_within_limit(
            request.consent_id, request.organization_id, ENDPOINT
        ):
            raise OperationalLimitExceededError(
                f"Monthly operational limit exceeded for consent {request.consent_id} "
                f"on {ENDPOINT}"
            )
        return context

    def fetch_accounts(self, context: AccountsRequestContext) -> AccountsRequestContext:
        request = context.request
        context.accounts = list(
            self.account_provider.fetch(
                request.consent_id,
                request.account_type,
                request.zero_based_page,
                request.page_size,
            )
        )
        context.total_records = self.account_provider.count(
            request.consent_id, request.account_type
        )
        return context

    def build_pagination(self, context: AccountsRequestContext) -> AccountsRequestContext:
        request = context.request
        context.total_pages = calculate_total_pages(context.total_records, request.page_size)
        links = self.link_builder.build(
            page=request.page,
            page_size=request.page_size,
            account_type=request.account_type,
            pagination_key=context.pagination_key,
            total_pages=context.total_pages,
        )
        context.pagination = PaginationInfo(
            total_records=context.total_records,
            total_pages=context.total_pages,
            current_page=request.page,
            page_size=request.page_size,
            links=links,
            pagination_key=context.pagination_key,
        )
        return context

    def record_usage(self, context: AccountsRequestContext) -> AccountsRequestContext:
        request = context.request
        self.rate_limit_service.record(request.organization_id, ENDPOINT)
        if self.operational_limit_service is not None and not context.is_pagination_call:
            self.operational_limit_service.record(
                request.consent_id, request.organization_id, ENDPOINT
            )
        return context

    def publish_access_event(self, context: AccountsRequestContext) -> AccountsRequestContext:
        if self.event_sink is None:
            return context
        request = context.request
        self.event_sink.publish(
            AccountAccessedEvent(
                consent_id=request.consent_id,
                organization_id=request.organization_id,
                operation=OPERATION,
                endpoint=ENDPOINT,
                interaction_id=request.interaction_id,
                page=request.page,
                page_size=request.page_size,
                account_type=request.account_type.value if request.account_type else None,
                result_count=len(context.accounts),
            )
        )
        return context
