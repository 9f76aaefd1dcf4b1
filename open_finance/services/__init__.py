"""Validation services consumed by the accounts pipeline."""

from open_finance.services.consent import Consent, InMemoryConsentRegistry, PermissionValidator
from open_finance.services.operational_limits import (
    InMemoryOperationalLimits,
    OperationalLimitCategory,
)
from open_finance.services.pagination_key import SignedPaginationKeyService
from open_finance.services.ports import (
    AccountProvider,
    ConsentService,
    EventSink,
    OperationalLimitService,
    PaginationKeyService,
    RateLimitService,
)
from open_finance.services.rate_limit import SlidingWindowRateLimiter

__all__ = [
    "AccountProvider",
    "Consent",
    "ConsentService",
    "EventSink",
    "InMemoryConsentRegistry",
    "InMemoryOperationalLimits",
    "OperationalLimitCategory",
    "OperationalLimitService",
    "PaginationKeyService",
    "PermissionValidator",
    "RateLimitService",
    "SignedPaginationKeyService",
    "SlidingWindowRateLimiter",
]
