"""Monthly operational limits per consent and endpoint.

Each endpoint belongs to a frequency category that fixes how many calls a
consent may make to it in one calendar month. Calls that continue a listing
with a valid pagination key are not counted.
"""

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class OperationalLimitCategory(int, Enum):
    """Monthly call budget of an endpoint."""

    LOW_FREQUENCY = 8
    MEDIUM_FREQUENCY = 30
    MEDIUM_HIGH_FREQUENCY = 120
    HIGH_FREQUENCY = 240
    SPECIAL_ACCOUNTS = 420


ENDPOINT_CATEGORIES: dict[str, OperationalLimitCategory] = {
    "/accounts": OperationalLimitCategory.HIGH_FREQUENCY,
    "/accounts/{accountId}": OperationalLimitCategory.MEDIUM_HIGH_FREQUENCY,
    "/accounts/{accountId}/balances": OperationalLimitCategory.SPECIAL_ACCOUNTS,
    "/accounts/{accountId}/overdraft-limits": OperationalLimitCategory.SPECIAL_ACCOUNTS,
    "/accounts/{accountId}/transactions": OperationalLimitCategory.HIGH_FREQUENCY,
    "/accounts/{accountId}/transactions-current": OperationalLimitCategory.HIGH_FREQUENCY,
}


def category_for(endpoint: str) -> OperationalLimitCategory:
    return ENDPOINT_CATEGORIES.get(endpoint, OperationalLimitCategory.MEDIUM_FREQUENCY)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryOperationalLimits:
    """Count calls per ``(consent, organization, endpoint)`` for the current month.

    Counters belong to the month they were recorded in; the first call in a
    new month drops every counter of the previous one.

    Parameters
    ----------
    monthly_limits : dict[str, int] | None
        Per-endpoint overrides of the category budget.
    clock : Callable[[], datetime] | None
        Current time, injectable for tests.
    """

    def __init__(
        self,
        monthly_limits: dict[str, int] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        for endpoint, limit in (monthly_limits or {}).items():
            if limit <= 0:
                raise ValueError(f"monthly limit for {endpoint} must be positive")
        self.monthly_limits = dict(monthly_limits or {})
        self._clock = clock or _utcnow
        self._month: tuple[int, int] | None = None
        self._usage: dict[tuple[str, str, str], int] = {}
        self._lock = threading.Lock()

    def limit_for(self, endpoint: str) -> int:
        if endpoint in self.monthly_limits:
            return self.monthly_limits[endpoint]
        return int(category_for(endpoint))

    def _roll_month(self) -> None:
        now = self._clock()
        month = (now.year, now.month)
        if month != self._month:
            if self._usage:
                logger.info("Operational limits reset for %04d-%02d", *month)
            self._usage.clear()
            self._month = month

    def usage(self, consent_id: str, organization_id: str, endpoint: str) -> int:
        with self._lock:
            self._roll_month()
            return self._usage.get((consent_id, organization_id, endpoint), 0)

    def is_within_limit(self, consent_id: str, organization_id: str, endpoint: str) -> bool:
        used = self.usage(consent_id, organization_id, endpoint)
        limit = self.limit_for(endpoint)
        if used >= limit:
            logger.warning(
                "Operational limit reached for consent %s on %s (%d/%d)",
                consent_id, endpoint, used, limit,
            )
            return False
        return True

    def record(self, consent_id: str, organization_id: str, endpoint: str) -> None:
        with self._lock:
            self._roll_month()
            key = (consent_id, organization_id, endpoint)
            self._usage[key] = self._usage.get(key, 0) + 1

    def remaining(self, consent_id: str, organization_id: str, endpoint: str) -> int:
        return max(0, self.limit_for(endpoint) - self.usage(consent_id, organization_id, endpoint))
