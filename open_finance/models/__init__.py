"""Domain models for the accounts API."""

from open_finance.models.base import Event
from open_finance.models.events import AccountAccessedEvent, RateLimitExceededEvent

__all__ = ["AccountAccessedEvent", "Event", "RateLimitExceededEvent"]
