"""Domain events published by the accounts API."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from open_finance.models.base import Event

EVENT_SOURCE = "open-finance-accounts"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_event_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class AccountAccessedEvent:
    """Audit record of a successful accounts read.

    List operations carry no account identifiers; ``account_id`` is only
    set for single-account reads.
    """

    consent_id: str
    organization_id: str
    operation: str
    endpoint: str
    interaction_id: str
    account_id: str | None = None
    page: int | None = None
    page_size: int | None = None
    account_type: str | None = None
    result_count: int = 0
    event_id: str = field(default_factory=_new_event_id)
    occurred_on: datetime = field(default_factory=_utcnow)

    event_type = "account.accessed"

    def to_envelope(self) -> Event:
        data = {
            "consent_id": self.consent_id,
            "organization_id": self.organization_id,
            "operation": self.operation,
            "endpoint": self.endpoint,
            "account_id": self.account_id,
            "page": self.page,
            "page_size": self.page_size,
            "account_type": self.account_type,
            "result_count": self.result_count,
        }
        return Event(
            event_id=self.event_id,
            event_type=self.event_type,
            event_time=self.occurred_on,
            source=EVENT_SOURCE,
            subject=self.consent_id,
            data=data,
            metadata={"interaction_id": self.interaction_id},
        )


@dataclass(frozen=True)
class RateLimitExceededEvent:
    """Emitted by a rate limiter when a caller hits its budget."""

    identifier: str
    endpoint: str
    current_count: int
    limit: int
    limit_type: str = "SLIDING_WINDOW"
    event_id: str = field(default_factory=_new_event_id)
    occurred_on: datetime = field(default_factory=_utcnow)

    event_type = "rate_limit.exceeded"

    def to_envelope(self) -> Event:
        return Event(
            event_id=self.event_id,
            event_type=self.event_type,
            event_time=self.occurred_on,
            source=EVENT_SOURCE,
            subject=self.identifier,
            data={
                "identifier": self.identifier,
                "endpoint": self.endpoint,
                "limit_type": self.limit_type,
                "current_count": self.current_count,
                "limit": self.limit,
            },
        )
