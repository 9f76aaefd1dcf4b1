"""Base models shared across domains."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope for streaming."""

    event_id: str
    event_type: str  # entity.action (e.g., account.accessed)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Aggregate the event is about
    data: dict
    metadata: dict = field(default_factory=dict)
