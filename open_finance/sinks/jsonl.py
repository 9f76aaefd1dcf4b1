"""JSON Lines file sink for audit events."""

import json
import logging
import threading
from pathlib import Path
from typing import Any

from open_finance.exceptions import SinkError
from open_finance.sinks.serialization import event_to_dict

logger = logging.getLogger(__name__)


class JsonLinesSink:
    """Append events to ``<output_dir>/<event_type>.jsonl``, one per line."""

    def __init__(self, output_dir: str | Path) -> None:
        """Initialize JSON Lines sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write event files into; created if missing.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def path_for(self, event_type: str) -> Path:
        return self.output_dir / f"{event_type}.jsonl"

    def publish(self, event: Any) -> None:
        data = event_to_dict(event)
        event_type = data.get("event_type", "events")
        line = json.dumps(data, ensure_ascii=False, default=str) + "\n"
        with self._lock:
            try:
                with open(self.path_for(event_type), "a", encoding="utf-8") as f:
                    f.write(line)
            except OSError as exc:
                raise SinkError(f"Cannot write {event_type} event: {exc}") from exc
            self._counts[event_type] = self._counts.get(event_type, 0) + 1

    def close(self) -> None:
        """Log summary."""
        for event_type, count in self._counts.items():
            logger.info("Wrote %d %s events to %s", count, event_type, self.path_for(event_type))
