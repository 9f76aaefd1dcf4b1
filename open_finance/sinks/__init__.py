"""Output sinks for audit events."""

from typing import Any

from open_finance.config import OpenFinanceConfig
from open_finance.exceptions import ConfigurationError
from open_finance.sinks.console import ConsoleSink
from open_finance.sinks.jsonl import JsonLinesSink
from open_finance.sinks.kafka import KafkaSink


class NullSink:
    """Discard every event."""

    def publish(self, event: Any) -> None:
        pass

    def close(self) -> None:
        pass


def create_sink(config: OpenFinanceConfig) -> ConsoleSink | JsonLinesSink | KafkaSink | NullSink:
    """Build the audit sink selected by ``config.audit``."""
    audit = config.audit
    if not audit.publish_events or audit.sink == "none":
        return NullSink()
    if audit.sink == "console":
        return ConsoleSink(pretty=False)
    if audit.sink == "jsonl":
        return JsonLinesSink(audit.output_dir)
    if audit.sink == "kafka":
        return KafkaSink(config.kafka)
    raise ConfigurationError(f"Unknown audit sink {audit.sink!r}")


__all__ = ["ConsoleSink", "JsonLinesSink", "KafkaSink", "NullSink", "create_sink"]
