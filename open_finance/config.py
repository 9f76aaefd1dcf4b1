"""Configuration management for open-finance."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from open_finance.exceptions import ConfigurationError

SINK_NAMES = ("console", "jsonl", "kafka", "none")
PAGE_SIZE_CEILING = 1000


@dataclass
class ApiConfig:
    """Public API location used when building pagination links."""

    base_url: str = "https://api.banco.com.br"
    accounts_path: str = "/open-banking/accounts/v2/accounts"

    @property
    def accounts_url(self) -> str:
        """Absolute URL of the accounts listing endpoint."""
        return self.base_url.rstrip("/") + self.accounts_path


@dataclass
class PaginationConfig:
    """Page size limits and pagination key settings."""

    default_page_size: int = 25
    max_page_size: int = PAGE_SIZE_CEILING
    key_ttl_minutes: int = 60
    key_secret: str = "change-me"


@dataclass
class RateLimitConfig:
    """Request budgets.

    A sliding window per organization and endpoint, plus a monthly
    operational limit per consent on the accounts listing.
    """

    requests_per_window: int = 300
    window_seconds: int = 60
    accounts_monthly_limit: int = 240


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic: str = "open-finance.account-access"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class AuditConfig:
    """Where access events go."""

    publish_events: bool = True
    sink: str = "console"
    output_dir: Path = field(default_factory=lambda: Path("output"))


@dataclass
class OpenFinanceConfig:
    """Main configuration for open-finance."""

    api: ApiConfig = field(default_factory=ApiConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    audit: AuditConfig = field(default_factory=AuditConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "OpenFinanceConfig":
        """Create config from environment variables."""
        import os

        api = ApiConfig(
            base_url=os.getenv("OPEN_FINANCE_BASE_URL", "https://api.banco.com.br"),
            accounts_path=os.getenv("ACCOUNTS_PATH", "/open-banking/accounts/v2/accounts"),
        )

        pagination = PaginationConfig(
            default_page_size=int(os.getenv("DEFAULT_PAGE_SIZE", "25")),
            max_page_size=int(os.getenv("MAX_PAGE_SIZE", str(PAGE_SIZE_CEILING))),
            key_ttl_minutes=int(os.getenv("PAGINATION_KEY_TTL_MINUTES", "60")),
            key_secret=os.getenv("PAGINATION_KEY_SECRET", "change-me"),
        )

        rate_limit = RateLimitConfig(
            requests_per_window=int(os.getenv("RATE_LIMIT_REQUESTS", "300")),
            window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60")),
            accounts_monthly_limit=int(os.getenv("ACCOUNTS_MONTHLY_LIMIT", "240")),
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic=os.getenv("ACCESS_EVENTS_TOPIC", "open-finance.account-access"),
        )

        audit = AuditConfig(
            publish_events=os.getenv("PUBLISH_EVENTS", "true").lower() == "true",
            sink=os.getenv("AUDIT_SINK", "console"),
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
        )

        config = cls(
            api=api,
            pagination=pagination,
            rate_limit=rate_limit,
            kafka=kafka,
            audit=audit,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check cross-field constraints.

        Raises
        ------
        ConfigurationError
            If any setting is out of range.
        """
        if not self.api.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Base URL must be http(s): {self.api.base_url!r}")

        pagination = self.pagination
        if not 1 <= pagination.max_page_size <= PAGE_SIZE_CEILING:
            raise ConfigurationError(
                f"max_page_size must be between 1 and {PAGE_SIZE_CEILING}"
            )
        if not 1 <= pagination.default_page_size <= pagination.max_page_size:
            raise ConfigurationError("default_page_size must be between 1 and max_page_size")
        if pagination.key_ttl_minutes <= 0:
            raise ConfigurationError("key_ttl_minutes must be positive")
        if not pagination.key_secret:
            raise ConfigurationError("key_secret cannot be empty")

        if self.rate_limit.requests_per_window <= 0:
            raise ConfigurationError("requests_per_window must be positive")
        if self.rate_limit.window_seconds <= 0:
            raise ConfigurationError("window_seconds must be positive")
        if self.rate_limit.accounts_monthly_limit <= 0:
            raise ConfigurationError("accounts_monthly_limit must be positive")

        if self.audit.sink not in SINK_NAMES:
            raise ConfigurationError(
                f"Unknown audit sink {self.audit.sink!r}, expected one of {SINK_NAMES}"
            )
