"""Tests for config and logging."""

import json
import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from open_finance.config import (
    ApiConfig,
    AuditConfig,
    KafkaConfig,
    OpenFinanceConfig,
    PaginationConfig,
    RateLimitConfig,
)
from open_finance.exceptions import ConfigurationError
from open_finance.logging import REQUEST_FIELDS, JsonFormatter, get_logger, setup_logging

ENV_VARS = [
    "OPEN_FINANCE_BASE_URL",
    "ACCOUNTS_PATH",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PAGINATION_KEY_TTL_MINUTES",
    "PAGINATION_KEY_SECRET",
    "RATE_LIMIT_REQUESTS",
    "RATE_LIMIT_WINDOW_SECONDS",
    "ACCOUNTS_MONTHLY_LIMIT",
    "KAFKA_BOOTSTRAP_SERVERS",
    "KAFKA_ACKS",
    "ACCESS_EVENTS_TOPIC",
    "AUDIT_SINK",
    "PUBLISH_EVENTS",
    "OUTPUT_DIR",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env() -> dict[str, str]:
    """Environment without any open-finance variables."""
    return {k: v for k, v in os.environ.items() if k not in ENV_VARS}


class TestKafkaConfig:
    """Tests for KafkaConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = KafkaConfig()

        assert config.bootstrap_servers == "localhost:9092"
        assert config.acks == "all"
        assert config.topic == "open-finance.account-access"

    def test_to_dict(self) -> None:
        """Test conversion to a confluent-kafka dict."""
        result = KafkaConfig(bootstrap_servers="kafka:9092", acks="1").to_dict()

        assert result["bootstrap.servers"] == "kafka:9092"
        assert result["acks"] == "1"
        assert result["compression.type"] == "snappy"
        assert "topic" not in result


class TestApiConfig:
    """Tests for ApiConfig."""

    def test_accounts_url(self) -> None:
        """Test the accounts URL joins base URL and path."""
        config = ApiConfig(base_url="https://api.example.com/")

        assert config.accounts_url == "https://api.example.com/open-banking/accounts/v2/accounts"


class TestOpenFinanceConfig:
    """Tests for OpenFinanceConfig."""

    def test_default_values(self) -> None:
        """Test defaults of every section."""
        config = OpenFinanceConfig()

        assert config.pagination.default_page_size == 25
        assert config.pagination.max_page_size == 1000
        assert config.pagination.key_ttl_minutes == 60
        assert config.rate_limit.requests_per_window == 300
        assert config.rate_limit.window_seconds == 60
        assert config.rate_limit.accounts_monthly_limit == 240
        assert config.audit.sink == "console"
        assert config.audit.output_dir == Path("output")
        assert config.log_level == "INFO"
        config.validate()

    def test_from_env_default(self, clean_env: dict[str, str]) -> None:
        """Test creating config from environment with defaults."""
        with patch.dict(os.environ, clean_env, clear=True):
            config = OpenFinanceConfig.from_env()

        assert config.api.base_url == "https://api.banco.com.br"
        assert config.kafka.bootstrap_servers == "localhost:9092"
        assert config.audit.publish_events is True
        assert config.log_format == "standard"

    def test_from_env_custom(self, clean_env: dict[str, str]) -> None:
        """Test creating config from custom environment variables."""
        env = {
            **clean_env,
            "OPEN_FINANCE_BASE_URL": "http://localhost:8080",
            "DEFAULT_PAGE_SIZE": "10",
            "MAX_PAGE_SIZE": "100",
            "PAGINATION_KEY_TTL_MINUTES": "5",
            "PAGINATION_KEY_SECRET": "s3cret",
            "RATE_LIMIT_REQUESTS": "20",
            "RATE_LIMIT_WINDOW_SECONDS": "30",
            "ACCOUNTS_MONTHLY_LIMIT": "10",
            "KAFKA_BOOTSTRAP_SERVERS": "kafka:9092",
            "ACCESS_EVENTS_TOPIC": "audit",
            "AUDIT_SINK": "jsonl",
            "PUBLISH_EVENTS": "false",
            "OUTPUT_DIR": "/tmp/events",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, env, clear=True):
            config = OpenFinanceConfig.from_env()

        assert config.api.base_url == "http://localhost:8080"
        assert config.pagination.default_page_size == 10
        assert config.pagination.max_page_size == 100
        assert config.pagination.key_ttl_minutes == 5
        assert config.pagination.key_secret == "s3cret"
        assert config.rate_limit.requests_per_window == 20
        assert config.rate_limit.window_seconds == 30
        assert config.rate_limit.accounts_monthly_limit == 10
        assert config.kafka.topic == "audit"
        assert config.audit.sink == "jsonl"
        assert config.audit.publish_events is False
        assert config.audit.output_dir == Path("/tmp/events")
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_invalid(self, clean_env: dict[str, str]) -> None:
        """Test from_env validates what it reads."""
        with patch.dict(os.environ, {**clean_env, "MAX_PAGE_SIZE": "5000"}, clear=True):
            with pytest.raises(ConfigurationError):
                OpenFinanceConfig.from_env()

    @pytest.mark.parametrize(
        "config",
        [
            OpenFinanceConfig(api=ApiConfig(base_url="ftp://bank")),
            OpenFinanceConfig(pagination=PaginationConfig(max_page_size=0)),
            OpenFinanceConfig(pagination=PaginationConfig(max_page_size=1001)),
            OpenFinanceConfig(pagination=PaginationConfig(default_page_size=50, max_page_size=20)),
            OpenFinanceConfig(pagination=PaginationConfig(key_ttl_minutes=0)),
            OpenFinanceConfig(pagination=PaginationConfig(key_secret="")),
            OpenFinanceConfig(rate_limit=RateLimitConfig(requests_per_window=0)),
            OpenFinanceConfig(rate_limit=RateLimitConfig(window_seconds=0)),
            OpenFinanceConfig(rate_limit=RateLimitConfig(accounts_monthly_limit=0)),
            OpenFinanceConfig(audit=AuditConfig(sink="s3")),
        ],
    )
    def test_validate(self, config: OpenFinanceConfig) -> None:
        """Test out-of-range settings are rejected."""
        with pytest.raises(ConfigurationError):
            config.validate()


class TestSetupLogging:
    """Tests for setup_logging."""

    def teardown_method(self) -> None:
        setup_logging("WARNING")

    def test_setup_logging_debug(self) -> None:
        """Test the level is applied to root and package loggers."""
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("open_finance").level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test unknown levels fall back to INFO."""
        setup_logging(level="LOUD")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        """Test the json format installs JsonFormatter on stdout."""
        setup_logging(format_type="json")

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JsonFormatter)
        assert handlers[0].stream is sys.stdout

    def test_setup_logging_replaces_handlers(self) -> None:
        """Test repeated setup keeps a single handler."""
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_external_loggers_quieted(self) -> None:
        """Test library loggers are raised to WARNING."""
        setup_logging(level="DEBUG")

        assert logging.getLogger("confluent_kafka").level == logging.WARNING
        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs: object) -> logging.LogRecord:
        return logging.LogRecord(
            name="open_finance.usecases.accounts",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg="Listed %d accounts",
            args=(3,),
            exc_info=kwargs.get("exc_info"),
        )

    def test_format_basic(self) -> None:
        """Test basic log formatting."""
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "open_finance.usecases.accounts"
        assert data["message"] == "Listed 3 accounts"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        """Test formatting with exception info."""
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(self._record(exc_info=exc_info)))

        assert "ValueError" in data["exception"]

    def test_format_with_extra(self) -> None:
        """Test request fields are top-level and the rest goes under context."""
        record = self._record()
        record.extra = {"interaction_id": "i-1", "organization_id": "o1", "elapsed_ms": 1.5}

        data = json.loads(JsonFormatter().format(record))

        assert data["interaction_id"] == "i-1"
        assert data["organization_id"] == "o1"
        assert data["context"] == {"elapsed_ms": 1.5}
        assert "elapsed_ms" not in data

    def test_request_fields_always_present(self) -> None:
        """Test lines logged outside a request still carry the request keys."""
        data = json.loads(JsonFormatter().format(self._record()))

        for name in REQUEST_FIELDS:
            assert name in data
            assert data[name] is None
        assert "context" not in data


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self) -> None:
        """Test getting a logger."""
        logger = get_logger("open_finance.test")

        assert isinstance(logger, logging.Logger)
        assert logger is logging.getLogger("open_finance.test")


class TestPackageInit:
    """Tests for open_finance __init__.py."""

    def test_version_exported(self) -> None:
        """Test that __version__ is exported."""
        from open_finance import __version__

        assert isinstance(__version__, str)
