"""
SQS Poller Configuration.

Immutable values describing which queue to poll and how to reach it. Defaults
come from Django settings, so a host project can tune the poller without code:

    SQS_AWS_REGION = "us-east-1"
    SQS_AWS_ACCESS_KEY_ID = None        # falls back to boto3's credential chain
    SQS_AWS_SECRET_ACCESS_KEY = None
    SQS_AWS_SESSION_TOKEN = None
    SQS_ENDPOINT_URL = None             # e.g. a localstack endpoint

    SQS_POLLER_MAX_MESSAGES = 10        # 1-10
    SQS_POLLER_WAIT_TIME_SECONDS = 20   # 0-20
    SQS_POLLER_VISIBILITY_TIMEOUT = None
    SQS_POLLER_LOGGING_ENABLED = True
    SQS_POLLER_ERROR_BACKOFF_SECONDS = 0
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings

from sqspoller.exceptions import SQSConfigurationError

DEFAULT_REGION = "us-east-1"
DEFAULT_MAX_MESSAGES = 10  # Max messages per poll (SQS limit)
DEFAULT_WAIT_TIME_SECONDS = 20  # Long polling (max 20s)
MAX_WAIT_TIME_SECONDS = 20
MAX_VISIBILITY_TIMEOUT = 43200  # 12 hours (SQS limit)


@dataclass(frozen=True)
class AWSConfig:
    """Region, credentials and endpoint used to build the SQS client."""

    region_name: str = DEFAULT_REGION
    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None
    endpoint_url: str | None = None

    @classmethod
    def from_settings(cls, **overrides: Any) -> "AWSConfig":
        values = {
            "region_name": getattr(settings, "SQS_AWS_REGION", DEFAULT_REGION),
            "access_key_id": getattr(settings, "SQS_AWS_ACCESS_KEY_ID", None),
            "secret_access_key": getattr(settings, "SQS_AWS_SECRET_ACCESS_KEY", None),
            "session_token": getattr(settings, "SQS_AWS_SESSION_TOKEN", None),
            "endpoint_url": getattr(settings, "SQS_ENDPOINT_URL", None),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    def client_kwargs(self) -> dict[str, str]:
        """Keyword arguments for boto3.client, leaving unset values to boto3's defaults."""
        kwargs = {
            "region_name": self.region_name,
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "aws_session_token": self.session_token,
            "endpoint_url": self.endpoint_url,
        }
        return {key: value for key, value in kwargs.items() if value is not None}


@dataclass(frozen=True)
class PollerConfig:
    """
    Polling parameters, fixed for the lifetime of a poll loop.

    Attributes:
        queue_url: The URL of the SQS queue to consume from.
        max_messages: Maximum messages to receive per poll (1-10). Also the
            number of worker threads, so every message of a batch gets its own.
        wait_time_seconds: Long polling wait time (0-20 seconds).
        visibility_timeout: How long a received message is hidden from other
            consumers. None keeps the queue's own setting.
        logging_enabled: Whether handler and delete failures are logged.
        error_backoff_seconds: Pause after a failed receive. 0 retries at once.
    """

    queue_url: str
    max_messages: int = DEFAULT_MAX_MESSAGES
    wait_time_seconds: int = DEFAULT_WAIT_TIME_SECONDS
    visibility_timeout: int | None = None
    logging_enabled: bool = True
    error_backoff_seconds: float = 0

    def __post_init__(self):
        if not self.queue_url:
            raise SQSConfigurationError("Queue URL is required")
        if not 1 <= self.max_messages <= DEFAULT_MAX_MESSAGES:
            raise SQSConfigurationError(f"max_messages must be between 1 and {DEFAULT_MAX_MESSAGES}")
        if not 0 <= self.wait_time_seconds <= MAX_WAIT_TIME_SECONDS:
            raise SQSConfigurationError(f"wait_time_seconds must be between 0 and {MAX_WAIT_TIME_SECONDS}")
        if self.visibility_timeout is not None and not 0 <= self.visibility_timeout <= MAX_VISIBILITY_TIMEOUT:
            raise SQSConfigurationError(f"visibility_timeout must be between 0 and {MAX_VISIBILITY_TIMEOUT}")
        if self.error_backoff_seconds < 0:
            raise SQSConfigurationError("error_backoff_seconds cannot be negative")

    @classmethod
    def from_settings(cls, queue_url: str, **overrides: Any) -> "PollerConfig":
        """Build a config from Django settings. Overrides set to None are ignored."""
        values = {
            "max_messages": getattr(settings, "SQS_POLLER_MAX_MESSAGES", DEFAULT_MAX_MESSAGES),
            "wait_time_seconds": getattr(settings, "SQS_POLLER_WAIT_TIME_SECONDS", DEFAULT_WAIT_TIME_SECONDS),
            "visibility_timeout": getattr(settings, "SQS_POLLER_VISIBILITY_TIMEOUT", None),
            "logging_enabled": getattr(settings, "SQS_POLLER_LOGGING_ENABLED", True),
            "error_backoff_seconds": getattr(settings, "SQS_POLLER_ERROR_BACKOFF_SECONDS", 0),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(queue_url=queue_url, **values)
