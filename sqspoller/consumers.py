"""
Base SQS Consumer class.

Provides an abstract base class for handlers of JSON messages, similar to the
EDAConsumer pattern used for RabbitMQ.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from sentry_sdk import capture_exception

from sqspoller.exceptions import InvalidEventError
from sqspoller.messages import Message
from sqspoller.parsers import JSONParser

logger = logging.getLogger(__name__)


class SQSConsumer(ABC):
    """
    Abstract base class for SQS message consumers.

    Decodes the message body as JSON and passes the payload to `consume`.
    Instances are callable, so they can be handed to SQSPollingBackend as
    the handler.

    A body that is not valid JSON raises ParseError, an InvalidEventError, so
    the message is deleted instead of being redelivered forever. Subclasses can
    raise InvalidEventError themselves for payloads they cannot use.

    Example:
        ```python
        class MyConsumer(SQSConsumer):
            def consume(self, payload: dict) -> None:
                if "data" not in payload:
                    raise InvalidEventError("my-event", "missing data")
                # Process the payload...
        ```
    """

    parser = JSONParser

    def __call__(self, message: Message) -> None:
        self.handle(message)

    def handle(self, message: Message) -> None:
        """
        Process an SQS message.

        Args:
            message: The received message.

        Raises:
            InvalidEventError: The message should be deleted without retrying.
            Exception: Any other failure; the message is left for redelivery.
        """
        payload = self.parser.parse(message.body)
        try:
            self.consume(payload)
        except InvalidEventError:
            raise
        except Exception as e:
            self.on_error(payload, e)
            raise

    @abstractmethod
    def consume(self, payload: Any) -> None:
        """
        Process the decoded message payload.

        Subclasses must implement this method to handle the actual
        message processing logic.

        Args:
            payload: The parsed JSON body of the SQS message.
        """
        pass

    def on_error(self, payload: Any, error: Exception) -> None:
        """
        Handle errors during message processing.

        Default implementation logs the error and reports to Sentry.
        Subclasses can override for custom error handling.

        Args:
            payload: The payload that failed to process.
            error: The exception that was raised.
        """
        logger.error(
            f"[{self.__class__.__name__}] Error processing message: {error}",
            exc_info=True,
            extra={"payload": payload},
        )
        capture_exception(error)
