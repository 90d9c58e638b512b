"""
SQS Polling Backend.

Long-polls a queue for batches of messages and processes every message of a
batch in its own thread, deleting the ones that were handled successfully.
"""

import logging
import signal
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

from sqspoller.config import AWSConfig, PollerConfig
from sqspoller.exceptions import InvalidEventError, SQSTransportError
from sqspoller.messages import Message
from sqspoller.signals import message_finished, message_started
from sqspoller.transport import QueueTransport, SQSTransport


@dataclass(frozen=True)
class BatchResult:
    """Outcome counts of one processed batch."""

    received: int
    acknowledged: int

    @property
    def retained(self) -> int:
        return self.received - self.acknowledged


class SQSPollingBackend:
    """
    SQS polling backend with long polling and one thread per message.

    Features:
        - Long polling for efficient message retrieval
        - Parallel message processing, as many threads as the batch size
        - Backpressure (waits for batch completion before fetching more)
        - Graceful shutdown (finishes the in-flight batch)

    A message is deleted when the handler returns or raises InvalidEventError.
    Any other exception leaves it on the queue, to be redelivered once its
    visibility timeout expires.

    Example:
        ```python
        from sqspoller.backends import SQSPollingBackend
        from sqspoller.config import PollerConfig

        def handler(message):
            print(message.body)

        backend = SQSPollingBackend(handler, PollerConfig(queue_url))
        backend.start_consuming()
        ```
    """

    def __init__(
        self,
        consumer_handler: Callable[[Message], None],
        config: PollerConfig,
        transport: QueueTransport | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the SQS polling backend.

        Args:
            consumer_handler: A callable that processes one message. Raising
                InvalidEventError still deletes the message, any other
                exception leaves it for redelivery.
            config: The polling configuration.
            transport: The queue transport. Defaults to an SQSTransport built
                from the Django settings.
            logger: Logger for the poll loop. Defaults to this module's logger.
        """
        self.consumer_handler = consumer_handler
        self.config = config
        self.transport = transport or SQSTransport(AWSConfig.from_settings())
        self.logger = logger or logging.getLogger(__name__)
        self._stop_event = threading.Event()

    @property
    def stop_event(self) -> threading.Event:
        """Set once a stop was requested. Long-running handlers may check it."""
        return self._stop_event

    def install_signal_handlers(self) -> None:
        """Stop gracefully on SIGINT and SIGTERM. Must be called from the main thread."""
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received {signal_name}, initiating graceful shutdown...")
        self.stop()

    def start_consuming(self) -> None:
        """
        Poll the queue until stop() is called.

        Errors never escape the loop: a failed receive is logged and the next
        poll starts right away, or after error_backoff_seconds when configured.
        """
        self.logger.info(f"Starting SQS consumer for queue: {self.config.queue_url}")
        self.logger.info(
            f"Config: max_messages={self.config.max_messages}, wait_time={self.config.wait_time_seconds}s, "
            f"visibility_timeout={self.config.visibility_timeout}"
        )

        with ThreadPoolExecutor(
            max_workers=self.config.max_messages,
            thread_name_prefix="sqs-worker",
        ) as executor:
            while not self._stop_event.is_set():
                try:
                    self._poll_and_process(executor)
                except SQSTransportError as e:
                    self.logger.error(f"SQS transport error: {e}")
                    self._backoff()
                except Exception as e:
                    self.logger.error(f"Unexpected error in consumer loop: {e}", exc_info=True)
                    self._backoff()

        self.logger.info("SQS consumer stopped")

    def _poll_and_process(self, executor: ThreadPoolExecutor) -> BatchResult | None:
        self.logger.debug("Start polling")

        messages = self.transport.receive_batch(
            self.config.queue_url,
            self.config.max_messages,
            self.config.wait_time_seconds,
            self.config.visibility_timeout,
        )

        if not messages:
            self.logger.debug("No messages received")
            return None

        return self._process_batch(messages, executor)

    def _process_batch(self, messages: list[Message], executor: ThreadPoolExecutor) -> BatchResult:
        """
        Process a batch in parallel and wait for every message to finish.

        Args:
            messages: The messages of one receive call.
            executor: The thread pool executor.

        Returns:
            How many messages were received and deleted.
        """
        self.logger.info(f"Received {len(messages)} message(s), processing in parallel...")

        futures: list[tuple[Message, Future]] = [
            (message, executor.submit(self._process_message, message)) for message in messages
        ]

        # BACKPRESSURE: the next receive waits until the whole batch is done
        acknowledged = 0
        for message, future in futures:
            try:
                if future.result():
                    acknowledged += 1
            except Exception as e:
                self.logger.error(f"Message {message.message_id} failed: {e}", exc_info=True)

        result = BatchResult(received=len(messages), acknowledged=acknowledged)
        self.logger.info(f"Batch complete: {result.acknowledged} acknowledged, {result.retained} left on the queue")
        return result

    def _process_message(self, message: Message) -> bool:
        """
        Handle a single message (runs in the thread pool).

        Returns:
            True if the message was deleted from the queue, False otherwise.
        """
        acknowledged = False
        message_started.send(sender=self.__class__, message=message)
        try:
            try:
                self.consumer_handler(message)
            except InvalidEventError as e:
                self.logger.error(str(e))
            except BaseException as e:
                if self.config.logging_enabled:
                    self.logger.error(f"Error processing message {message.message_id}: {e}", exc_info=True)
                # Message will become visible again after visibility timeout
                return False

            acknowledged = self._delete_message(message)
            return acknowledged
        finally:
            message_finished.send(sender=self.__class__, message=message, acknowledged=acknowledged)

    def _delete_message(self, message: Message) -> bool:
        try:
            self.transport.delete_message(self.config.queue_url, message.receipt_handle)
        except SQSTransportError as e:
            if self.config.logging_enabled:
                self.logger.error(f"Failed to delete message {message.message_id}: {e}")
            return False

        self.logger.debug(f"deleted message from queue: {message.receipt_handle}")
        return True

    def _backoff(self) -> None:
        """Wait before the next poll after an error, unless a stop is requested meanwhile."""
        seconds = self.config.error_backoff_seconds
        if seconds and not self._stop_event.is_set():
            self.logger.info(f"Backing off for {seconds}s...")
            self._stop_event.wait(seconds)

    def stop(self) -> None:
        """Stop the consumer once the in-flight batch is done."""
        self.logger.info("Stopping SQS consumer...")
        self._stop_event.set()
