"""
SQS Transport.

The network side of the poller: receive a batch, delete a message, look up a
queue URL. The backend only depends on the QueueTransport protocol, so tests
and other queue services can provide their own implementation.
"""

import logging
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sqspoller.config import AWSConfig
from sqspoller.exceptions import SQSTransportError
from sqspoller.messages import Message

logger = logging.getLogger(__name__)


class QueueTransport(Protocol):
    def receive_batch(
        self,
        queue_url: str,
        max_messages: int,
        wait_time_seconds: int,
        visibility_timeout: int | None = None,
    ) -> list[Message]: ...

    def delete_message(self, queue_url: str, receipt_handle: str) -> None: ...


class SQSTransport:
    """
    QueueTransport backed by a boto3 SQS client.

    The client is created on first use and shared by every worker thread;
    boto3 clients are safe to use concurrently.

    Example:
        ```python
        transport = SQSTransport(AWSConfig(region_name="eu-west-1"))
        messages = transport.receive_batch(queue_url, max_messages=10, wait_time_seconds=20)
        ```
    """

    def __init__(self, aws_config: AWSConfig | None = None):
        self.aws_config = aws_config or AWSConfig()
        self._client = None

    @property
    def client(self):
        """Lazy-loaded SQS client."""
        if self._client is None:
            self._client = boto3.client("sqs", **self.aws_config.client_kwargs())
        return self._client

    def receive_batch(
        self,
        queue_url: str,
        max_messages: int,
        wait_time_seconds: int,
        visibility_timeout: int | None = None,
    ) -> list[Message]:
        params = dict(
            QueueUrl=queue_url,
            MaxNumberOfMessages=max_messages,
            WaitTimeSeconds=wait_time_seconds,
            MessageAttributeNames=["All"],
            AttributeNames=["All"],
        )
        if visibility_timeout is not None:
            params["VisibilityTimeout"] = visibility_timeout

        try:
            response = self.client.receive_message(**params)
        except (ClientError, BotoCoreError) as e:
            raise SQSTransportError(f"Failed to receive messages from {queue_url}: {e}") from e

        return [Message.from_sqs(raw) for raw in response.get("Messages", [])]

    def delete_message(self, queue_url: str, receipt_handle: str) -> None:
        try:
            self.client.delete_message(QueueUrl=queue_url, ReceiptHandle=receipt_handle)
        except (ClientError, BotoCoreError) as e:
            raise SQSTransportError(f"Failed to delete message {receipt_handle}: {e}") from e

    def get_queue_url(self, queue_name: str) -> str:
        """Resolve a queue name to its URL."""
        try:
            response = self.client.get_queue_url(QueueName=queue_name)
        except (ClientError, BotoCoreError) as e:
            raise SQSTransportError(f"Failed to resolve URL for queue {queue_name}: {e}") from e
        return response["QueueUrl"]


def new_sqs_transport(queue_name: str, aws_config: AWSConfig | None = None) -> tuple[SQSTransport, str]:
    """
    Create a transport and resolve the URL of the named queue.

    Args:
        queue_name: Name of an existing SQS queue.
        aws_config: Region and credentials. Defaults to the Django settings.

    Returns:
        The transport and the queue URL.
    """
    transport = SQSTransport(aws_config or AWSConfig.from_settings())
    queue_url = transport.get_queue_url(queue_name)
    logger.info(f"Resolved queue {queue_name} to {queue_url}")
    return transport, queue_url
