"""
SQS Poller.

Long-polls an SQS queue, hands every message of a batch to a handler in its
own thread and deletes the messages that were handled successfully.
"""

from sqspoller.consumers import SQSConsumer
from sqspoller.exceptions import InvalidEventError, SQSConfigurationError, SQSPollerError, SQSTransportError

__all__ = [
    "SQSConsumer",
    "InvalidEventError",
    "SQSPollerError",
    "SQSConfigurationError",
    "SQSTransportError",
]
