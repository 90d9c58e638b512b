"""
SQS Poller Exceptions.
"""


class SQSPollerError(Exception):
    """Base exception for SQS poller errors."""

    pass


class SQSConfigurationError(SQSPollerError):
    """Raised when SQS configuration is invalid or missing."""

    pass


class SQSTransportError(SQSPollerError):
    """Raised when a call to the queue service fails."""

    pass


class InvalidEventError(SQSPollerError):
    """
    Raised by a handler when a message is well-received but cannot be processed.

    The message is still deleted from the queue, since redelivering a malformed
    payload would fail the same way every time.
    """

    def __init__(self, event: str, msg: str):
        self.event = event
        self.msg = msg
        super().__init__(f"[Invalid Event: {event}] {msg}")
