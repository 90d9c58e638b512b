from sqspoller.exceptions import InvalidEventError


class ParseError(InvalidEventError):
    """Raised when a message body cannot be decoded. The message is deleted, not retried."""

    def __init__(self, msg: str):
        super().__init__("parse", msg)
