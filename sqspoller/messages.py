from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Message:
    """A message received from the queue. The body is never inspected by the poller."""

    message_id: str
    receipt_handle: str
    body: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    message_attributes: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_sqs(cls, raw: dict[str, Any]) -> "Message":
        """Build a Message from an entry of a boto3 receive_message response."""
        return cls(
            message_id=raw.get("MessageId", "unknown"),
            receipt_handle=raw.get("ReceiptHandle", ""),
            body=raw.get("Body", ""),
            attributes=raw.get("Attributes", {}),
            message_attributes=raw.get("MessageAttributes", {}),
        )
