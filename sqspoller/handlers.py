"""
Example handlers.

Point the sqspoll command at one of these to check a queue is wired up:

    python manage.py sqspoll --queue-url <url> --handler sqspoller.handlers.log_message_body
"""

import logging

from sqspoller.messages import Message

logger = logging.getLogger(__name__)


def log_message_body(message: Message) -> None:
    logger.info(f"[{message.message_id}] {message.body}")
