"""
SQS Poller Signals.

Sent from the worker threads around each message, so they can be used for
monitoring, logging, or other cross-cutting concerns.
"""

from django.db import close_old_connections, reset_queries
from django.dispatch import Signal

# Sent when a message starts being processed
message_started = Signal()

# Sent when a message finishes processing (success or failure)
message_finished = Signal()

# db connection state managed similarly to the wsgi handler
message_started.connect(reset_queries)
message_started.connect(close_old_connections)
message_finished.connect(close_old_connections)
