"""
SQS Poller Management Command.

Polls an SQS queue and hands its messages to a handler until stopped.

Usage:
    python manage.py sqspoll --queue broadcasts
    python manage.py sqspoll --queue-url https://sqs.../my-queue --handler myapp.handlers.handle
    python manage.py sqspoll --queue broadcasts --region us-east-1 --max-messages 5

Named queues come from the SQS_POLLER_QUEUES setting:

    SQS_POLLER_QUEUES = {
        "broadcasts": {
            "url_setting": "SQS_BROADCAST_QUEUE_URL",  # or "url": "...", or "queue_name": "..."
            "handler": "myapp.consumers.BroadcastConsumer",
        },
    }
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils.module_loading import import_string

from sqspoller.backends import SQSPollingBackend
from sqspoller.config import AWSConfig, PollerConfig
from sqspoller.consumers import SQSConsumer
from sqspoller.exceptions import SQSConfigurationError, SQSTransportError
from sqspoller.transport import SQSTransport


class Command(BaseCommand):
    help = "Start an SQS poller for processing messages from a queue"

    def add_arguments(self, parser):
        parser.add_argument(
            "--queue",
            dest="queue_name",
            default=None,
            help="Name of a queue configured in SQS_POLLER_QUEUES (e.g., broadcasts)",
        )
        parser.add_argument(
            "--queue-url",
            dest="queue_url",
            default=None,
            help="URL of the queue to poll, overrides the configured one",
        )
        parser.add_argument(
            "--handler",
            dest="handler",
            default=None,
            help="Dotted path to a handler callable or SQSConsumer subclass",
        )
        parser.add_argument(
            "--region",
            dest="region",
            default=None,
            help="AWS region (defaults to SQS_AWS_REGION setting or us-east-1)",
        )
        parser.add_argument(
            "--wait-time",
            dest="wait_time",
            type=int,
            default=None,
            help="Long polling wait time in seconds (0-20, default: 20)",
        )
        parser.add_argument(
            "--max-messages",
            dest="max_messages",
            type=int,
            default=None,
            help="Maximum messages to receive per poll (1-10, default: 10)",
        )
        parser.add_argument(
            "--visibility-timeout",
            dest="visibility_timeout",
            type=int,
            default=None,
            help="Message visibility timeout in seconds (default: the queue's own)",
        )
        parser.add_argument(
            "--error-backoff",
            dest="error_backoff",
            type=float,
            default=None,
            help="Seconds to wait after a failed receive (default: 0)",
        )

    def handle(self, *args, **options):
        queue_name = options["queue_name"]
        wait_time = options["wait_time"]
        max_messages = options["max_messages"]

        # Validate options
        if wait_time is not None and not 0 <= wait_time <= 20:
            raise CommandError("wait-time must be between 0 and 20")
        if max_messages is not None and not 1 <= max_messages <= 10:
            raise CommandError("max-messages must be between 1 and 10")

        queue_config = {}
        if queue_name:
            queue_config = getattr(settings, "SQS_POLLER_QUEUES", {}).get(queue_name)
            if not queue_config:
                raise CommandError(f"Unknown queue: {queue_name}")

        handler_path = options["handler"] or queue_config.get("handler")
        if not handler_path:
            raise CommandError("No handler configured. Pass --handler or set one in SQS_POLLER_QUEUES.")
        handler = self.load_handler(handler_path)

        transport = SQSTransport(AWSConfig.from_settings(region_name=options["region"]))
        queue_url = options["queue_url"] or self.resolve_queue_url(queue_config, transport)

        try:
            config = PollerConfig.from_settings(
                queue_url,
                max_messages=max_messages,
                wait_time_seconds=wait_time,
                visibility_timeout=options["visibility_timeout"],
                error_backoff_seconds=options["error_backoff"],
            )
        except SQSConfigurationError as e:
            raise CommandError(str(e))

        backend = SQSPollingBackend(handler, config, transport=transport)
        backend.install_signal_handlers()

        self.stdout.write(
            self.style.SUCCESS(
                f"Starting SQS poller for '{queue_name or queue_url}'\n"
                f"  Queue URL: {config.queue_url}\n"
                f"  Region: {transport.aws_config.region_name}\n"
                f"  Wait time: {config.wait_time_seconds}s\n"
                f"  Max messages: {config.max_messages}\n"
                f"  Visibility timeout: {config.visibility_timeout}"
            )
        )

        try:
            backend.start_consuming()
        except KeyboardInterrupt:
            self.stdout.write(self.style.WARNING("\nShutting down..."))

        self.stdout.write(self.style.SUCCESS("SQS poller stopped"))

    def load_handler(self, path: str):
        try:
            handler = import_string(path)
        except ImportError as e:
            raise CommandError(f"Failed to import handler: {e}")

        if isinstance(handler, type) and issubclass(handler, SQSConsumer):
            return handler()
        if not callable(handler):
            raise CommandError(f"Handler {path} is not callable")
        return handler

    def resolve_queue_url(self, queue_config: dict, transport: SQSTransport) -> str:
        if queue_config.get("url"):
            return queue_config["url"]

        url_setting = queue_config.get("url_setting")
        if url_setting:
            queue_url = getattr(settings, url_setting, None)
            if not queue_url:
                raise CommandError(f"Queue URL not configured. Set {url_setting} in settings.")
            return queue_url

        if queue_config.get("queue_name"):
            try:
                return transport.get_queue_url(queue_config["queue_name"])
            except SQSTransportError as e:
                raise CommandError(str(e))

        raise CommandError("No queue URL configured. Pass --queue-url or configure the queue in SQS_POLLER_QUEUES.")
