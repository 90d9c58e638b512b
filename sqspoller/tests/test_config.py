from django.test import SimpleTestCase, override_settings

from sqspoller.config import AWSConfig, PollerConfig
from sqspoller.exceptions import SQSConfigurationError

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123/queue"


class PollerConfigTests(SimpleTestCase):
    def test_defaults(self):
        config = PollerConfig(queue_url=QUEUE_URL)

        self.assertEqual(config.max_messages, 10)
        self.assertEqual(config.wait_time_seconds, 20)
        self.assertIsNone(config.visibility_timeout)
        self.assertTrue(config.logging_enabled)
        self.assertEqual(config.error_backoff_seconds, 0)

    def test_empty_url_raises(self):
        """Test that empty queue URL raises error."""
        with self.assertRaisesMessage(SQSConfigurationError, "Queue URL is required"):
            PollerConfig(queue_url="")

    def test_invalid_values_raise(self):
        invalid = [
            {"max_messages": 0},
            {"max_messages": 11},
            {"wait_time_seconds": -1},
            {"wait_time_seconds": 21},
            {"visibility_timeout": 43201},
            {"error_backoff_seconds": -1},
        ]
        for kwargs in invalid:
            with self.subTest(**kwargs):
                with self.assertRaises(SQSConfigurationError):
                    PollerConfig(queue_url=QUEUE_URL, **kwargs)

    def test_immutable(self):
        config = PollerConfig(queue_url=QUEUE_URL)

        with self.assertRaises(AttributeError):
            config.max_messages = 5

    @override_settings(
        SQS_POLLER_MAX_MESSAGES=5,
        SQS_POLLER_WAIT_TIME_SECONDS=10,
        SQS_POLLER_VISIBILITY_TIMEOUT=120,
        SQS_POLLER_LOGGING_ENABLED=False,
    )
    def test_from_settings(self):
        config = PollerConfig.from_settings(QUEUE_URL, wait_time_seconds=None, error_backoff_seconds=2)

        self.assertEqual(
            config,
            PollerConfig(
                queue_url=QUEUE_URL,
                max_messages=5,
                wait_time_seconds=10,
                visibility_timeout=120,
                logging_enabled=False,
                error_backoff_seconds=2,
            ),
        )

    @override_settings(SQS_POLLER_MAX_MESSAGES=50)
    def test_from_settings_validates(self):
        with self.assertRaises(SQSConfigurationError):
            PollerConfig.from_settings(QUEUE_URL)


class AWSConfigTests(SimpleTestCase):
    def test_client_kwargs_skip_unset_values(self):
        self.assertEqual(AWSConfig().client_kwargs(), {"region_name": "us-east-1"})

    @override_settings(
        SQS_AWS_REGION="eu-central-1",
        SQS_AWS_ACCESS_KEY_ID="AKIA",
        SQS_AWS_SECRET_ACCESS_KEY="secret",
        SQS_AWS_SESSION_TOKEN="token",
        SQS_ENDPOINT_URL="http://localstack:4566",
    )
    def test_from_settings(self):
        aws_config = AWSConfig.from_settings(region_name="us-west-2")

        self.assertEqual(
            aws_config.client_kwargs(),
            {
                "region_name": "us-west-2",
                "aws_access_key_id": "AKIA",
                "aws_secret_access_key": "secret",
                "aws_session_token": "token",
                "endpoint_url": "http://localstack:4566",
            },
        )
