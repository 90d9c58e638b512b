SECRET_KEY = "sqspoller-tests"

INSTALLED_APPS = [
    "sqspoller",
]

DATABASES = {}

USE_TZ = True

SQS_AWS_REGION = "us-east-1"
