"""Typed codecs for AWS Lambda Kafka events and API Gateway proxy responses."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
