"""sqs_simple: client for the Amazon Simple Queue Service query API."""

from .client import SqsClient
from .dispatcher import MAX_GET_MSG_SIZE, SQS_VERSION, RequestDispatcher
from .exceptions import SqsError, SqsErrorCodes
from .http_client import HttpSqsClient
from .models import (
    BASE_ENDPOINT,
    PreparedRequest,
    ReceivedMessage,
    SignatureVersion,
    SqsConfig,
)
from .queue import Queue
from .signing import timestamp

__all__ = [
    "SqsClient",
    "HttpSqsClient",
    "Queue",
    "RequestDispatcher",
    "SqsConfig",
    "SignatureVersion",
    "PreparedRequest",
    "ReceivedMessage",
    "SqsError",
    "SqsErrorCodes",
    "BASE_ENDPOINT",
    "SQS_VERSION",
    "MAX_GET_MSG_SIZE",
    "timestamp",
]
