"""sqs_simple data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .exceptions import SqsError, SqsErrorCodes

BASE_ENDPOINT = "http://queue.amazonaws.com"


class SignatureVersion(IntEnum):
    """Request signature scheme."""

    LEGACY = 0  # Action + Timestamp only
    V1 = 1


def to_signature_version(value: int) -> SignatureVersion:
    """Convert value to a SignatureVersion, rejecting unsupported schemes."""
    try:
        return SignatureVersion(value)
    except ValueError as e:
        raise SqsError(
            code=SqsErrorCodes.CONFIGURATION_ERROR,
            message=f"Unsupported SignatureVersion: {value!r}",
            cause=e,
        ) from e


@dataclass
class SqsConfig:
    """Credentials and endpoint settings shared by a client and its queues."""

    access_key_id: str
    secret_key: str
    endpoint: str = BASE_ENDPOINT
    signature_version: SignatureVersion = SignatureVersion.V1
    timeout_seconds: float = 10.0
    options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.access_key_id or not self.secret_key:
            raise SqsError(
                code=SqsErrorCodes.CONFIGURATION_ERROR,
                message="Missing AWSAccessKeyId or SecretKey",
            )
        self.signature_version = to_signature_version(self.signature_version)

    def get_option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)

    def set_option(self, name: str, value: Any) -> SqsConfig:
        self.options[name] = value
        return self


@dataclass
class PreparedRequest:
    """A signed request ready to be sent."""

    action: str
    method: str
    url: str
    body: str | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class ReceivedMessage:
    """A message returned by ReceiveMessage."""

    message_id: str
    body: str
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReceivedMessage:
        """Build a ReceivedMessage from a deserialized <Message> element."""
        return cls(
            message_id=data.get("MessageId", ""),
            body=data.get("MessageBody", ""),
            raw=dict(data),
        )
