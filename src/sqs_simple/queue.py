"""Queue handle: message operations against one queue endpoint."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .dispatcher import RequestDispatcher
from .exceptions import SqsError, SqsErrorCodes
from .models import ReceivedMessage, SqsConfig


class Queue:
    """A single queue, addressed by its URL."""

    def __init__(self, config: SqsConfig) -> None:
        self._config = config
        self._dispatcher = RequestDispatcher(config)

    def __repr__(self) -> str:
        return f"Queue({self._config.endpoint!r})"

    @property
    def config(self) -> SqsConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    def display_name(self) -> str:
        return self._config.endpoint

    def _call(
        self,
        action: str,
        params: Mapping[str, Any] | None,
        force_array: tuple[str, ...] = (),
        **fields: Any,
    ) -> dict[str, Any]:
        request = {**(params or {}), **fields, "Action": action}
        return self._dispatcher.dispatch(request, force_array)

    def send_message(self, body: str, params: Mapping[str, Any] | None = None) -> str:
        """Send a message and return its MessageId."""
        data = self._call("SendMessage", params, MessageBody=body)
        message_id = data.get("MessageId")
        if not message_id:
            raise SqsError(
                code=SqsErrorCodes.MISSING_FIELD,
                message="ERROR: On calling SendMessage: response did not contain a MessageId\n",
            )
        return str(message_id)

    def receive_messages(
        self,
        max_messages: int = 1,
        visibility_timeout: int | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> list[ReceivedMessage]:
        """Receive up to max_messages messages; an empty queue gives []."""
        data = self._call(
            "ReceiveMessage",
            params,
            ("Message",),
            MaxNumberOfMessages=max_messages,
            VisibilityTimeout=visibility_timeout,
        )
        return [
            ReceivedMessage.from_dict(m)
            for m in data.get("Message", [])
            if isinstance(m, dict)
        ]

    def receive_message(
        self,
        visibility_timeout: int | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> ReceivedMessage | None:
        messages = self.receive_messages(1, visibility_timeout, params)
        return messages[0] if messages else None

    def delete_message(self, message_id: str, params: Mapping[str, Any] | None = None) -> None:
        self._call("DeleteMessage", params, MessageId=message_id)

    def get_attributes(
        self,
        name: str = "All",
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, str]:
        """Return queue attributes as {Attribute: Value}."""
        data = self._call("GetQueueAttributes", params, ("AttributedValue",), AttributeName=name)
        return {
            item["Attribute"]: item.get("Value", "")
            for item in data.get("AttributedValue", [])
            if isinstance(item, dict) and "Attribute" in item
        }

    def set_attribute(self, name: str, value: Any, params: Mapping[str, Any] | None = None) -> None:
        self._call("SetQueueAttributes", params, Attribute=name, Value=value)

    def delete(self, params: Mapping[str, Any] | None = None) -> None:
        """Delete this queue."""
        self._call("DeleteQueue", params)
