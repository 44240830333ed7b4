"""httpx based SqsClient implementation."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from .client import SqsClient
from .dispatcher import RequestDispatcher
from .exceptions import SqsError, SqsErrorCodes
from .models import SignatureVersion, SqsConfig, to_signature_version
from .queue import Queue


class HttpSqsClient(SqsClient):
    """Service client for the 2007-05-01 query API."""

    # Option names accepted the way the query API spells them.
    OPTION_ALIASES: dict[str, str] = {
        "AWSAccessKeyId": "access_key_id",
        "SecretKey": "secret_key",
        "Endpoint": "endpoint",
        "SignatureVersion": "signature_version",
    }

    def __init__(self, config: SqsConfig) -> None:
        self._config = config
        self._dispatcher = RequestDispatcher(config)

    @classmethod
    def from_keys(cls, access_key_id: str, secret_key: str, **options: Any) -> HttpSqsClient:
        """Build a client from credentials plus SqsConfig fields or extra options.

        Both the field names (``endpoint``) and the API spellings
        (``Endpoint``, ``SignatureVersion``) are recognized; anything else
        is kept in ``SqsConfig.options``.
        """
        names = {f.name for f in dataclasses.fields(SqsConfig)} - {"options"}
        known: dict[str, Any] = {"access_key_id": access_key_id, "secret_key": secret_key}
        extra: dict[str, Any] = {}
        for key, value in options.items():
            name = cls.OPTION_ALIASES.get(key, key)
            if name in names:
                known[name] = value
            else:
                extra[key] = value
        return cls(SqsConfig(options=extra, **known))

    @property
    def config(self) -> SqsConfig:
        return self._config

    @property
    def access_key_id(self) -> str:
        return self._config.access_key_id

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    @endpoint.setter
    def endpoint(self, value: str) -> None:
        self._config.endpoint = value

    @property
    def signature_version(self) -> SignatureVersion:
        return self._config.signature_version

    @signature_version.setter
    def signature_version(self, value: int) -> None:
        self._config.signature_version = to_signature_version(value)

    def display_name(self) -> str:
        return self._config.endpoint

    def dispatch(self, params: Mapping[str, Any], force_array: tuple[str, ...] = ()) -> dict[str, Any]:
        return self._dispatcher.dispatch(params, force_array)

    def get_queue(self, url: str) -> Queue:
        return Queue(dataclasses.replace(self._config, endpoint=url, options=dict(self._config.options)))

    def create_queue(self, name: str, params: Mapping[str, Any] | None = None) -> Queue:
        request = {**(params or {}), "Action": "CreateQueue", "QueueName": name}
        data = self.dispatch(request)
        url = data.get("QueueUrl")
        if not url:
            raise SqsError(
                code=SqsErrorCodes.MISSING_FIELD,
                message="ERROR: On calling CreateQueue: response did not contain a QueueUrl\n",
            )
        return self.get_queue(url)

    def list_queues(self, params: Mapping[str, Any] | None = None) -> list[Queue]:
        request = {**(params or {}), "Action": "ListQueues"}
        data = self.dispatch(request, ("QueueUrl",))
        return [self.get_queue(url) for url in data.get("QueueUrl", [])]
