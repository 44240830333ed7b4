"""Signed request dispatch shared by the service client and queue handles."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from typing import Any
from xml.etree import ElementTree

import httpx

from . import signing, xml_data
from .exceptions import SqsError, SqsErrorCodes
from .models import PreparedRequest, SignatureVersion, SqsConfig

SQS_VERSION = "2007-05-01"

# Bodies larger than this are sent by POST instead of in the query string.
MAX_GET_MSG_SIZE = 4096

logger = logging.getLogger(__name__)


class RequestDispatcher:
    """Assembles, signs and sends one query API request per call."""

    def __init__(self, config: SqsConfig) -> None:
        self._config = config

    @property
    def config(self) -> SqsConfig:
        return self._config

    def _make_client(self) -> httpx.Client:
        return httpx.Client(timeout=self._config.timeout_seconds)

    def prepare(self, params: Mapping[str, Any]) -> PreparedRequest:
        """Build the signed GET or POST request for the given parameters."""
        merged: dict[str, Any] = {
            "AWSAccessKeyId": self._config.access_key_id,
            "Version": SQS_VERSION,
            **params,
        }
        query: dict[str, str] = {k: str(v) for k, v in merged.items() if v is not None}

        if "Timestamp" not in query and "Expires" not in query:
            query["Timestamp"] = signing.timestamp()

        message: str | None = None
        body = query.get("MessageBody")
        if body is not None and len(body.encode("utf-8")) > MAX_GET_MSG_SIZE:
            message = query.pop("MessageBody")

        version = self._config.signature_version
        if version == SignatureVersion.V1:
            query["SignatureVersion"] = str(int(version))
        signature = signing.compute_signature(
            self._config.secret_key,
            signing.string_to_sign(query, version),
        )
        query["Signature"] = signature
        if "MessageBody" in query:
            query["MessageBody"] = signing.escape(query["MessageBody"])

        url = self._config.endpoint + "/?" + "&".join(f"{k}={v}" for k, v in query.items())
        action = query.get("Action", "")
        if message is not None:
            return PreparedRequest(
                action=action,
                method="POST",
                url=url,
                body=message,
                headers={"Content-Type": "text/plain"},
            )
        return PreparedRequest(action=action, method="GET", url=url)

    def send(self, request: PreparedRequest) -> httpx.Response:
        try:
            with self._make_client() as client:
                if request.method == "POST":
                    return client.post(request.url, content=request.body, headers=request.headers)
                return client.get(request.url)
        except httpx.HTTPError as e:
            raise SqsError(
                code=SqsErrorCodes.TRANSPORT_ERROR,
                message=f"ERROR: On calling {request.action}: {e}\n",
                cause=e,
            ) from e

    def _handle_error(self, resp: httpx.Response, action: str) -> None:
        if resp.is_success:
            return
        status_line = f"{resp.status_code} {resp.reason_phrase}".rstrip()
        detail = xml_data.find_error_message(resp.content)
        logger.warning(
            "SQS request failed",
            extra={"action": action, "status": resp.status_code, "detail": detail},
        )
        message = f"ERROR: On calling {action}: {status_line}"
        if detail:
            message += f" ({detail})"
        raise SqsError(
            code=SqsErrorCodes.REQUEST_FAILED,
            message=message + "\n",
        )

    def dispatch(
        self,
        params: Mapping[str, Any],
        force_array: Collection[str] = (),
    ) -> dict[str, Any]:
        """Send a signed request and return the deserialized response.

        Args:
            params: operation parameters, Action included
            force_array: response element names always returned as lists

        Raises:
            SqsError: the request could not be sent, the service answered
                with a non-2xx status, or the response is not valid XML
        """
        request = self.prepare(params)
        logger.debug(
            "SQS dispatch",
            extra={
                "action": request.action,
                "method": request.method,
                "endpoint": self._config.endpoint,
            },
        )
        resp = self.send(request)
        self._handle_error(resp, request.action)
        try:
            return xml_data.parse(resp.content, force_array)
        except ElementTree.ParseError as e:
            raise SqsError(
                code=SqsErrorCodes.PARSE_ERROR,
                message=f"ERROR: On calling {request.action}: malformed response: {e}\n",
                cause=e,
            ) from e
