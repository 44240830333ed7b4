"""RequestDispatcher unit tests (respx mocks)."""

import base64
import hashlib
import hmac
from urllib.parse import quote

import httpx
import pytest
import respx
from sqs_simple.dispatcher import MAX_GET_MSG_SIZE, SQS_VERSION, RequestDispatcher
from sqs_simple.exceptions import SqsError, SqsErrorCodes
from sqs_simple.models import SignatureVersion, SqsConfig

BASE_URL = "http://queue.amazonaws.com"
TIMESTAMP = "2007-06-30T00:00:00Z"


def make_dispatcher(version: SignatureVersion = SignatureVersion.V1) -> RequestDispatcher:
    return RequestDispatcher(
        SqsConfig(access_key_id="AKID", secret_key="secret", signature_version=version)
    )


def query_of(url: str) -> dict[str, str]:
    """Split a URL query into raw (still escaped) key/value pairs."""
    pairs = url.split("?", 1)[1].split("&")
    return dict(pair.split("=", 1) for pair in pairs)


def expected_signature(data: str) -> str:
    digest = hmac.new(b"secret", data.encode(), hashlib.sha1).digest()
    return quote(base64.b64encode(digest).decode(), safe="")


def test_prepare_adds_common_parameters() -> None:
    """AWSAccessKeyId, Version, Timestamp, SignatureVersion and Signature are added."""
    request = make_dispatcher().prepare({"Action": "ListQueues"})
    query = query_of(request.url)
    assert request.method == "GET"
    assert request.url.startswith(f"{BASE_URL}/?")
    assert query["AWSAccessKeyId"] == "AKID"
    assert query["Version"] == SQS_VERSION
    assert query["Action"] == "ListQueues"
    assert query["SignatureVersion"] == "1"
    assert "Timestamp" in query
    assert "Signature" in query


def test_prepare_caller_parameters_override_defaults() -> None:
    """Caller supplied values win over the common parameters."""
    request = make_dispatcher().prepare({"Action": "ListQueues", "Version": "2006-04-01"})
    assert query_of(request.url)["Version"] == "2006-04-01"


def test_prepare_keeps_caller_timestamp() -> None:
    """A caller Timestamp is used as given."""
    request = make_dispatcher().prepare({"Action": "ListQueues", "Timestamp": TIMESTAMP})
    assert query_of(request.url)["Timestamp"] == TIMESTAMP


def test_prepare_expires_suppresses_timestamp() -> None:
    """Expires and Timestamp are never both present."""
    request = make_dispatcher().prepare({"Action": "ListQueues", "Expires": TIMESTAMP})
    query = query_of(request.url)
    assert query["Expires"] == TIMESTAMP
    assert "Timestamp" not in query


def test_prepare_drops_none_values() -> None:
    """None values are neither signed nor sent."""
    request = make_dispatcher().prepare(
        {"Action": "ListQueues", "QueueNamePrefix": None, "Timestamp": TIMESTAMP}
    )
    assert "QueueNamePrefix" not in query_of(request.url)


def test_prepare_v1_signature() -> None:
    """Version 1 signs every parameter sorted by upper-cased name."""
    request = make_dispatcher().prepare(
        {"Action": "CreateQueue", "QueueName": "q1", "Timestamp": TIMESTAMP}
    )
    signed = (
        "ActionCreateQueue"
        "AWSAccessKeyIdAKID"
        "QueueNameq1"
        "SignatureVersion1"
        f"Timestamp{TIMESTAMP}"
        f"Version{SQS_VERSION}"
    )
    assert query_of(request.url)["Signature"] == expected_signature(signed)


def test_prepare_v1_signature_is_order_independent() -> None:
    """Insertion order of the caller parameters does not affect the signature."""
    dispatcher = make_dispatcher()
    a = dispatcher.prepare({"Action": "CreateQueue", "QueueName": "q1", "Timestamp": TIMESTAMP})
    b = dispatcher.prepare({"Timestamp": TIMESTAMP, "QueueName": "q1", "Action": "CreateQueue"})
    assert query_of(a.url)["Signature"] == query_of(b.url)["Signature"]


def test_prepare_legacy_signature() -> None:
    """The legacy scheme signs Action + Timestamp and sends no SignatureVersion."""
    request = make_dispatcher(SignatureVersion.LEGACY).prepare(
        {"Action": "CreateQueue", "QueueName": "q1", "Timestamp": TIMESTAMP}
    )
    query = query_of(request.url)
    assert "SignatureVersion" not in query
    assert query["Signature"] == expected_signature(f"CreateQueue{TIMESTAMP}")


def test_prepare_small_message_body_uses_get() -> None:
    """A body at the size limit stays in the escaped query string."""
    body = "a b+" * (MAX_GET_MSG_SIZE // 4)
    assert len(body.encode()) == MAX_GET_MSG_SIZE
    request = make_dispatcher().prepare(
        {"Action": "SendMessage", "MessageBody": body, "Timestamp": TIMESTAMP}
    )
    assert request.method == "GET"
    assert request.body is None
    assert query_of(request.url)["MessageBody"] == quote(body, safe="")


def test_prepare_message_body_signed_unescaped() -> None:
    """The signature covers the raw body, the URL carries the escaped body."""
    request = make_dispatcher().prepare(
        {"Action": "SendMessage", "MessageBody": "hello world", "Timestamp": TIMESTAMP}
    )
    signed = (
        "ActionSendMessage"
        "AWSAccessKeyIdAKID"
        "MessageBodyhello world"
        "SignatureVersion1"
        f"Timestamp{TIMESTAMP}"
        f"Version{SQS_VERSION}"
    )
    query = query_of(request.url)
    assert query["MessageBody"] == "hello%20world"
    assert query["Signature"] == expected_signature(signed)


def test_prepare_large_message_body_uses_post() -> None:
    """A body over the limit is sent as a text/plain POST and left out of the query."""
    body = "x" * (MAX_GET_MSG_SIZE + 1)
    request = make_dispatcher().prepare(
        {"Action": "SendMessage", "MessageBody": body, "Timestamp": TIMESTAMP}
    )
    query = query_of(request.url)
    assert request.method == "POST"
    assert request.body == body
    assert request.headers == {"Content-Type": "text/plain"}
    assert "MessageBody" not in query
    signed = (
        "ActionSendMessage"
        "AWSAccessKeyIdAKID"
        "SignatureVersion1"
        f"Timestamp{TIMESTAMP}"
        f"Version{SQS_VERSION}"
    )
    assert query["Signature"] == expected_signature(signed)


def test_prepare_size_limit_counts_bytes() -> None:
    """Multi-byte characters count by their UTF-8 length."""
    body = "é" * (MAX_GET_MSG_SIZE // 2 + 1)
    assert len(body) <= MAX_GET_MSG_SIZE
    request = make_dispatcher().prepare({"Action": "SendMessage", "MessageBody": body})
    assert request.method == "POST"


def test_prepare_uses_configured_endpoint() -> None:
    """The URL is built on the configured endpoint."""
    dispatcher = RequestDispatcher(
        SqsConfig(access_key_id="AKID", secret_key="secret", endpoint=f"{BASE_URL}/123/q1")
    )
    request = dispatcher.prepare({"Action": "DeleteQueue"})
    assert request.url.startswith(f"{BASE_URL}/123/q1/?")
    assert request.action == "DeleteQueue"


@respx.mock
def test_dispatch_success_parses_xml() -> None:
    """A 200 response is returned as a dict."""
    route = respx.get(url__startswith=f"{BASE_URL}/").mock(
        return_value=httpx.Response(
            200,
            text="<ListQueuesResponse><QueueUrl>http://queue.amazonaws.com/123/q1</QueueUrl>"
            "</ListQueuesResponse>",
        )
    )
    data = make_dispatcher().dispatch({"Action": "ListQueues"}, ("QueueUrl",))
    assert data == {"QueueUrl": ["http://queue.amazonaws.com/123/q1"]}
    assert route.call_count == 1


@respx.mock
def test_dispatch_post_sends_text_body() -> None:
    """Large bodies go out as the POST content."""
    body = "y" * (MAX_GET_MSG_SIZE * 2)
    route = respx.post(url__startswith=f"{BASE_URL}/").mock(
        return_value=httpx.Response(
            200, text="<SendMessageResponse><MessageId>m1</MessageId></SendMessageResponse>"
        )
    )
    data = make_dispatcher().dispatch({"Action": "SendMessage", "MessageBody": body})
    assert data == {"MessageId": "m1"}
    sent = route.calls.last.request
    assert sent.headers["Content-Type"] == "text/plain"
    assert sent.content == body.encode()
    assert "MessageBody" not in str(sent.url)


@respx.mock
def test_dispatch_error_includes_service_message() -> None:
    """A 403 error carries the action, status line and service message."""
    respx.get(url__startswith=f"{BASE_URL}/").mock(
        return_value=httpx.Response(
            403, text="<Error><Message>Signature does not match</Message></Error>"
        )
    )
    with pytest.raises(SqsError) as exc_info:
        make_dispatcher().dispatch({"Action": "ListQueues"})
    assert exc_info.value.code == SqsErrorCodes.REQUEST_FAILED
    assert exc_info.value.message == (
        "ERROR: On calling ListQueues: 403 Forbidden (Signature does not match)\n"
    )
    assert "Signature does not match" in str(exc_info.value)


@respx.mock
def test_dispatch_error_without_parseable_body() -> None:
    """Unparseable error bodies still give the status line."""
    respx.get(url__startswith=f"{BASE_URL}/").mock(
        return_value=httpx.Response(500, text="Internal Server Error")
    )
    with pytest.raises(SqsError) as exc_info:
        make_dispatcher().dispatch({"Action": "ListQueues"})
    assert exc_info.value.message == "ERROR: On calling ListQueues: 500 Internal Server Error\n"


@respx.mock
def test_dispatch_malformed_success_body() -> None:
    """Malformed XML on a 200 raises SqsError(PARSE_ERROR)."""
    respx.get(url__startswith=f"{BASE_URL}/").mock(return_value=httpx.Response(200, text="<oops"))
    with pytest.raises(SqsError) as exc_info:
        make_dispatcher().dispatch({"Action": "ListQueues"})
    assert exc_info.value.code == SqsErrorCodes.PARSE_ERROR
    assert exc_info.value.__cause__ is not None


def test_dispatch_network_error() -> None:
    """Connection failures raise SqsError(TRANSPORT_ERROR)."""
    with respx.mock:
        respx.get(url__startswith=f"{BASE_URL}/").mock(
            side_effect=httpx.ConnectError("Connection refused")
        )
        with pytest.raises(SqsError) as exc_info:
            make_dispatcher().dispatch({"Action": "ListQueues"})
        assert exc_info.value.code == SqsErrorCodes.TRANSPORT_ERROR
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
