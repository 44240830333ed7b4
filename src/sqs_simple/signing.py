"""Query request signing (SignatureVersion 1 and legacy)."""

from __future__ import annotations

import base64
import hashlib
import hmac
import time
from collections.abc import Mapping
from urllib.parse import quote

from .models import SignatureVersion

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def timestamp(epoch: float | None = None) -> str:
    """Format a Unix time (default: now) as a UTC ISO-8601 timestamp."""
    if epoch is None:
        epoch = time.time()
    return time.strftime(TIMESTAMP_FORMAT, time.gmtime(epoch))


def escape(value: str) -> str:
    """Percent-escape everything except RFC 3986 unreserved characters."""
    return quote(value, safe="")


def string_to_sign(params: Mapping[str, str], version: SignatureVersion) -> str:
    """Build the string the HMAC is computed over.

    Version 1 concatenates name and value of every parameter ordered by
    upper-cased name. The legacy scheme only covers Action and Timestamp.
    """
    if version == SignatureVersion.V1:
        return "".join(
            key + params[key]
            for key in sorted(params, key=str.upper)
            if params[key] is not None
        )
    return (params.get("Action") or "") + (params.get("Timestamp") or "")


def compute_signature(secret_key: str, data: str) -> str:
    """Return the escaped Base64 HMAC-SHA1 of data."""
    digest = hmac.new(secret_key.encode(), data.encode(), hashlib.sha1).digest()
    return escape(base64.b64encode(digest).decode("ascii"))
