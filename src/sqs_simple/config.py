"""Load SqsConfig from a YAML file, with credentials from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import SqsError, SqsErrorCodes
from .models import BASE_ENDPOINT, SignatureVersion, SqsConfig

# Environment variables consulted when the file leaves a credential out.
ENV_CREDENTIALS = {
    "access_key_id": "AWS_ACCESS_KEY_ID",
    "secret_key": "AWS_SECRET_ACCESS_KEY",
}


class SqsSection(BaseModel):
    """The `sqs:` section of a config file."""

    access_key_id: str = Field(min_length=1)
    secret_key: str = Field(min_length=1)
    endpoint: str = BASE_ENDPOINT
    signature_version: SignatureVersion = SignatureVersion.V1
    timeout_seconds: float = Field(default=10.0, gt=0)
    options: dict[str, Any] = Field(default_factory=dict)


def _config_error(message: str, cause: Exception | None = None) -> SqsError:
    return SqsError(code=SqsErrorCodes.CONFIGURATION_ERROR, message=message, cause=cause)


def load(path: Path, environ: Mapping[str, str] | None = None) -> SqsConfig:
    """Read the `sqs:` section of a YAML file and return an SqsConfig.

    access_key_id and secret_key may be left out of the file; they are then
    taken from AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY in environ
    (os.environ by default). Values in the file win.

    Raises:
        SqsError: CONFIGURATION_ERROR when the file cannot be read, is not
            YAML, or does not describe a valid configuration
    """
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as e:
        raise _config_error(f"Failed to read config file: {path}", e) from e
    except yaml.YAMLError as e:
        raise _config_error(f"Failed to parse YAML: {path}", e) from e

    section = document.get("sqs") if isinstance(document, dict) else None
    if not isinstance(section, dict):
        raise _config_error(f"Config file has no `sqs` section: {path}")

    env = os.environ if environ is None else environ
    values = dict(section)
    for field_name, variable in ENV_CREDENTIALS.items():
        if not values.get(field_name) and env.get(variable):
            values[field_name] = env[variable]

    try:
        validated = SqsSection.model_validate(values)
    except ValidationError as e:
        raise _config_error(f"Config validation failed: {e}", e) from e
    return SqsConfig(**validated.model_dump())
