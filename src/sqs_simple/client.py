"""SqsClient abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from .queue import Queue


class SqsClient(ABC):
    """Queue management client."""

    @abstractmethod
    def create_queue(self, name: str, params: Mapping[str, Any] | None = None) -> Queue:
        """Create a queue and return a handle bound to its URL."""
        ...

    @abstractmethod
    def list_queues(self, params: Mapping[str, Any] | None = None) -> list[Queue]:
        """Return handles for every queue visible to these credentials."""
        ...

    @abstractmethod
    def get_queue(self, url: str) -> Queue:
        """Return a handle for an existing queue URL without a request."""
        ...
