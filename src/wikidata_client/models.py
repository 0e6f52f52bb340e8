"""Result and error types for Wikidata requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class SetupError(RuntimeError):
    """Remote services cannot be used at all; the batch must not start."""


@dataclass
class FetchError:
    """Failure of a single remote call."""
    kind: str  # "network", "http", "timeout", "malformed" or "api"
    message: str
    status_code: Optional[int] = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.kind} error (status {self.status_code}): {self.message}"
        return f"{self.kind} error: {self.message}"


@dataclass
class FetchResult(Generic[T]):
    """Value of a remote call, or the error that prevented it."""
    value: Optional[T] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        """Whether the call succeeded."""
        return self.error is None
