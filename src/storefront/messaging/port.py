"""Push messaging port — abstract interface for seller notifications."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PushResult:
    """Result of a push attempt."""

    success: bool
    failure_reason: str | None = None


class MessagingPort(ABC):
    """Abstract interface for push messaging adapters."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        ...

    @abstractmethod
    def push(self, account_id: str, text: str) -> PushResult:
        """Push a plain-text message to a linked account."""
        ...
