"""Messaging adapter registry.

``MESSAGING_ADAPTER=line`` (the default) pushes through the LINE Messaging
API; ``MESSAGING_ADAPTER=fake`` records messages in memory.
"""

import os

from storefront.messaging.port import MessagingPort

_current_messenger: MessagingPort | None = None


def get_messenger() -> MessagingPort:
    global _current_messenger
    if _current_messenger is None:
        adapter = os.environ.get("MESSAGING_ADAPTER", "line").lower()
        if adapter == "fake":
            from storefront.messaging.fake_adapter import FakeMessenger

            _current_messenger = FakeMessenger()
        elif adapter == "line":
            from storefront.messaging.line_adapter import LineMessenger

            _current_messenger = LineMessenger()
        else:
            raise ValueError(f"Unknown messaging adapter: {adapter}")
    return _current_messenger


def set_messenger(messenger: MessagingPort) -> None:
    global _current_messenger
    _current_messenger = messenger


def reset_messenger() -> None:
    """Reset messenger singleton (useful for testing)."""
    global _current_messenger
    _current_messenger = None
