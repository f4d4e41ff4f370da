"""Fake messaging adapter — records pushed messages for testing."""

from storefront.messaging.port import MessagingPort, PushResult


class FakeMessenger(MessagingPort):
    """Messenger that records pushes in memory for test assertions."""

    def __init__(self, configured: bool = True):
        self.configured = configured
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
        self.raise_error: Exception | None = None

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Push delivery failed",
        raise_error: Exception | None = None,
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.raise_error = raise_error

    @property
    def is_configured(self) -> bool:
        return self.configured

    def push(self, account_id: str, text: str) -> PushResult:
        if self.raise_error is not None:
            raise self.raise_error
        if not self.should_succeed:
            return PushResult(success=False, failure_reason=self.failure_reason)

        self.sent_messages.append({"account_id": account_id, "text": text})
        return PushResult(success=True)

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
        self.raise_error = None
