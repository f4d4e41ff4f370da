"""LINE Messaging API push adapter."""

import os

import requests
import structlog
from requests import RequestException

from storefront.messaging.port import MessagingPort, PushResult

logger = structlog.get_logger(__name__)

PUSH_URL = "https://api.line.me/v2/bot/message/push"
DEFAULT_TIMEOUT_SECONDS = 10.0


class LineMessenger(MessagingPort):
    def __init__(
        self,
        access_token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.access_token = (
            access_token if access_token is not None else os.environ.get("LINE_CHANNEL_ACCESS_TOKEN", "")
        )
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def is_configured(self) -> bool:
        return bool(self.access_token)

    def push(self, account_id: str, text: str) -> PushResult:
        if not self.is_configured:
            return PushResult(success=False, failure_reason="LINE is not configured")

        try:
            response = self.session.post(
                PUSH_URL,
                json={"to": account_id, "messages": [{"type": "text", "text": text}]},
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout,
            )
        except RequestException as exc:
            logger.warning("LINE push failed", error=str(exc))
            return PushResult(success=False, failure_reason=str(exc))

        if not response.ok:
            logger.warning("LINE push rejected", status_code=response.status_code, body=response.text[:500])
            return PushResult(success=False, failure_reason=response.text[:500] or response.reason)
        return PushResult(success=True)
