"""Fire-and-forget seller notifications.

Pushes run on a background thread pool. The request that placed the order
never waits for them, and a push that fails or raises is logged and
dropped: a lost notification never affects the order.
"""

from concurrent.futures import Future, ThreadPoolExecutor

import structlog

from storefront.messaging.port import MessagingPort
from storefront.notification.templates import render_new_order

logger = structlog.get_logger(__name__)

DEFAULT_WORKERS = 4


class NotificationDispatcher:
    def __init__(self, messenger: MessagingPort, executor: ThreadPoolExecutor | None = None):
        self.messenger = messenger
        self.executor = executor or ThreadPoolExecutor(max_workers=DEFAULT_WORKERS, thread_name_prefix="notify")

    def notify_new_order(self, order, seller) -> Future | None:
        """Queue a new-order push to ``seller``. Returns the pending future, or ``None`` if skipped."""
        account_id = seller.messaging_account_id
        if not account_id:
            logger.info("Seller has no linked messaging account, skipping", order_number=order.order_number)
            return None
        if not self.messenger.is_configured:
            logger.info("Messaging not configured, skipping notification", order_number=order.order_number)
            return None

        text = render_new_order(order)
        return self.executor.submit(self._push, account_id, text, order.order_number)

    def _push(self, account_id: str, text: str, order_number: str) -> bool:
        try:
            result = self.messenger.push(account_id, text)
        except Exception as exc:
            logger.error("New-order notification raised", order_number=order_number, error=str(exc))
            return False

        if not result.success:
            logger.warning(
                "New-order notification failed",
                order_number=order_number,
                reason=result.failure_reason,
            )
            return False

        logger.info("New-order notification sent", order_number=order_number)
        return True

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)
