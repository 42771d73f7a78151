"""Email sending via Resend API.

Plain-text confirmation emails are delivered with a single HTTP POST to
Resend. Delivery failures never raise: the sender reports False and logs,
and the caller decides what a missed confirmation means.
"""

import logging
from typing import Protocol

import httpx

from profile_wizard.core.config import settings

logger = logging.getLogger(__name__)

_RESEND_API_URL = "https://api.resend.com/emails"
_RESEND_TIMEOUT = 10.0


class NotificationSender(Protocol):
    """Anything that can deliver a plain-text message to an address."""

    async def send(self, to_address: str, subject: str, body: str) -> bool:
        """Deliver one message.

        Returns:
            True if the message was accepted for delivery, False otherwise.
        """
        ...


class ResendEmailSender:
    """NotificationSender backed by the Resend HTTP API."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        from_address: str | None = None,
        enabled: bool | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the sender.

        Args:
            api_key: Resend API key. Defaults to ``settings.resend_api_key``.
            from_address: Sender address. Defaults to ``settings.email_from``.
            enabled: When False, nothing is sent and ``send`` reports True.
                Defaults to ``settings.notifications_enabled``.
            transport: Optional httpx transport (tests inject a mock).
        """
        self._api_key = (
            api_key
            if api_key is not None
            else settings.resend_api_key.get_secret_value()
        )
        self._from_address = from_address or settings.email_from
        self._enabled = settings.notifications_enabled if enabled is None else enabled
        self._transport = transport

    async def send(self, to_address: str, subject: str, body: str) -> bool:
        if not self._enabled:
            logger.info("Notifications disabled; skipping email to %s", to_address)
            return True

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    _RESEND_API_URL,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    json={
                        "from": self._from_address,
                        "to": to_address,
                        "subject": subject,
                        "text": body,
                    },
                    timeout=_RESEND_TIMEOUT,
                )
                resp.raise_for_status()
        except httpx.HTTPError:
            logger.warning("Failed to send confirmation email", exc_info=True)
            return False
        return True
