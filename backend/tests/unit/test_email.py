"""Tests for ResendEmailSender: confirmation delivery over the Resend API.

Covers:
- Request shape sent to Resend (auth header, from/to/subject/text)
- Failure handling: HTTP errors and transport errors return False
- Disabled notifications skip the network entirely
"""

import json

import httpx

from profile_wizard.core.email import ResendEmailSender

_API_KEY = "re_test_key"  # nosec B105


def _sender(handler, *, enabled: bool = True) -> ResendEmailSender:
    return ResendEmailSender(
        api_key=_API_KEY,
        from_address="wizard@example.com",
        enabled=enabled,
        transport=httpx.MockTransport(handler),
    )


class TestSend:
    """Successful and failed deliveries."""

    async def test_posts_plain_text_email(self) -> None:
        """The Resend payload carries the message fields and bearer key."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"id": "email-1"})

        sent = await _sender(handler).send("jane@x.com", "Subject", "Body")

        assert sent is True
        (request,) = requests
        assert str(request.url) == "https://api.resend.com/emails"
        assert request.headers["Authorization"] == f"Bearer {_API_KEY}"
        assert json.loads(request.content) == {
            "from": "wizard@example.com",
            "to": "jane@x.com",
            "subject": "Subject",
            "text": "Body",
        }

    async def test_error_status_returns_false(self) -> None:
        """A rejected request is reported, not raised."""
        sender = _sender(lambda request: httpx.Response(422, json={"message": "bad"}))

        assert await sender.send("jane@x.com", "Subject", "Body") is False

    async def test_transport_error_returns_false(self) -> None:
        """Network failures are reported, not raised."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        assert await _sender(handler).send("jane@x.com", "Subject", "Body") is False

    async def test_disabled_sender_makes_no_request(self) -> None:
        """With notifications off nothing is sent and delivery counts as done."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200)

        sent = await _sender(handler, enabled=False).send("jane@x.com", "S", "B")

        assert sent is True
        assert requests == []
