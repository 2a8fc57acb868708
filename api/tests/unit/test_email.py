"""Unit tests for invitation email rendering and delivery."""

import json

import httpx
import pytest

from tripindo.errors import EmailDeliveryError
from tripindo.services.email import InvitationMailer, invitation_subject, render_invitation_email


def test_template_embeds_trip_inviter_and_link():
    html = render_invitation_email("Bali Getaway", "ayu@mail.com", app_url="https://tripindo.app/")

    assert "Bali Getaway" in html
    assert "ayu@mail.com" in html
    assert 'href="https://tripindo.app/dashboard"' in html


def test_template_escapes_interpolated_values():
    html = render_invitation_email('<script>alert("x")</script>', "a&b@mail.com", app_url="https://tripindo.app")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "a&amp;b@mail.com" in html


def test_subject():
    assert invitation_subject("Bali Getaway") == "Trip invitation: Bali Getaway"


async def test_send_posts_to_resend():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"id": "email-1"})

    mailer = InvitationMailer(
        api_key="re_key",
        api_url="https://api.resend.com/emails",
        sender="Trip Indo <onboarding@resend.dev>",
        transport=httpx.MockTransport(handler),
    )

    data = await mailer.send_invitation("Bali Getaway", "ayu@mail.com", "budi@mail.com")

    assert data == {"id": "email-1"}
    request = requests[0]
    assert str(request.url) == "https://api.resend.com/emails"
    assert request.headers["Authorization"] == "Bearer re_key"
    body = json.loads(request.content)
    assert body["from"] == "Trip Indo <onboarding@resend.dev>"
    assert body["to"] == ["budi@mail.com"]
    assert body["subject"] == "Trip invitation: Bali Getaway"


async def test_missing_api_key_is_a_delivery_failure():
    mailer = InvitationMailer(api_key="", transport=httpx.MockTransport(lambda request: httpx.Response(200)))

    assert not mailer.is_configured
    with pytest.raises(EmailDeliveryError, match="RESEND_API_KEY"):
        await mailer.send("budi@mail.com", "subject", "<p>hi</p>")


async def test_provider_rejection_raises():
    mailer = InvitationMailer(
        api_key="re_key",
        transport=httpx.MockTransport(lambda request: httpx.Response(403, json={"message": "forbidden"})),
    )

    with pytest.raises(EmailDeliveryError, match="403"):
        await mailer.send("budi@mail.com", "subject", "<p>hi</p>")


async def test_unreachable_provider_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    mailer = InvitationMailer(api_key="re_key", transport=httpx.MockTransport(handler))

    with pytest.raises(EmailDeliveryError, match="unreachable"):
        await mailer.send("budi@mail.com", "subject", "<p>hi</p>")


@pytest.mark.parametrize(
    "reply",
    [httpx.Response(200, text="ok"), httpx.Response(200, json=["email-1"])],
)
async def test_unexpected_provider_body_raises(reply):
    mailer = InvitationMailer(api_key="re_key", transport=httpx.MockTransport(lambda request: reply))

    with pytest.raises(EmailDeliveryError, match="invalid response"):
        await mailer.send("budi@mail.com", "subject", "<p>hi</p>")
