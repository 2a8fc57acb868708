"""Integration tests for POST /api/send-invitation."""

import pytest

from tripindo.main import app
from tripindo.services.email import get_mailer

VALID_BODY = {
    "tripName": "Bali Getaway",
    "inviterEmail": "ayu@mail.com",
    "inviteeEmail": "budi@mail.com",
    "tripId": "4b1f7c4e-61d5-4c7e-9d5a-2f0c7f6b2d11",
}


async def test_sends_invitation_email(client, resend):
    response = await client.post("/api/send-invitation", json=VALID_BODY)

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Invitation email sent",
        "data": {"id": "email-1"},
    }
    assert resend.sent[0]["to"] == ["budi@mail.com"]
    assert resend.sent[0]["subject"] == "Trip invitation: Bali Getaway"
    assert "Bali Getaway" in resend.sent[0]["html"]


@pytest.mark.parametrize("field", ["tripName", "inviterEmail", "inviteeEmail", "tripId"])
async def test_missing_field_is_rejected(client, resend, field):
    body = {key: value for key, value in VALID_BODY.items() if key != field}

    response = await client.post("/api/send-invitation", json=body)

    assert response.status_code == 400
    assert field in response.json()["error"]
    assert resend.requests == []


async def test_blank_field_is_rejected(client):
    response = await client.post("/api/send-invitation", json={**VALID_BODY, "tripName": "   "})

    assert response.status_code == 400
    assert "tripName" in response.json()["error"]


async def test_non_json_body_is_rejected(client):
    response = await client.post(
        "/api/send-invitation", content=b"not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400


async def test_provider_failure_returns_500(client, resend):
    resend.status_code = 422

    response = await client.post("/api/send-invitation", json=VALID_BODY)

    assert response.status_code == 500
    assert "422" in response.json()["error"]


async def test_missing_api_key_returns_500(client, resend):
    app.dependency_overrides[get_mailer] = lambda: resend.mailer(api_key="")

    response = await client.post("/api/send-invitation", json=VALID_BODY)

    assert response.status_code == 500
    assert "RESEND_API_KEY" in response.json()["error"]
    assert resend.requests == []


async def test_html_in_trip_name_is_escaped(client, resend):
    await client.post("/api/send-invitation", json={**VALID_BODY, "tripName": "<b>Bali</b>"})

    html = resend.sent[0]["html"]
    assert "<b>Bali</b>" not in html
    assert "&lt;b&gt;Bali&lt;/b&gt;" in html


async def test_non_json_provider_reply_returns_500(client, resend):
    resend.text_body = "Accepted"

    response = await client.post("/api/send-invitation", json=VALID_BODY)

    assert response.status_code == 500
    assert response.json()["error"] == "Email provider returned an invalid response"
