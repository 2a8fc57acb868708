"""Integration tests for the invitation lifecycle."""

from sqlalchemy import func, select

from conftest import auth_headers, create_trip, sign_up
from tripindo.models.participant import TripParticipant


async def invite(client, token, trip_id, email):
    return await client.post(f"/trips/{trip_id}/invitations", json={"email": email}, headers=auth_headers(token))


async def participant_count(session_factory):
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(TripParticipant))
        return result.scalar_one()


async def test_owner_invites_and_email_is_sent(client, resend):
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"], title="Bali Getaway")

    response = await invite(client, owner["access_token"], trip["id"], "Budi@Mail.com")

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["email_sent"] is True
    assert body["invitation"]["status"] == "pending"
    assert body["invitation"]["invitee_email"] == "budi@mail.com"
    assert resend.sent[0]["to"] == ["budi@mail.com"]
    assert resend.sent[0]["subject"] == "Trip invitation: Bali Getaway"
    assert "owner@mail.com" in resend.sent[0]["html"]


async def test_email_failure_keeps_invitation(client, resend):
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"])
    resend.status_code = 500

    response = await invite(client, owner["access_token"], trip["id"], "budi@mail.com")
    sent = await client.get("/invitations/sent", headers=auth_headers(owner["access_token"]))

    assert response.status_code == 201
    assert response.json()["email_sent"] is False
    assert response.json()["message"].startswith("Invitation created but the email could not be sent")
    assert [item["invitee_email"] for item in sent.json()] == ["budi@mail.com"]


async def test_non_json_email_reply_keeps_invitation(client, resend):
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"])
    resend.text_body = "Accepted"

    response = await invite(client, owner["access_token"], trip["id"], "budi@mail.com")

    assert response.status_code == 201
    assert response.json()["email_sent"] is False
    assert response.json()["invitation"]["status"] == "pending"


async def test_duplicate_pending_invitation_conflicts(client):
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"])

    await invite(client, owner["access_token"], trip["id"], "budi@mail.com")
    second = await invite(client, owner["access_token"], trip["id"], "BUDI@mail.com")

    assert second.status_code == 409
    assert second.json()["code"] == "CONFLICT"


async def test_only_owner_invites(client):
    owner = await sign_up(client, "owner@mail.com")
    stranger = await sign_up(client, "stranger@mail.com")
    trip = await create_trip(client, owner["access_token"])

    response = await invite(client, stranger["access_token"], trip["id"], "budi@mail.com")

    assert response.status_code == 403


async def test_received_invitations_embed_trip_and_inviter(client):
    owner = await sign_up(client, "owner@mail.com", first_name="Wayan", last_name="Sudarma")
    trip = await create_trip(client, owner["access_token"], budget=2500, title="Flores")
    await invite(client, owner["access_token"], trip["id"], "budi@mail.com")
    budi = await sign_up(client, "budi@mail.com")

    response = await client.get("/invitations/received", headers=auth_headers(budi["access_token"]))

    received = response.json()
    assert len(received) == 1
    assert received[0]["trip"]["title"] == "Flores"
    assert received[0]["trip"]["budget"] == 2500.0
    assert received[0]["inviter"]["first_name"] == "Wayan"
    assert received[0]["inviter"]["email"] == "owner@mail.com"


async def test_accept_joins_trip_once(client, session_factory):
    """Accepting twice fails the second time and never duplicates the participant."""
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"])
    invitation = (await invite(client, owner["access_token"], trip["id"], "budi@mail.com")).json()["invitation"]
    budi = await sign_up(client, "budi@mail.com")
    headers = auth_headers(budi["access_token"])

    accepted = await client.post(f"/invitations/{invitation['id']}/accept", headers=headers)
    again = await client.post(f"/invitations/{invitation['id']}/accept", headers=headers)

    assert accepted.status_code == 200
    assert accepted.json()["invitation"]["status"] == "accepted"
    assert accepted.json()["invitation"]["responded_at"] is not None
    assert accepted.json()["participant_created"] is True
    assert accepted.json()["participant"]["user_id"] == budi["user"]["id"]
    assert again.status_code == 409
    assert again.json()["code"] == "INVITATION_ALREADY_DECIDED"
    assert await participant_count(session_factory) == 2

    trips = await client.get("/trips", headers=headers)
    assert [item["id"] for item in trips.json()] == [trip["id"]]
    received = await client.get("/invitations/received", headers=headers)
    assert received.json() == []


async def test_accept_when_already_participant(client, session_factory):
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"])
    await client.post(
        f"/trips/{trip['id']}/participants",
        json={"email": "budi@mail.com"},
        headers=auth_headers(owner["access_token"]),
    )
    invitation = (await invite(client, owner["access_token"], trip["id"], "budi@mail.com")).json()["invitation"]
    budi = await sign_up(client, "budi@mail.com")

    response = await client.post(f"/invitations/{invitation['id']}/accept", headers=auth_headers(budi["access_token"]))

    assert response.status_code == 200
    assert response.json()["participant_created"] is False
    assert await participant_count(session_factory) == 2


async def test_decline_never_creates_participant(client, session_factory):
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"])
    invitation = (await invite(client, owner["access_token"], trip["id"], "budi@mail.com")).json()["invitation"]
    budi = await sign_up(client, "budi@mail.com")
    headers = auth_headers(budi["access_token"])

    declined = await client.post(f"/invitations/{invitation['id']}/decline", headers=headers)
    accept_after = await client.post(f"/invitations/{invitation['id']}/accept", headers=headers)

    assert declined.status_code == 200
    assert declined.json()["invitation"]["status"] == "declined"
    assert declined.json()["participant"] is None
    assert accept_after.status_code == 409
    assert await participant_count(session_factory) == 1


async def test_only_invitee_can_answer(client):
    owner = await sign_up(client, "owner@mail.com")
    trip = await create_trip(client, owner["access_token"])
    invitation = (await invite(client, owner["access_token"], trip["id"], "budi@mail.com")).json()["invitation"]
    citra = await sign_up(client, "citra@mail.com")

    response = await client.post(
        f"/invitations/{invitation['id']}/accept", headers=auth_headers(citra["access_token"])
    )
    missing = await client.post(
        "/invitations/00000000-0000-0000-0000-000000000000/accept", headers=auth_headers(citra["access_token"])
    )

    assert response.status_code == 403
    assert missing.status_code == 404
