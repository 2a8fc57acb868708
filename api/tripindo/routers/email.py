"""
Invitation Email Endpoint - POST /api/send-invitation
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
import json
import logging

from tripindo.errors import EmailDeliveryError
from tripindo.schemas.participant import SendInvitationEmailResponse
from tripindo.services.email import InvitationMailer, get_mailer

router = APIRouter()
logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("tripName", "inviterEmail", "inviteeEmail", "tripId")


def error_response(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse(status_code=status_code, content={"error": message})


@router.post("/send-invitation", response_model=SendInvitationEmailResponse)
async def send_invitation(
    request: Request,
    mailer: InvitationMailer = Depends(get_mailer),
):
    """
    Send a trip invitation email.

    Body: {tripName, inviterEmail, inviteeEmail, tripId}, all required.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return error_response(400, "Request body must be valid JSON")

    if not isinstance(body, dict):
        return error_response(400, "Request body must be a JSON object")

    missing = [
        name for name in REQUIRED_FIELDS
        if not isinstance(body.get(name), str) or not body[name].strip()
    ]
    if missing:
        return error_response(400, f"Missing required fields: {', '.join(missing)}")

    try:
        data = await mailer.send_invitation(
            trip_name=body["tripName"],
            inviter_email=body["inviterEmail"],
            invitee_email=body["inviteeEmail"].strip(),
        )
    except EmailDeliveryError as e:
        logger.error(f"Invitation email for trip {body['tripId']} failed: {e.message}")
        return error_response(500, e.message)

    return SendInvitationEmailResponse(
        success=True,
        message="Invitation email sent",
        data=data,
    )
