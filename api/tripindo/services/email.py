"""
Invitation Email - template rendering and delivery through the Resend API
https://resend.com/docs/api-reference/emails/send-email
"""
from html import escape
from typing import Optional
import logging

import httpx

from tripindo.config import settings
from tripindo.errors import EmailDeliveryError

logger = logging.getLogger(__name__)


INVITATION_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Trip invitation - {trip_name}</title>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }}
    .content {{ background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px; }}
    .button {{ display: inline-block; padding: 12px 24px; background: #10b981; color: white; text-decoration: none; border-radius: 5px; margin: 10px 5px; }}
    .footer {{ text-align: center; margin-top: 30px; color: #666; font-size: 14px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>Trip invitation</h1>
      <h2>{trip_name}</h2>
    </div>
    <div class="content">
      <p>Hello!</p>
      <p><strong>{inviter_email}</strong> invites you to join the trip <strong>"{trip_name}"</strong> on Trip Indo!</p>
      <p>Once you join you can:</p>
      <ul>
        <li>See the trip details</li>
        <li>Take part in the planning</li>
        <li>Browse destinations and activities</li>
        <li>Share your ideas with the group</li>
      </ul>
      <div style="text-align: center; margin: 30px 0;">
        <a href="{app_url}/dashboard" class="button">Accept the invitation</a>
      </div>
      <div class="footer">
        <p>Sent from Trip Indo</p>
        <p>Questions? Contact {inviter_email}</p>
      </div>
    </div>
  </div>
</body>
</html>
"""


def render_invitation_email(trip_name: str, inviter_email: str, app_url: Optional[str] = None) -> str:
    """Render the invitation HTML; interpolated values are escaped"""
    return INVITATION_TEMPLATE.format(
        trip_name=escape(trip_name),
        inviter_email=escape(inviter_email),
        app_url=escape((app_url or settings.APP_URL).rstrip("/")),
    )


def invitation_subject(trip_name: str) -> str:
    return f"Trip invitation: {trip_name}"


class InvitationMailer:
    """
    Sends invitation emails through Resend.

    The HTTP transport is injectable so tests can answer with httpx.MockTransport.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        sender: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.RESEND_API_KEY if api_key is None else api_key
        self.api_url = api_url or settings.RESEND_API_URL
        self.sender = sender or settings.EMAIL_FROM
        self.timeout = timeout or settings.EMAIL_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if the Resend API key is configured"""
        return bool(self.api_key)

    async def send(self, to: str, subject: str, html: str) -> dict:
        """
        Deliver one email.

        Returns:
            The provider's JSON response (contains the message id)

        Raises:
            EmailDeliveryError: If not configured, unreachable, rejected or the reply is not JSON
        """
        if not self.is_configured:
            raise EmailDeliveryError("RESEND_API_KEY is not configured")

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={
                        "from": self.sender,
                        "to": [to],
                        "subject": subject,
                        "html": html,
                    },
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Resend rejected email to {to}: {e.response.status_code} {e.response.text}")
            raise EmailDeliveryError(f"Email provider returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Resend request failed for {to}: {e}")
            raise EmailDeliveryError(f"Email provider unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Resend returned a non-JSON body for {to}: {response.text[:200]}")
            raise EmailDeliveryError("Email provider returned an invalid response") from e
        if not isinstance(data, dict):
            logger.error(f"Resend returned an unexpected body for {to}: {data!r}")
            raise EmailDeliveryError("Email provider returned an invalid response")

        logger.info(f"Email sent to {to}: {data.get('id')}")
        return data

    async def send_invitation(self, trip_name: str, inviter_email: str, invitee_email: str) -> dict:
        logger.info(f"Sending invitation for '{trip_name}' from {inviter_email} to {invitee_email}")
        return await self.send(
            to=invitee_email,
            subject=invitation_subject(trip_name),
            html=render_invitation_email(trip_name, inviter_email),
        )


def get_mailer() -> InvitationMailer:
    """
    Dependency that provides the mailer
    Usage: mailer: InvitationMailer = Depends(get_mailer)
    """
    return InvitationMailer()
