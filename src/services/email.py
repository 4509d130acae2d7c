"""Transactional email through an HTTP email provider."""

import logging

import httpx

from src.config import Settings, get_settings
from src.errors import UpstreamError

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Confirm your SmartStock Account"

VERIFICATION_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #4CAF50; text-align: center;">Welcome to SmartStock!</h2>
  <p>Hi {name},</p>
  <p>Thank you for signing up for SmartStock. Please verify your email address to activate your account:</p>
  <p style="text-align: center; margin: 30px 0;">
    <a href="{url}" style="background-color: #4CAF50; color: white; padding: 12px 25px; text-decoration: none; border-radius: 5px;">Verify My Email</a>
  </p>
  <p style="font-size: 12px; color: #888;">If the button doesn't work, paste this link into your browser:<br>{url}</p>
  <p style="font-size: 12px; color: #aaa;">This link expires in {minutes} minutes. If you did not create an account, ignore this email.</p>
</div>"""


class EmailService:
    """Sends account emails via the provider's REST API."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.timeout = 10.0

    def verification_url(self, token: str) -> str:
        return f"{self.settings.frontend_url}/verify-email?token={token}"

    def send_verification_email(self, email: str, name: str, token: str) -> None:
        """Send the account confirmation link.

        Raises:
            UpstreamError: The provider rejected the message or was unreachable.
        """
        url = self.verification_url(token)
        if not self.settings.email_api_key:
            # Local development without a provider: the link is only logged
            logger.warning(f"EMAIL_API_KEY not set, verification link for {email}: {url}")
            return

        html = VERIFICATION_TEMPLATE.format(
            name=name,
            url=url,
            minutes=self.settings.verification_token_expiry_minutes,
        )
        try:
            response = httpx.post(
                self.settings.email_api_url,
                headers={"Authorization": f"Bearer {self.settings.email_api_key}"},
                json={
                    "from": self.settings.email_from,
                    "to": [email],
                    "subject": VERIFICATION_SUBJECT,
                    "html": html,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Error sending verification email to {email}: {e}")
            raise UpstreamError("Could not send verification email") from e

        logger.info(f"Verification email sent to {email}")
