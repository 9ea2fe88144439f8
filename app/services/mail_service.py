import html
import logging
from typing import Optional

import resend

from app.core.config import Settings
from app.schemas.user import User

logger = logging.getLogger("assignment.mail")


class WelcomeMailer:
    """Email di benvenuto via Resend. Fire-and-forget: gli errori finiscono solo nei log."""

    def __init__(self, api_key: Optional[str], sender: str):
        self._api_key = api_key
        if api_key:
            # chiave di processo: impostata una sola volta
            resend.api_key = api_key
        self.sender = sender

    @classmethod
    def from_settings(cls, settings: Settings) -> "WelcomeMailer":
        key = settings.resend_api_key.get_secret_value() if settings.resend_api_key else None
        return cls(api_key=key, sender=settings.mail_from)

    def build_message(self, user: User) -> dict:
        name = html.escape(user.name)
        return {
            "from": self.sender,
            "to": [user.email],
            "subject": "Welcome to EduPortal!",
            "html": (
                f"<h3>Hello {name},</h3>"
                f"<p>Your account has been successfully created as <strong>{user.role}</strong> in EduPortal.</p>"
                f"<p>You can sign in with the email address <strong>{html.escape(user.email)}</strong>.</p>"
                "<br><p>EduPortal Team</p>"
            ),
        }

    def send_welcome(self, user: User) -> None:
        if not self._api_key:
            logger.info("RESEND_API_KEY non configurata: benvenuto a %s non inviato", user.email)
            return
        try:
            response = resend.Emails.send(self.build_message(user))
            logger.info("Email inviata a %s: %s", user.email, response)
        except Exception:
            logger.exception("Invio email di benvenuto fallito per %s", user.email)
