"""Transactional email integration for focuslist (Resend HTTP API)."""

import logging
import os
from typing import Optional
import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

RESEND_API_BASE = "https://api.resend.com"

FROM_EMAIL = os.getenv("RESEND_FROM_EMAIL", "noreply@example.com")
FROM_NAME = os.getenv("RESEND_FROM_NAME", "Distraction-Free Todos")


def default_sender() -> str:
    """The From header used for every outgoing email."""
    return f"{FROM_NAME} <{FROM_EMAIL}>"


class EmailDeliveryError(Exception):
    """Raised when the email provider rejects or cannot be reached."""
    pass


class ResendEmailClient:
    """Client for the Resend email API."""

    def __init__(self, api_key: Optional[str] = None, timeout: int = 10):
        """Initialize Resend client.

        Args:
            api_key: Resend API key. If None, reads from RESEND_API_KEY env var.
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or os.getenv("RESEND_API_KEY")
        if not self.api_key:
            raise ValueError("Resend API key is required. Set RESEND_API_KEY env var.")
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def send_email(self, from_: str, to: str, subject: str, html: str) -> str:
        """Hand one email to Resend for delivery.

        Returns:
            Provider message id

        Raises:
            EmailDeliveryError: If the API call fails
        """
        payload = {"from": from_, "to": [to], "subject": subject, "html": html}
        try:
            response = requests.post(
                f"{RESEND_API_BASE}/emails",
                headers=self.headers,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise EmailDeliveryError(f"Failed to send email via Resend: {e}") from e

        try:
            message_id = response.json().get("id", "")
        except ValueError:
            logger.warning(f"Resend accepted email to {to} but returned a non-JSON body")
            message_id = ""
        logger.debug(f"Resend accepted email {message_id} to {to}")
        return message_id
