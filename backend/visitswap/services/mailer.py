"""Outbound email delivery through an HTTP email API."""
import httpx
from dataclasses import dataclass
from typing import Optional
from visitswap.config import settings
from visitswap.utils.logger import logger


@dataclass
class SendResult:
    """Result of an email delivery attempt."""
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class MailerService:
    """
    Sends transactional email via a Resend-compatible REST endpoint
    (``POST {email_api_url}`` with a bearer key and a JSON body).
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url or settings.email_api_url
        self.api_key = api_key or settings.email_api_key
        self.sender = sender or settings.email_from
        self.timeout = timeout
        self.transport = transport

    def is_configured(self) -> bool:
        return bool(self.api_url and self.api_key)

    async def send(self, to: str, subject: str, html: str) -> SendResult:
        """
        Send one email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body

        Returns:
            SendResult; delivery problems are reported, never raised
        """
        if not self.is_configured():
            logger.warning(f"Email API not configured, dropping email to {to}: {subject}")
            return SendResult(success=False, error="Email API not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {"from": self.sender, "to": [to], "subject": subject, "html": html}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Email delivery to {to} failed: {e}", exc_info=True)
            return SendResult(success=False, error=str(e))

        if response.status_code not in (200, 201, 202):
            logger.error(f"Email API rejected message to {to}: {response.status_code} - {response.text}")
            return SendResult(success=False, error=f"HTTP {response.status_code}")

        message_id = None
        try:
            message_id = response.json().get("id")
        except ValueError:
            pass
        logger.info(f"Sent email to {to}: {subject}")
        return SendResult(success=True, message_id=message_id)
