"""ARQ background tasks for outbound email."""
from typing import Any, Dict

from visitswap.services.mailer import MailerService
from visitswap.utils.logger import logger


async def send_email(ctx: Dict[str, Any], to: str, subject: str, html: str) -> Dict[str, Any]:
    """
    Deliver one queued email.

    Args:
        ctx: ARQ context (holds the shared ``mailer`` after startup)
        to: Recipient address
        subject: Subject line
        html: HTML body

    Returns:
        Dict with success status and provider message ID or error
    """
    mailer: MailerService = ctx.get("mailer") or MailerService()
    result = await mailer.send(to, subject, html)

    if not result.success:
        logger.warning(f"Email to {to} not delivered: {result.error}")
        return {"success": False, "error": result.error}

    return {"success": True, "message_id": result.message_id}
