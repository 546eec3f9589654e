"""Fire-and-forget account notifications (verification and reset links)."""
from typing import Optional, Protocol

from arq import create_pool
from arq.connections import RedisSettings

from visitswap.config import settings
from visitswap.utils.logger import logger


class Notifier(Protocol):
    """Sends account links. Implementations never raise on delivery failure."""

    async def send_verification(self, email: str, token: str) -> bool:
        ...

    async def send_password_reset(self, email: str, token: str) -> bool:
        ...


def verification_email(token: str) -> tuple[str, str]:
    link = f"{settings.frontend_url}/verify/{token}"
    return "Confirm your VisitSwap email", f'<p>Click: <a href="{link}">Confirm email</a></p>'


def password_reset_email(token: str) -> tuple[str, str]:
    link = f"{settings.frontend_url}/reset/{token}"
    return "Reset your VisitSwap password", f'<p><a href="{link}">Reset password</a></p>'


class QueuedNotifier:
    """Enqueues ``send_email`` jobs for the ARQ worker."""

    def __init__(self, redis_settings: Optional[RedisSettings] = None):
        if redis_settings is None:
            from visitswap.workers.config import redis_settings as configured
            redis_settings = configured
        self.redis_settings = redis_settings

    async def _enqueue(self, to: str, subject: str, html: str) -> bool:
        try:
            redis = await create_pool(self.redis_settings)
            try:
                await redis.enqueue_job("send_email", to, subject, html)
            finally:
                await redis.aclose()
            return True
        except Exception as e:
            logger.error(f"Failed to queue email to {to}: {e}", exc_info=True)
            return False

    async def send_verification(self, email: str, token: str) -> bool:
        subject, html = verification_email(token)
        return await self._enqueue(email, subject, html)

    async def send_password_reset(self, email: str, token: str) -> bool:
        subject, html = password_reset_email(token)
        return await self._enqueue(email, subject, html)


def get_notifier() -> Notifier:
    """Dependency returning the production notifier."""
    return QueuedNotifier()
