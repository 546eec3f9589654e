"""ARQ worker configuration."""
from arq.connections import RedisSettings
from visitswap.config import settings
from visitswap.services.mailer import MailerService
from visitswap.utils.logger import logger
from urllib.parse import urlparse

from visitswap.workers.tasks import send_email


def parse_redis_url(url: str) -> RedisSettings:
    """Parse Redis URL into RedisSettings."""
    parsed = urlparse(url)
    return RedisSettings(
        host=parsed.hostname or "localhost",
        port=parsed.port or 6379,
        password=parsed.password,
        database=int(parsed.path[1:]) if parsed.path and len(parsed.path) > 1 else 0,
    )


redis_settings = parse_redis_url(settings.redis_url)


async def startup(ctx):
    """Worker startup hook."""
    ctx["mailer"] = MailerService()
    if not ctx["mailer"].is_configured():
        logger.warning("Email API not configured; queued emails will be dropped")
    logger.info("ARQ worker starting up...")


async def shutdown(ctx):
    """Worker shutdown hook."""
    logger.info("ARQ worker shutting down...")


class WorkerSettings:
    """ARQ worker settings."""

    functions = [send_email]

    on_startup = startup
    on_shutdown = shutdown

    redis_settings = redis_settings

    max_jobs = 10
    job_timeout = 60
    keep_result = 3600
    retry_jobs = True
    max_tries = 3
