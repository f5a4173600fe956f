"""Tasks for the accounts app."""

import structlog
from celery import shared_task
from ninja_jwt.token_blacklist.models import OutstandingToken
from ninja_jwt.utils import aware_utcnow

logger = structlog.get_logger(__name__)


@shared_task
def flush_expired_tokens() -> int:
    """Delete refresh tokens that can no longer be used.

    Meant to run periodically from celery beat.
    """
    deleted, _ = OutstandingToken.objects.filter(expires_at__lte=aware_utcnow()).delete()
    logger.info("token_cleanup_completed", jwt_tokens_deleted=deleted)
    return deleted
