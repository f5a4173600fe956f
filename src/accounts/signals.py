"""Signal handlers for account-related operations."""

import structlog
from django.db.models.signals import post_save
from django.dispatch import receiver

from accounts.models import EncoreUser, UserRole

logger = structlog.get_logger(__name__)


@receiver(post_save, sender=EncoreUser)
def assign_default_role(sender: type[EncoreUser], instance: EncoreUser, created: bool, **kwargs: object) -> None:
    """Give every new account the viewer role."""
    if not created:
        return
    UserRole.objects.get_or_create(user=instance, role=UserRole.Role.VIEWER)
    logger.info("default_role_assigned", user_id=str(instance.id), role=UserRole.Role.VIEWER)
