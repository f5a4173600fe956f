"""Common tasks."""

import structlog
from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives

logger = structlog.get_logger(__name__)


@shared_task
def send_email(*, to: str | list[str], subject: str, body: str, html_body: str | None = None) -> int:
    """Send a plain-text email, with an HTML alternative when one is given.

    Returns the number of messages the backend accepted.
    """
    recipients = [to] if isinstance(to, str) else list(to)
    message = EmailMultiAlternatives(subject, body, settings.DEFAULT_FROM_EMAIL, recipients)
    if html_body:
        message.attach_alternative(html_body, "text/html")
    sent = message.send(fail_silently=False)
    logger.info("email_sent", subject=subject, recipient_count=len(recipients))
    return sent
