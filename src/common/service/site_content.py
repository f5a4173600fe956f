import typing as t

import structlog
from django.db import transaction

from accounts.models import EncoreUser
from common.models import SiteContent

logger = structlog.get_logger(__name__)


@transaction.atomic
def save_page(page_key: str, *, title: str, content: dict[str, t.Any], user: EncoreUser) -> SiteContent:
    """Create or replace the content of a page. The whole content object is replaced, not merged."""
    page = SiteContent.objects.select_for_update().filter(page_key=page_key).first()
    created = page is None
    if page is None:
        page = SiteContent(page_key=page_key)
    page.title = title
    page.content = content
    page.updated_by = user
    page.save()
    logger.info("site_content_saved", page_key=page_key, user_id=str(user.id), created=created)
    return page
