import typing as t

from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.permissions import IsAdmin
from common.controllers.base import UserAwareController
from common.models import SiteContent
from common.schema import SiteContentEditSchema, SiteContentSchema, ValidationErrorResponse
from common.service import site_content as site_content_service
from common.throttling import WriteThrottle


@api_controller("/site-content", tags=["Site content"])
class SiteContentController(UserAwareController):
    @route.get("/{page_key}", url_name="get-site-content", response=SiteContentSchema)
    def get_page(self, page_key: str) -> SiteContent:
        """Public copy for a static page such as `about`."""
        return t.cast(SiteContent, self.get_object_or_exception(SiteContent, page_key=page_key))

    @route.put(
        "/{page_key}",
        url_name="update-site-content",
        response={200: SiteContentSchema, 400: ValidationErrorResponse},
        auth=JWTAuth(),
        permissions=[IsAdmin()],
        throttle=WriteThrottle(),
    )
    def update_page(self, page_key: str, payload: SiteContentEditSchema) -> SiteContent:
        """Create or replace a page's copy. Admin only."""
        return site_content_service.save_page(page_key, title=payload.title, content=payload.content, user=self.user())
