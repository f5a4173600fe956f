from uuid import UUID

from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from accounts.permissions import IsAdmin
from common.controllers import UserAwareController
from events import schema
from events.service import audit_service


@api_controller("/admin/history", tags=["Admin"], auth=JWTAuth(), permissions=[IsAdmin()])
class AuditController(UserAwareController):
    @route.get("/{model_key}/{object_id}", url_name="admin-object-history", response=list[schema.HistoryEntrySchema])
    def object_history(self, model_key: str, object_id: UUID) -> list[audit_service.HistoryEntry]:
        """Change log of an artist, event, booking or site-content page, newest first.

        `model_key` is one of `artists`, `events`, `bookings` or `site-content`.
        """
        return audit_service.object_history(model_key, object_id)
