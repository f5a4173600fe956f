import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route, status
from ninja_jwt.authentication import JWTAuth

from accounts.permissions import CanCreateEvents
from common.authentication import OptionalAuth
from common.controllers import UserAwareController
from common.schema import ValidationErrorResponse
from common.throttling import WriteThrottle
from events import models, schema
from events.service import artist_service

from .permissions import IsArtistOwnerOrAdmin


@api_controller("/artists", auth=OptionalAuth(), tags=["Artists"])
class ArtistController(UserAwareController):
    def get_one(self, artist_id: UUID) -> models.Artist:
        """Wrapper helper. Runs the route's object permissions."""
        return t.cast(models.Artist, self.get_object_or_exception(models.Artist, pk=artist_id))

    @route.get("", url_name="list-artists", response=list[schema.ArtistSchema])
    def list_artists(self, search: str | None = None) -> QuerySet[models.Artist]:
        """All artists by name. `search` matches part of the name or genre."""
        return artist_service.list_artists(search)

    @route.post(
        "",
        url_name="create-artist",
        response={201: schema.ArtistSchema, 400: ValidationErrorResponse},
        auth=JWTAuth(),
        permissions=[CanCreateEvents()],
        throttle=WriteThrottle(),
    )
    def create_artist(self, payload: schema.ArtistCreateSchema) -> tuple[int, models.Artist]:
        """Create an artist profile. Requires the artist, organizer or admin role."""
        return status.HTTP_201_CREATED, artist_service.create_artist(self.user(), payload)

    @route.get("/{artist_id}", url_name="get-artist", response=schema.ArtistSchema)
    def get_artist(self, artist_id: UUID) -> models.Artist:
        return self.get_one(artist_id)

    @route.put(
        "/{artist_id}",
        url_name="update-artist",
        response={200: schema.ArtistSchema, 400: ValidationErrorResponse},
        auth=JWTAuth(),
        permissions=[IsArtistOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def update_artist(self, artist_id: UUID, payload: schema.ArtistEditSchema) -> models.Artist:
        """Update an artist profile. Omitted fields are left unchanged."""
        return artist_service.update_artist(self.get_one(artist_id), payload)

    @route.delete(
        "/{artist_id}",
        url_name="delete-artist",
        response={204: None},
        auth=JWTAuth(),
        permissions=[IsArtistOwnerOrAdmin()],
        throttle=WriteThrottle(),
    )
    def delete_artist(self, artist_id: UUID) -> tuple[int, None]:
        """Delete an artist profile. Events keep running without them."""
        self.get_one(artist_id).delete()
        return status.HTTP_204_NO_CONTENT, None

    @route.get("/{artist_id}/events", url_name="artist-events", response=list[schema.EventInListSchema])
    def artist_events(self, artist_id: UUID) -> QuerySet[models.Event]:
        """Events the artist performs in, soonest first."""
        return artist_service.artist_events(self.get_one(artist_id))
