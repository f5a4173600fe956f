"""Artist schemas."""

from uuid import UUID

from ninja import Schema

from common.schema import OneToHundredString, UpToFourKString, UpToHundredString
from events.models import Artist

from .mixins import LocationEditMixin, LocationRetrieveMixin, ensure_url


class ArtistEditSchema(LocationEditMixin):
    name: OneToHundredString | None = None
    genre: UpToHundredString | None = None
    bio: UpToFourKString | None = None


class ArtistCreateSchema(ArtistEditSchema):
    name: OneToHundredString


class MinimalArtistSchema(Schema):
    id: UUID
    name: str
    genre: str


class ArtistSchema(LocationRetrieveMixin):
    id: UUID
    user_id: UUID
    name: str
    genre: str
    bio: str
    image_url: str | None = None

    @staticmethod
    def resolve_image_url(obj: Artist) -> str | None:
        return ensure_url(obj.image.url) if obj.image else None
