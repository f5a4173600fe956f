import structlog
from django.db.models import QuerySet

from accounts.models import EncoreUser
from events.models import Artist, Event
from events.schema import ArtistCreateSchema, ArtistEditSchema
from events.service import update_db_instance

logger = structlog.get_logger(__name__)


def list_artists(search: str | None = None) -> QuerySet[Artist]:
    return Artist.objects.search(search).order_by("name")


def create_artist(user: EncoreUser, payload: ArtistCreateSchema) -> Artist:
    data = {key: value for key, value in payload.model_dump().items() if value is not None}
    artist = Artist.objects.create(user=user, **data)
    logger.info("artist_created", artist_id=str(artist.id), user_id=str(user.id))
    return artist


def update_artist(artist: Artist, payload: ArtistEditSchema) -> Artist:
    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    if "location_lat" in payload.model_fields_set and payload.location_lat is None:
        data["location_lat"] = None
    if "location_lng" in payload.model_fields_set and payload.location_lng is None:
        data["location_lng"] = None
    return update_db_instance(artist, **data)


def artist_events(artist: Artist) -> QuerySet[Event]:
    """Events the artist performs in, soonest first."""
    return Event.objects.with_artists().filter(artists=artist).order_by("date", "time")
