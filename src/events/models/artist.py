from django.conf import settings
from django.db import models
from django.db.models import Q
from simple_history.models import HistoricalRecords

from common.models import ExifStripMixin, TimeStampedModel

from .mixins import LocationMixin, image_validators


class ArtistQuerySet(models.QuerySet["Artist"]):
    def search(self, term: str | None) -> "ArtistQuerySet":
        """Case-insensitive match on name or genre."""
        if not term or not term.strip():
            return self
        term = term.strip()
        return self.filter(Q(name__icontains=term) | Q(genre__icontains=term))


class ArtistManager(models.Manager["Artist"]):
    def get_queryset(self) -> ArtistQuerySet:
        return ArtistQuerySet(self.model, using=self._db)

    def search(self, term: str | None) -> ArtistQuerySet:
        return self.get_queryset().search(term)


class Artist(ExifStripMixin, LocationMixin, TimeStampedModel):
    IMAGE_FIELDS = ("image",)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="artists")
    name = models.CharField(max_length=100, db_index=True)
    genre = models.CharField(max_length=100, blank=True)
    bio = models.TextField(max_length=4096, blank=True)
    image = models.ImageField(upload_to="artist-images", null=True, blank=True, validators=image_validators)

    objects = ArtistManager()
    history = HistoricalRecords()

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
