import typing as t
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from simple_history.models import HistoricalRecords


class TimeStampedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        abstract = True

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Override the save method to call full_clean before saving."""
        self.full_clean()
        super().save(*args, **kwargs)


class ExifStripMixin(models.Model):
    """Mixin that strips EXIF metadata from image fields on save.

    Subclasses must define IMAGE_FIELDS as an iterable of field names to process.
    """

    IMAGE_FIELDS: t.Iterable[str]

    def _strip_exif_from_image_fields(self) -> None:
        from django.utils.translation import gettext_lazy as _
        from PIL import UnidentifiedImageError

        from common.utils import strip_exif

        for field_name in self.IMAGE_FIELDS:
            file = getattr(self, field_name, None)
            # Only freshly uploaded files; already stored ones were stripped on their first save.
            if file and not getattr(file, "_committed", True):
                try:
                    setattr(self, field_name, strip_exif(file))
                except (UnidentifiedImageError, OSError) as e:
                    raise ValidationError({field_name: [_("File is not a valid image.")]}) from e

    def save(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Override save to auto-strip exif from image fields."""
        self._strip_exif_from_image_fields()
        super().save(*args, **kwargs)

    class Meta:
        abstract = True


class SiteContent(TimeStampedModel):
    """Admin-editable copy for static pages, one row per page (e.g. ``about``)."""

    page_key = models.SlugField(max_length=64, unique=True)
    title = models.CharField(max_length=200, blank=True)
    content = models.JSONField(default=dict, blank=True, help_text="Named text blocks rendered by the page.")
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    history = HistoricalRecords()

    class Meta:
        ordering = ["page_key"]
        verbose_name_plural = "site content"

    def __str__(self) -> str:
        return self.page_key

    def clean(self) -> None:
        super().clean()
        if not isinstance(self.content, dict):
            raise ValidationError({"content": ["Content must be an object of named text blocks."]})
