import typing as t

from django.core.exceptions import ValidationError
from django.core.files.images import get_image_dimensions
from django.core.files.uploadedfile import UploadedFile
from django.core.validators import FileExtensionValidator, MaxValueValidator, MinValueValidator
from django.db import models

ALLOWED_IMAGE_EXTENSIONS: list[str] = ["jpg", "jpeg", "png", "gif", "webp"]
MAX_IMAGE_SIZE_BYTES: int = 5 * 1024 * 1024  # 5MB


def validate_image_file(file: UploadedFile) -> None:
    """Validates an uploaded image."""
    if file.size > MAX_IMAGE_SIZE_BYTES:  # type: ignore[operator]
        raise ValidationError(f"Image must be under {MAX_IMAGE_SIZE_BYTES // (1024 * 1024)}MB.")
    try:
        get_image_dimensions(file)
    except (OSError, TypeError, ValueError):
        raise ValidationError("File is not a valid image.")


image_validators: list[t.Callable[[UploadedFile], None]] = [
    FileExtensionValidator(allowed_extensions=ALLOWED_IMAGE_EXTENSIONS),
    validate_image_file,
]


class LocationMixin(models.Model):
    location_name = models.CharField(max_length=200, blank=True, db_index=True)
    location_lat = models.FloatField(
        null=True, blank=True, validators=[MinValueValidator(-90), MaxValueValidator(90)]
    )
    location_lng = models.FloatField(
        null=True, blank=True, validators=[MinValueValidator(-180), MaxValueValidator(180)]
    )

    class Meta:
        abstract = True

    @property
    def has_coordinates(self) -> bool:
        return self.location_lat is not None and self.location_lng is not None
