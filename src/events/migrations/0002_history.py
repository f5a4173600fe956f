import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models

import events.models.mixins

IMAGE_VALIDATORS = [
    django.core.validators.FileExtensionValidator(allowed_extensions=["jpg", "jpeg", "png", "gif", "webp"]),
    events.models.mixins.validate_image_file,
]

PRICE_VALIDATORS = [
    django.core.validators.MinValueValidator(Decimal("0")),
    django.core.validators.MaxValueValidator(Decimal("10000")),
]


def _historical_timestamped() -> list[tuple[str, models.Field]]:
    return [
        ("id", models.UUIDField(db_index=True, default=uuid.uuid4, editable=False)),
        ("created_at", models.DateTimeField(blank=True, db_index=True, editable=False)),
        ("updated_at", models.DateTimeField(blank=True, db_index=True, editable=False)),
    ]


def _historical_location() -> list[tuple[str, models.Field]]:
    return [
        ("location_name", models.CharField(blank=True, db_index=True, max_length=200)),
        (
            "location_lat",
            models.FloatField(
                blank=True,
                null=True,
                validators=[
                    django.core.validators.MinValueValidator(-90),
                    django.core.validators.MaxValueValidator(90),
                ],
            ),
        ),
        (
            "location_lng",
            models.FloatField(
                blank=True,
                null=True,
                validators=[
                    django.core.validators.MinValueValidator(-180),
                    django.core.validators.MaxValueValidator(180),
                ],
            ),
        ),
    ]


def _history() -> list[tuple[str, models.Field]]:
    return [
        ("history_id", models.AutoField(primary_key=True, serialize=False)),
        ("history_date", models.DateTimeField(db_index=True)),
        ("history_change_reason", models.CharField(max_length=100, null=True)),
        (
            "history_type",
            models.CharField(choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")], max_length=1),
        ),
        (
            "history_user",
            models.ForeignKey(
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
    ]


def _historical_fk(to: str) -> models.ForeignKey:
    return models.ForeignKey(
        blank=True,
        db_constraint=False,
        null=True,
        on_delete=django.db.models.deletion.DO_NOTHING,
        related_name="+",
        to=to,
    )


def _options(name: str) -> dict[str, object]:
    return {
        "verbose_name": f"historical {name}",
        "verbose_name_plural": f"historical {name}s",
        "ordering": ("-history_date", "-history_id"),
        "get_latest_by": ("history_date", "history_id"),
    }


class Migration(migrations.Migration):

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("events", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="HistoricalArtist",
            fields=[
                *_historical_location(),
                *_historical_timestamped(),
                ("name", models.CharField(db_index=True, max_length=100)),
                ("genre", models.CharField(blank=True, max_length=100)),
                ("bio", models.TextField(blank=True, max_length=4096)),
                ("image", models.TextField(blank=True, max_length=100, null=True, validators=IMAGE_VALIDATORS)),
                *_history(),
                ("user", _historical_fk(settings.AUTH_USER_MODEL)),
            ],
            options=_options("artist"),
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="HistoricalEvent",
            fields=[
                *_historical_location(),
                *_historical_timestamped(),
                ("title", models.CharField(db_index=True, max_length=200)),
                ("description", models.TextField(blank=True)),
                ("date", models.DateField(db_index=True)),
                (
                    "time",
                    models.TimeField(blank=True, help_text="Local time of day, no timezone stored.", null=True),
                ),
                (
                    "price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Base ticket price. Empty means free.",
                        max_digits=7,
                        null=True,
                        validators=PRICE_VALIDATORS,
                    ),
                ),
                ("price_tiers", models.JSONField(blank=True, default=list)),
                (
                    "ticket_capacity",
                    models.PositiveIntegerField(blank=True, help_text="Empty means unlimited.", null=True),
                ),
                ("payment_instructions", models.JSONField(blank=True, default=dict)),
                ("image", models.TextField(blank=True, max_length=100, null=True, validators=IMAGE_VALIDATORS)),
                ("notes", models.TextField(blank=True, max_length=2000)),
                *_history(),
                ("user", _historical_fk(settings.AUTH_USER_MODEL)),
            ],
            options=_options("event"),
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name="HistoricalBooking",
            fields=[
                *_historical_timestamped(),
                ("attendee_name", models.CharField(max_length=100)),
                ("attendee_email", models.EmailField(max_length=255)),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0"), max_digits=7, validators=PRICE_VALIDATORS
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(choices=[("free", "Free"), ("direct", "Direct")], default="free", max_length=10),
                ),
                ("proof_of_payment", models.TextField(blank=True, max_length=255)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("confirmed", "Confirmed"), ("cancelled", "Cancelled")],
                        db_index=True,
                        default="pending",
                        max_length=10,
                    ),
                ),
                *_history(),
                ("event", _historical_fk("events.event")),
                ("user", _historical_fk(settings.AUTH_USER_MODEL)),
            ],
            options=_options("booking"),
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
