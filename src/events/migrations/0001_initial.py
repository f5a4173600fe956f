import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import events.models.mixins


def _timestamped() -> list[tuple[str, models.Field]]:
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
        ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
    ]


def _location() -> list[tuple[str, models.Field]]:
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


IMAGE_VALIDATORS = [
    django.core.validators.FileExtensionValidator(allowed_extensions=["jpg", "jpeg", "png", "gif", "webp"]),
    events.models.mixins.validate_image_file,
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Artist",
            fields=[
                *_location(),
                *_timestamped(),
                ("name", models.CharField(db_index=True, max_length=100)),
                ("genre", models.CharField(blank=True, max_length=100)),
                ("bio", models.TextField(blank=True, max_length=4096)),
                (
                    "image",
                    models.ImageField(blank=True, null=True, upload_to="artist-images", validators=IMAGE_VALIDATORS),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="artists",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                *_location(),
                *_timestamped(),
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
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("10000")),
                        ],
                    ),
                ),
                ("price_tiers", models.JSONField(blank=True, default=list)),
                (
                    "ticket_capacity",
                    models.PositiveIntegerField(blank=True, help_text="Empty means unlimited.", null=True),
                ),
                ("payment_instructions", models.JSONField(blank=True, default=dict)),
                (
                    "image",
                    models.ImageField(blank=True, null=True, upload_to="event-images", validators=IMAGE_VALIDATORS),
                ),
                ("notes", models.TextField(blank=True, max_length=2000)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["date", "time"],
            },
        ),
        migrations.CreateModel(
            name="EventArtist",
            fields=[
                *_timestamped(),
                (
                    "artist",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="event_artists",
                        to="events.artist",
                    ),
                ),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="event_artists",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("event", "artist"), name="unique_event_artist")],
            },
        ),
        migrations.AddField(
            model_name="event",
            name="artists",
            field=models.ManyToManyField(
                blank=True, related_name="events", through="events.EventArtist", to="events.artist"
            ),
        ),
        migrations.CreateModel(
            name="EventScheduleItem",
            fields=[
                *_timestamped(),
                ("time", models.TimeField()),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, max_length=1000)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="schedule_items",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["time", "created_at"],
            },
        ),
        migrations.CreateModel(
            name="EventDiscussion",
            fields=[
                *_timestamped(),
                ("message", models.TextField(max_length=2000)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="discussions",
                        to="events.event",
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="replies",
                        to="events.eventdiscussion",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="discussion_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                *_timestamped(),
                ("attendee_name", models.CharField(max_length=100)),
                ("attendee_email", models.EmailField(max_length=255)),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=7,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("10000")),
                        ],
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(choices=[("free", "Free"), ("direct", "Direct")], default="free", max_length=10),
                ),
                ("proof_of_payment", models.FileField(blank=True, max_length=255, upload_to="")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("confirmed", "Confirmed"), ("cancelled", "Cancelled")],
                        db_index=True,
                        default="pending",
                        max_length=10,
                    ),
                ),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="events.event",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["event", "status"], name="booking_event_status_idx")],
            },
        ),
    ]
