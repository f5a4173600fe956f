"""Project-wide fixtures."""

import secrets
import string
import typing as t
from datetime import datetime, time, timedelta

import faker
import pytest
from django.core.cache import cache
from django.test import Client
from django.utils import timezone
from ninja_jwt.tokens import RefreshToken

from accounts.models import EncoreUser, UserRole


@pytest.fixture(autouse=True)
def enable_celery_eager_mode(settings: t.Any) -> None:
    """Enable Celery eager mode for tests so tasks execute synchronously.

    This ensures that Celery tasks run immediately in the same process,
    allowing tests to verify their side effects without async complications.
    """
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


@pytest.fixture(autouse=True)
def use_locmem_email_backend(settings: t.Any) -> None:
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"


@pytest.fixture(autouse=True)
def media_root(settings: t.Any, tmp_path: t.Any) -> None:
    """Keep uploaded files out of the real media directory."""
    settings.MEDIA_ROOT = str(tmp_path / "media")


@pytest.fixture(autouse=True)
def clear_cache() -> None:
    """Clear the cache before each test so throttle counters start from zero."""
    cache.clear()


class EncoreUserFactory:
    """Factory for creating EncoreUser instances for testing."""

    fake = faker.Faker()

    def create_user(self, *, roles: t.Iterable[str] = (), **kwargs: t.Any) -> EncoreUser:
        username = kwargs.pop(
            "username", "".join(secrets.choice(string.ascii_lowercase) for _ in range(8)) + "@user.test"
        )
        email = kwargs.pop("email", username if "@" in username else username + "@test.com")
        password = kwargs.pop("password", "password")
        first_name = kwargs.pop("first_name", self.fake.first_name())
        last_name = kwargs.pop("last_name", self.fake.last_name())
        preferred_name = kwargs.pop("preferred_name", f"{first_name} {last_name}")
        user = EncoreUser.objects.create_user(
            username=username,
            email=email,
            password=password,
            preferred_name=preferred_name,
            first_name=first_name,
            last_name=last_name,
            **kwargs,
        )
        for role in roles:
            UserRole.objects.get_or_create(user=user, role=role)
        return user

    def __call__(self, **kwargs: t.Any) -> EncoreUser:
        return self.create_user(**kwargs)


@pytest.fixture
def user_factory() -> EncoreUserFactory:
    return EncoreUserFactory()


@pytest.fixture
def user(user_factory: EncoreUserFactory) -> EncoreUser:
    """A plain attendee with the default viewer role."""
    return user_factory(username="attendee@user.test", first_name="Ada", last_name="Lovelace", preferred_name="")


@pytest.fixture
def organizer(user_factory: EncoreUserFactory) -> EncoreUser:
    return user_factory(username="organizer@user.test", roles=[UserRole.Role.ORGANIZER])


@pytest.fixture
def site_admin(user_factory: EncoreUserFactory) -> EncoreUser:
    return user_factory(username="admin@user.test", roles=[UserRole.Role.ADMIN])


@pytest.fixture
def superuser(user_factory: EncoreUserFactory) -> EncoreUser:
    """A superuser."""
    return user_factory(is_superuser=True, is_staff=True)


def auth_client(user: EncoreUser) -> Client:
    refresh = RefreshToken.for_user(user)
    return Client(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")  # type: ignore[attr-defined]


@pytest.fixture
def user_client(user: EncoreUser) -> Client:
    return auth_client(user)


@pytest.fixture
def organizer_client(organizer: EncoreUser) -> Client:
    return auth_client(organizer)


@pytest.fixture
def site_admin_client(site_admin: EncoreUser) -> Client:
    return auth_client(site_admin)


@pytest.fixture
def next_week() -> datetime:
    today = timezone.now()
    same_time_next_week = today + timedelta(days=7)
    noon = time(hour=12, minute=0)
    return timezone.make_aware(
        datetime.combine(same_time_next_week.date(), noon),
        timezone.get_current_timezone(),
    )


@pytest.fixture
def client_for() -> t.Callable[[EncoreUser], Client]:
    """Build an authenticated client for an arbitrary user."""
    return auth_client
