import typing as t

from django.db import models, transaction

T = t.TypeVar("T", bound=models.Model)


@transaction.atomic
def update_db_instance(instance: T, **fields: t.Any) -> T:
    """Apply ``fields`` to a fresh, row-locked copy of ``instance`` and save it.

    The returned object is the locked copy, so callers must use it instead of the one they passed in.
    """
    locked = instance.__class__.objects.select_for_update().get(pk=instance.pk)  # type: ignore[attr-defined]
    for key, value in fields.items():
        setattr(locked, key, value)
    locked.save()
    return locked
