"""Common schemas for the API."""

import datetime
import typing as t
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from ninja import Schema
from pydantic import AfterValidator, Field, StringConstraints

StrippedString = t.Annotated[str, StringConstraints(strip_whitespace=True)]
OneToHundredString = t.Annotated[str, StringConstraints(min_length=1, max_length=100, strip_whitespace=True)]
OneToTwoHundredString = t.Annotated[str, StringConstraints(min_length=1, max_length=200, strip_whitespace=True)]
UpToHundredString = t.Annotated[str, StringConstraints(max_length=100, strip_whitespace=True)]
UpToOneFiftyString = t.Annotated[str, StringConstraints(max_length=150, strip_whitespace=True)]
UpToTwoHundredString = t.Annotated[str, StringConstraints(max_length=200, strip_whitespace=True)]
UpToThousandString = t.Annotated[str, StringConstraints(max_length=1000, strip_whitespace=True)]
UpToTwoThousandString = t.Annotated[str, StringConstraints(max_length=2000, strip_whitespace=True)]
UpToFourKString = t.Annotated[str, StringConstraints(max_length=4096, strip_whitespace=True)]


def _validate_email(value: str) -> str:
    try:
        validate_email(value)
    except DjangoValidationError as e:
        raise ValueError("Enter a valid email address.") from e
    return value


# Same rule as models.EmailField, so anything the API accepts can also be stored and mailed.
EmailAddress = t.Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=255), AfterValidator(_validate_email)
]


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"


class ResponseMessage(Schema):
    message: str


class ErrorResponse(Schema):
    detail: str
    code: str | None = None


class ValidationErrorResponse(Schema):
    errors: dict[str, str | list[str]]


class SiteContentSchema(Schema):
    page_key: str
    title: str
    content: dict[str, t.Any]
    updated_at: datetime.datetime
    updated_by_id: UUID | None = None


class SiteContentEditSchema(Schema):
    title: UpToTwoHundredString = ""
    content: dict[str, UpToFourKString] = Field(default_factory=dict, max_length=50)
