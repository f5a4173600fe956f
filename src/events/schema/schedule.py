import datetime
from uuid import UUID

from ninja import Schema

from common.schema import OneToTwoHundredString, UpToThousandString


class ScheduleItemEditSchema(Schema):
    time: datetime.time | None = None
    title: OneToTwoHundredString | None = None
    description: UpToThousandString | None = None


class ScheduleItemCreateSchema(Schema):
    time: datetime.time
    title: OneToTwoHundredString
    description: UpToThousandString = ""


class ScheduleItemSchema(Schema):
    id: UUID
    time: datetime.time
    title: str
    description: str
