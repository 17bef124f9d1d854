from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, ConfigDict, field_validator


class ActivityType(str, Enum):
    """Kinds of interaction an activity can log."""

    CALL = "call"
    EMAIL = "email"
    MEETING = "meeting"
    NOTE = "note"
    TASK = "task"


class RecordRef(BaseModel):
    """Id and display name of a linked contact or deal"""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


def _as_utc(v: datetime | None) -> datetime | None:
    # Naive timestamps (SQLite, datetime-local inputs) are stored as UTC
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


def _not_null(v):
    if v is None:
        raise ValueError("Field cannot be cleared")
    return v


def _strip_description(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Description is required")
    return v


class ActivityBase(BaseModel):
    type: ActivityType
    date: datetime
    description: str
    contact_id: int
    deal_id: int | None = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return _as_utc(v)

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v):
        return _strip_description(v)


class ActivityCreate(ActivityBase):
    pass


class ActivityUpdate(BaseModel):
    """Partial update - an explicit null deal_id unlinks the deal"""
    type: ActivityType | None = None
    date: datetime | None = None
    description: str | None = None
    contact_id: int | None = None
    deal_id: int | None = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("type", "date", "description")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v):
        return _as_utc(v)

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v):
        return _strip_description(v)


class ActivityResponse(ActivityBase):
    id: int
    contact: RecordRef | None = None
    deal: RecordRef | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
