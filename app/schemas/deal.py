from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.deal import DealStage


class DealBase(BaseModel):
    name: str = Field(..., min_length=1)
    value: Decimal | None = None
    stage: str = DealStage.LEAD


class DealCreate(DealBase):
    pass


class DealUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    value: Decimal | None = None
    stage: str | None = None

    @field_validator("name", "stage")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be cleared")
        return v


class DealResponse(DealBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
