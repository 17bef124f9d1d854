from .contact import ContactCreate, ContactUpdate, ContactResponse
from .deal import DealCreate, DealUpdate, DealResponse
from .activity import (
    ActivityType,
    RecordRef,
    ActivityCreate,
    ActivityUpdate,
    ActivityResponse,
)

__all__ = [
    "ContactCreate",
    "ContactUpdate",
    "ContactResponse",
    "DealCreate",
    "DealUpdate",
    "DealResponse",
    "ActivityType",
    "RecordRef",
    "ActivityCreate",
    "ActivityUpdate",
    "ActivityResponse",
]
