"""
State and validation for the add/edit activity form.

Values are kept as the raw strings an HTML form posts so a rejected
submission can be re-rendered exactly as the user typed it.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from app.schemas import ActivityCreate, ActivityType

DATE_INPUT_FORMAT = "%Y-%m-%dT%H:%M"

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"
SAVE_FAILED_MESSAGE = "Failed to save activity"

TYPE_OPTIONS: List[Tuple[str, str]] = [
    ("", "Select Type"),
    ("call", "Call"),
    ("email", "Email"),
    ("meeting", "Meeting"),
    ("note", "Note"),
    ("task", "Task"),
]

_VALID_TYPES = {t.value for t in ActivityType}


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_date(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def _date_input(value: datetime) -> str:
    # Form values are read back as UTC
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_INPUT_FORMAT)


def _ref_id(embedded, raw_id) -> str:
    if embedded is not None and getattr(embedded, "id", None) is not None:
        return str(embedded.id)
    if raw_id is None:
        return ""
    return str(raw_id)


@dataclass
class ActivityForm:
    type: str = ""
    date: str = ""
    description: str = ""
    contact_id: str = ""
    deal_id: str = ""
    errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def blank(cls, now: datetime) -> "ActivityForm":
        """Empty form for a new activity, dated now"""
        return cls(date=_date_input(now))

    @classmethod
    def from_activity(cls, activity) -> "ActivityForm":
        """Pre-filled form for editing an existing activity"""
        return cls(
            type=activity.type or "",
            date=_date_input(activity.date) if activity.date else "",
            description=activity.description or "",
            contact_id=_ref_id(getattr(activity, "contact", None), activity.contact_id),
            deal_id=_ref_id(getattr(activity, "deal", None), activity.deal_id),
        )

    def validate(self) -> Dict[str, str]:
        """
        Check the required fields and record a message per failing field.

        Returns:
            Mapping of field name to error message; empty when the form is valid.
        """
        errors: Dict[str, str] = {}

        if not self.type:
            errors["type"] = "Activity type is required"
        elif self.type not in _VALID_TYPES:
            errors["type"] = "Select a valid activity type"

        if not (self.description or "").strip():
            errors["description"] = "Description is required"

        if not self.contact_id:
            errors["contact_id"] = "Contact is required"
        elif _parse_int(self.contact_id) is None:
            errors["contact_id"] = "Select a valid contact"

        if not self.date:
            errors["date"] = "Date is required"
        elif _parse_date(self.date) is None:
            errors["date"] = "Enter a valid date"

        if self.deal_id and _parse_int(self.deal_id) is None:
            errors["deal_id"] = "Select a valid deal"

        self.errors = errors
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validate()

    def to_payload(self) -> ActivityCreate:
        """Build the service payload. Only call on a validated form."""
        return ActivityCreate(
            type=self.type,
            date=_parse_date(self.date),
            description=self.description.strip(),
            contact_id=int(self.contact_id),
            deal_id=int(self.deal_id) if self.deal_id else None,
        )


def contact_options(contacts: Sequence) -> List[Tuple[str, str]]:
    return [("", "Select Contact")] + [(str(c.id), c.name) for c in contacts]


def deal_options(deals: Sequence) -> List[Tuple[str, str]]:
    return [("", "No Deal (Optional)")] + [(str(d.id), d.name) for d in deals]


def form_title(editing: bool) -> str:
    return "Edit Activity" if editing else "Add New Activity"


def submit_label(editing: bool) -> str:
    return "Update" if editing else "Create"
