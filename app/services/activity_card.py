from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

ACTIVITY_ICONS = {
    "call": "Phone",
    "email": "Mail",
    "meeting": "Calendar",
    "note": "FileText",
    "task": "CheckSquare",
}

ACTIVITY_COLORS = {
    "call": "bg-blue-100 text-blue-600",
    "email": "bg-green-100 text-green-600",
    "meeting": "bg-purple-100 text-purple-600",
    "note": "bg-gray-100 text-gray-600",
    "task": "bg-orange-100 text-orange-600",
}

ACTIVITY_LABELS = {
    "call": "Call",
    "email": "Email",
    "meeting": "Meeting",
    "note": "Note",
    "task": "Task",
}

DEFAULT_ICON = "Clock"
DEFAULT_COLOR = "bg-gray-100 text-gray-600"
UNKNOWN_CONTACT = "Unknown Contact"


def activity_icon(activity_type: str) -> str:
    return ACTIVITY_ICONS.get(activity_type, DEFAULT_ICON)


def activity_color(activity_type: str) -> str:
    return ACTIVITY_COLORS.get(activity_type, DEFAULT_COLOR)


def activity_type_label(activity_type: str) -> str:
    return ACTIVITY_LABELS.get(activity_type, activity_type)


def _find_by_id(records: Sequence, record_id) -> Optional[object]:
    for record in records:
        if record.id == record_id:
            return record
    return None


def resolve_contact_name(activity, contacts: Sequence) -> str:
    """Name of the activity's contact: embedded reference, then lookup, then a placeholder."""
    embedded = getattr(activity, "contact", None)
    if embedded is not None and getattr(embedded, "name", None):
        return embedded.name

    contact = _find_by_id(contacts, activity.contact_id)
    if contact is not None and contact.name:
        return contact.name
    return UNKNOWN_CONTACT


def resolve_deal_name(activity, deals: Sequence) -> Optional[str]:
    """Name of the linked deal, or None when there is no deal or it cannot be found."""
    if not activity.deal_id:
        return None

    embedded = getattr(activity, "deal", None)
    if embedded is not None and getattr(embedded, "name", None):
        return embedded.name

    deal = _find_by_id(deals, activity.deal_id)
    if deal is not None and deal.name:
        return deal.name
    return None


def format_activity_date(value: datetime) -> str:
    """Format like 'Mar 05, 2024 at 2:30 PM', in UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    hour = value.hour % 12 or 12
    return f"{value:%b %d, %Y} at {hour}:{value:%M} {value:%p}"


@dataclass
class ActivityCard:
    """Everything the card partial needs to render one activity"""
    id: int
    type: str
    type_label: str
    icon: str
    color: str
    date_display: str
    description: str
    contact_name: str
    deal_name: Optional[str]


def build_activity_card(activity, contacts: Sequence, deals: Sequence) -> ActivityCard:
    return ActivityCard(
        id=activity.id,
        type=activity.type,
        type_label=activity_type_label(activity.type),
        icon=activity_icon(activity.type),
        color=activity_color(activity.type),
        date_display=format_activity_date(activity.date),
        description=activity.description,
        contact_name=resolve_contact_name(activity, contacts),
        deal_name=resolve_deal_name(activity, deals),
    )
