"""
Client-side style filtering and ordering of the activities list.

The list page loads every activity and narrows it here, so the JSON API
and the HTML page agree on what a given search/type combination shows.
"""
from datetime import datetime, timezone
from typing import Iterable, List, Sequence, Tuple

ALL_TYPES = "all"

ACTIVITY_TYPE_FILTERS: List[Tuple[str, str]] = [
    (ALL_TYPES, "All Types"),
    ("call", "Call"),
    ("email", "Email"),
    ("meeting", "Meeting"),
    ("note", "Note"),
    ("task", "Task"),
]


def _matches_search(activity, search_term: str) -> bool:
    description = getattr(activity, "description", None)
    if description is None:
        return False
    return search_term.lower() in description.lower()


def _matches_type(activity, type_filter: str) -> bool:
    return type_filter == ALL_TYPES or getattr(activity, "type", None) == type_filter


def filter_activities(activities: Iterable, search_term: str = "", type_filter: str = ALL_TYPES) -> List:
    """
    Keep activities whose description contains search_term (case-insensitive)
    and whose type equals type_filter. An empty search term and the "all"
    filter match everything.
    """
    search_term = search_term or ""
    type_filter = type_filter or ALL_TYPES
    return [
        activity
        for activity in activities
        if _matches_search(activity, search_term) and _matches_type(activity, type_filter)
    ]


def _sort_key(activity) -> datetime:
    value = activity.date
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def sort_activities(activities: Iterable) -> List:
    """Newest first; activities sharing a timestamp keep their input order."""
    return sorted(activities, key=_sort_key, reverse=True)


def visible_activities(activities: Sequence, search_term: str = "", type_filter: str = ALL_TYPES) -> List:
    return sort_activities(filter_activities(activities, search_term, type_filter))


def filters_active(search_term: str, type_filter: str) -> bool:
    return bool(search_term) or (type_filter or ALL_TYPES) != ALL_TYPES


def empty_state_description(search_term: str, type_filter: str) -> str:
    if filters_active(search_term, type_filter):
        return "Try adjusting your filters"
    return "Get started by adding your first activity"
