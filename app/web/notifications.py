from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Notification:
    """A transient toast shown at the top of a page"""
    level: str  # "success" or "error"
    message: str


NOTICES = {
    "activity_created": Notification("success", "Activity created successfully"),
    "activity_updated": Notification("success", "Activity updated successfully"),
    "activity_deleted": Notification("success", "Activity deleted successfully"),
    "activity_delete_failed": Notification("error", "Failed to delete activity"),
    "activity_not_found": Notification("error", "Activity not found"),
}


def notice_for(code: Optional[str]) -> Optional[Notification]:
    """Look up the toast for a redirect's notice code; unknown codes show nothing."""
    if not code:
        return None
    return NOTICES.get(code)


def error(message: str) -> Notification:
    return Notification("error", message)
