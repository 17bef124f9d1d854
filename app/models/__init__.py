from .contact import Contact
from .deal import Deal
from .activity import Activity

__all__ = ["Contact", "Deal", "Activity"]
