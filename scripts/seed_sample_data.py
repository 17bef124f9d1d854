from datetime import datetime, timedelta, timezone
from decimal import Decimal

from app.db.database import SessionLocal
from app.models import Activity
from app.schemas import ActivityCreate, ContactCreate, DealCreate
from app.services.crm_service import ActivitiesService, ContactsService, DealsService

CONTACTS = [
    ContactCreate(name="Maya Patel", email="maya@northwind.example", company="Northwind"),
    ContactCreate(name="Jordan Lee", email="jordan@contoso.example", company="Contoso"),
    ContactCreate(name="Sam Okafor", phone="+1 555 0134", company="Fabrikam"),
]

DEALS = [
    DealCreate(name="Northwind renewal", value=Decimal("48000"), stage="negotiation"),
    DealCreate(name="Contoso pilot", value=Decimal("12000"), stage="proposal"),
]

# (type, days ago, description, contact index, deal index or None)
ACTIVITIES = [
    ("call", 0, "Walked through renewal pricing, waiting on procurement", 0, 0),
    ("email", 1, "Sent pilot scope and success criteria", 1, 1),
    ("meeting", 3, "Kickoff with the Contoso platform team", 1, 1),
    ("note", 5, "Sam prefers phone over email", 2, None),
    ("task", 7, "Prepare reference customer list for Northwind", 0, 0),
]


def seed_sample_data():
    """Insert a small set of contacts, deals and activities"""
    db = SessionLocal()
    try:
        if db.query(Activity).count():
            print("Activities already present, skipping seed")
            return

        contacts = [ContactsService(db).create(c) for c in CONTACTS]
        deals = [DealsService(db).create(d) for d in DEALS]

        now = datetime.now(timezone.utc)
        for activity_type, days_ago, description, contact_index, deal_index in ACTIVITIES:
            ActivitiesService(db).create(ActivityCreate(
                type=activity_type,
                date=now - timedelta(days=days_ago),
                description=description,
                contact_id=contacts[contact_index].id,
                deal_id=deals[deal_index].id if deal_index is not None else None,
            ))

        print(f"Seeded {len(contacts)} contacts, {len(deals)} deals, {len(ACTIVITIES)} activities")
    finally:
        db.close()


if __name__ == "__main__":
    seed_sample_data()
