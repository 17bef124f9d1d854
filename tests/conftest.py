"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired
to it through the get_db override, and a small set of CRM records.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.schemas import ActivityCreate, ContactCreate, DealCreate
from app.services.crm_service import ActivitiesService, ContactsService, DealsService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_data(db):
    """
    Two contacts, one deal and three activities:
    a call (Mar 5, linked to the deal), an email (Mar 7) and a note (Mar 1).
    """
    contacts = ContactsService(db)
    deals = DealsService(db)
    activities = ActivitiesService(db)

    maya = contacts.create(ContactCreate(name="Maya Patel", company="Northwind"))
    jordan = contacts.create(ContactCreate(name="Jordan Lee"))
    renewal = deals.create(DealCreate(name="Northwind renewal"))

    call = activities.create(ActivityCreate(
        type="call",
        date=datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc),
        description="Discussed renewal pricing",
        contact_id=maya.id,
        deal_id=renewal.id,
    ))
    email = activities.create(ActivityCreate(
        type="email",
        date=datetime(2024, 3, 7, 9, 0, tzinfo=timezone.utc),
        description="Sent the Pricing sheet",
        contact_id=jordan.id,
    ))
    note = activities.create(ActivityCreate(
        type="note",
        date=datetime(2024, 3, 1, 8, 15, tzinfo=timezone.utc),
        description="Prefers phone calls",
        contact_id=maya.id,
    ))

    return SimpleNamespace(
        maya=maya,
        jordan=jordan,
        renewal=renewal,
        call=call,
        email=email,
        note=note,
    )
