from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from app.services.activity_form import (
    ActivityForm,
    contact_options,
    deal_options,
    form_title,
    submit_label,
)


def valid_form(**overrides) -> ActivityForm:
    values = dict(
        type="meeting",
        date="2024-03-05T14:30",
        description="  Quarterly review  ",
        contact_id="3",
        deal_id="",
    )
    values.update(overrides)
    return ActivityForm(**values)


def test_empty_form_reports_every_required_field() -> None:
    form = ActivityForm()

    errors = form.validate()

    assert errors == {
        "type": "Activity type is required",
        "description": "Description is required",
        "contact_id": "Contact is required",
        "date": "Date is required",
    }
    assert form.errors == errors
    assert not form.is_valid


def test_whitespace_description_is_missing() -> None:
    assert valid_form(description="   ").validate() == {"description": "Description is required"}


def test_invalid_values_are_rejected() -> None:
    errors = valid_form(type="fax", date="yesterday", contact_id="abc", deal_id="x").validate()

    assert errors == {
        "type": "Select a valid activity type",
        "date": "Enter a valid date",
        "contact_id": "Select a valid contact",
        "deal_id": "Select a valid deal",
    }


def test_valid_form_builds_payload() -> None:
    form = valid_form(deal_id="8")
    assert form.is_valid

    payload = form.to_payload()

    assert payload.type == "meeting"
    assert payload.date == datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)
    assert payload.description == "Quarterly review"
    assert payload.contact_id == 3
    assert payload.deal_id == 8


def test_empty_deal_becomes_none() -> None:
    assert valid_form().to_payload().deal_id is None


def test_blank_form_is_dated_now() -> None:
    form = ActivityForm.blank(datetime(2024, 3, 5, 9, 7, 45))

    assert form.date == "2024-03-05T09:07"
    assert form.type == ""
    assert form.contact_id == ""


def test_from_activity_prefers_embedded_ids() -> None:
    activity = SimpleNamespace(
        type="call",
        date=datetime(2024, 3, 5, 14, 30),
        description="Discussed pricing",
        contact_id=1,
        deal_id=None,
        contact=SimpleNamespace(id=1, name="Maya Patel"),
        deal=None,
    )

    form = ActivityForm.from_activity(activity)

    assert form.type == "call"
    assert form.date == "2024-03-05T14:30"
    assert form.description == "Discussed pricing"
    assert form.contact_id == "1"
    assert form.deal_id == ""


def test_options_have_placeholders() -> None:
    contacts = [SimpleNamespace(id=1, name="Maya Patel")]
    deals = [SimpleNamespace(id=4, name="Northwind renewal")]

    assert contact_options(contacts) == [("", "Select Contact"), ("1", "Maya Patel")]
    assert deal_options(deals) == [("", "No Deal (Optional)"), ("4", "Northwind renewal")]


def test_titles_and_labels() -> None:
    assert form_title(editing=False) == "Add New Activity"
    assert form_title(editing=True) == "Edit Activity"
    assert submit_label(editing=False) == "Create"
    assert submit_label(editing=True) == "Update"


def test_edit_round_trip_keeps_instant_for_offset_dates() -> None:
    stored = datetime(2024, 3, 5, 16, 30, tzinfo=timezone(timedelta(hours=2)))
    activity = SimpleNamespace(
        type="call",
        date=stored,
        description="Discussed pricing",
        contact_id=1,
        deal_id=None,
        contact=None,
        deal=None,
    )

    form = ActivityForm.from_activity(activity)

    assert form.date == "2024-03-05T14:30"
    assert form.to_payload().date == stored
