"""
Server-rendered Activities pages.

One list page hosts everything: the filter bar, the activity cards, and
the add/edit form and delete confirmation as modals opened by their own
URLs. Mutations use post/redirect/get; the redirect carries a notice code
that the list page turns into a toast after re-loading all data.
"""
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.config import app_settings
from app.db.session import get_db
from app.schemas import ActivityUpdate
from app.services.activity_card import build_activity_card
from app.services.activity_form import (
    ActivityForm,
    REQUIRED_FIELDS_MESSAGE,
    SAVE_FAILED_MESSAGE,
    TYPE_OPTIONS,
    contact_options,
    deal_options,
    form_title,
    submit_label,
)
from app.services.activity_list import (
    ACTIVITY_TYPE_FILTERS,
    ALL_TYPES,
    empty_state_description,
    filters_active,
    visible_activities,
)
from app.services.crm_service import (
    ActivitiesService,
    ContactsService,
    CRMServiceError,
    DealsService,
    RecordNotFoundError,
)
from app.web.notifications import Notification, error, notice_for

logger = logging.getLogger(__name__)

BASE_PATH = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_PATH / "templates"))


def icon_slug(name: str) -> str:
    """Convert an icon name like 'CheckSquare' to the 'check-square' form the icon set uses"""
    return re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()


templates.env.filters["icon_slug"] = icon_slug

router = APIRouter(prefix="/activities", tags=["pages"], include_in_schema=False)


def list_url(search: str = "", type_filter: str = ALL_TYPES, notice: Optional[str] = None, path: str = "") -> str:
    """URL under /activities that keeps the current filters"""
    params = {}
    if search:
        params["search"] = search
    if type_filter and type_filter != ALL_TYPES:
        params["type"] = type_filter
    if notice:
        params["notice"] = notice
    url = f"/activities{path}"
    return f"{url}?{urlencode(params)}" if params else url


def _render_page(
    request: Request,
    db: Session,
    search: str,
    type_filter: str,
    notification: Optional[Notification] = None,
    form: Optional[ActivityForm] = None,
    editing_id: Optional[int] = None,
    deleting=None,
    status_code: int = 200,
) -> HTMLResponse:
    try:
        activities = ActivitiesService(db).get_all()
        contacts = ContactsService(db).get_all()
        deals = DealsService(db).get_all()
    except CRMServiceError as e:
        logger.error(f"Error loading activities page: {e.message}")
        return templates.TemplateResponse(
            request=request,
            name="activities/error.html",
            context={
                "app_name": app_settings.app_name,
                "message": e.message or "Failed to load activities",
                "retry_url": list_url(search, type_filter),
            },
            status_code=503,
        )

    cards = [
        build_activity_card(activity, contacts, deals)
        for activity in visible_activities(activities, search, type_filter)
    ]

    context = {
        "app_name": app_settings.app_name,
        "cards": cards,
        "search": search,
        "type_filter": type_filter,
        "type_filters": ACTIVITY_TYPE_FILTERS,
        "filters_active": filters_active(search, type_filter),
        "empty_description": empty_state_description(search, type_filter),
        "notification": notification,
        "list_url": list_url(search, type_filter),
        "new_url": list_url(search, type_filter, path="/new"),
        "edit_urls": {c.id: list_url(search, type_filter, path=f"/{c.id}/edit") for c in cards},
        "delete_urls": {c.id: list_url(search, type_filter, path=f"/{c.id}/delete") for c in cards},
        "form": form,
        "deleting": deleting,
    }

    if form is not None:
        editing = editing_id is not None
        form_path = f"/{editing_id}/edit" if editing else "/new"
        context.update({
            "form_title": form_title(editing),
            "submit_label": submit_label(editing),
            "form_action": list_url(search, type_filter, path=form_path),
            "type_options": TYPE_OPTIONS,
            "contact_options": contact_options(contacts),
            "deal_options": deal_options(deals),
        })

    if deleting is not None:
        context["delete_action"] = list_url(search, type_filter, path=f"/{deleting.id}/delete")

    return templates.TemplateResponse(
        request=request,
        name="activities/list.html",
        context=context,
        status_code=status_code,
    )


def _get_activity_or_404(db: Session, activity_id: int):
    try:
        return ActivitiesService(db).get_by_id(activity_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Activity not found")
    except CRMServiceError as e:
        logger.error(f"Error loading activity {activity_id}: {e.message}")
        raise HTTPException(status_code=503, detail=e.message)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


@router.get("", response_class=HTMLResponse)
def activities_page(
    request: Request,
    search: str = Query(""),
    type_filter: str = Query(ALL_TYPES, alias="type"),
    notice: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Activities list with search, type filter and any pending toast"""
    return _render_page(request, db, search, type_filter, notification=notice_for(notice))


@router.get("/new", response_class=HTMLResponse)
def new_activity_page(
    request: Request,
    search: str = Query(""),
    type_filter: str = Query(ALL_TYPES, alias="type"),
    db: Session = Depends(get_db),
):
    """List page with an empty activity form open"""
    form = ActivityForm.blank(datetime.now(timezone.utc))
    return _render_page(request, db, search, type_filter, form=form)


@router.post("/new", response_class=HTMLResponse)
def create_activity_submit(
    request: Request,
    search: str = Query(""),
    type_filter: str = Query(ALL_TYPES, alias="type"),
    activity_type: str = Form("", alias="type"),
    date: str = Form(""),
    description: str = Form(""),
    contact_id: str = Form(""),
    deal_id: str = Form(""),
    db: Session = Depends(get_db),
):
    """Validate and create an activity, then return to the list"""
    form = ActivityForm(
        type=activity_type,
        date=date,
        description=description,
        contact_id=contact_id,
        deal_id=deal_id,
    )
    if not form.is_valid:
        return _render_page(
            request, db, search, type_filter,
            notification=error(REQUIRED_FIELDS_MESSAGE),
            form=form,
            status_code=422,
        )

    try:
        ActivitiesService(db).create(form.to_payload())
    except CRMServiceError as e:
        logger.error(f"Error saving activity: {e.message}")
        return _render_page(
            request, db, search, type_filter,
            notification=error(e.message or SAVE_FAILED_MESSAGE),
            form=form,
            status_code=400,
        )

    return _redirect(list_url(search, type_filter, notice="activity_created"))


@router.get("/{activity_id}/edit", response_class=HTMLResponse)
def edit_activity_page(
    request: Request,
    activity_id: int,
    search: str = Query(""),
    type_filter: str = Query(ALL_TYPES, alias="type"),
    db: Session = Depends(get_db),
):
    """List page with the form open on an existing activity"""
    activity = _get_activity_or_404(db, activity_id)
    form = ActivityForm.from_activity(activity)
    return _render_page(request, db, search, type_filter, form=form, editing_id=activity_id)


@router.post("/{activity_id}/edit", response_class=HTMLResponse)
def update_activity_submit(
    request: Request,
    activity_id: int,
    search: str = Query(""),
    type_filter: str = Query(ALL_TYPES, alias="type"),
    activity_type: str = Form("", alias="type"),
    date: str = Form(""),
    description: str = Form(""),
    contact_id: str = Form(""),
    deal_id: str = Form(""),
    db: Session = Depends(get_db),
):
    """Validate and save changes to an activity, then return to the list"""
    _get_activity_or_404(db, activity_id)

    form = ActivityForm(
        type=activity_type,
        date=date,
        description=description,
        contact_id=contact_id,
        deal_id=deal_id,
    )
    if not form.is_valid:
        return _render_page(
            request, db, search, type_filter,
            notification=error(REQUIRED_FIELDS_MESSAGE),
            form=form,
            editing_id=activity_id,
            status_code=422,
        )

    try:
        # Every field is sent so clearing the deal unlinks it
        ActivitiesService(db).update(activity_id, ActivityUpdate(**form.to_payload().model_dump()))
    except CRMServiceError as e:
        logger.error(f"Error saving activity {activity_id}: {e.message}")
        return _render_page(
            request, db, search, type_filter,
            notification=error(e.message or SAVE_FAILED_MESSAGE),
            form=form,
            editing_id=activity_id,
            status_code=400,
        )

    return _redirect(list_url(search, type_filter, notice="activity_updated"))


@router.get("/{activity_id}/delete", response_class=HTMLResponse)
def delete_activity_page(
    request: Request,
    activity_id: int,
    search: str = Query(""),
    type_filter: str = Query(ALL_TYPES, alias="type"),
    db: Session = Depends(get_db),
):
    """List page with the delete confirmation open"""
    activity = _get_activity_or_404(db, activity_id)
    return _render_page(request, db, search, type_filter, deleting=activity)


@router.post("/{activity_id}/delete")
def delete_activity_submit(
    activity_id: int,
    search: str = Query(""),
    type_filter: str = Query(ALL_TYPES, alias="type"),
    db: Session = Depends(get_db),
):
    """Delete a confirmed activity and return to the list"""
    try:
        ActivitiesService(db).delete(activity_id)
    except RecordNotFoundError:
        logger.error(f"Error deleting activity {activity_id}: not found")
        return _redirect(list_url(search, type_filter, notice="activity_not_found"))
    except CRMServiceError as e:
        logger.error(f"Error deleting activity {activity_id}: {e.message}")
        return _redirect(list_url(search, type_filter, notice="activity_delete_failed"))

    return _redirect(list_url(search, type_filter, notice="activity_deleted"))
