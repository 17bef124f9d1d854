from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from app.api.errors import to_http_error
from app.db.session import get_db
from app.schemas import ActivityCreate, ActivityUpdate, ActivityResponse
from app.services.activity_list import ALL_TYPES, visible_activities
from app.services.crm_service import ActivitiesService, CRMServiceError

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post("/", response_model=ActivityResponse, status_code=201)
def create_activity(activity: ActivityCreate, db: Session = Depends(get_db)):
    """Log a new activity against a contact and, optionally, a deal"""
    try:
        return ActivitiesService(db).create(activity)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.get("/", response_model=List[ActivityResponse])
def list_activities(
    search: str = Query("", description="Case-insensitive substring of the description"),
    type: str = Query(ALL_TYPES, description="Activity type, or 'all'"),
    db: Session = Depends(get_db)
):
    """
    List activities, newest first.
    Optionally narrowed by a description search and an activity type.
    """
    try:
        activities = ActivitiesService(db).get_all()
    except CRMServiceError as e:
        raise to_http_error(e)
    return visible_activities(activities, search, type)


@router.get("/{activity_id}", response_model=ActivityResponse)
def get_activity(activity_id: int, db: Session = Depends(get_db)):
    """Get a specific activity by ID"""
    try:
        return ActivitiesService(db).get_by_id(activity_id)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.put("/{activity_id}", response_model=ActivityResponse)
def update_activity(
    activity_id: int,
    activity_update: ActivityUpdate,
    db: Session = Depends(get_db)
):
    """Update an activity"""
    try:
        return ActivitiesService(db).update(activity_id, activity_update)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.delete("/{activity_id}", status_code=204)
def delete_activity(activity_id: int, db: Session = Depends(get_db)):
    """Delete an activity"""
    try:
        ActivitiesService(db).delete(activity_id)
    except CRMServiceError as e:
        raise to_http_error(e)
    return None
