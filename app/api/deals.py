from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.api.errors import to_http_error
from app.db.session import get_db
from app.schemas import DealCreate, DealUpdate, DealResponse
from app.services.crm_service import DealsService, CRMServiceError

router = APIRouter(prefix="/deals", tags=["deals"])


@router.post("/", response_model=DealResponse, status_code=201)
def create_deal(deal: DealCreate, db: Session = Depends(get_db)):
    """Create a new deal"""
    try:
        return DealsService(db).create(deal)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.get("/", response_model=List[DealResponse])
def list_deals(db: Session = Depends(get_db)):
    """List all deals ordered by name"""
    try:
        return DealsService(db).get_all()
    except CRMServiceError as e:
        raise to_http_error(e)


@router.get("/{deal_id}", response_model=DealResponse)
def get_deal(deal_id: int, db: Session = Depends(get_db)):
    """Get a specific deal by ID"""
    try:
        return DealsService(db).get_by_id(deal_id)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.put("/{deal_id}", response_model=DealResponse)
def update_deal(
    deal_id: int,
    deal_update: DealUpdate,
    db: Session = Depends(get_db)
):
    """Update a deal"""
    try:
        return DealsService(db).update(deal_id, deal_update)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.delete("/{deal_id}", status_code=204)
def delete_deal(deal_id: int, db: Session = Depends(get_db)):
    """Delete a deal. Its activities stay, unlinked."""
    try:
        DealsService(db).delete(deal_id)
    except CRMServiceError as e:
        raise to_http_error(e)
    return None
