from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.api.errors import to_http_error
from app.db.session import get_db
from app.schemas import ContactCreate, ContactUpdate, ContactResponse
from app.services.crm_service import ContactsService, CRMServiceError

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("/", response_model=ContactResponse, status_code=201)
def create_contact(contact: ContactCreate, db: Session = Depends(get_db)):
    """Create a new contact"""
    try:
        return ContactsService(db).create(contact)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.get("/", response_model=List[ContactResponse])
def list_contacts(db: Session = Depends(get_db)):
    """List all contacts ordered by name"""
    try:
        return ContactsService(db).get_all()
    except CRMServiceError as e:
        raise to_http_error(e)


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(contact_id: int, db: Session = Depends(get_db)):
    """Get a specific contact by ID"""
    try:
        return ContactsService(db).get_by_id(contact_id)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.put("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: int,
    contact_update: ContactUpdate,
    db: Session = Depends(get_db)
):
    """Update a contact"""
    try:
        return ContactsService(db).update(contact_id, contact_update)
    except CRMServiceError as e:
        raise to_http_error(e)


@router.delete("/{contact_id}", status_code=204)
def delete_contact(contact_id: int, db: Session = Depends(get_db)):
    """Delete a contact together with its activities"""
    try:
        ContactsService(db).delete(contact_id)
    except CRMServiceError as e:
        raise to_http_error(e)
    return None
