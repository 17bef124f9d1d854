"""
CRUD services for the CRM resources (activities, contacts, deals).

Each service wraps a SQLAlchemy session and exposes the same small surface
the pages and the JSON API build on: get_all, get_by_id, create, update,
delete. Database failures are rolled back and re-raised as CRMServiceError
so callers only ever handle one exception family.
"""
import logging
from typing import Any, Dict, List

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.models import Activity, Contact, Deal

logger = logging.getLogger(__name__)


class CRMServiceError(Exception):
    """Raised when a CRM operation fails. The message is safe to show to users."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RecordNotFoundError(CRMServiceError):
    """Raised when a record id does not exist"""

    def __init__(self, resource: str, record_id: int):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource} not found")


class InvalidReferenceError(CRMServiceError):
    """Raised when an activity points at a contact or deal that does not exist"""
    pass


class CRMService:
    model: Any = None
    resource_name = "Record"

    def __init__(self, db: Session):
        self.db = db

    def _ordering(self) -> tuple:
        return (self.model.id,)

    def _query(self):
        return self.db.query(self.model)

    def _check_references(self, data: Dict[str, Any]) -> None:
        pass

    def _fail(self, action: str, error: SQLAlchemyError) -> CRMServiceError:
        self.db.rollback()
        logger.error(f"Failed to {action} {self.resource_name.lower()}: {error}")
        return CRMServiceError(f"Failed to {action} {self.resource_name.lower()}")

    def get_all(self) -> List[Any]:
        try:
            return self._query().order_by(*self._ordering()).all()
        except SQLAlchemyError as e:
            raise self._fail("load", e) from e

    def get_by_id(self, record_id: int) -> Any:
        try:
            record = self._query().filter(self.model.id == record_id).first()
        except SQLAlchemyError as e:
            raise self._fail("load", e) from e
        if record is None:
            raise RecordNotFoundError(self.resource_name, record_id)
        return record

    def create(self, data: BaseModel) -> Any:
        values = data.model_dump()
        self._check_references(values)

        record = self.model(**values)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            raise self._fail("create", e) from e

        logger.info(f"Created {self.resource_name.lower()} {record.id}")
        return record

    def update(self, record_id: int, data: BaseModel) -> Any:
        record = self.get_by_id(record_id)
        values = data.model_dump(exclude_unset=True)
        self._check_references(values)

        for field, value in values.items():
            setattr(record, field, value)

        try:
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            raise self._fail("update", e) from e

        logger.info(f"Updated {self.resource_name.lower()} {record_id}")
        return record

    def delete(self, record_id: int) -> None:
        record = self.get_by_id(record_id)
        try:
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", e) from e

        logger.info(f"Deleted {self.resource_name.lower()} {record_id}")


class ContactsService(CRMService):
    model = Contact
    resource_name = "Contact"

    def _ordering(self) -> tuple:
        return (Contact.name, Contact.id)


class DealsService(CRMService):
    model = Deal
    resource_name = "Deal"

    def _ordering(self) -> tuple:
        return (Deal.name, Deal.id)


class ActivitiesService(CRMService):
    model = Activity
    resource_name = "Activity"

    def _ordering(self) -> tuple:
        # Newest first
        return (Activity.date.desc(), Activity.id.desc())

    def _query(self):
        return self.db.query(Activity).options(
            joinedload(Activity.contact), joinedload(Activity.deal)
        )

    def _check_references(self, data: Dict[str, Any]) -> None:
        try:
            if "contact_id" in data:
                if data["contact_id"] is None:
                    raise InvalidReferenceError("Contact is required")
                if self.db.get(Contact, data["contact_id"]) is None:
                    raise InvalidReferenceError(f"Contact {data['contact_id']} does not exist")
            if data.get("deal_id") is not None:
                if self.db.get(Deal, data["deal_id"]) is None:
                    raise InvalidReferenceError(f"Deal {data['deal_id']} does not exist")
        except SQLAlchemyError as e:
            raise self._fail("validate", e) from e
