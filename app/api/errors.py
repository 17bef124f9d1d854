from fastapi import HTTPException

from app.services.crm_service import CRMServiceError, RecordNotFoundError, InvalidReferenceError


def to_http_error(error: CRMServiceError) -> HTTPException:
    """Translate a service failure into the matching HTTP error"""
    if isinstance(error, RecordNotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, InvalidReferenceError):
        return HTTPException(status_code=422, detail=error.message)
    return HTTPException(status_code=500, detail=error.message)
