"""
Domain Errors - raised by services, rendered by the API exception handlers
"""
from typing import Any, Dict, Optional


class WanderlistError(Exception):
    """Base error carrying an HTTP status and a stable error code"""
    status_code: int = 500
    code: str = "internal"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.context:
            payload["context"] = self.context
        return payload


class InvalidRequest(WanderlistError):
    """Malformed or missing caller input"""
    status_code = 400
    code = "invalid_request"


class InvalidName(InvalidRequest):
    code = "invalid_name"


class InvalidRating(InvalidRequest):
    code = "invalid_rating"


class InvalidComment(InvalidRequest):
    code = "invalid_comment"


class Duplicate(InvalidRequest):
    """Destination is already a member of the list"""
    code = "duplicate"


class Unauthenticated(WanderlistError):
    status_code = 401
    code = "unauthenticated"


class Forbidden(WanderlistError):
    status_code = 403
    code = "forbidden"


class NotFound(WanderlistError):
    status_code = 404
    code = "not_found"


class Conflict(WanderlistError):
    status_code = 409
    code = "conflict"


class Internal(WanderlistError):
    status_code = 500
    code = "internal"


class CatalogNotLoaded(WanderlistError):
    """Destination data has not been loaded yet"""
    status_code = 503
    code = "catalog_not_loaded"
