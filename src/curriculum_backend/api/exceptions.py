from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional

class NotFoundException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_404_NOT_FOUND
        self.detail = detail or "Not found"

class ForbiddenException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_403_FORBIDDEN
        self.detail = detail or "Forbidden"

class BadRequestException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_400_BAD_REQUEST
        self.detail = detail or "Bad request"

class UnauthorizedException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_401_UNAUTHORIZED
        self.detail = detail or "Unauthorized"

class BasicAuthException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = {"WWW-Authenticate": "Basic"}
        self.status_code = status.HTTP_401_UNAUTHORIZED
        self.detail = detail or "Incorrect username or password"

class InternalServerException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        self.detail = detail or "Internal server error"


class FieldError:
    """A single rejected field: which field, which rule, what to tell the caller."""

    def __init__(self, field: str, error_key: str, message: str):
        self.field = field
        self.error_key = error_key
        self.message = message

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "error_key": self.error_key, "message": self.message}


class ValidationException(BadRequestException):
    """Malformed write request: pre-set id on create, missing id on update, unsafe content."""

    def __init__(self, message: str, entity_name: str, error_key: str,
                 field_errors: Optional[List[FieldError]] = None,
                 headers: Optional[Dict[str, str]] = None):
        self.message = message
        self.entity_name = entity_name
        self.error_key = error_key
        self.field_errors = field_errors or []
        super().__init__(
            detail={
                "message": message,
                "entity_name": entity_name,
                "error_key": error_key,
                "field_errors": [field_error.to_dict() for field_error in self.field_errors],
            },
            headers=headers,
        )
