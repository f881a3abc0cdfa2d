"""
Content-safety validation for Course payloads.

This is a denylist for two literal markup patterns in the
description, not an HTML sanitizer.
"""

from typing import Any, List, Optional

from curriculum_backend.api.exceptions import FieldError, ValidationException
from curriculum_backend.validation.events import (
    INPUT_VALIDATION_XSS,
    SecurityEvent,
    SecurityEventObserver,
    emit_security_event,
)

XSS_ERROR_KEY = "xss.attempt"
XSS_MESSAGE = "You tried XSS - stop!"
FORBIDDEN_MARKUP = ("<script>", "<img")


def contains_forbidden_markup(value: Optional[str]) -> bool:
    return value is not None and any(pattern in value for pattern in FORBIDDEN_MARKUP)


class CourseValidator:

    entity_name = "course"

    def __init__(self, observer: Optional[SecurityEventObserver] = None):
        self.observer = observer

    def validate(self, entity: Any, login: Optional[str] = None) -> List[FieldError]:
        """Return the rejected fields of ``entity``; emits a security event on rejection."""
        errors = []

        if contains_forbidden_markup(getattr(entity, "description", None)):
            errors.append(FieldError("description", XSS_ERROR_KEY, XSS_MESSAGE))
            emit_security_event(self.observer, SecurityEvent(
                login=login,
                detection_point=INPUT_VALIDATION_XSS,
                entity_name=self.entity_name,
                field="description",
            ))

        return errors

    def check(self, entity: Any, login: Optional[str] = None) -> None:
        errors = self.validate(entity, login)
        if errors:
            raise ValidationException(
                errors[0].message,
                self.entity_name,
                errors[0].error_key,
                field_errors=errors,
            )
