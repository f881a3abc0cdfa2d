from .course import CourseValidator, contains_forbidden_markup, XSS_ERROR_KEY
from .events import (
    DetectionPoint,
    SecurityEvent,
    SecurityEventObserver,
    LoggingSecurityEventObserver,
    emit_security_event,
)

__all__ = [
    "CourseValidator",
    "contains_forbidden_markup",
    "XSS_ERROR_KEY",
    "DetectionPoint",
    "SecurityEvent",
    "SecurityEventObserver",
    "LoggingSecurityEventObserver",
    "emit_security_event",
]
