"""
Security signal side channel.

Validators report detected attacks to an observer. Emission is
fire-and-forget: ``emit_security_event`` logs observer failures and
never lets them reach the caller.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)
security_logger = logging.getLogger("curriculum_backend.security")

DETECTION_SYSTEM = "curriculum-backend"


class DetectionPoint(BaseModel):
    category: str
    label: str


INPUT_VALIDATION_XSS = DetectionPoint(category="INPUT_VALIDATION", label="IE1")


class SecurityEvent(BaseModel):
    login: Optional[str] = None
    detection_point: DetectionPoint
    detection_system: str = DETECTION_SYSTEM
    entity_name: Optional[str] = None
    field: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SecurityEventObserver:
    """Receives security events. Implementations may talk to remote intrusion detection."""

    def notify(self, event: SecurityEvent) -> None:
        raise NotImplementedError


class LoggingSecurityEventObserver(SecurityEventObserver):

    def notify(self, event: SecurityEvent) -> None:
        security_logger.warning(
            "Security event %s/%s from user %r on %s.%s",
            event.detection_point.category,
            event.detection_point.label,
            event.login,
            event.entity_name,
            event.field,
        )


def emit_security_event(observer: Optional[SecurityEventObserver], event: SecurityEvent) -> None:
    if observer is None:
        return

    try:
        observer.notify(event)
    except Exception:
        logger.warning(f"Security event observer {type(observer).__name__} failed", exc_info=True)
