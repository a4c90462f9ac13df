"""Audit trail writes."""
from typing import Optional, Any, Dict

from registry.models import AuditEvent, Hospital


def log_action(*, hospital: Optional[Hospital], action: str, object_type: Optional[str] = None,
               object_id: Optional[Any] = None, detail: Optional[Dict[str, Any]] = None) -> AuditEvent:
    return AuditEvent.objects.create(
        hospital=hospital if isinstance(hospital, Hospital) and hospital.pk else None,
        action=action,
        object_type=object_type,
        object_id=str(object_id) if object_id is not None else None,
        detail=detail or {},
    )
