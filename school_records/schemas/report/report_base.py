# --- File: school_records/schemas/report/report_base.py ---
"""
Shared pieces of the report subsystem schemas.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import Field

from school_records.schemas.common.base import AuditMixin, BaseSchema, TimestampMixin

__all__ = [
    "ReportComponentBase",
    "percentage",
    "utcnow",
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def percentage(part: int, whole: int) -> float:
    """`part` as a percentage of `whole`, rounded to 2 places; 0.0 for an empty whole."""
    if not whole:
        return 0.0
    return round(part * 100.0 / whole, 2)


class ReportComponentBase(BaseSchema, TimestampMixin, AuditMixin):
    """Identity and configuration fields every report subsystem carries."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    report_id: Optional[int] = Field(default=None, description="Report this component serves")
    is_active: bool = Field(default=False)
    configuration: Dict[str, Any] = Field(default_factory=dict)
    tags: Dict[str, str] = Field(default_factory=dict)
