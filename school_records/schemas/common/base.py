# --- File: school_records/schemas/common/base.py ---
"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "AuditMixin",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Every transport object in the package inherits from this so that
    construction from ORM-style objects, assignment validation and
    whitespace handling behave the same everywhere.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        # Keep enums as Enum instances; callers use `.value` for display.
        use_enum_values=False,
        arbitrary_types_allowed=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class TimestampMixin(BaseModel):
    """Mixin for optional timestamp fields."""

    created_at: Optional[datetime] = Field(
        default=None,
        description="Creation timestamp",
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last update timestamp",
    )


class AuditMixin(BaseModel):
    """Mixin recording who created and last changed a record."""

    created_by: Optional[str] = Field(
        default=None,
        description="User that created the record",
    )
    updated_by: Optional[str] = Field(
        default=None,
        description="User that last modified the record",
    )
