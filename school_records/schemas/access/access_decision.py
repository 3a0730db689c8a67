# --- File: school_records/schemas/access/access_decision.py ---
"""
Access decision schema.

Carries the outcome of a permission check from whatever evaluated it to
the caller that has to enforce it: the decision itself, the reasons
behind it, and any restrictions that apply when access is conditional.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field, computed_field, model_validator

from school_records.config.settings import settings
from school_records.schemas.common.base import BaseSchema
from school_records.schemas.common.enums import Decision

__all__ = ["AccessDecision"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccessDecision(BaseSchema):
    """
    Result of a permission check.

    Build instances through `grant`, `deny` or `conditional` so the
    `decision` and `granted` fields always agree. `grant` is the
    `granted(reason)` factory, named apart from the `granted` field.
    """

    decision: Decision = Field(
        ...,
        description="Decision outcome",
    )
    granted: bool = Field(
        ...,
        description="Whether the requester may proceed",
    )
    reason: Optional[str] = Field(
        default=None,
        description="Primary reason for the decision",
    )
    reasons: Optional[List[str]] = Field(
        default_factory=list,
        description="All reasons collected while evaluating",
    )
    applied_permissions: Optional[List[str]] = Field(
        default_factory=list,
        description="Permissions that contributed to the decision",
    )
    data_restrictions: Optional[Dict[str, Any]] = Field(
        default_factory=dict,
        description="Row or column level restrictions keyed by name",
    )
    masked_fields: Optional[List[str]] = Field(
        default_factory=list,
        description="Fields that must be masked in the response",
    )
    max_records: Optional[int] = Field(
        default=None,
        ge=0,
        description="Maximum number of records the requester may read",
    )
    requires_audit: bool = Field(
        default=False,
        description="Whether the access must be written to the audit log",
    )

    # Request context
    user_id: Optional[str] = Field(default=None, description="Requesting user")
    resource: Optional[str] = Field(default=None, description="Resource being accessed")
    action: Optional[str] = Field(default=None, description="Requested action")
    evaluated_at: datetime = Field(
        default_factory=_utcnow,
        description="When the decision was made",
    )

    @model_validator(mode="after")
    def validate_granted_flag(self) -> "AccessDecision":
        """Keep `granted` consistent with the decision outcome."""
        expected = self.decision != Decision.DENIED
        if self.granted != expected:
            raise ValueError(
                f"granted={self.granted} is inconsistent with decision {self.decision.value}"
            )
        return self

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def grant(cls, reason: Optional[str] = None, **context: Any) -> "AccessDecision":
        """Unconditional grant."""
        return cls(
            decision=Decision.GRANTED,
            granted=True,
            reason=reason,
            reasons=[reason] if reason else [],
            **context,
        )

    @classmethod
    def deny(cls, reason: Optional[str] = None, **context: Any) -> "AccessDecision":
        """Denial. Denials are always audited."""
        context.setdefault("requires_audit", True)
        return cls(
            decision=Decision.DENIED,
            granted=False,
            reason=reason,
            reasons=[reason] if reason else [],
            **context,
        )

    @classmethod
    def conditional(
        cls,
        reason: Optional[str] = None,
        max_records: Optional[int] = None,
        masked_fields: Optional[List[str]] = None,
        data_restrictions: Optional[Dict[str, Any]] = None,
        **context: Any,
    ) -> "AccessDecision":
        """
        Grant subject to record caps, masking or data restrictions.

        Without an explicit cap the configured DEFAULT_MAX_RECORDS applies.
        """
        if max_records is None:
            max_records = settings.DEFAULT_MAX_RECORDS
        return cls(
            decision=Decision.CONDITIONAL,
            granted=True,
            reason=reason,
            reasons=[reason] if reason else [],
            max_records=max_records,
            masked_fields=list(masked_fields or []),
            data_restrictions=dict(data_restrictions or {}),
            **context,
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add_reason(self, reason: str) -> None:
        if self.reasons is None:
            self.reasons = []
        self.reasons.append(reason)

    def add_applied_permission(self, permission: str) -> None:
        if self.applied_permissions is None:
            self.applied_permissions = []
        self.applied_permissions.append(permission)

    def add_masked_field(self, field_name: str) -> None:
        if self.masked_fields is None:
            self.masked_fields = []
        if field_name not in self.masked_fields:
            self.masked_fields.append(field_name)

    def add_data_restriction(self, key: str, value: Any) -> None:
        if self.data_restrictions is None:
            self.data_restrictions = {}
        self.data_restrictions[key] = value

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_conditional(self) -> bool:
        return self.decision == Decision.CONDITIONAL

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_restrictions(self) -> bool:
        """Whether any cap, mask or data restriction applies."""
        return bool(
            self.max_records is not None
            or self.masked_fields
            or self.data_restrictions
        )

    def is_field_masked(self, field_name: str) -> bool:
        return bool(self.masked_fields) and field_name in self.masked_fields
