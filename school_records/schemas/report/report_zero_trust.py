# --- File: school_records/schemas/report/report_zero_trust.py ---
"""
Zero-trust report subsystem schema.

Policy settings and access counters for zero-trust access to reports.
Enforcement happens elsewhere; this object only records outcomes.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from school_records.schemas.report.report_base import ReportComponentBase, percentage

__all__ = [
    "PolicyMode",
    "ReportZeroTrust",
]


class PolicyMode(str, Enum):
    MONITOR = "MONITOR"
    ENFORCE = "ENFORCE"


class ReportZeroTrust(ReportComponentBase):
    """Zero-trust configuration and access metrics."""

    zero_trust_id: Optional[int] = Field(default=None)
    policy_mode: PolicyMode = Field(default=PolicyMode.MONITOR)
    default_deny: bool = Field(default=True)
    mfa_required: bool = Field(default=True)
    continuous_verification: bool = Field(default=True)
    session_timeout_minutes: int = Field(default=30, ge=1)
    trust_score: Optional[float] = Field(default=None, ge=0, le=100)

    # Access
    total_access_attempts: int = Field(default=0, ge=0)
    granted_access_count: int = Field(default=0, ge=0)
    denied_access_count: int = Field(default=0, ge=0)

    # Verification
    total_verifications: int = Field(default=0, ge=0)
    passed_verifications: int = Field(default=0, ge=0)
    failed_verifications: int = Field(default=0, ge=0)

    # Segmentation
    segments: List[str] = Field(default_factory=list)
    micro_segment_count: int = Field(default=0, ge=0)
    policy_violations: int = Field(default=0, ge=0)

    def increment_access_attempt(self, granted: bool) -> None:
        self.total_access_attempts += 1
        if granted:
            self.granted_access_count += 1
        else:
            self.denied_access_count += 1

    def get_access_grant_rate(self) -> float:
        return percentage(self.granted_access_count, self.total_access_attempts)

    def get_access_denial_rate(self) -> float:
        return percentage(self.denied_access_count, self.total_access_attempts)

    def record_verification(self, passed: bool) -> None:
        self.total_verifications += 1
        if passed:
            self.passed_verifications += 1
        else:
            self.failed_verifications += 1

    def get_verification_pass_rate(self) -> float:
        return percentage(self.passed_verifications, self.total_verifications)

    def add_segment(self, segment: str) -> None:
        if segment not in self.segments:
            self.segments.append(segment)
            self.micro_segment_count = len(self.segments)

    def update_trust_score(self, score: float) -> None:
        """Assignment is validated, so scores outside 0-100 raise."""
        self.trust_score = score

    def record_policy_violation(self) -> None:
        self.policy_violations += 1
