# --- File: school_records/schemas/report/report_aiops.py ---
"""
AIOps report subsystem schema.

Settings and running counters for automated operations on the reporting
platform. Counters are fed by callers; no detection or remediation logic
lives here.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from school_records.schemas.common.enums import SeverityLevel
from school_records.schemas.report.report_base import ReportComponentBase, percentage

__all__ = [
    "AIOpsStatus",
    "ReportAIOps",
]


class AIOpsStatus(str, Enum):
    INITIALIZING = "INITIALIZING"
    LEARNING = "LEARNING"
    ACTIVE = "ACTIVE"
    DEGRADED = "DEGRADED"
    DISABLED = "DISABLED"


class ReportAIOps(ReportComponentBase):
    """AIOps configuration and metrics."""

    aiops_id: Optional[int] = Field(default=None)
    status: AIOpsStatus = Field(default=AIOpsStatus.INITIALIZING)
    platform: Optional[str] = Field(default=None)
    auto_remediation_enabled: bool = Field(default=False)
    anomaly_sensitivity: float = Field(default=0.5, ge=0, le=1)
    last_trained_at: Optional[datetime] = Field(default=None)
    monitored_services: List[str] = Field(default_factory=list)

    # Automation
    total_automations: int = Field(default=0, ge=0)
    successful_automations: int = Field(default=0, ge=0)
    failed_automations: int = Field(default=0, ge=0)
    automation_success_rate: float = Field(default=0.0, ge=0, le=100)

    # Anomalies
    total_anomalies: int = Field(default=0, ge=0)
    critical_anomalies: int = Field(default=0, ge=0)
    anomalies_by_severity: Dict[str, int] = Field(default_factory=dict)

    # Incidents
    total_incidents: int = Field(default=0, ge=0)
    resolved_incidents: int = Field(default=0, ge=0)
    timed_resolutions: int = Field(default=0, ge=0, description="Resolved incidents with a known duration")
    mean_time_to_resolve_minutes: float = Field(default=0.0, ge=0)

    # Predictions
    total_predictions: int = Field(default=0, ge=0)
    accurate_predictions: int = Field(default=0, ge=0)
    prediction_accuracy: float = Field(default=0.0, ge=0, le=100)

    def increment_automation(self, successful: bool) -> None:
        self.total_automations += 1
        if successful:
            self.successful_automations += 1
        else:
            self.failed_automations += 1
        self.automation_success_rate = percentage(
            self.successful_automations, self.total_automations
        )

    def record_anomaly(self, severity: SeverityLevel) -> None:
        self.total_anomalies += 1
        key = SeverityLevel(severity).value
        self.anomalies_by_severity[key] = self.anomalies_by_severity.get(key, 0) + 1
        if key == SeverityLevel.CRITICAL.value:
            self.critical_anomalies += 1

    def record_incident(self, resolved: bool, resolution_minutes: Optional[float] = None) -> None:
        """Count an incident; resolved ones with a duration feed the running MTTR."""
        self.total_incidents += 1
        if not resolved:
            return
        self.resolved_incidents += 1
        if resolution_minutes is not None:
            total = self.mean_time_to_resolve_minutes * self.timed_resolutions + resolution_minutes
            self.timed_resolutions += 1
            self.mean_time_to_resolve_minutes = round(total / self.timed_resolutions, 2)

    def record_prediction(self, accurate: bool) -> None:
        self.total_predictions += 1
        if accurate:
            self.accurate_predictions += 1
        self.prediction_accuracy = percentage(self.accurate_predictions, self.total_predictions)

    def get_incident_resolution_rate(self) -> float:
        return percentage(self.resolved_incidents, self.total_incidents)

    def add_monitored_service(self, service_name: str) -> None:
        if service_name not in self.monitored_services:
            self.monitored_services.append(service_name)
