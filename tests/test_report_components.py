from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from school_records.schemas.common.enums import SeverityLevel
from school_records.schemas.report import (
    Aggregation,
    Dimension,
    DrillOperation,
    DrillType,
    Hierarchy,
    MDXQuery,
    Measure,
    OLAPCube,
    OLAPStatus,
    PivotOperation,
    QueryStatus,
    ReportAIOps,
    ReportOLAP,
    ReportQuantumCrypto,
    ReportZeroTrust,
    SliceOperation,
    percentage,
)
from school_records.schemas.report.report_base import utcnow


def test_percentage_handles_empty_whole():
    assert percentage(1, 3) == 33.33
    assert percentage(4, 0) == 0.0


# ---------------------------------------------------------------------------
# OLAP
# ---------------------------------------------------------------------------


def test_olap_deploy_and_cubes():
    olap = ReportOLAP(name="Attendance cube")
    olap.deploy_olap_system()
    olap.add_olap_cube(OLAPCube(cube_id="c1", cube_name="Daily", cell_count=100))

    assert olap.status == OLAPStatus.ACTIVE
    assert olap.is_active is True
    assert olap.deployed_at is not None
    assert olap.total_cubes == 1
    assert olap.total_cells == 100

    assert olap.process_cube("c1") is True
    assert olap.process_cube("c1") is True
    assert olap.active_cubes == 1
    assert olap.get_cube("c1").processing_progress == 100.0
    assert olap.process_cube("missing") is False


def test_olap_re_adding_ids_does_not_double_count():
    olap = ReportOLAP(name="Attendance cube")
    olap.add_olap_cube(OLAPCube(cube_id="c1", cube_name="Daily", cell_count=100))
    olap.process_cube("c1")
    olap.add_olap_cube(OLAPCube(cube_id="c1", cube_name="Daily", cell_count=40))
    olap.add_olap_cube(OLAPCube(cube_id="c2", cube_name="Weekly", cell_count=5))
    olap.add_dimension(Dimension(dimension_id="d1", dimension_name="Date"))
    olap.add_dimension(Dimension(dimension_id="d1", dimension_name="Calendar date"))
    olap.add_measure(Measure(measure_id="m1", measure_name="absences"))
    olap.add_measure(Measure(measure_id="m1", measure_name="absences"))
    olap.add_aggregation(Aggregation(aggregation_id="a1", aggregation_name="By month"))
    olap.add_aggregation(Aggregation(aggregation_id="a1", aggregation_name="By month"))

    assert olap.total_cubes == 2
    assert olap.total_cells == 45
    assert olap.active_cubes == 0
    assert olap.cubes["c1"].cell_count == 40
    assert olap.total_dimensions == 1
    assert olap.dimensions["d1"].dimension_name == "Calendar date"
    assert olap.total_measures == 1
    assert olap.total_aggregations == 1


def test_olap_query_counters():
    olap = ReportOLAP(name="Attendance cube")
    olap.execute_mdx_query(MDXQuery(query_id="q1", mdx_statement="SELECT", status=QueryStatus.COMPLETED, execution_time=100))
    olap.execute_mdx_query(MDXQuery(query_id="q2", mdx_statement="SELECT", status=QueryStatus.FAILED, execution_time=300))
    olap.execute_mdx_query(MDXQuery(query_id="q3", mdx_statement="SELECT"))

    assert olap.total_queries == 3
    assert olap.successful_queries == 1
    assert olap.failed_queries == 1
    assert olap.average_query_time_ms == 200.0
    assert olap.query_success_rate == 33.33


def test_olap_hierarchy_links_dimension_and_operations_count():
    olap = ReportOLAP(name="Attendance cube")
    olap.add_dimension(Dimension(dimension_id="d1", dimension_name="Date"))
    olap.add_hierarchy(
        Hierarchy(hierarchy_id="h1", hierarchy_name="Calendar", dimension_id="d1", levels=["Year", "Month"])
    )
    olap.add_hierarchy(
        Hierarchy(hierarchy_id="h1", hierarchy_name="Calendar", dimension_id="d1", levels=["Year"])
    )

    olap.perform_drill(DrillOperation(operation_id="o1", drill_type=DrillType.DRILL_DOWN))
    olap.add_slice(SliceOperation(operation_id="o2"))
    olap.add_pivot(PivotOperation(operation_id="o3"))

    assert olap.dimensions["d1"].hierarchy_ids == ["h1"]
    assert olap.total_dimensions == 1
    assert olap.total_operations == 3


# ---------------------------------------------------------------------------
# AIOps
# ---------------------------------------------------------------------------


def test_aiops_automation_rate():
    aiops = ReportAIOps(name="Report ops")
    aiops.increment_automation(True)
    aiops.increment_automation(False)

    assert aiops.total_automations == 2
    assert aiops.automation_success_rate == 50.0


def test_aiops_anomalies_and_incidents():
    aiops = ReportAIOps(name="Report ops")
    aiops.record_anomaly(SeverityLevel.CRITICAL)
    aiops.record_anomaly(SeverityLevel.LOW)
    aiops.record_anomaly(SeverityLevel.LOW)
    aiops.record_incident(resolved=True, resolution_minutes=30)
    aiops.record_incident(resolved=True, resolution_minutes=60)
    aiops.record_incident(resolved=True)
    aiops.record_incident(resolved=False)

    assert aiops.anomalies_by_severity == {"CRITICAL": 1, "LOW": 2}
    assert aiops.critical_anomalies == 1
    assert aiops.mean_time_to_resolve_minutes == 45.0
    assert aiops.get_incident_resolution_rate() == 75.0


def test_aiops_prediction_accuracy_and_services():
    aiops = ReportAIOps(name="Report ops")
    for accurate in (True, True, False, True):
        aiops.record_prediction(accurate)
    aiops.add_monitored_service("scheduler")
    aiops.add_monitored_service("scheduler")

    assert aiops.prediction_accuracy == 75.0
    assert aiops.monitored_services == ["scheduler"]


# ---------------------------------------------------------------------------
# Zero trust
# ---------------------------------------------------------------------------


def test_zero_trust_access_rates():
    zero_trust = ReportZeroTrust(name="Report access")
    for granted in (True, True, True, False):
        zero_trust.increment_access_attempt(granted)

    assert zero_trust.get_access_grant_rate() == 75.0
    assert zero_trust.get_access_denial_rate() == 25.0
    assert ReportZeroTrust(name="Empty").get_access_grant_rate() == 0.0


def test_zero_trust_segments_and_trust_score():
    zero_trust = ReportZeroTrust(name="Report access")
    zero_trust.add_segment("staff")
    zero_trust.add_segment("staff")
    zero_trust.add_segment("students")
    zero_trust.record_verification(True)
    zero_trust.record_verification(False)
    zero_trust.update_trust_score(82.5)

    assert zero_trust.micro_segment_count == 2
    assert zero_trust.get_verification_pass_rate() == 50.0
    assert zero_trust.trust_score == 82.5
    with pytest.raises(ValueError):
        zero_trust.update_trust_score(120)


# ---------------------------------------------------------------------------
# Quantum crypto
# ---------------------------------------------------------------------------


def test_quantum_crypto_counters_and_rotation():
    crypto = ReportQuantumCrypto(name="Report signing", key_rotation_days=30)
    assert crypto.is_rotation_due() is False

    crypto.increment_key_generation()
    crypto.increment_key_generation()
    crypto.increment_encryption(True)
    crypto.increment_encryption(False)
    crypto.increment_decryption(True)
    crypto.increment_decryption(True)

    assert crypto.is_rotation_due() is True
    assert crypto.get_operation_success_rate() == 75.0

    assert crypto.rotate_keys() == 2
    assert crypto.keys_rotated == 2
    assert crypto.is_rotation_due() is False
    assert crypto.is_rotation_due(utcnow() + timedelta(days=31)) is True


def test_quantum_crypto_rotation_accepts_naive_now():
    rotated_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    crypto = ReportQuantumCrypto(
        name="Report signing", key_rotation_days=30, active_keys=1, last_key_rotation=rotated_at
    )

    assert crypto.is_rotation_due(datetime(2024, 1, 15)) is False
    assert crypto.is_rotation_due(datetime(2024, 2, 1)) is True

    crypto.last_key_rotation = datetime(2024, 1, 1)
    assert crypto.is_rotation_due(datetime(2024, 1, 30, 23, tzinfo=timezone(timedelta(hours=2)))) is False
    assert crypto.is_rotation_due(rotated_at + timedelta(days=30)) is True


def test_quantum_crypto_security_level_bounds():
    with pytest.raises(ValueError):
        ReportQuantumCrypto(name="Report signing", security_level=6)
