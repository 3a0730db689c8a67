from __future__ import annotations

import pytest

from school_records.schemas.report import (
    AggregationFunction,
    DrillType,
    OLAPStatus,
    QueryStatus,
    ReportOLAP,
)
from school_records.services.base import ErrorCode
from school_records.services.olap_registry_service import OLAPRegistryService


def _service_with_system():
    svc = OLAPRegistryService()
    olap = svc.create_olap_system(ReportOLAP(name="Attendance analytics")).unwrap()
    return svc, olap.olap_id


def test_create_resets_status_and_counters():
    svc = OLAPRegistryService()

    olap = svc.create_olap_system(
        ReportOLAP(name="Attendance analytics", status=OLAPStatus.ACTIVE, total_cubes=5)
    ).unwrap()

    assert olap.olap_id == 1
    assert olap.status == OLAPStatus.INITIALIZING
    assert olap.total_cubes == 0
    assert olap.created_at is not None


def test_deploy_and_delete():
    svc, olap_id = _service_with_system()

    deployed = svc.deploy_olap_system(olap_id).unwrap()
    assert deployed.status == OLAPStatus.ACTIVE

    assert svc.delete_olap_system(olap_id).unwrap() is True
    assert svc.get_olap_system(olap_id).error.code == ErrorCode.NOT_FOUND
    assert svc.deploy_olap_system(olap_id).error.code == ErrorCode.NOT_FOUND


def test_cube_must_reference_known_dimensions_and_measures():
    svc, olap_id = _service_with_system()
    dimension = svc.add_dimension(olap_id, "Date", attributes=["year", "month"]).unwrap()
    measure = svc.add_measure(olap_id, "absences", source_column="absent_count").unwrap()

    rejected = svc.create_cube(olap_id, "Daily", dimension_ids=[dimension.dimension_id, "ghost"])
    assert rejected.error.code == ErrorCode.VALIDATION_ERROR
    assert rejected.error.details == {"unknown_ids": ["ghost"]}

    cube = svc.create_cube(
        olap_id,
        "Daily",
        dimension_ids=[dimension.dimension_id],
        measure_ids=[measure.measure_id],
    ).unwrap()
    assert measure.display_name == "absences"

    processed = svc.process_cube(olap_id, cube.cube_id).unwrap()
    assert processed.is_processed is True
    assert svc.get_olap_system(olap_id).unwrap().active_cubes == 1
    assert svc.process_cube(olap_id, "missing").error.code == ErrorCode.NOT_FOUND


def test_hierarchy_requires_dimension():
    svc, olap_id = _service_with_system()
    dimension = svc.add_dimension(olap_id, "Date").unwrap()

    hierarchy = svc.create_hierarchy(olap_id, "Calendar", dimension.dimension_id, ["Year", "Month"]).unwrap()

    assert dimension.hierarchy_ids == [hierarchy.hierarchy_id]
    missing = svc.create_hierarchy(olap_id, "Calendar", "ghost", ["Year"])
    assert missing.error.code == ErrorCode.NOT_FOUND


def test_calculated_member():
    svc, olap_id = _service_with_system()

    member = svc.create_calculated_member(
        olap_id, "Attendance Rate", "[Measures].[present] / [Measures].[total]"
    ).unwrap()

    assert svc.get_olap_system(olap_id).unwrap().calculated_members[member.member_id] is member


def test_record_queries():
    svc, olap_id = _service_with_system()
    cube = svc.create_cube(olap_id, "Daily").unwrap()

    completed = svc.record_mdx_query(
        olap_id,
        "SELECT [Measures].[absences] ON 0 FROM [Daily]",
        cube_id=cube.cube_id,
        results={"rowCount": 10, "columnCount": 3},
        execution_time=120,
    ).unwrap()
    failed = svc.record_mdx_query(olap_id, "SELECT", error_message="syntax error").unwrap()

    assert completed.status == QueryStatus.COMPLETED
    assert completed.row_count == 10
    assert completed.column_count == 3
    assert failed.status == QueryStatus.FAILED

    olap = svc.get_olap_system(olap_id).unwrap()
    assert olap.total_queries == 2
    assert olap.query_success_rate == 50.0
    assert olap.average_query_time_ms == 120.0

    unknown_cube = svc.record_mdx_query(olap_id, "SELECT", cube_id="ghost")
    assert unknown_cube.error.code == ErrorCode.NOT_FOUND


def test_statistics():
    svc, olap_id = _service_with_system()
    svc.create_olap_system(ReportOLAP(name="Spare"))
    svc.deploy_olap_system(olap_id)
    svc.create_cube(olap_id, "Daily")

    stats = svc.get_statistics().unwrap()

    assert stats["total_olap_systems"] == 2
    assert stats["active_olap_systems"] == 1
    assert stats["total_cubes"] == 1
    assert stats["total_queries"] == 0


@pytest.mark.parametrize(
    "results",
    [
        {"rowCount": None},
        {"rowCount": "many"},
        {"columnCount": [3]},
        {"row_count": True},
    ],
)
def test_query_with_unusable_count_is_a_validation_failure(results):
    svc, olap_id = _service_with_system()

    result = svc.record_mdx_query(olap_id, "SELECT", results=results)

    assert result.is_success is False
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert svc.get_olap_system(olap_id).unwrap().total_queries == 0


def test_query_counts_accept_snake_case_keys():
    svc, olap_id = _service_with_system()

    query = svc.record_mdx_query(olap_id, "SELECT", results={"row_count": "7", "column_count": 2}).unwrap()
    empty = svc.record_mdx_query(olap_id, "SELECT").unwrap()

    assert (query.row_count, query.column_count) == (7, 2)
    assert (empty.row_count, empty.column_count) == (0, 0)


def test_create_aggregation():
    svc, olap_id = _service_with_system()
    cube = svc.create_cube(olap_id, "Daily").unwrap()

    aggregation = svc.create_aggregation(
        olap_id,
        "Absences by month",
        cube_id=cube.cube_id,
        dimension_levels=["Year", "Month"],
        function=AggregationFunction.COUNT,
        aggregated_value=318,
        cell_count=12,
    ).unwrap()

    olap = svc.get_olap_system(olap_id).unwrap()
    assert aggregation.is_materialized is True
    assert aggregation.calculated_at is not None
    assert olap.aggregations[aggregation.aggregation_id] is aggregation
    assert olap.total_aggregations == 1

    missing = svc.create_aggregation(olap_id, "Orphan", cube_id="ghost")
    assert missing.error.code == ErrorCode.NOT_FOUND
    assert svc.create_aggregation(99, "Nowhere").error.code == ErrorCode.NOT_FOUND


def test_drill_slice_and_pivot_are_recorded():
    svc, olap_id = _service_with_system()
    dimension = svc.add_dimension(olap_id, "Date").unwrap()
    cube = svc.create_cube(olap_id, "Daily", dimension_ids=[dimension.dimension_id]).unwrap()

    drill = svc.perform_drill(
        olap_id,
        DrillType.DRILL_DOWN,
        cube_id=cube.cube_id,
        dimension_id=dimension.dimension_id,
        from_level="Year",
        to_level="Month",
    ).unwrap()
    sliced = svc.perform_slice(
        olap_id,
        cube_id=cube.cube_id,
        dimension_id=dimension.dimension_id,
        fixed_member="2024",
        resulting_dimensions=2,
        cell_count=365,
    ).unwrap()
    pivot = svc.perform_pivot(
        olap_id,
        cube_id=cube.cube_id,
        row_dimensions=["Grade"],
        column_dimensions=["Month"],
        result={"rowCount": 4, "columnCount": 12},
    ).unwrap()

    olap = svc.get_olap_system(olap_id).unwrap()
    assert drill.drill_type == DrillType.DRILL_DOWN
    assert sliced.cell_count == 365
    assert (pivot.row_count, pivot.column_count) == (4, 12)
    assert olap.drill_operations == [drill]
    assert olap.slice_operations == [sliced]
    assert olap.pivot_operations == [pivot]
    assert olap.total_operations == 3


def test_navigation_rejects_unknown_references():
    svc, olap_id = _service_with_system()
    cube = svc.create_cube(olap_id, "Daily").unwrap()

    assert svc.perform_drill(olap_id, DrillType.DRILL_UP, cube_id="ghost").error.code == ErrorCode.NOT_FOUND
    assert (
        svc.perform_drill(olap_id, DrillType.DRILL_UP, cube_id=cube.cube_id, dimension_id="ghost").error.code
        == ErrorCode.NOT_FOUND
    )
    assert svc.perform_slice(olap_id, cube_id="ghost").error.code == ErrorCode.NOT_FOUND
    assert svc.perform_pivot(olap_id, cube_id="ghost").error.code == ErrorCode.NOT_FOUND
    assert svc.perform_pivot(olap_id, result={"rowCount": None}).error.code == ErrorCode.VALIDATION_ERROR
    assert svc.perform_slice(olap_id, cell_count=-1).error.code == ErrorCode.VALIDATION_ERROR
    assert svc.get_olap_system(olap_id).unwrap().total_operations == 0
