"""
OLAP registry service.

Holds ReportOLAP configurations in memory and records cubes, dimensions,
measures, hierarchies, calculated members, aggregations, query runs and
drill, slice and pivot operations against them. Results are supplied by
the caller; nothing here evaluates MDX or computes cube cells.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from school_records.schemas.report.report_olap import (
    Aggregation,
    AggregationFunction,
    CalculatedMember,
    Dimension,
    DimensionType,
    DrillOperation,
    DrillType,
    Hierarchy,
    MDXQuery,
    Measure,
    OLAPCube,
    OLAPStatus,
    PivotOperation,
    QueryStatus,
    ReportOLAP,
    SliceOperation,
)
from school_records.services.base import BaseService, ServiceResult


class OLAPRegistryService(BaseService):
    """In-memory store of OLAP report configurations."""

    def __init__(self):
        super().__init__()
        self._store: Dict[int, ReportOLAP] = {}

    # -------------------------------------------------------------------------
    # Systems
    # -------------------------------------------------------------------------

    def create_olap_system(self, olap: ReportOLAP) -> ServiceResult[ReportOLAP]:
        """Register `olap` with a fresh id and reset its status and metrics."""
        olap_id = self._next_id()
        olap.olap_id = olap_id
        olap.status = OLAPStatus.INITIALIZING
        olap.is_active = False
        olap.is_optimized = False
        olap.created_at = datetime.now(timezone.utc)
        for counter in (
            "total_cubes",
            "active_cubes",
            "total_dimensions",
            "total_measures",
            "total_cells",
            "total_queries",
            "successful_queries",
            "failed_queries",
            "total_aggregations",
            "total_operations",
        ):
            setattr(olap, counter, 0)
        olap.cache_hit_ratio = 0.0

        self._store[olap_id] = olap
        self._logger.info(f"OLAP system created: {olap_id}")
        return ServiceResult.success(olap, message="OLAP system created")

    def get_olap_system(self, olap_id: int) -> ServiceResult[ReportOLAP]:
        olap = self._store.get(olap_id)
        if olap is None:
            return ServiceResult.not_found("OLAP system", olap_id)
        return ServiceResult.success(olap)

    def deploy_olap_system(self, olap_id: int) -> ServiceResult[ReportOLAP]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)

        olap.deploy_olap_system()
        self._logger.info(f"OLAP system deployed: {olap_id}")
        return ServiceResult.success(olap, message="OLAP system deployed")

    def delete_olap_system(self, olap_id: int) -> ServiceResult[bool]:
        removed = self._store.pop(olap_id, None)
        if removed is None:
            return self._missing(olap_id)
        self._logger.info(f"OLAP system deleted: {olap_id}")
        return ServiceResult.success(True, message="OLAP system deleted")

    # -------------------------------------------------------------------------
    # Model objects
    # -------------------------------------------------------------------------

    def create_cube(
        self,
        olap_id: int,
        cube_name: str,
        description: Optional[str] = None,
        dimension_ids: Optional[List[str]] = None,
        measure_ids: Optional[List[str]] = None,
        fact_table: Optional[str] = None,
    ) -> ServiceResult[OLAPCube]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)

        unknown = [d for d in dimension_ids or [] if d not in olap.dimensions]
        unknown += [m for m in measure_ids or [] if m not in olap.measures]
        if unknown:
            return ServiceResult.validation_failure(
                "Cube references unknown dimensions or measures",
                details={"unknown_ids": unknown},
            )

        try:
            cube = OLAPCube(
                cube_id=str(uuid.uuid4()),
                cube_name=cube_name,
                description=description,
                dimension_ids=list(dimension_ids or []),
                measure_ids=list(measure_ids or []),
                fact_table=fact_table,
            )
        except ValueError as e:
            return self._handle_exception(e, "create OLAP cube", olap_id)

        olap.add_olap_cube(cube)
        self._logger.info(f"OLAP cube created: {cube.cube_id}")
        return ServiceResult.success(cube, message="Cube created")

    def process_cube(self, olap_id: int, cube_id: str) -> ServiceResult[OLAPCube]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)

        if not olap.process_cube(cube_id):
            return ServiceResult.not_found("OLAP cube", cube_id)

        self._logger.info(f"OLAP cube processed: {cube_id}")
        return ServiceResult.success(olap.get_cube(cube_id), message="Cube processed")

    def add_dimension(
        self,
        olap_id: int,
        dimension_name: str,
        dimension_type: DimensionType = DimensionType.STANDARD,
        table: Optional[str] = None,
        key_column: Optional[str] = None,
        attributes: Optional[List[str]] = None,
    ) -> ServiceResult[Dimension]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)

        try:
            dimension = Dimension(
                dimension_id=str(uuid.uuid4()),
                dimension_name=dimension_name,
                dimension_type=dimension_type,
                table=table,
                key_column=key_column,
                attributes=list(attributes or []),
            )
        except ValueError as e:
            return self._handle_exception(e, "add dimension", olap_id)

        olap.add_dimension(dimension)
        self._logger.info(f"Dimension added: {dimension.dimension_id}")
        return ServiceResult.success(dimension, message="Dimension added")

    def add_measure(
        self,
        olap_id: int,
        measure_name: str,
        display_name: Optional[str] = None,
        aggregation_function: AggregationFunction = AggregationFunction.SUM,
        source_column: Optional[str] = None,
        data_type: Optional[str] = None,
    ) -> ServiceResult[Measure]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)

        try:
            measure = Measure(
                measure_id=str(uuid.uuid4()),
                measure_name=measure_name,
                display_name=display_name or measure_name,
                aggregation_function=aggregation_function,
                source_column=source_column,
                data_type=data_type,
            )
        except ValueError as e:
            return self._handle_exception(e, "add measure", olap_id)

        olap.add_measure(measure)
        self._logger.info(f"Measure added: {measure.measure_id}")
        return ServiceResult.success(measure, message="Measure added")

    def create_hierarchy(
        self,
        olap_id: int,
        hierarchy_name: str,
        dimension_id: str,
        levels: List[str],
    ) -> ServiceResult[Hierarchy]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)
        if dimension_id not in olap.dimensions:
            return ServiceResult.not_found("Dimension", dimension_id)

        try:
            hierarchy = Hierarchy(
                hierarchy_id=str(uuid.uuid4()),
                hierarchy_name=hierarchy_name,
                dimension_id=dimension_id,
                levels=list(levels),
            )
        except ValueError as e:
            return self._handle_exception(e, "create hierarchy", olap_id)

        olap.add_hierarchy(hierarchy)
        self._logger.info(f"Hierarchy created: {hierarchy.hierarchy_id}")
        return ServiceResult.success(hierarchy, message="Hierarchy created")

    def create_calculated_member(
        self,
        olap_id: int,
        member_name: str,
        expression: str,
        dimension_id: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> ServiceResult[CalculatedMember]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)

        try:
            member = CalculatedMember(
                member_id=str(uuid.uuid4()),
                member_name=member_name,
                dimension_id=dimension_id,
                expression=expression,
                created_by=created_by,
            )
        except ValueError as e:
            return self._handle_exception(e, "create calculated member", olap_id)

        olap.add_calculated_member(member)
        self._logger.info(f"Calculated member created: {member.member_id}")
        return ServiceResult.success(member, message="Calculated member created")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def record_mdx_query(
        self,
        olap_id: int,
        mdx_statement: str,
        cube_id: Optional[str] = None,
        query_name: Optional[str] = None,
        dimensions: Optional[List[str]] = None,
        measures: Optional[List[str]] = None,
        results: Optional[Dict[str, Any]] = None,
        execution_time: Optional[int] = None,
        executed_by: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> ServiceResult[MDXQuery]:
        """
        Record a query that ran elsewhere.

        A query with an `error_message` is recorded as FAILED, otherwise
        as COMPLETED with row and column counts taken from `results`.
        """
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)
        if cube_id is not None and cube_id not in olap.cubes:
            return ServiceResult.not_found("OLAP cube", cube_id)

        results = results or {}
        try:
            query = MDXQuery(
                query_id=str(uuid.uuid4()),
                query_name=query_name,
                status=QueryStatus.FAILED if error_message else QueryStatus.COMPLETED,
                cube_id=cube_id,
                mdx_statement=mdx_statement,
                dimensions=list(dimensions or []),
                measures=list(measures or []),
                row_count=_count(results, "rowCount", "row_count"),
                column_count=_count(results, "columnCount", "column_count"),
                execution_time=execution_time,
                executed_at=datetime.now(timezone.utc),
                executed_by=executed_by,
                results=results,
                error_message=error_message,
            )
        except ValueError as e:
            return self._handle_exception(e, "record MDX query", olap_id)

        olap.execute_mdx_query(query)
        if query.status == QueryStatus.FAILED:
            self._logger.error(f"MDX query failed: {query.query_id}: {error_message}")
        else:
            self._logger.info(f"MDX query executed: {query.query_id}")
        return ServiceResult.success(query)

    # -------------------------------------------------------------------------
    # Aggregations and navigation
    # -------------------------------------------------------------------------

    def create_aggregation(
        self,
        olap_id: int,
        aggregation_name: str,
        cube_id: Optional[str] = None,
        dimension_levels: Optional[List[str]] = None,
        measure_id: Optional[str] = None,
        function: AggregationFunction = AggregationFunction.SUM,
        aggregated_value: Any = None,
        cell_count: int = 0,
        calculation_time: Optional[int] = None,
        is_materialized: bool = True,
    ) -> ServiceResult[Aggregation]:
        """Record a precomputed aggregation; the value is supplied by the caller."""
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)
        if cube_id is not None and cube_id not in olap.cubes:
            return ServiceResult.not_found("OLAP cube", cube_id)

        try:
            aggregation = Aggregation(
                aggregation_id=str(uuid.uuid4()),
                aggregation_name=aggregation_name,
                cube_id=cube_id,
                dimension_levels=list(dimension_levels or []),
                measure_id=measure_id,
                function=function,
                aggregated_value=aggregated_value,
                cell_count=cell_count,
                calculated_at=datetime.now(timezone.utc),
                calculation_time=calculation_time,
                is_materialized=is_materialized,
            )
        except ValueError as e:
            return self._handle_exception(e, "create aggregation", olap_id)

        olap.add_aggregation(aggregation)
        self._logger.info(f"Aggregation created: {aggregation.aggregation_id}")
        return ServiceResult.success(aggregation, message="Aggregation created")

    def perform_drill(
        self,
        olap_id: int,
        drill_type: DrillType,
        cube_id: Optional[str] = None,
        dimension_id: Optional[str] = None,
        from_level: Optional[str] = None,
        to_level: Optional[str] = None,
        member_path: Optional[str] = None,
        performed_by: Optional[str] = None,
        execution_time: Optional[int] = None,
        result: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult[DrillOperation]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)
        if cube_id is not None and cube_id not in olap.cubes:
            return ServiceResult.not_found("OLAP cube", cube_id)
        if dimension_id is not None and dimension_id not in olap.dimensions:
            return ServiceResult.not_found("Dimension", dimension_id)

        try:
            drill = DrillOperation(
                operation_id=str(uuid.uuid4()),
                drill_type=drill_type,
                cube_id=cube_id,
                dimension_id=dimension_id,
                from_level=from_level,
                to_level=to_level,
                member_path=member_path,
                performed_by=performed_by,
                execution_time=execution_time,
                result=dict(result or {}),
            )
        except ValueError as e:
            return self._handle_exception(e, "perform drill", olap_id)

        olap.perform_drill(drill)
        self._logger.info(f"Drill operation performed: {drill.operation_id} ({drill.drill_type.value})")
        return ServiceResult.success(drill, message="Drill operation recorded")

    def perform_slice(
        self,
        olap_id: int,
        cube_id: Optional[str] = None,
        dimension_id: Optional[str] = None,
        fixed_member: Optional[str] = None,
        resulting_dimensions: int = 0,
        cell_count: int = 0,
        performed_by: Optional[str] = None,
        execution_time: Optional[int] = None,
        result: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult[SliceOperation]:
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)
        if cube_id is not None and cube_id not in olap.cubes:
            return ServiceResult.not_found("OLAP cube", cube_id)

        try:
            slice_operation = SliceOperation(
                operation_id=str(uuid.uuid4()),
                cube_id=cube_id,
                dimension_id=dimension_id,
                fixed_member=fixed_member,
                resulting_dimensions=resulting_dimensions,
                cell_count=cell_count,
                performed_by=performed_by,
                execution_time=execution_time,
                result=dict(result or {}),
            )
        except ValueError as e:
            return self._handle_exception(e, "perform slice", olap_id)

        olap.add_slice(slice_operation)
        self._logger.info(f"Slice operation performed: {slice_operation.operation_id}")
        return ServiceResult.success(slice_operation, message="Slice operation recorded")

    def perform_pivot(
        self,
        olap_id: int,
        cube_id: Optional[str] = None,
        row_dimensions: Optional[List[str]] = None,
        column_dimensions: Optional[List[str]] = None,
        measures: Optional[List[str]] = None,
        performed_by: Optional[str] = None,
        execution_time: Optional[int] = None,
        result: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult[PivotOperation]:
        """Record a pivot; row and column counts are read from `result`."""
        olap = self._store.get(olap_id)
        if olap is None:
            return self._missing(olap_id)
        if cube_id is not None and cube_id not in olap.cubes:
            return ServiceResult.not_found("OLAP cube", cube_id)

        result = dict(result or {})
        try:
            pivot = PivotOperation(
                operation_id=str(uuid.uuid4()),
                cube_id=cube_id,
                row_dimensions=list(row_dimensions or []),
                column_dimensions=list(column_dimensions or []),
                measures=list(measures or []),
                row_count=_count(result, "rowCount", "row_count"),
                column_count=_count(result, "columnCount", "column_count"),
                performed_by=performed_by,
                execution_time=execution_time,
                result=result,
            )
        except ValueError as e:
            return self._handle_exception(e, "perform pivot", olap_id)

        olap.add_pivot(pivot)
        self._logger.info(f"Pivot operation performed: {pivot.operation_id}")
        return ServiceResult.success(pivot, message="Pivot operation recorded")

    def get_statistics(self) -> ServiceResult[Dict[str, Any]]:
        systems = list(self._store.values())
        stats = {
            "total_olap_systems": len(systems),
            "active_olap_systems": sum(1 for o in systems if o.is_active),
            "total_cubes": sum(o.total_cubes for o in systems),
            "total_queries": sum(o.total_queries for o in systems),
            "timestamp": datetime.now(timezone.utc),
        }
        return ServiceResult.success(stats)

    def _missing(self, olap_id: int) -> ServiceResult:
        self._logger.warning(f"OLAP system not found: {olap_id}")
        return ServiceResult.not_found("OLAP system", olap_id)


def _count(results: Dict[str, Any], *keys: str) -> int:
    """Count under the first of `keys` present in `results`, or 0 when none is."""
    for key in keys:
        if key not in results:
            continue
        value = results[key]
        if value is None or isinstance(value, bool):
            raise ValueError(f"{key} must be a whole number, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"{key} must be a whole number, got {value!r}") from None
    return 0
