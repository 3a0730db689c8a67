# --- File: school_records/schemas/report/report_olap.py ---
"""
OLAP report subsystem schemas.

Configuration and bookkeeping for multidimensional report analysis:
cubes, dimensions, measures, hierarchies, MDX query records and
drill / slice / pivot operation records. The helper methods only keep
the object's own registries and counters in step; nothing here
evaluates a query.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, computed_field

from school_records.schemas.common.base import BaseSchema
from school_records.schemas.report.report_base import ReportComponentBase, percentage, utcnow

__all__ = [
    "OLAPStatus",
    "OLAPEngine",
    "DimensionType",
    "AggregationFunction",
    "QueryStatus",
    "DrillType",
    "OLAPCube",
    "Dimension",
    "Measure",
    "Hierarchy",
    "MDXQuery",
    "Aggregation",
    "DrillOperation",
    "SliceOperation",
    "PivotOperation",
    "CalculatedMember",
    "ReportOLAP",
]

DEFAULT_FORMAT_STRING = "#,##0.00"


class OLAPStatus(str, Enum):
    INITIALIZING = "INITIALIZING"
    CONFIGURING = "CONFIGURING"
    PROCESSING = "PROCESSING"
    ACTIVE = "ACTIVE"
    DEGRADED = "DEGRADED"
    MAINTENANCE = "MAINTENANCE"
    INACTIVE = "INACTIVE"
    ERROR = "ERROR"


class OLAPEngine(str, Enum):
    MOLAP = "MOLAP"
    ROLAP = "ROLAP"
    HOLAP = "HOLAP"


class DimensionType(str, Enum):
    STANDARD = "STANDARD"
    TIME = "TIME"
    GEOGRAPHY = "GEOGRAPHY"
    PARENT_CHILD = "PARENT_CHILD"
    DEGENERATE = "DEGENERATE"


class AggregationFunction(str, Enum):
    SUM = "SUM"
    AVG = "AVG"
    COUNT = "COUNT"
    DISTINCT_COUNT = "DISTINCT_COUNT"
    MIN = "MIN"
    MAX = "MAX"
    MEDIAN = "MEDIAN"


class QueryStatus(str, Enum):
    PENDING = "PENDING"
    EXECUTING = "EXECUTING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    TIMEOUT = "TIMEOUT"


class DrillType(str, Enum):
    DRILL_DOWN = "DRILL_DOWN"
    DRILL_UP = "DRILL_UP"
    DRILL_THROUGH = "DRILL_THROUGH"
    DRILL_ACROSS = "DRILL_ACROSS"


# ----------------------------------------------------------------------
# Nested structures
# ----------------------------------------------------------------------


class OLAPCube(BaseSchema):
    cube_id: str = Field(...)
    cube_name: str = Field(..., min_length=1)
    description: Optional[str] = Field(default=None)
    dimension_ids: List[str] = Field(default_factory=list)
    measure_ids: List[str] = Field(default_factory=list)
    fact_table: Optional[str] = Field(default=None)
    cell_count: int = Field(default=0, ge=0)
    data_size_mb: int = Field(default=0, ge=0)
    is_processed: bool = Field(default=False)
    processing_progress: float = Field(default=0.0, ge=0, le=100)
    created_at: datetime = Field(default_factory=utcnow)
    processed_at: Optional[datetime] = Field(default=None)
    configuration: Dict[str, Any] = Field(default_factory=dict)


class Dimension(BaseSchema):
    dimension_id: str = Field(...)
    dimension_name: str = Field(..., min_length=1)
    dimension_type: DimensionType = Field(default=DimensionType.STANDARD)
    hierarchy_ids: List[str] = Field(default_factory=list)
    table: Optional[str] = Field(default=None)
    key_column: Optional[str] = Field(default=None)
    attributes: List[str] = Field(default_factory=list)
    member_count: int = Field(default=0, ge=0)
    is_slowly_changing: bool = Field(default=False)
    scd_type: int = Field(default=1, ge=0, le=6, description="Slowly changing dimension type")
    created_at: datetime = Field(default_factory=utcnow)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Measure(BaseSchema):
    measure_id: str = Field(...)
    measure_name: str = Field(..., min_length=1)
    display_name: Optional[str] = Field(default=None)
    aggregation_function: AggregationFunction = Field(default=AggregationFunction.SUM)
    source_column: Optional[str] = Field(default=None)
    format_string: str = Field(default=DEFAULT_FORMAT_STRING)
    data_type: Optional[str] = Field(default=None)
    is_visible: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
    properties: Dict[str, Any] = Field(default_factory=dict)


class Hierarchy(BaseSchema):
    hierarchy_id: str = Field(...)
    hierarchy_name: str = Field(..., min_length=1)
    dimension_id: str = Field(...)
    levels: List[str] = Field(default_factory=list)
    is_balanced: bool = Field(default=True)
    is_ragged: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
    configuration: Dict[str, Any] = Field(default_factory=dict)


class MDXQuery(BaseSchema):
    query_id: str = Field(...)
    query_name: Optional[str] = Field(default=None)
    status: QueryStatus = Field(default=QueryStatus.PENDING)
    cube_id: Optional[str] = Field(default=None)
    mdx_statement: str = Field(..., min_length=1)
    dimensions: List[str] = Field(default_factory=list)
    measures: List[str] = Field(default_factory=list)
    filters: Dict[str, Any] = Field(default_factory=dict)
    row_count: int = Field(default=0, ge=0)
    column_count: int = Field(default=0, ge=0)
    execution_time: Optional[int] = Field(default=None, ge=0, description="Milliseconds")
    executed_at: Optional[datetime] = Field(default=None)
    executed_by: Optional[str] = Field(default=None)
    results: Dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = Field(default=None)


class Aggregation(BaseSchema):
    aggregation_id: str = Field(...)
    aggregation_name: str = Field(..., min_length=1)
    cube_id: Optional[str] = Field(default=None)
    dimension_levels: List[str] = Field(default_factory=list)
    measure_id: Optional[str] = Field(default=None)
    function: AggregationFunction = Field(default=AggregationFunction.SUM)
    cell_count: int = Field(default=0, ge=0)
    aggregated_value: Any = Field(default=None)
    calculated_at: Optional[datetime] = Field(default=None)
    calculation_time: Optional[int] = Field(default=None, ge=0)
    is_materialized: bool = Field(default=False)
    configuration: Dict[str, Any] = Field(default_factory=dict)


class DrillOperation(BaseSchema):
    operation_id: str = Field(...)
    drill_type: DrillType = Field(...)
    cube_id: Optional[str] = Field(default=None)
    dimension_id: Optional[str] = Field(default=None)
    from_level: Optional[str] = Field(default=None)
    to_level: Optional[str] = Field(default=None)
    member_path: Optional[str] = Field(default=None)
    performed_at: datetime = Field(default_factory=utcnow)
    performed_by: Optional[str] = Field(default=None)
    execution_time: Optional[int] = Field(default=None, ge=0)
    result: Dict[str, Any] = Field(default_factory=dict)


class SliceOperation(BaseSchema):
    operation_id: str = Field(...)
    cube_id: Optional[str] = Field(default=None)
    dimension_id: Optional[str] = Field(default=None)
    fixed_member: Optional[str] = Field(default=None)
    resulting_dimensions: int = Field(default=0, ge=0)
    cell_count: int = Field(default=0, ge=0)
    performed_at: datetime = Field(default_factory=utcnow)
    performed_by: Optional[str] = Field(default=None)
    execution_time: Optional[int] = Field(default=None, ge=0)
    result: Dict[str, Any] = Field(default_factory=dict)


class PivotOperation(BaseSchema):
    operation_id: str = Field(...)
    cube_id: Optional[str] = Field(default=None)
    row_dimensions: List[str] = Field(default_factory=list)
    column_dimensions: List[str] = Field(default_factory=list)
    measures: List[str] = Field(default_factory=list)
    row_count: int = Field(default=0, ge=0)
    column_count: int = Field(default=0, ge=0)
    performed_at: datetime = Field(default_factory=utcnow)
    performed_by: Optional[str] = Field(default=None)
    execution_time: Optional[int] = Field(default=None, ge=0)
    result: Dict[str, Any] = Field(default_factory=dict)


class CalculatedMember(BaseSchema):
    member_id: str = Field(...)
    member_name: str = Field(..., min_length=1)
    dimension_id: Optional[str] = Field(default=None)
    expression: str = Field(..., min_length=1)
    format_string: str = Field(default=DEFAULT_FORMAT_STRING)
    is_visible: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
    created_by: Optional[str] = Field(default=None)
    properties: Dict[str, Any] = Field(default_factory=dict)


# ----------------------------------------------------------------------
# Root schema
# ----------------------------------------------------------------------


class ReportOLAP(ReportComponentBase):
    """
    OLAP configuration and metrics for the reporting platform.

    Cubes, dimensions, measures, hierarchies, aggregations and calculated
    members are kept in id-keyed registries; queries and drill, slice and
    pivot operations are kept as ordered history.
    """

    olap_id: Optional[int] = Field(default=None)
    status: OLAPStatus = Field(default=OLAPStatus.INITIALIZING)
    engine: OLAPEngine = Field(default=OLAPEngine.MOLAP)
    is_optimized: bool = Field(default=False)
    data_source: Optional[str] = Field(default=None)
    deployed_at: Optional[datetime] = Field(default=None)
    last_processed_at: Optional[datetime] = Field(default=None)

    # Metrics
    total_cubes: int = Field(default=0, ge=0)
    active_cubes: int = Field(default=0, ge=0)
    total_dimensions: int = Field(default=0, ge=0)
    total_measures: int = Field(default=0, ge=0)
    total_cells: int = Field(default=0, ge=0)
    total_queries: int = Field(default=0, ge=0)
    successful_queries: int = Field(default=0, ge=0)
    failed_queries: int = Field(default=0, ge=0)
    total_aggregations: int = Field(default=0, ge=0)
    total_operations: int = Field(default=0, ge=0)
    cache_hit_ratio: float = Field(default=0.0, ge=0, le=1)
    average_query_time_ms: float = Field(default=0.0, ge=0)

    # Registries
    cubes: Dict[str, OLAPCube] = Field(default_factory=dict)
    dimensions: Dict[str, Dimension] = Field(default_factory=dict)
    measures: Dict[str, Measure] = Field(default_factory=dict)
    hierarchies: Dict[str, Hierarchy] = Field(default_factory=dict)
    aggregations: Dict[str, Aggregation] = Field(default_factory=dict)
    calculated_members: Dict[str, CalculatedMember] = Field(default_factory=dict)

    # History
    queries: List[MDXQuery] = Field(default_factory=list)
    drill_operations: List[DrillOperation] = Field(default_factory=list)
    slice_operations: List[SliceOperation] = Field(default_factory=list)
    pivot_operations: List[PivotOperation] = Field(default_factory=list)

    def deploy_olap_system(self) -> None:
        self.status = OLAPStatus.ACTIVE
        self.is_active = True
        self.deployed_at = utcnow()

    def add_olap_cube(self, cube: OLAPCube) -> None:
        """Register a cube; re-adding an id replaces it and its cell count."""
        previous = self.cubes.get(cube.cube_id)
        self.cubes[cube.cube_id] = cube
        if previous is None:
            self.total_cubes += 1
            self.total_cells += cube.cell_count
            return
        self.total_cells = max(0, self.total_cells - previous.cell_count) + cube.cell_count
        if previous.is_processed and not cube.is_processed:
            self.active_cubes = max(0, self.active_cubes - 1)
        elif cube.is_processed and not previous.is_processed:
            self.active_cubes += 1

    def get_cube(self, cube_id: str) -> Optional[OLAPCube]:
        return self.cubes.get(cube_id)

    def process_cube(self, cube_id: str) -> bool:
        """Mark a cube processed. Returns False for an unknown cube."""
        cube = self.cubes.get(cube_id)
        if cube is None:
            return False
        now = utcnow()
        if not cube.is_processed:
            cube.is_processed = True
            self.active_cubes += 1
        cube.processing_progress = 100.0
        cube.processed_at = now
        self.last_processed_at = now
        return True

    def add_dimension(self, dimension: Dimension) -> None:
        if dimension.dimension_id not in self.dimensions:
            self.total_dimensions += 1
        self.dimensions[dimension.dimension_id] = dimension

    def add_measure(self, measure: Measure) -> None:
        if measure.measure_id not in self.measures:
            self.total_measures += 1
        self.measures[measure.measure_id] = measure

    def add_hierarchy(self, hierarchy: Hierarchy) -> None:
        self.hierarchies[hierarchy.hierarchy_id] = hierarchy
        dimension = self.dimensions.get(hierarchy.dimension_id)
        if dimension is not None and hierarchy.hierarchy_id not in dimension.hierarchy_ids:
            dimension.hierarchy_ids.append(hierarchy.hierarchy_id)

    def execute_mdx_query(self, query: MDXQuery) -> None:
        """Record a query run and update the query counters."""
        self.queries.append(query)
        self.total_queries += 1
        if query.status == QueryStatus.COMPLETED:
            self.successful_queries += 1
        elif query.status in (QueryStatus.FAILED, QueryStatus.TIMEOUT):
            self.failed_queries += 1

        timed = [q.execution_time for q in self.queries if q.execution_time is not None]
        if timed:
            self.average_query_time_ms = round(sum(timed) / len(timed), 2)

    def add_aggregation(self, aggregation: Aggregation) -> None:
        if aggregation.aggregation_id not in self.aggregations:
            self.total_aggregations += 1
        self.aggregations[aggregation.aggregation_id] = aggregation

    def perform_drill(self, drill: DrillOperation) -> None:
        self.drill_operations.append(drill)
        self.total_operations += 1

    def add_slice(self, slice_operation: SliceOperation) -> None:
        self.slice_operations.append(slice_operation)
        self.total_operations += 1

    def add_pivot(self, pivot: PivotOperation) -> None:
        self.pivot_operations.append(pivot)
        self.total_operations += 1

    def add_calculated_member(self, member: CalculatedMember) -> None:
        self.calculated_members[member.member_id] = member

    def get_query_success_rate(self) -> float:
        return percentage(self.successful_queries, self.total_queries)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def query_success_rate(self) -> float:
        return self.get_query_success_rate()
