# --- File: school_records/schemas/report/olap_requests.py ---
"""
Request bodies for the OLAP registry endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from school_records.schemas.common.base import BaseSchema
from school_records.schemas.report.report_olap import (
    AggregationFunction,
    DimensionType,
    DrillType,
)

__all__ = [
    "OLAPSystemCreate",
    "CubeCreate",
    "DimensionCreate",
    "MeasureCreate",
    "HierarchyCreate",
    "CalculatedMemberCreate",
    "MDXQueryRecord",
    "AggregationCreate",
    "DrillRecord",
    "SliceRecord",
    "PivotRecord",
]


class OLAPSystemCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None)
    report_id: Optional[int] = Field(default=None)
    data_source: Optional[str] = Field(default=None)
    created_by: Optional[str] = Field(default=None)


class CubeCreate(BaseSchema):
    cube_name: str = Field(..., min_length=1)
    description: Optional[str] = Field(default=None)
    dimension_ids: List[str] = Field(default_factory=list)
    measure_ids: List[str] = Field(default_factory=list)
    fact_table: Optional[str] = Field(default=None)


class DimensionCreate(BaseSchema):
    dimension_name: str = Field(..., min_length=1)
    dimension_type: DimensionType = Field(default=DimensionType.STANDARD)
    table: Optional[str] = Field(default=None)
    key_column: Optional[str] = Field(default=None)
    attributes: List[str] = Field(default_factory=list)


class MeasureCreate(BaseSchema):
    measure_name: str = Field(..., min_length=1)
    display_name: Optional[str] = Field(default=None)
    aggregation_function: AggregationFunction = Field(default=AggregationFunction.SUM)
    source_column: Optional[str] = Field(default=None)
    data_type: Optional[str] = Field(default=None)


class HierarchyCreate(BaseSchema):
    hierarchy_name: str = Field(..., min_length=1)
    dimension_id: str = Field(...)
    levels: List[str] = Field(..., min_length=1)


class CalculatedMemberCreate(BaseSchema):
    member_name: str = Field(..., min_length=1)
    expression: str = Field(..., min_length=1)
    dimension_id: Optional[str] = Field(default=None)
    created_by: Optional[str] = Field(default=None)


class MDXQueryRecord(BaseSchema):
    """A query run that happened elsewhere, reported for bookkeeping."""

    mdx_statement: str = Field(..., min_length=1)
    cube_id: Optional[str] = Field(default=None)
    query_name: Optional[str] = Field(default=None)
    dimensions: List[str] = Field(default_factory=list)
    measures: List[str] = Field(default_factory=list)
    results: Dict[str, Any] = Field(default_factory=dict)
    execution_time: Optional[int] = Field(default=None, ge=0)
    executed_by: Optional[str] = Field(default=None)
    error_message: Optional[str] = Field(default=None)

    @model_validator(mode="after")
    def validate_outcome(self) -> "MDXQueryRecord":
        if self.error_message and self.results:
            raise ValueError("A failed query cannot carry results")
        return self


class AggregationCreate(BaseSchema):
    aggregation_name: str = Field(..., min_length=1)
    cube_id: Optional[str] = Field(default=None)
    dimension_levels: List[str] = Field(default_factory=list)
    measure_id: Optional[str] = Field(default=None)
    function: AggregationFunction = Field(default=AggregationFunction.SUM)
    aggregated_value: Any = Field(default=None)
    cell_count: int = Field(default=0, ge=0)
    calculation_time: Optional[int] = Field(default=None, ge=0)
    is_materialized: bool = Field(default=True)


class DrillRecord(BaseSchema):
    drill_type: DrillType = Field(...)
    cube_id: Optional[str] = Field(default=None)
    dimension_id: Optional[str] = Field(default=None)
    from_level: Optional[str] = Field(default=None)
    to_level: Optional[str] = Field(default=None)
    member_path: Optional[str] = Field(default=None)
    performed_by: Optional[str] = Field(default=None)
    execution_time: Optional[int] = Field(default=None, ge=0)
    result: Dict[str, Any] = Field(default_factory=dict)


class SliceRecord(BaseSchema):
    cube_id: Optional[str] = Field(default=None)
    dimension_id: Optional[str] = Field(default=None)
    fixed_member: Optional[str] = Field(default=None)
    resulting_dimensions: int = Field(default=0, ge=0)
    cell_count: int = Field(default=0, ge=0)
    performed_by: Optional[str] = Field(default=None)
    execution_time: Optional[int] = Field(default=None, ge=0)
    result: Dict[str, Any] = Field(default_factory=dict)


class PivotRecord(BaseSchema):
    """A pivot that ran elsewhere; `result` may carry rowCount and columnCount."""

    cube_id: Optional[str] = Field(default=None)
    row_dimensions: List[str] = Field(default_factory=list)
    column_dimensions: List[str] = Field(default_factory=list)
    measures: List[str] = Field(default_factory=list)
    performed_by: Optional[str] = Field(default=None)
    execution_time: Optional[int] = Field(default=None, ge=0)
    result: Dict[str, Any] = Field(default_factory=dict)
