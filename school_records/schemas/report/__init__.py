"""
Report subsystem schemas package.

Configuration and metric schemas for the OLAP, AIOps, post-quantum
crypto and zero-trust report subsystems.
"""

from school_records.schemas.report.report_aiops import AIOpsStatus, ReportAIOps
from school_records.schemas.report.report_base import ReportComponentBase, percentage
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
    OLAPEngine,
    OLAPStatus,
    PivotOperation,
    QueryStatus,
    ReportOLAP,
    SliceOperation,
)
from school_records.schemas.report.report_quantum_crypto import (
    CryptoStatus,
    QuantumAlgorithm,
    ReportQuantumCrypto,
)
from school_records.schemas.report.report_zero_trust import PolicyMode, ReportZeroTrust
from school_records.schemas.report.olap_requests import (
    AggregationCreate,
    CalculatedMemberCreate,
    CubeCreate,
    DimensionCreate,
    DrillRecord,
    HierarchyCreate,
    MDXQueryRecord,
    MeasureCreate,
    OLAPSystemCreate,
    PivotRecord,
    SliceRecord,
)

__all__ = [
    "ReportComponentBase",
    "percentage",
    # OLAP
    "ReportOLAP",
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
    # AIOps
    "ReportAIOps",
    "AIOpsStatus",
    # Quantum crypto
    "ReportQuantumCrypto",
    "QuantumAlgorithm",
    "CryptoStatus",
    # Zero trust
    "ReportZeroTrust",
    "PolicyMode",
]
