"""
Report OLAP registry endpoints.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status

from school_records.api.deps import get_olap_registry_service
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
from school_records.schemas.report.report_olap import (
    Aggregation,
    CalculatedMember,
    Dimension,
    DrillOperation,
    Hierarchy,
    MDXQuery,
    Measure,
    OLAPCube,
    PivotOperation,
    ReportOLAP,
    SliceOperation,
)
from school_records.services.olap_registry_service import OLAPRegistryService

router = APIRouter(prefix="/olap")


@router.post("", response_model=ReportOLAP, status_code=status.HTTP_201_CREATED)
def create_olap_system(
    payload: OLAPSystemCreate,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> ReportOLAP:
    olap = ReportOLAP(**payload.model_dump())
    return service.create_olap_system(olap).unwrap()


@router.get("/statistics")
def olap_statistics(
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> Dict[str, Any]:
    return service.get_statistics().unwrap()


@router.get("/{olap_id}", response_model=ReportOLAP)
def get_olap_system(
    olap_id: int,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> ReportOLAP:
    return service.get_olap_system(olap_id).unwrap()


@router.post("/{olap_id}/deploy", response_model=ReportOLAP)
def deploy_olap_system(
    olap_id: int,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> ReportOLAP:
    return service.deploy_olap_system(olap_id).unwrap()


@router.delete("/{olap_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_olap_system(
    olap_id: int,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> Response:
    service.delete_olap_system(olap_id).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{olap_id}/cubes", response_model=OLAPCube, status_code=status.HTTP_201_CREATED)
def create_cube(
    olap_id: int,
    payload: CubeCreate,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> OLAPCube:
    return service.create_cube(olap_id, **payload.model_dump()).unwrap()


@router.post("/{olap_id}/cubes/{cube_id}/process", response_model=OLAPCube)
def process_cube(
    olap_id: int,
    cube_id: str,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> OLAPCube:
    return service.process_cube(olap_id, cube_id).unwrap()


@router.post("/{olap_id}/dimensions", response_model=Dimension, status_code=status.HTTP_201_CREATED)
def add_dimension(
    olap_id: int,
    payload: DimensionCreate,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> Dimension:
    return service.add_dimension(olap_id, **payload.model_dump()).unwrap()


@router.post("/{olap_id}/measures", response_model=Measure, status_code=status.HTTP_201_CREATED)
def add_measure(
    olap_id: int,
    payload: MeasureCreate,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> Measure:
    return service.add_measure(olap_id, **payload.model_dump()).unwrap()


@router.post("/{olap_id}/hierarchies", response_model=Hierarchy, status_code=status.HTTP_201_CREATED)
def create_hierarchy(
    olap_id: int,
    payload: HierarchyCreate,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> Hierarchy:
    return service.create_hierarchy(olap_id, **payload.model_dump()).unwrap()


@router.post(
    "/{olap_id}/calculated-members",
    response_model=CalculatedMember,
    status_code=status.HTTP_201_CREATED,
)
def create_calculated_member(
    olap_id: int,
    payload: CalculatedMemberCreate,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> CalculatedMember:
    return service.create_calculated_member(olap_id, **payload.model_dump()).unwrap()


@router.post("/{olap_id}/queries", response_model=MDXQuery, status_code=status.HTTP_201_CREATED)
def record_query(
    olap_id: int,
    payload: MDXQueryRecord,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> MDXQuery:
    return service.record_mdx_query(olap_id, **payload.model_dump()).unwrap()


@router.post(
    "/{olap_id}/aggregations",
    response_model=Aggregation,
    status_code=status.HTTP_201_CREATED,
)
def create_aggregation(
    olap_id: int,
    payload: AggregationCreate,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> Aggregation:
    return service.create_aggregation(olap_id, **payload.model_dump()).unwrap()


@router.post("/{olap_id}/drills", response_model=DrillOperation, status_code=status.HTTP_201_CREATED)
def perform_drill(
    olap_id: int,
    payload: DrillRecord,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> DrillOperation:
    return service.perform_drill(olap_id, **payload.model_dump()).unwrap()


@router.post("/{olap_id}/slices", response_model=SliceOperation, status_code=status.HTTP_201_CREATED)
def perform_slice(
    olap_id: int,
    payload: SliceRecord,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> SliceOperation:
    return service.perform_slice(olap_id, **payload.model_dump()).unwrap()


@router.post("/{olap_id}/pivots", response_model=PivotOperation, status_code=status.HTTP_201_CREATED)
def perform_pivot(
    olap_id: int,
    payload: PivotRecord,
    service: OLAPRegistryService = Depends(get_olap_registry_service),
) -> PivotOperation:
    return service.perform_pivot(olap_id, **payload.model_dump()).unwrap()
