"""
Bell schedule configuration endpoints.
"""

from datetime import date as Date
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from school_records.api.deps import get_bell_schedule_service
from school_records.schemas.schedule.bell_schedule import BellScheduleDTO, PeriodTimerDTO
from school_records.services.bell_schedule_service import BellScheduleService

router = APIRouter(prefix="/bell-schedules")


@router.post("", response_model=BellScheduleDTO, status_code=status.HTTP_201_CREATED)
def create_bell_schedule(
    payload: BellScheduleDTO,
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> BellScheduleDTO:
    return service.create_bell_schedule(payload).unwrap()


@router.get("", response_model=List[BellScheduleDTO])
def list_bell_schedules(
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> List[BellScheduleDTO]:
    return service.get_all_bell_schedules().unwrap()


@router.get("/active", response_model=List[BellScheduleDTO])
def list_active_bell_schedules(
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> List[BellScheduleDTO]:
    return service.get_active_bell_schedules().unwrap()


@router.get("/for-date", response_model=BellScheduleDTO)
def get_bell_schedule_for_date(
    date: Date = Query(...),
    campus_id: int = Query(...),
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> BellScheduleDTO:
    return service.get_bell_schedule_for_date(date, campus_id).unwrap()


@router.get("/by-campus/{campus_id}", response_model=List[BellScheduleDTO])
def list_bell_schedules_by_campus(
    campus_id: int,
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> List[BellScheduleDTO]:
    return service.get_bell_schedules_by_campus(campus_id).unwrap()


@router.get("/by-academic-year/{academic_year_id}", response_model=List[BellScheduleDTO])
def list_bell_schedules_by_academic_year(
    academic_year_id: int,
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> List[BellScheduleDTO]:
    return service.get_bell_schedules_by_academic_year(academic_year_id).unwrap()


@router.get("/{schedule_id}", response_model=BellScheduleDTO)
def get_bell_schedule(
    schedule_id: int,
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> BellScheduleDTO:
    return service.get_bell_schedule_by_id(schedule_id).unwrap()


@router.put("/{schedule_id}", response_model=BellScheduleDTO)
def update_bell_schedule(
    schedule_id: int,
    payload: BellScheduleDTO,
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> BellScheduleDTO:
    return service.update_bell_schedule(schedule_id, payload).unwrap()


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bell_schedule(
    schedule_id: int,
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> Response:
    service.delete_bell_schedule(schedule_id).unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{schedule_id}/periods", response_model=BellScheduleDTO)
def add_period(
    schedule_id: int,
    payload: PeriodTimerDTO,
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> BellScheduleDTO:
    return service.add_period_to_bell_schedule(schedule_id, payload).unwrap()


@router.delete("/{schedule_id}/periods/{period_id}", response_model=BellScheduleDTO)
def remove_period(
    schedule_id: int,
    period_id: int,
    service: BellScheduleService = Depends(get_bell_schedule_service),
) -> BellScheduleDTO:
    return service.remove_period_from_bell_schedule(schedule_id, period_id).unwrap()
