"""
Bell schedule service.

In-memory bell schedule configuration: CRUD, period management and
resolving which schedule applies to a campus on a given date.
"""

from datetime import date as Date, datetime, timezone
from typing import Dict, List, Optional

from school_records.schemas.schedule.bell_schedule import BellScheduleDTO, PeriodTimerDTO
from school_records.services.base import BaseService, ServiceResult


class BellScheduleService(BaseService):
    """
    Manage bell schedules per campus.

    At most one schedule per campus is the default; marking a new one as
    default clears the flag on the others.
    """

    def __init__(self):
        super().__init__()
        self._schedules: Dict[int, BellScheduleDTO] = {}
        self._period_ids = 0

    def create_bell_schedule(self, dto: BellScheduleDTO) -> ServiceResult[BellScheduleDTO]:
        try:
            schedule = dto.model_copy(deep=True)
            schedule.id = self._next_id()
            now = datetime.now(timezone.utc)
            schedule.created_at = now
            schedule.updated_at = now
            for period in schedule.periods or []:
                if period.id is None:
                    period.id = self._next_period_id()
        except ValueError as e:
            return self._handle_exception(e, "create bell schedule", dto.name)

        overlap = self._first_overlap(schedule)
        if overlap:
            return overlap

        if schedule.is_default:
            self._clear_default(schedule.campus_id)
        self._schedules[schedule.id] = schedule
        self._logger.info(f"Bell schedule created: {schedule.name} (ID={schedule.id})")
        return ServiceResult.success(schedule, message="Bell schedule created successfully")

    def update_bell_schedule(
        self,
        schedule_id: int,
        dto: BellScheduleDTO,
    ) -> ServiceResult[BellScheduleDTO]:
        """Replace the editable fields of a schedule, keeping id and created_at."""
        existing = self._schedules.get(schedule_id)
        if existing is None:
            return self._missing(schedule_id)

        try:
            updated = dto.model_copy(deep=True)
            updated.id = schedule_id
            updated.created_at = existing.created_at
            for period in updated.periods or []:
                if period.id is None:
                    period.id = self._next_period_id()
            updated.touch()
        except ValueError as e:
            return self._handle_exception(e, "update bell schedule", schedule_id)

        overlap = self._first_overlap(updated)
        if overlap:
            return overlap

        if updated.is_default:
            self._clear_default(updated.campus_id, keep=schedule_id)
        self._schedules[schedule_id] = updated
        self._logger.info(f"Bell schedule updated: {schedule_id}")
        return ServiceResult.success(updated, message="Bell schedule updated successfully")

    def delete_bell_schedule(self, schedule_id: int) -> ServiceResult[bool]:
        if self._schedules.pop(schedule_id, None) is None:
            return self._missing(schedule_id)
        self._logger.info(f"Bell schedule deleted: {schedule_id}")
        return ServiceResult.success(True, message="Bell schedule deleted successfully")

    def get_bell_schedule_by_id(self, schedule_id: int) -> ServiceResult[BellScheduleDTO]:
        schedule = self._schedules.get(schedule_id)
        if schedule is None:
            return ServiceResult.not_found("Bell schedule", schedule_id)
        return ServiceResult.success(schedule)

    def get_all_bell_schedules(self) -> ServiceResult[List[BellScheduleDTO]]:
        return ServiceResult.success(sorted(self._schedules.values(), key=lambda s: s.id))

    def get_active_bell_schedules(self) -> ServiceResult[List[BellScheduleDTO]]:
        return ServiceResult.success(
            sorted((s for s in self._schedules.values() if s.is_active), key=lambda s: s.id)
        )

    def get_bell_schedules_by_campus(self, campus_id: int) -> ServiceResult[List[BellScheduleDTO]]:
        """All schedules for a campus, active or not."""
        return ServiceResult.success(
            sorted(
                (s for s in self._schedules.values() if s.campus_id == campus_id),
                key=lambda s: s.id,
            )
        )

    def get_bell_schedules_by_academic_year(
        self, academic_year_id: int
    ) -> ServiceResult[List[BellScheduleDTO]]:
        """All schedules for an academic year, active or not."""
        return ServiceResult.success(
            sorted(
                (s for s in self._schedules.values() if s.academic_year_id == academic_year_id),
                key=lambda s: s.id,
            )
        )

    # -------------------------------------------------------------------------
    # Periods
    # -------------------------------------------------------------------------

    def add_period_to_bell_schedule(
        self,
        schedule_id: int,
        period: PeriodTimerDTO,
    ) -> ServiceResult[BellScheduleDTO]:
        schedule = self._schedules.get(schedule_id)
        if schedule is None:
            return self._missing(schedule_id)

        new_period = period.model_copy()
        if new_period.id is None:
            new_period.id = self._next_period_id()

        clashes = schedule.find_overlapping(new_period)
        if clashes:
            return ServiceResult.validation_failure(
                f"Period '{new_period.period_name}' overlaps {clashes[0].period_name}",
                field="periods",
                details={"overlapping_period_ids": [p.id for p in clashes]},
            )

        schedule.add_period(new_period)
        schedule.touch()
        self._logger.info(f"Period {new_period.id} added to bell schedule {schedule_id}")
        return ServiceResult.success(schedule, message="Period added successfully")

    def remove_period_from_bell_schedule(
        self,
        schedule_id: int,
        period_id: int,
    ) -> ServiceResult[BellScheduleDTO]:
        schedule = self._schedules.get(schedule_id)
        if schedule is None:
            return self._missing(schedule_id)

        if not schedule.remove_period(period_id):
            return ServiceResult.not_found("Period", period_id)

        schedule.touch()
        self._logger.info(f"Period {period_id} removed from bell schedule {schedule_id}")
        return ServiceResult.success(schedule, message="Period removed successfully")

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def get_bell_schedule_for_date(
        self,
        day: Date,
        campus_id: int,
    ) -> ServiceResult[BellScheduleDTO]:
        """
        Schedule for a campus on `day`.

        A schedule listing `day` among its specific dates wins; otherwise
        the campus default applies if it runs on that weekday.
        """
        candidates = [
            s for s in self._schedules.values()
            if s.campus_id == campus_id and s.is_active
        ]

        for schedule in sorted(candidates, key=lambda s: s.id):
            if schedule.specific_dates and schedule.applies_to(day):
                return ServiceResult.success(schedule)

        for schedule in candidates:
            if schedule.is_default and schedule.applies_to(day):
                return ServiceResult.success(schedule)

        self._logger.warning(f"No bell schedule for campus {campus_id} on {day.isoformat()}")
        return ServiceResult.not_found("Bell schedule", f"campus {campus_id} on {day.isoformat()}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _next_period_id(self) -> int:
        with self._id_lock:
            self._period_ids += 1
            return self._period_ids

    def _clear_default(self, campus_id: Optional[int], keep: Optional[int] = None) -> None:
        for schedule in self._schedules.values():
            if schedule.campus_id == campus_id and schedule.id != keep and schedule.is_default:
                schedule.is_default = False

    def _first_overlap(self, schedule: BellScheduleDTO) -> Optional[ServiceResult]:
        for period in schedule.periods or []:
            clashes = schedule.find_overlapping(period)
            if clashes:
                return ServiceResult.validation_failure(
                    f"Period '{period.period_name}' overlaps {clashes[0].period_name}",
                    field="periods",
                    details={"overlapping_period_ids": [p.id for p in clashes]},
                )
        return None

    def _missing(self, schedule_id: int) -> ServiceResult:
        self._logger.warning(f"Bell schedule not found: {schedule_id}")
        return ServiceResult.not_found("Bell schedule", schedule_id)
