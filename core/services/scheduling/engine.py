# core/services/scheduling/engine.py
from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import DependencyRepository, MilestoneRepository, TaskRepository
from core.models import ScheduleMode, TaskDependency
from core.services.common.base import ServiceBase
from core.services.scheduling.dates import DateLike, as_date, utc_now, utc_today
from core.services.scheduling.milestones import expand_milestone_dependencies
from core.services.scheduling.models import ScheduleResult
from core.services.scheduling.scheduler import schedule
from infra.operational_support import OperationalSupport, bind_trace_id


logger = logging.getLogger(__name__)


class SchedulingEngine(ServiceBase):
    """
    Store-facing side of the CPM scheduler:
    - preview_schedule: read-only run, full or cascade
    - recalculate_schedule: full run that writes back changed start/end dates

    Runs are assumed to be serialized by the caller; no locking happens here.
    """

    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        milestone_repo: MilestoneRepository,
        support: OperationalSupport | None = None,
        today_provider: Callable[[], date] = utc_today,
    ):
        super().__init__(session)
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._milestone_repo: MilestoneRepository = milestone_repo
        self._support: OperationalSupport | None = support
        self._today_provider: Callable[[], date] = today_provider

    def preview_schedule(
        self,
        mode: ScheduleMode | str = ScheduleMode.FULL,
        anchor_task_id: Optional[str] = None,
        today: Optional[DateLike] = None,
    ) -> ScheduleResult:
        """
        Compute the schedule for the stored tasks without persisting anything.
        Raises BusinessRuleError (SCHEDULE_CYCLE) when the graph is circular.
        """
        mode = ScheduleMode(mode)
        if mode == ScheduleMode.CASCADE:
            if not anchor_task_id:
                raise ValidationError(
                    "anchor_task_id is required when mode is 'cascade'.",
                    code="SCHEDULE_ANCHOR_REQUIRED",
                )
            if self._task_repo.get(anchor_task_id) is None:
                raise NotFoundError("Anchor task not found.", code="TASK_NOT_FOUND")

        tasks = self._task_repo.list_all()
        deps = self._load_dependencies(include_milestones=mode == ScheduleMode.FULL)
        result = schedule(
            mode,
            tasks,
            deps,
            as_date(today) or self._today_provider(),
            anchor_task_id=anchor_task_id,
        )
        if result.has_cycle:
            raise BusinessRuleError(
                "The dependency graph contains a circular dependency.",
                code="SCHEDULE_CYCLE",
                details={"cycle": list(result.cycle_nodes)},
            )
        return result

    def recalculate_schedule(self, today: Optional[DateLike] = None) -> int:
        """
        Full CPM run against the store. Only tasks whose computed start/end
        differ from the stored ones are written. Returns the number updated.
        """
        with bind_trace_id() as trace_id:
            tasks = self._task_repo.list_all()
            if not tasks:
                return 0

            deps = self._load_dependencies(include_milestones=True)
            run_date: date = as_date(today) or self._today_provider()
            result = schedule(ScheduleMode.FULL, tasks, deps, run_date)

            if result.has_cycle:
                # dependency creation rejects cycles; nothing to apply here
                logger.warning(
                    "Skipping reschedule: circular dependency among %s", result.cycle_nodes
                )
                self._emit(
                    "schedule.cycle_skipped",
                    "Reschedule skipped because of a circular dependency",
                    level="WARNING",
                    trace_id=trace_id,
                    data={"cycle": result.cycle_nodes},
                )
                return 0

            try:
                updated = self._apply_changed_dates(result)
            except Exception as exc:
                logger.exception("Reschedule failed; no dates were written")
                if self._support is not None:
                    self._support.capture_exception(
                        exc_type=type(exc),
                        exc_value=exc,
                        exc_traceback=exc.__traceback__,
                        context="schedule.reconcile",
                    )
                raise

            logger.info(
                "Rescheduled %d of %d task(s) as of %s", updated, len(tasks), run_date.isoformat()
            )
            if updated:
                self._emit(
                    "schedule.reconciled",
                    f"Rescheduled {updated} task(s)",
                    trace_id=trace_id,
                    data={"updated": updated, "today": run_date, "warnings": len(result.warnings)},
                )
                domain_events.schedule_changed.emit(updated)
            return updated

    def _load_dependencies(self, include_milestones: bool) -> List[TaskDependency]:
        deps = self._dependency_repo.list_all()
        if not include_milestones:
            return deps
        synthetic = expand_milestone_dependencies(
            self._milestone_repo.list_requirements(),
            self._milestone_repo.list_contributions(),
        )
        return [*deps, *synthetic]

    def _apply_changed_dates(self, result: ScheduleResult) -> int:
        now = utc_now()
        updated = 0
        with self.transaction():
            for item in result.scheduled_items:
                if not item.dates_changed:
                    continue
                self._task_repo.update_dates(
                    item.task_id,
                    item.scheduled_start_date,
                    item.scheduled_end_date,
                    updated_at=now,
                )
                updated += 1
        return updated

    def _emit(self, event_type: str, message: str, **kwargs) -> None:
        if self._support is None:
            return
        self._support.emit_event(event_type=event_type, message=message, **kwargs)


__all__ = ["SchedulingEngine"]
