from __future__ import annotations

from datetime import date
from typing import List, Optional

from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import DependencyRepository, MilestoneRepository, TaskRepository
from core.models import Task, TaskDependency, TaskStatus
from core.services.scheduling.dates import DateLike, as_date
from core.services.scheduling.graph import find_path
from core.services.scheduling.milestones import expand_milestone_dependencies


class TaskValidationMixin:
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _milestone_repo: MilestoneRepository

    def _validate_task_name(self, name: str) -> None:
        if not (name or "").strip():
            raise ValidationError("Task name cannot be empty.", code="TASK_NAME_EMPTY")

    def _validate_duration(self, duration_days: Optional[int]) -> None:
        if duration_days is None:
            return
        if isinstance(duration_days, bool) or not isinstance(duration_days, int):
            raise ValidationError(
                "Task duration_days must be a whole number of days.",
                code="TASK_INVALID_DURATION",
            )
        if duration_days < 0:
            raise ValidationError(
                "Task duration_days cannot be negative.", code="TASK_INVALID_DURATION"
            )

    def _validate_dates(
        self,
        start_date: Optional[date],
        end_date: Optional[date],
        start_after: Optional[date],
        start_before: Optional[date],
    ) -> None:
        errors: List[str] = []
        if start_date and end_date and start_date > end_date:
            errors.append("start_date must be before or equal to end_date")
        if start_after and start_before and start_after > start_before:
            errors.append("start_after must be before or equal to start_before")
        if errors:
            raise ValidationError("; ".join(errors), code="TASK_INVALID_DATE")

    def _parse_date_field(self, field_name: str, value: Optional[DateLike]) -> Optional[date]:
        try:
            return as_date(value)
        except ValueError as exc:
            raise ValidationError(
                f"{field_name} must be an ISO date (YYYY-MM-DD), got {value!r}",
                code="TASK_INVALID_DATE",
            ) from exc

    def _parse_status(self, value: TaskStatus | str) -> TaskStatus:
        try:
            return TaskStatus(value)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown task status: {value!r}", code="TASK_INVALID_STATUS"
            ) from exc

    def _require_task(self, task_id: str, label: str = "Task") -> Task:
        task = self._task_repo.get(task_id)
        if task is None:
            raise NotFoundError(f"{label} not found.", code="TASK_NOT_FOUND")
        return task

    def _scheduling_dependencies(self) -> List[TaskDependency]:
        """Real dependencies plus the edges implied by milestone links."""
        synthetic = expand_milestone_dependencies(
            self._milestone_repo.list_requirements(),
            self._milestone_repo.list_contributions(),
        )
        return [*self._dependency_repo.list_all(), *synthetic]

    def find_cycle_path(self, predecessor_id: str, successor_id: str) -> Optional[List[str]]:
        """
        Path that a new predecessor -> successor edge would close into a loop,
        starting and ending at the successor; None when the edge is safe.
        """
        path = find_path(self._scheduling_dependencies(), successor_id, predecessor_id)
        if path is None:
            return None
        return [*path, successor_id]

    def _check_no_circular_dependency(self, predecessor_id: str, successor_id: str) -> None:
        cycle = self.find_cycle_path(predecessor_id, successor_id)
        if not cycle:
            return
        names = []
        for task_id in cycle:
            task = self._task_repo.get(task_id)
            names.append(f'"{task.name}"' if task else task_id)
        raise BusinessRuleError(
            f"Circular dependency detected: {' -> '.join(names)}",
            code="DEPENDENCY_CYCLE",
            details={"cycle_path": cycle},
        )
