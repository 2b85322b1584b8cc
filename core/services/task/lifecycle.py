from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import ValidationError
from core.interfaces import DependencyRepository, MilestoneRepository, TaskRepository
from core.models import Task, TaskStatus
from core.services.scheduling.dates import utc_now


logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "status",
        "start_date",
        "end_date",
        "duration_days",
        "start_after",
        "start_before",
    }
)
_SCHEDULING_FIELDS = frozenset(
    {"status", "start_date", "end_date", "duration_days", "start_after", "start_before"}
)
_DATE_FIELDS = ("start_date", "end_date", "start_after", "start_before")


class TaskLifecycleMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository
    _milestone_repo: MilestoneRepository

    def create_task(
        self,
        name: str,
        description: str = "",
        duration_days: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        start_after: Optional[date] = None,
        start_before: Optional[date] = None,
        status: TaskStatus = TaskStatus.NOT_STARTED,
    ) -> Task:
        self._validate_task_name(name)
        self._validate_duration(duration_days)
        start_date = self._parse_date_field("start_date", start_date)
        end_date = self._parse_date_field("end_date", end_date)
        start_after = self._parse_date_field("start_after", start_after)
        start_before = self._parse_date_field("start_before", start_before)
        self._validate_dates(start_date, end_date, start_after, start_before)

        task = Task.create(
            name=name.strip(),
            description=description,
            status=self._parse_status(status),
            start_date=start_date,
            end_date=end_date,
            duration_days=duration_days,
            start_after=start_after,
            start_before=start_before,
            updated_at=utc_now(),
        )
        try:
            self._task_repo.add(task)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error("Error creating task %s: %s", task.name, exc)
            raise
        logger.info("Created task %s - %s", task.id, task.name)
        domain_events.tasks_changed.emit(task.id)
        return task

    def update_task(self, task_id: str, **changes: Any) -> Task:
        """
        Update the given fields. Any change to a field the scheduler reads
        triggers a full reschedule after the commit.
        """
        if not changes:
            raise ValidationError("At least one field must be provided.", code="TASK_NO_CHANGES")
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Unknown task field(s): {', '.join(sorted(unknown))}",
                code="TASK_UNKNOWN_FIELD",
            )

        task = self._require_task(task_id)
        for field_name in _DATE_FIELDS:
            if field_name in changes:
                changes[field_name] = self._parse_date_field(field_name, changes[field_name])
        if "name" in changes:
            self._validate_task_name(changes["name"])
            changes["name"] = changes["name"].strip()
        if "duration_days" in changes:
            self._validate_duration(changes["duration_days"])
        if "status" in changes:
            changes["status"] = self._parse_status(changes["status"])

        for field_name, value in changes.items():
            setattr(task, field_name, value)
        self._validate_dates(task.start_date, task.end_date, task.start_after, task.start_before)
        task.updated_at = utc_now()

        try:
            self._task_repo.update(task)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.tasks_changed.emit(task.id)

        if _SCHEDULING_FIELDS & set(changes):
            self._reschedule()
            task = self._require_task(task_id)
        return task

    def set_status(self, task_id: str, status: TaskStatus) -> Task:
        return self.update_task(task_id, status=status)

    def delete_task(self, task_id: str) -> None:
        task = self._require_task(task_id)
        try:
            self._dependency_repo.delete_for_task(task_id)
            self._milestone_repo.delete_links_for_task(task_id)
            self._task_repo.delete(task_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Deleted task %s - %s", task.id, task.name)
        domain_events.tasks_changed.emit(task_id)
        self._reschedule()
