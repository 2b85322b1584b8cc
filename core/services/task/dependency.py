from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import DependencyType, TaskDependency


logger = logging.getLogger(__name__)


class TaskDependencyMixin:
    _session: Session
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def add_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> TaskDependency:
        self._require_task(successor_id, "Successor task")
        self._require_task(predecessor_id, "Predecessor task")
        if predecessor_id == successor_id:
            raise ValidationError("A task cannot depend on itself.", code="DEPENDENCY_SELF")
        if isinstance(lag_days, bool) or not isinstance(lag_days, int):
            raise ValidationError("lag_days must be a whole number of days.", code="DEPENDENCY_INVALID_LAG")
        try:
            dependency_type = DependencyType(dependency_type)
        except ValueError as exc:
            raise ValidationError(
                f"Unknown dependency type: {dependency_type!r}", code="DEPENDENCY_INVALID_TYPE"
            ) from exc

        if self._dependency_repo.get(predecessor_id, successor_id) is not None:
            raise BusinessRuleError("Dependency already exists.", code="DEPENDENCY_DUPLICATE")
        self._check_no_circular_dependency(predecessor_id, successor_id)

        dep = TaskDependency.create(predecessor_id, successor_id, dependency_type, lag_days)
        try:
            self._dependency_repo.add(dep)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            raise exc
        logger.info(
            "Added %s dependency %s -> %s (lag %d)",
            dep.dependency_type.value,
            predecessor_id,
            successor_id,
            dep.lag_days,
        )
        domain_events.dependencies_changed.emit(successor_id)
        self._reschedule()
        return dep

    def remove_dependency(self, predecessor_id: str, successor_id: str) -> None:
        dep = self._dependency_repo.get(predecessor_id, successor_id)
        if dep is None:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")
        try:
            self._dependency_repo.delete(predecessor_id, successor_id)
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            raise exc
        logger.info("Removed dependency %s -> %s", predecessor_id, successor_id)
        domain_events.dependencies_changed.emit(successor_id)
        self._reschedule()

    def list_dependencies_for_task(self, task_id: str) -> List[TaskDependency]:
        self._require_task(task_id)
        return self._dependency_repo.list_by_task(task_id)

    def list_predecessors(self, task_id: str) -> List[TaskDependency]:
        return [d for d in self.list_dependencies_for_task(task_id) if d.successor_task_id == task_id]

    def list_successors(self, task_id: str) -> List[TaskDependency]:
        return [d for d in self.list_dependencies_for_task(task_id) if d.predecessor_task_id == task_id]
