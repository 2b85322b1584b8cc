from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, MilestoneRepository, TaskRepository
from core.services.scheduling.engine import SchedulingEngine
from core.services.task.dependency import TaskDependencyMixin
from core.services.task.lifecycle import TaskLifecycleMixin
from core.services.task.query import TaskQueryMixin
from core.services.task.validation import TaskValidationMixin


class TaskService(
    TaskLifecycleMixin,
    TaskDependencyMixin,
    TaskQueryMixin,
    TaskValidationMixin,
):
    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        milestone_repo: MilestoneRepository,
        scheduling_engine: SchedulingEngine | None = None,
    ):
        self._session: Session = session
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._milestone_repo: MilestoneRepository = milestone_repo
        self._scheduling_engine: SchedulingEngine | None = scheduling_engine

    def _reschedule(self) -> int:
        if self._scheduling_engine is None:
            return 0
        return self._scheduling_engine.recalculate_schedule()
