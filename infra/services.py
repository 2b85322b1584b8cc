from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from sqlalchemy.orm import Session

from core.services.milestone import MilestoneService
from core.services.scheduling import SchedulingEngine
from core.services.scheduling.dates import utc_today
from core.services.task import TaskService
from infra.db.repositories import (
    SqlAlchemyDependencyRepository,
    SqlAlchemyMilestoneRepository,
    SqlAlchemyTaskRepository,
)
from infra.operational_support import OperationalSupport


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    scheduling_engine: SchedulingEngine
    task_service: TaskService
    milestone_service: MilestoneService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "scheduling_engine": self.scheduling_engine,
            "task_service": self.task_service,
            "milestone_service": self.milestone_service,
        }


def build_service_graph(
    session: Session,
    support: OperationalSupport | None = None,
    today_provider: Callable[[], date] = utc_today,
) -> ServiceGraph:
    task_repo = SqlAlchemyTaskRepository(session)
    dependency_repo = SqlAlchemyDependencyRepository(session)
    milestone_repo = SqlAlchemyMilestoneRepository(session)

    scheduling_engine = SchedulingEngine(
        session,
        task_repo,
        dependency_repo,
        milestone_repo,
        support=support,
        today_provider=today_provider,
    )
    task_service = TaskService(
        session,
        task_repo,
        dependency_repo,
        milestone_repo,
        scheduling_engine=scheduling_engine,
    )
    milestone_service = MilestoneService(
        session,
        milestone_repo,
        task_repo,
        dependency_repo,
        scheduling_engine=scheduling_engine,
    )

    return ServiceGraph(
        session=session,
        scheduling_engine=scheduling_engine,
        task_service=task_service,
        milestone_service=milestone_service,
    )
