from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import DependencyRepository, MilestoneRepository, TaskRepository
from core.models import Milestone, MilestoneContribution, MilestoneRequirement, Task
from core.services.common.base import ServiceBase
from core.services.scheduling.dates import as_date
from core.services.scheduling.engine import SchedulingEngine
from core.services.scheduling.graph import find_path
from core.services.scheduling.milestones import expand_milestone_dependencies


logger = logging.getLogger(__name__)


class MilestoneService(ServiceBase):
    """
    Milestones are not scheduled themselves. A task that requires a milestone
    waits for every task contributing to it; link changes reschedule the store.
    """

    def __init__(
        self,
        session: Session,
        milestone_repo: MilestoneRepository,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        scheduling_engine: SchedulingEngine | None = None,
    ):
        super().__init__(session)
        self._milestone_repo: MilestoneRepository = milestone_repo
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._scheduling_engine: SchedulingEngine | None = scheduling_engine

    def create_milestone(
        self,
        title: str,
        target_date: Optional[date] = None,
        description: str = "",
    ) -> Milestone:
        if not (title or "").strip():
            raise ValidationError("Milestone title cannot be empty.", code="MILESTONE_TITLE_EMPTY")
        try:
            target = as_date(target_date)
        except ValueError as exc:
            raise ValidationError(
                f"target_date must be an ISO date (YYYY-MM-DD), got {target_date!r}",
                code="MILESTONE_INVALID_DATE",
            ) from exc
        milestone = Milestone.create(title, target, description)
        with self.transaction():
            self._milestone_repo.add(milestone)
        logger.info("Created milestone %s - %s", milestone.id, milestone.title)
        domain_events.milestones_changed.emit(milestone.id)
        return milestone

    def get_milestone(self, milestone_id: str) -> Milestone:
        milestone = self._milestone_repo.get(milestone_id)
        if milestone is None:
            raise NotFoundError("Milestone not found.", code="MILESTONE_NOT_FOUND")
        return milestone

    def list_milestones(self) -> List[Milestone]:
        return sorted(
            self._milestone_repo.list_all(),
            key=lambda m: (m.target_date or date.max, m.title, m.id),
        )

    def delete_milestone(self, milestone_id: str) -> None:
        self.get_milestone(milestone_id)
        with self.transaction():
            self._milestone_repo.delete(milestone_id)
        domain_events.milestones_changed.emit(milestone_id)
        self._reschedule()

    def list_contributors(self, milestone_id: str) -> List[str]:
        self.get_milestone(milestone_id)
        return sorted(
            link.task_id
            for link in self._milestone_repo.list_contributions()
            if link.milestone_id == milestone_id
        )

    def list_dependent_tasks(self, milestone_id: str) -> List[str]:
        self.get_milestone(milestone_id)
        return sorted(
            link.task_id
            for link in self._milestone_repo.list_requirements()
            if link.milestone_id == milestone_id
        )

    def link_task(self, milestone_id: str, task_id: str) -> MilestoneContribution:
        """The task's completion now feeds the milestone."""
        self.get_milestone(milestone_id)
        self._require_task(task_id)
        link = MilestoneContribution(milestone_id=milestone_id, task_id=task_id)
        if link in self._milestone_repo.list_contributions():
            raise BusinessRuleError(
                "Task is already linked to this milestone.", code="MILESTONE_LINK_DUPLICATE"
            )
        if MilestoneRequirement(task_id=task_id, milestone_id=milestone_id) in self._milestone_repo.list_requirements():
            raise BusinessRuleError(
                "Cannot contribute to a milestone that this task depends on.",
                code="MILESTONE_LINK_CONFLICT",
            )
        self._check_links_stay_acyclic(contributions=[link])

        with self.transaction():
            self._milestone_repo.add_contribution(link)
        domain_events.milestones_changed.emit(milestone_id)
        self._reschedule()
        return link

    def unlink_task(self, milestone_id: str, task_id: str) -> None:
        self.get_milestone(milestone_id)
        self._require_task(task_id)
        link = MilestoneContribution(milestone_id=milestone_id, task_id=task_id)
        if link not in self._milestone_repo.list_contributions():
            raise NotFoundError(
                "Task is not linked to this milestone.", code="MILESTONE_LINK_NOT_FOUND"
            )
        with self.transaction():
            self._milestone_repo.remove_contribution(milestone_id, task_id)
        domain_events.milestones_changed.emit(milestone_id)
        self._reschedule()

    def add_required_milestone(self, task_id: str, milestone_id: str) -> MilestoneRequirement:
        """The task now waits for every task contributing to the milestone."""
        self._require_task(task_id)
        self.get_milestone(milestone_id)
        link = MilestoneRequirement(task_id=task_id, milestone_id=milestone_id)
        if link in self._milestone_repo.list_requirements():
            raise BusinessRuleError(
                "Task already depends on this milestone.", code="MILESTONE_LINK_DUPLICATE"
            )
        if MilestoneContribution(milestone_id=milestone_id, task_id=task_id) in self._milestone_repo.list_contributions():
            raise BusinessRuleError(
                "Cannot require a milestone that this task contributes to.",
                code="MILESTONE_LINK_CONFLICT",
            )
        self._check_links_stay_acyclic(requirements=[link])

        with self.transaction():
            self._milestone_repo.add_requirement(link)
        domain_events.milestones_changed.emit(milestone_id)
        self._reschedule()
        return link

    def remove_required_milestone(self, task_id: str, milestone_id: str) -> None:
        self._require_task(task_id)
        self.get_milestone(milestone_id)
        link = MilestoneRequirement(task_id=task_id, milestone_id=milestone_id)
        if link not in self._milestone_repo.list_requirements():
            raise NotFoundError(
                "Task does not depend on this milestone.", code="MILESTONE_LINK_NOT_FOUND"
            )
        with self.transaction():
            self._milestone_repo.remove_requirement(task_id, milestone_id)
        domain_events.milestones_changed.emit(milestone_id)
        self._reschedule()

    def _require_task(self, task_id: str) -> Task:
        task = self._task_repo.get(task_id)
        if task is None:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        return task

    def _check_links_stay_acyclic(
        self,
        contributions: List[MilestoneContribution] | None = None,
        requirements: List[MilestoneRequirement] | None = None,
    ) -> None:
        existing_contributions = self._milestone_repo.list_contributions()
        existing_requirements = self._milestone_repo.list_requirements()
        deps = self._dependency_repo.list_all()
        current = [
            *deps,
            *expand_milestone_dependencies(existing_requirements, existing_contributions),
        ]
        proposed = expand_milestone_dependencies(
            [*existing_requirements, *(requirements or [])],
            [*existing_contributions, *(contributions or [])],
        )
        current_edges = {(d.predecessor_task_id, d.successor_task_id) for d in current}
        new_edges = [
            d for d in proposed if (d.predecessor_task_id, d.successor_task_id) not in current_edges
        ]
        graph = [*current, *new_edges]
        for edge in new_edges:
            path = find_path(graph, edge.successor_task_id, edge.predecessor_task_id)
            if path:
                raise BusinessRuleError(
                    "This milestone link would create a circular dependency.",
                    code="DEPENDENCY_CYCLE",
                    details={"cycle_path": [*path, edge.successor_task_id]},
                )

    def _reschedule(self) -> int:
        if self._scheduling_engine is None:
            return 0
        return self._scheduling_engine.recalculate_schedule()
