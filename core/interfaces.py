# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional

from core.models import (
    Milestone,
    MilestoneContribution,
    MilestoneRequirement,
    Task,
    TaskDependency,
)


class TaskRepository(ABC):
    @abstractmethod
    def add(self, task: Task) -> None: ...

    @abstractmethod
    def update(self, task: Task) -> None: ...

    @abstractmethod
    def update_dates(
        self,
        task_id: str,
        start_date: Optional[date],
        end_date: Optional[date],
        updated_at: datetime,
    ) -> None: ...

    @abstractmethod
    def delete(self, task_id: str) -> None: ...

    @abstractmethod
    def get(self, task_id: str) -> Optional[Task]: ...

    @abstractmethod
    def list_all(self) -> List[Task]: ...


class DependencyRepository(ABC):
    @abstractmethod
    def add(self, dependency: TaskDependency) -> None: ...

    @abstractmethod
    def get(self, predecessor_id: str, successor_id: str) -> Optional[TaskDependency]: ...

    @abstractmethod
    def delete(self, predecessor_id: str, successor_id: str) -> None: ...

    @abstractmethod
    def delete_for_task(self, task_id: str) -> None: ...

    @abstractmethod
    def list_all(self) -> List[TaskDependency]: ...

    @abstractmethod
    def list_by_task(self, task_id: str) -> List[TaskDependency]: ...


class MilestoneRepository(ABC):
    @abstractmethod
    def add(self, milestone: Milestone) -> None: ...

    @abstractmethod
    def get(self, milestone_id: str) -> Optional[Milestone]: ...

    @abstractmethod
    def delete(self, milestone_id: str) -> None: ...

    @abstractmethod
    def list_all(self) -> List[Milestone]: ...

    @abstractmethod
    def add_contribution(self, link: MilestoneContribution) -> None: ...

    @abstractmethod
    def remove_contribution(self, milestone_id: str, task_id: str) -> None: ...

    @abstractmethod
    def list_contributions(self) -> List[MilestoneContribution]: ...

    @abstractmethod
    def add_requirement(self, link: MilestoneRequirement) -> None: ...

    @abstractmethod
    def remove_requirement(self, task_id: str, milestone_id: str) -> None: ...

    @abstractmethod
    def list_requirements(self) -> List[MilestoneRequirement]: ...

    @abstractmethod
    def delete_links_for_task(self, task_id: str) -> None: ...


__all__ = ["TaskRepository", "DependencyRepository", "MilestoneRepository"]
