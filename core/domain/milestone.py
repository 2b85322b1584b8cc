from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Milestone:
    id: str
    title: str
    target_date: Optional[date] = None
    description: str = ""

    @staticmethod
    def create(title: str, target_date: Optional[date] = None, description: str = "") -> "Milestone":
        return Milestone(
            id=generate_id(),
            title=title.strip(),
            target_date=target_date,
            description=description,
        )


@dataclass(frozen=True)
class MilestoneContribution:
    """The task's completion feeds the milestone."""
    milestone_id: str
    task_id: str


@dataclass(frozen=True)
class MilestoneRequirement:
    """The task must wait for the milestone."""
    task_id: str
    milestone_id: str


__all__ = ["Milestone", "MilestoneContribution", "MilestoneRequirement"]
