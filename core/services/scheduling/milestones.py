from __future__ import annotations

from typing import Dict, Iterable, List

from core.models import (
    DependencyType,
    MilestoneContribution,
    MilestoneRequirement,
    TaskDependency,
)


def contributors_by_milestone(contributions: Iterable[MilestoneContribution]) -> Dict[str, List[str]]:
    result: Dict[str, List[str]] = {}
    for link in contributions:
        result.setdefault(link.milestone_id, []).append(link.task_id)
    return result


def expand_milestone_dependencies(
    requirements: Iterable[MilestoneRequirement],
    contributions: Iterable[MilestoneContribution],
) -> List[TaskDependency]:
    """
    Replace "task waits for milestone M" with a zero-lag finish-to-start edge
    from every task contributing to M.
    """
    contributors = contributors_by_milestone(contributions)
    synthetic: List[TaskDependency] = []
    for requirement in requirements:
        for contributor_id in contributors.get(requirement.milestone_id, []):
            if contributor_id == requirement.task_id:
                continue
            synthetic.append(
                TaskDependency.create(
                    contributor_id,
                    requirement.task_id,
                    DependencyType.FINISH_TO_START,
                    lag_days=0,
                )
            )
    return synthetic


__all__ = ["contributors_by_milestone", "expand_milestone_dependencies"]
