from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from core.exceptions import ValidationError
from core.models import ScheduleMode, Task, TaskDependency


def downstream_closure(anchor_task_id: str, deps: Iterable[TaskDependency]) -> Set[str]:
    """Anchor plus every task reachable from it along successor edges."""
    successors: Dict[str, List[str]] = {}
    for dep in deps:
        successors.setdefault(dep.predecessor_task_id, []).append(dep.successor_task_id)

    visited: Set[str] = set()
    queue = deque([anchor_task_id])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        for succ_id in successors.get(current, []):
            if succ_id not in visited:
                queue.append(succ_id)
    return visited


def select_scheduled_ids(
    mode: ScheduleMode | str,
    tasks_by_id: Dict[str, Task],
    deps: List[TaskDependency],
    anchor_task_id: Optional[str] = None,
) -> Set[str]:
    mode = ScheduleMode(mode)
    if mode == ScheduleMode.FULL:
        scheduled_ids = set(tasks_by_id)
    else:
        if not anchor_task_id:
            raise ValidationError(
                "anchor_task_id is required for cascade mode.",
                code="SCHEDULE_ANCHOR_REQUIRED",
            )
        scheduled_ids = downstream_closure(anchor_task_id, deps)

    # stale edges can point at tasks that no longer exist
    return {task_id for task_id in scheduled_ids if task_id in tasks_by_id}


__all__ = ["downstream_closure", "select_scheduled_ids"]
