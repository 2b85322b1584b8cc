from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from core.models import ScheduleMode, Task, TaskDependency
from core.services.scheduling.dates import DateLike, as_date
from core.services.scheduling.graph import build_dependency_index, topological_sort
from core.services.scheduling.models import ScheduleResult
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.results import build_schedule_result
from core.services.scheduling.scope import select_scheduled_ids


logger = logging.getLogger(__name__)


def schedule(
    mode: ScheduleMode | str,
    tasks: Iterable[Task],
    dependencies: Iterable[TaskDependency],
    today: DateLike,
    anchor_task_id: Optional[str] = None,
) -> ScheduleResult:
    """
    CPM run over plain task/dependency records:
    - scope: every task (full) or the anchor's downstream closure (cascade)
    - forward pass: ES/EF, with ``today`` as the floor for source tasks
    - backward pass: LS/LF anchored at each terminal task's EF
    - float, critical path and warnings

    No state is kept between calls and nothing is read from the clock; the
    same inputs always give the same result. A cycle inside the scheduled set
    short-circuits into a result with only ``cycle_nodes`` filled in.
    """
    today_date: date = as_date(today)
    tasks_by_id: Dict[str, Task] = {t.id: t for t in tasks}
    deps: List[TaskDependency] = list(dependencies)

    scheduled_ids = select_scheduled_ids(mode, tasks_by_id, deps, anchor_task_id)
    if not scheduled_ids:
        return ScheduleResult()

    filtered_deps, deps_by_successor, deps_by_predecessor = build_dependency_index(scheduled_ids, deps)
    topo = topological_sort(
        scheduled_ids,
        [(d.predecessor_task_id, d.successor_task_id) for d in filtered_deps],
    )
    if topo.has_cycle:
        logger.debug("Circular dependency among %d task(s): %s", len(topo.cycle), topo.cycle)
        return ScheduleResult(cycle_nodes=topo.cycle)

    scheduled_tasks = {task_id: tasks_by_id[task_id] for task_id in scheduled_ids}
    nodes, warnings = run_forward_pass(scheduled_tasks, topo.order, deps_by_successor, today_date)
    run_backward_pass(nodes, topo.order, deps_by_predecessor)

    return build_schedule_result(nodes, topo.order, warnings)


__all__ = ["schedule"]
