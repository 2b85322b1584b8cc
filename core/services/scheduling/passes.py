from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from core.models import Task, TaskDependency
from core.services.scheduling.dates import add_days
from core.services.scheduling.formulas import backward_dependency_lf, forward_dependency_es
from core.services.scheduling.models import ScheduleNode, ScheduleWarning
from core.services.scheduling.warnings import collect_task_warnings


def run_forward_pass(
    tasks_by_id: Dict[str, Task],
    topo_order: List[str],
    deps_by_successor: Dict[str, List[TaskDependency]],
    today: date,
) -> tuple[Dict[str, ScheduleNode], List[ScheduleWarning]]:
    nodes: Dict[str, ScheduleNode] = {}
    warnings: List[ScheduleWarning] = []

    for task_id in topo_order:
        task = tasks_by_id[task_id]
        duration = int(task.duration_days or 0)

        est: Optional[date] = None
        for dep in deps_by_successor.get(task_id, []):
            candidate = forward_dependency_es(dep, nodes[dep.predecessor_task_id], duration)
            if est is None or candidate > est:
                est = candidate
        if est is None:
            # source node: nothing starts before today
            est = today

        if task.start_after is not None and task.start_after > est:
            est = task.start_after

        node = ScheduleNode(task=task, duration=duration, es=est, ef=add_days(est, duration))
        nodes[task_id] = node
        warnings.extend(collect_task_warnings(node))

    return nodes, warnings


def run_backward_pass(
    nodes: Dict[str, ScheduleNode],
    topo_order: List[str],
    deps_by_predecessor: Dict[str, List[TaskDependency]],
) -> None:
    for task_id in reversed(topo_order):
        node = nodes[task_id]

        lft: Optional[date] = None
        for dep in deps_by_predecessor.get(task_id, []):
            candidate = backward_dependency_lf(dep, nodes[dep.successor_task_id], node.duration)
            if lft is None or candidate < lft:
                lft = candidate

        if lft is None:
            # terminal node: anchored to its own early finish
            node.lf = node.ef
            node.ls = node.es
        else:
            node.lf = lft
            node.ls = add_days(lft, -node.duration)


__all__ = ["run_forward_pass", "run_backward_pass"]
