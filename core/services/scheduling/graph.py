from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from core.models import TaskDependency


@dataclass
class TopologicalOrder:
    order: List[str]
    cycle: List[str] = field(default_factory=list)

    @property
    def has_cycle(self) -> bool:
        return bool(self.cycle)


def topological_sort(node_ids: Set[str], edges: Iterable[Tuple[str, str]]) -> TopologicalOrder:
    """
    Kahn's algorithm over ``node_ids``.

    Edges with an endpoint outside ``node_ids`` are ignored. The ready set is
    drained smallest-id first so the order does not depend on edge order.
    When a cycle exists, ``order`` holds the sorted prefix and ``cycle`` every
    node whose in-degree never reached zero.
    """
    successors: Dict[str, List[str]] = {node_id: [] for node_id in node_ids}
    indegree: Dict[str, int] = {node_id: 0 for node_id in node_ids}

    for pred_id, succ_id in edges:
        if pred_id not in node_ids or succ_id not in node_ids:
            continue
        successors[pred_id].append(succ_id)
        indegree[succ_id] += 1

    ready: List[str] = [node_id for node_id, degree in indegree.items() if degree == 0]
    order: List[str] = []

    while ready:
        ready.sort()
        node_id = ready.pop(0)
        order.append(node_id)
        for succ_id in successors[node_id]:
            indegree[succ_id] -= 1
            if indegree[succ_id] == 0:
                ready.append(succ_id)

    if len(order) < len(node_ids):
        cycle = sorted(node_id for node_id, degree in indegree.items() if degree > 0)
        return TopologicalOrder(order=order, cycle=cycle)
    return TopologicalOrder(order=order)


def build_dependency_index(
    node_ids: Set[str],
    deps: Iterable[TaskDependency],
) -> tuple[list[TaskDependency], dict[str, list[TaskDependency]], dict[str, list[TaskDependency]]]:
    """
    Keep only dependencies whose endpoints are both scheduled and group them
    by successor (incoming) and by predecessor (outgoing).
    """
    filtered_deps = [
        d
        for d in deps
        if d.predecessor_task_id in node_ids and d.successor_task_id in node_ids
    ]

    deps_by_successor: Dict[str, List[TaskDependency]] = {node_id: [] for node_id in node_ids}
    deps_by_predecessor: Dict[str, List[TaskDependency]] = {node_id: [] for node_id in node_ids}
    for dep in filtered_deps:
        deps_by_successor[dep.successor_task_id].append(dep)
        deps_by_predecessor[dep.predecessor_task_id].append(dep)

    return filtered_deps, deps_by_successor, deps_by_predecessor


def find_path(deps: Iterable[TaskDependency], source_id: str, target_id: str) -> Optional[List[str]]:
    """Shortest chain of task ids from source to target along successor edges."""
    successors: Dict[str, List[str]] = {}
    for dep in deps:
        successors.setdefault(dep.predecessor_task_id, []).append(dep.successor_task_id)

    parents: Dict[str, Optional[str]] = {source_id: None}
    queue = deque([source_id])
    while queue:
        current = queue.popleft()
        if current == target_id:
            path: List[str] = []
            node: Optional[str] = current
            while node is not None:
                path.append(node)
                node = parents[node]
            return list(reversed(path))
        for succ_id in sorted(successors.get(current, [])):
            if succ_id not in parents:
                parents[succ_id] = current
                queue.append(succ_id)
    return None


__all__ = ["TopologicalOrder", "topological_sort", "build_dependency_index", "find_path"]
