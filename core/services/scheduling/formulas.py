from __future__ import annotations

from datetime import date

from core.models import DependencyType, TaskDependency
from core.services.scheduling.dates import add_days
from core.services.scheduling.models import ScheduleNode


def forward_dependency_es(dep: TaskDependency, pred: ScheduleNode, successor_duration: int) -> date:
    """Earliest start that ``dep`` imposes on its successor."""
    lag = dep.lag_days
    if dep.dependency_type == DependencyType.FINISH_TO_START:
        # ES_s >= EF_p + lag
        return add_days(pred.ef, lag)
    if dep.dependency_type == DependencyType.START_TO_START:
        # ES_s >= ES_p + lag
        return add_days(pred.es, lag)
    if dep.dependency_type == DependencyType.FINISH_TO_FINISH:
        # EF_s >= EF_p + lag => ES_s >= EF_p + lag - duration_s
        return add_days(add_days(pred.ef, lag), -successor_duration)
    if dep.dependency_type == DependencyType.START_TO_FINISH:
        # EF_s >= ES_p + lag => ES_s >= ES_p + lag - duration_s
        return add_days(add_days(pred.es, lag), -successor_duration)
    raise ValueError(f"Unknown dependency type: {dep.dependency_type!r}")


def backward_dependency_lf(dep: TaskDependency, succ: ScheduleNode, predecessor_duration: int) -> date:
    """Latest finish that ``dep`` imposes on its predecessor."""
    lag = dep.lag_days
    if dep.dependency_type == DependencyType.FINISH_TO_START:
        # LF_p <= LS_s - lag
        return add_days(succ.ls, -lag)
    if dep.dependency_type == DependencyType.START_TO_START:
        # LS_p <= LS_s - lag => LF_p <= LS_s - lag + duration_p
        return add_days(add_days(succ.ls, -lag), predecessor_duration)
    if dep.dependency_type == DependencyType.FINISH_TO_FINISH:
        # LF_p <= LF_s - lag
        return add_days(succ.lf, -lag)
    if dep.dependency_type == DependencyType.START_TO_FINISH:
        # LS_p <= LF_s - lag => LF_p <= LF_s - lag + duration_p
        return add_days(add_days(succ.lf, -lag), predecessor_duration)
    raise ValueError(f"Unknown dependency type: {dep.dependency_type!r}")


__all__ = ["forward_dependency_es", "backward_dependency_lf"]
