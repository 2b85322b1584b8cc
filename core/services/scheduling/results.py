from __future__ import annotations

from typing import Dict, List

from core.services.scheduling.dates import diff_days
from core.services.scheduling.models import (
    ScheduledItem,
    ScheduleNode,
    ScheduleResult,
    ScheduleWarning,
)


def build_schedule_result(
    nodes: Dict[str, ScheduleNode],
    topo_order: List[str],
    warnings: List[ScheduleWarning],
) -> ScheduleResult:
    scheduled_items: List[ScheduledItem] = []
    critical_path: List[str] = []

    for task_id in topo_order:
        node = nodes[task_id]
        raw_float = diff_days(node.es, node.ls)
        # negative float means the hard constraints cannot all hold; still critical
        is_critical = raw_float <= 0
        if is_critical:
            critical_path.append(task_id)

        scheduled_items.append(
            ScheduledItem(
                task_id=task_id,
                previous_start_date=node.task.start_date,
                previous_end_date=node.task.end_date,
                scheduled_start_date=node.es,
                scheduled_end_date=node.ef,
                latest_start_date=node.ls,
                latest_finish_date=node.lf,
                total_float=max(0, raw_float),
                is_critical=is_critical,
            )
        )

    return ScheduleResult(
        scheduled_items=scheduled_items,
        critical_path=critical_path,
        warnings=warnings,
    )


__all__ = ["build_schedule_result"]
