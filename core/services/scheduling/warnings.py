from __future__ import annotations

from typing import List

from core.models import TaskStatus, WarningType
from core.services.scheduling.models import ScheduleNode, ScheduleWarning


def collect_task_warnings(node: ScheduleNode) -> List[ScheduleWarning]:
    task = node.task
    warnings: List[ScheduleWarning] = []

    if task.duration_days is None:
        warnings.append(
            ScheduleWarning(
                task_id=task.id,
                type=WarningType.NO_DURATION,
                message="Task has no duration set; scheduled as zero-duration",
            )
        )

    if task.start_before is not None and node.es > task.start_before:
        warnings.append(
            ScheduleWarning(
                task_id=task.id,
                type=WarningType.START_BEFORE_VIOLATED,
                message=(
                    f"Scheduled start date ({node.es.isoformat()}) exceeds "
                    f"start-before constraint ({task.start_before.isoformat()})"
                ),
            )
        )

    if task.status == TaskStatus.COMPLETED:
        start_moves = task.start_date is not None and node.es != task.start_date
        end_moves = task.end_date is not None and node.ef != task.end_date
        if start_moves or end_moves:
            warnings.append(
                ScheduleWarning(
                    task_id=task.id,
                    type=WarningType.ALREADY_COMPLETED,
                    message="Task is already completed; dates cannot be changed by the scheduler",
                )
            )

    return warnings


__all__ = ["collect_task_warnings"]
