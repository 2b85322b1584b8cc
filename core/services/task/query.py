from __future__ import annotations

from datetime import date
from typing import List, Optional

from core.interfaces import TaskRepository
from core.models import Task, TaskStatus


class TaskQueryMixin:
    _task_repo: TaskRepository

    def get_task(self, task_id: str) -> Task:
        return self._require_task(task_id)

    def list_tasks(self, status: Optional[TaskStatus] = None) -> List[Task]:
        tasks = self._task_repo.list_all()
        if status is not None:
            status = self._parse_status(status)
            tasks = [t for t in tasks if t.status == status]
        return sorted(tasks, key=lambda t: (t.start_date or date.max, t.name, t.id))
