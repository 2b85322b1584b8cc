"""Notify listeners about task, dependency, milestone and schedule changes."""
from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.tasks_changed: Signal[str] = Signal("tasks_changed")                # task_id
        self.dependencies_changed: Signal[str] = Signal("dependencies_changed")  # successor task_id
        self.milestones_changed: Signal[str] = Signal("milestones_changed")      # milestone_id
        self.schedule_changed: Signal[int] = Signal("schedule_changed")          # tasks updated

    def reset(self) -> None:
        for signal in (
            self.tasks_changed,
            self.dependencies_changed,
            self.milestones_changed,
            self.schedule_changed,
        ):
            signal.disconnect_all()


# SINGLE global instance
domain_events = DomainEvents()
