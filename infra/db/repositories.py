# infra/db/repositories.py
from infra.db.milestone.repository import SqlAlchemyMilestoneRepository
from infra.db.task.repository import SqlAlchemyDependencyRepository, SqlAlchemyTaskRepository

__all__ = [
    "SqlAlchemyTaskRepository",
    "SqlAlchemyDependencyRepository",
    "SqlAlchemyMilestoneRepository",
]
