from datetime import date

from core.models import (
    DependencyType,
    MilestoneContribution,
    MilestoneRequirement,
    Task,
)
from core.services.scheduling import expand_milestone_dependencies, schedule


def test_requirement_becomes_edge_from_each_contributor():
    contributions = [
        MilestoneContribution(milestone_id="m1", task_id="a"),
        MilestoneContribution(milestone_id="m1", task_id="b"),
        MilestoneContribution(milestone_id="m2", task_id="c"),
    ]
    requirements = [MilestoneRequirement(task_id="d", milestone_id="m1")]

    deps = expand_milestone_dependencies(requirements, contributions)

    assert [(d.predecessor_task_id, d.successor_task_id) for d in deps] == [("a", "d"), ("b", "d")]
    assert all(d.dependency_type == DependencyType.FINISH_TO_START for d in deps)
    assert all(d.lag_days == 0 for d in deps)


def test_task_requiring_its_own_milestone_gets_no_self_edge():
    contributions = [
        MilestoneContribution(milestone_id="m1", task_id="a"),
        MilestoneContribution(milestone_id="m1", task_id="b"),
    ]
    requirements = [MilestoneRequirement(task_id="a", milestone_id="m1")]

    deps = expand_milestone_dependencies(requirements, contributions)

    assert [(d.predecessor_task_id, d.successor_task_id) for d in deps] == [("b", "a")]


def test_milestone_without_contributors_adds_nothing():
    requirements = [MilestoneRequirement(task_id="a", milestone_id="empty")]
    assert expand_milestone_dependencies(requirements, []) == []


def test_expanded_edges_drive_the_schedule():
    tasks = [
        Task(id="a", name="Design", duration_days=4),
        Task(id="b", name="Build", duration_days=2),
        Task(id="c", name="Launch", duration_days=1),
    ]
    deps = expand_milestone_dependencies(
        [MilestoneRequirement(task_id="c", milestone_id="m1")],
        [
            MilestoneContribution(milestone_id="m1", task_id="a"),
            MilestoneContribution(milestone_id="m1", task_id="b"),
        ],
    )
    result = schedule("full", tasks, deps, date(2024, 1, 1))

    launch = result.item_for("c")
    assert launch.scheduled_start_date == date(2024, 1, 5)
    assert result.critical_path == ["a", "c"]
