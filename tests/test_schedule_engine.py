from datetime import date
import random

import pytest

from core.exceptions import ValidationError
from core.models import (
    DependencyType,
    ScheduleMode,
    Task,
    TaskDependency,
    TaskStatus,
    WarningType,
)
from core.services.scheduling import schedule
from core.services.scheduling.models import ScheduleNode
from core.services.scheduling.results import build_schedule_result

TODAY = date(2024, 1, 1)


def _task(task_id: str, duration=None, **extra) -> Task:
    return Task(id=task_id, name=f"Task {task_id}", duration_days=duration, **extra)


def _dep(pred: str, succ: str, dep_type=DependencyType.FINISH_TO_START, lag: int = 0) -> TaskDependency:
    return TaskDependency.create(pred, succ, dep_type, lag)


def _dates(result, task_id):
    item = result.item_for(task_id)
    return item.scheduled_start_date, item.scheduled_end_date


def test_two_task_finish_to_start_chain():
    tasks = [_task("A", 5), _task("B", 3)]
    result = schedule("full", tasks, [_dep("A", "B")], TODAY)

    assert _dates(result, "A") == (date(2024, 1, 1), date(2024, 1, 6))
    assert _dates(result, "B") == (date(2024, 1, 6), date(2024, 1, 9))
    assert result.critical_path == ["A", "B"]
    assert all(item.total_float == 0 and item.is_critical for item in result.scheduled_items)
    assert result.warnings == []
    assert not result.has_cycle


def test_start_to_start_with_lag():
    result = schedule(
        ScheduleMode.FULL,
        [_task("A", 5), _task("B", 3)],
        [_dep("A", "B", DependencyType.START_TO_START, 2)],
        TODAY,
    )
    assert _dates(result, "B") == (date(2024, 1, 3), date(2024, 1, 6))
    a = result.item_for("A")
    assert a.latest_finish_date == date(2024, 1, 6)
    assert a.latest_start_date == date(2024, 1, 1)


def test_finish_to_finish_aligns_finish_dates():
    result = schedule(
        "full",
        [_task("A", 5), _task("B", 2)],
        [_dep("A", "B", DependencyType.FINISH_TO_FINISH)],
        TODAY,
    )
    assert _dates(result, "B") == (date(2024, 1, 4), date(2024, 1, 6))


def test_start_to_finish_uses_predecessor_start():
    result = schedule(
        "full",
        [_task("A", 2), _task("B", 3)],
        [_dep("A", "B", DependencyType.START_TO_FINISH, 4)],
        TODAY,
    )
    assert _dates(result, "B") == (date(2024, 1, 2), date(2024, 1, 5))


def test_negative_lag_is_lead_time():
    result = schedule("full", [_task("A", 5), _task("B", 3)], [_dep("A", "B", lag=-2)], TODAY)
    assert _dates(result, "B") == (date(2024, 1, 4), date(2024, 1, 7))


def test_latest_predecessor_wins_and_float_is_reported():
    tasks = [_task("A", 5), _task("B", 1), _task("C", 2)]
    deps = [_dep("A", "C"), _dep("B", "C")]
    result = schedule("full", tasks, deps, TODAY)

    assert _dates(result, "C") == (date(2024, 1, 6), date(2024, 1, 8))
    b = result.item_for("B")
    assert b.latest_start_date == date(2024, 1, 5)
    assert b.total_float == 4
    assert not b.is_critical
    assert result.critical_path == ["A", "C"]


def test_start_after_pushes_start_forward():
    tasks = [_task("A", 1, start_after=date(2024, 1, 10)), _task("B", 2, start_after=date(2023, 6, 1))]
    result = schedule("full", tasks, [], TODAY)

    assert _dates(result, "A") == (date(2024, 1, 10), date(2024, 1, 11))
    # an earlier floor has no effect
    assert _dates(result, "B") == (date(2024, 1, 1), date(2024, 1, 3))


def test_missing_duration_is_scheduled_as_zero_with_warning():
    result = schedule("full", [_task("A")], [], TODAY)

    assert _dates(result, "A") == (TODAY, TODAY)
    assert [(w.task_id, w.type) for w in result.warnings] == [("A", WarningType.NO_DURATION)]


def test_start_before_violation_is_a_warning_only():
    tasks = [_task("A", 5), _task("B", 3, start_before=date(2024, 1, 3))]
    result = schedule("full", tasks, [_dep("A", "B")], TODAY)

    assert _dates(result, "B") == (date(2024, 1, 6), date(2024, 1, 9))
    assert len(result.warnings) == 1
    warning = result.warnings[0]
    assert warning.type == WarningType.START_BEFORE_VIOLATED
    assert warning.message == (
        "Scheduled start date (2024-01-06) exceeds start-before constraint (2024-01-03)"
    )


def test_completed_task_with_moved_dates_is_flagged():
    tasks = [
        _task(
            "A",
            4,
            status=TaskStatus.COMPLETED,
            start_date=date(2023, 12, 1),
            end_date=date(2023, 12, 5),
        ),
        _task("B", 2, status=TaskStatus.COMPLETED),
    ]
    result = schedule("full", tasks, [], TODAY)

    # still rescheduled, only reported
    assert _dates(result, "A") == (date(2024, 1, 1), date(2024, 1, 5))
    assert [(w.task_id, w.type) for w in result.warnings] == [("A", WarningType.ALREADY_COMPLETED)]


def test_warnings_follow_fixed_order_per_task():
    tasks = [
        _task("A", 3),
        _task(
            "B",
            None,
            status=TaskStatus.COMPLETED,
            start_before=date(2024, 1, 2),
            start_date=date(2023, 12, 1),
        ),
    ]
    result = schedule("full", tasks, [_dep("A", "B")], TODAY)

    assert [w.type for w in result.warnings] == [
        WarningType.NO_DURATION,
        WarningType.START_BEFORE_VIOLATED,
        WarningType.ALREADY_COMPLETED,
    ]


def test_negative_float_is_clamped_but_critical():
    task = _task("A", 2)
    node = ScheduleNode(
        task=task,
        duration=2,
        es=date(2024, 1, 5),
        ef=date(2024, 1, 7),
        ls=date(2024, 1, 3),
        lf=date(2024, 1, 5),
    )
    result = build_schedule_result({"A": node}, ["A"], [])

    item = result.item_for("A")
    assert item.total_float == 0
    assert item.is_critical
    assert result.critical_path == ["A"]


def test_result_does_not_depend_on_input_order():
    tasks = [_task(t, d) for t, d in [("A", 3), ("B", 2), ("C", 4), ("D", 1), ("E", 2)]]
    deps = [
        _dep("A", "C"),
        _dep("B", "C", DependencyType.START_TO_START, 1),
        _dep("C", "D"),
        _dep("B", "E", lag=3),
        _dep("E", "D", DependencyType.FINISH_TO_FINISH),
    ]
    baseline = schedule("full", tasks, deps, TODAY)

    rng = random.Random(7)
    for _ in range(5):
        shuffled_tasks = list(tasks)
        shuffled_deps = list(deps)
        rng.shuffle(shuffled_tasks)
        rng.shuffle(shuffled_deps)
        assert schedule("full", shuffled_tasks, shuffled_deps, TODAY) == baseline


def test_rescheduling_applied_dates_changes_nothing():
    tasks = [_task("A", 5), _task("B", 3), _task("C", 1)]
    deps = [_dep("A", "B"), _dep("A", "C", DependencyType.START_TO_START, 1)]
    first = schedule("full", tasks, deps, TODAY)
    assert all(item.dates_changed for item in first.scheduled_items)

    applied = [
        _task(
            t.id,
            t.duration_days,
            start_date=first.item_for(t.id).scheduled_start_date,
            end_date=first.item_for(t.id).scheduled_end_date,
        )
        for t in tasks
    ]
    second = schedule("full", applied, deps, TODAY)
    assert not any(item.dates_changed for item in second.scheduled_items)


def test_cycle_returns_only_cycle_nodes():
    tasks = [_task("A", 1), _task("B", 1), _task("C", 1)]
    deps = [_dep("B", "A"), _dep("A", "B"), _dep("C", "A")]
    result = schedule("full", tasks, deps, TODAY)

    assert result.has_cycle
    assert result.cycle_nodes == ["A", "B"]
    assert result.scheduled_items == []
    assert result.critical_path == []
    assert result.warnings == []


def test_cascade_schedules_only_downstream_closure():
    tasks = [_task("A", 2), _task("B", 3), _task("C", 1), _task("D", 4)]
    deps = [_dep("A", "B"), _dep("B", "C")]
    result = schedule("cascade", tasks, deps, TODAY, anchor_task_id="B")

    assert [item.task_id for item in result.scheduled_items] == ["B", "C"]
    # edges into the anchor from outside the closure are dropped
    assert _dates(result, "B") == (date(2024, 1, 1), date(2024, 1, 4))
    assert _dates(result, "C") == (date(2024, 1, 4), date(2024, 1, 5))


def test_cascade_with_unknown_anchor_is_empty():
    result = schedule("cascade", [_task("A", 1)], [], TODAY, anchor_task_id="missing")
    assert result.scheduled_items == []
    assert not result.has_cycle


def test_cascade_without_anchor_fails_fast():
    with pytest.raises(ValidationError) as exc_info:
        schedule("cascade", [_task("A", 1)], [], TODAY)
    assert exc_info.value.code == "SCHEDULE_ANCHOR_REQUIRED"


def test_empty_task_set_gives_empty_result():
    result = schedule("full", [], [_dep("A", "B")], TODAY)
    assert result.scheduled_items == []
    assert result.critical_path == []


def test_edges_to_unknown_tasks_are_ignored():
    result = schedule("full", [_task("A", 2)], [_dep("ghost", "A"), _dep("A", "ghost")], "2024-01-01")
    assert _dates(result, "A") == (date(2024, 1, 1), date(2024, 1, 3))
    assert result.critical_path == ["A"]


def _latest(result, task_id):
    item = result.item_for(task_id)
    return item.latest_start_date, item.latest_finish_date


def _lagged_pair(dep_type):
    # C is longer and unrelated, so A -> B anchors its own backward pass
    tasks = [_task("A", 5), _task("B", 2), _task("C", 10)]
    return schedule("full", tasks, [_dep("A", "B", dep_type, 1)], TODAY)


def test_backward_pass_finish_to_start_with_lag():
    result = _lagged_pair(DependencyType.FINISH_TO_START)

    assert _dates(result, "B") == (date(2024, 1, 7), date(2024, 1, 9))
    assert _latest(result, "B") == (date(2024, 1, 7), date(2024, 1, 9))
    assert _latest(result, "A") == (date(2024, 1, 1), date(2024, 1, 6))
    assert _latest(result, "C") == (date(2024, 1, 1), date(2024, 1, 11))


def test_backward_pass_start_to_start_with_lag():
    result = _lagged_pair(DependencyType.START_TO_START)

    assert _dates(result, "B") == (date(2024, 1, 2), date(2024, 1, 4))
    assert _latest(result, "B") == (date(2024, 1, 2), date(2024, 1, 4))
    assert _latest(result, "A") == (date(2024, 1, 1), date(2024, 1, 6))


def test_backward_pass_finish_to_finish_with_lag():
    result = _lagged_pair(DependencyType.FINISH_TO_FINISH)

    assert _dates(result, "B") == (date(2024, 1, 5), date(2024, 1, 7))
    assert _latest(result, "B") == (date(2024, 1, 5), date(2024, 1, 7))
    # LF_A = LF_B - lag
    assert _latest(result, "A") == (date(2024, 1, 1), date(2024, 1, 6))


def test_backward_pass_start_to_finish_with_lag():
    result = _lagged_pair(DependencyType.START_TO_FINISH)

    assert _dates(result, "B") == (date(2023, 12, 31), date(2024, 1, 2))
    assert _latest(result, "B") == (date(2023, 12, 31), date(2024, 1, 2))
    # LF_A = LF_B - lag + duration_A
    assert _latest(result, "A") == (date(2024, 1, 1), date(2024, 1, 6))


def test_backward_pass_reports_slack_on_lagged_finish_to_finish():
    tasks = [_task("A", 2), _task("B", 3), _task("C", 1), _task("D", 8)]
    deps = [
        _dep("A", "C", DependencyType.FINISH_TO_FINISH, 2),
        _dep("B", "C", DependencyType.FINISH_TO_FINISH, 0),
    ]
    result = schedule("full", tasks, deps, TODAY)

    # C finishes at max(01-03 + 2, 01-04 + 0) = 01-05
    assert _dates(result, "C") == (date(2024, 1, 4), date(2024, 1, 5))
    assert _latest(result, "A") == (date(2024, 1, 1), date(2024, 1, 3))
    assert _latest(result, "B") == (date(2024, 1, 2), date(2024, 1, 5))
    assert result.item_for("A").total_float == 0
    assert result.item_for("B").total_float == 1


def _random_graph(rng):
    ids = [f"t{i:02d}" for i in range(12)]
    tasks = []
    for task_id in ids:
        start_after = date(2024, 1, 1 + rng.randint(0, 9)) if rng.random() < 0.2 else None
        tasks.append(_task(task_id, rng.randint(0, 6), start_after=start_after))
    types = list(DependencyType)
    deps = []
    for i, pred in enumerate(ids):
        for succ in ids[i + 1:]:
            if rng.random() < 0.25:
                deps.append(_dep(pred, succ, rng.choice(types), rng.randint(-2, 3)))
    return tasks, deps


def test_random_graphs_keep_date_invariants():
    rng = random.Random(2024)
    for _ in range(25):
        tasks, deps = _random_graph(rng)
        result = schedule("full", tasks, deps, TODAY)
        assert not result.has_cycle
        items = {item.task_id: item for item in result.scheduled_items}
        assert len(items) == len(tasks)

        for item in items.values():
            span = (item.scheduled_end_date - item.scheduled_start_date).days
            assert (item.latest_finish_date - item.latest_start_date).days == span
            assert item.total_float >= 0

        for dep in deps:
            p, s = items[dep.predecessor_task_id], items[dep.successor_task_id]
            lag = dep.lag_days
            if dep.dependency_type == DependencyType.FINISH_TO_START:
                assert (s.scheduled_start_date - p.scheduled_end_date).days >= lag
                assert (s.latest_start_date - p.latest_finish_date).days >= lag
            elif dep.dependency_type == DependencyType.START_TO_START:
                assert (s.scheduled_start_date - p.scheduled_start_date).days >= lag
                assert (s.latest_start_date - p.latest_start_date).days >= lag
            elif dep.dependency_type == DependencyType.FINISH_TO_FINISH:
                assert (s.scheduled_end_date - p.scheduled_end_date).days >= lag
                assert (s.latest_finish_date - p.latest_finish_date).days >= lag
            else:
                assert (s.scheduled_end_date - p.scheduled_start_date).days >= lag
                assert (s.latest_finish_date - p.latest_start_date).days >= lag
