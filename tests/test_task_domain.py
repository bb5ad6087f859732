import pytest
from datetime import datetime, timezone, timedelta
from todo.domain.task import Task, TaskId
from todo.domain.enums import Priority, normalize_priority
from todo.adapters.system.id_provider_sequence import SequentialIdProvider
from todo.adapters.system.clock_system import SystemClock

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_task(**kwargs) -> Task:
    return Task(id=TaskId(1), title="A", created_at=NOW - timedelta(days=1), **kwargs)


def test_not_overdue_without_due_date():
    assert make_task().is_overdue(NOW) is False


def test_overdue_when_due_date_passed():
    assert make_task(due_date=NOW - timedelta(seconds=1)).is_overdue(NOW) is True


def test_not_overdue_exactly_at_due_date():
    assert make_task(due_date=NOW).is_overdue(NOW) is False


def test_completed_task_is_never_overdue():
    task = make_task(due_date=NOW - timedelta(days=3))
    task.mark_completed()
    assert task.is_overdue(NOW) is False
    task.mark_incomplete()
    assert task.is_overdue(NOW) is True


@pytest.mark.parametrize("raw, expected", [
    ("high", "HIGH"),
    ("Medium", "MEDIUM"),
    (" low ", "LOW"),
    ("whatever", "WHATEVER"),
    (None, "LOW"),
    ("", "LOW"),
    (Priority.HIGH, "HIGH"),
])
def test_normalize_priority(raw, expected):
    assert normalize_priority(raw) == expected


def test_sequential_ids_start_at_one():
    ids = SequentialIdProvider()
    assert [ids.new_id(), ids.new_id(), ids.new_id()] == [1, 2, 3]


def test_observe_only_moves_forward():
    ids = SequentialIdProvider()
    ids.observe(10)
    ids.observe(4)
    assert ids.next_id == 11
    assert ids.new_id() == 11


def test_system_clock_is_utc_aware():
    now = SystemClock().now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)
