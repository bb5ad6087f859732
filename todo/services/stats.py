from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from todo.domain.task import Task
from todo.domain.enums import Priority


@dataclass(frozen=True)
class TaskStats:
    """Podsumowanie kolekcji: ile wszystkich, zakończonych, oczekujących i po terminie."""
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    pending_by_priority: dict[str, int] = field(default_factory=dict)

    @property
    def completion_rate(self) -> float:
        if not self.total:
            return 0.0
        return round(self.completed / self.total * 100, 2)


def compute_stats(tasks: Iterable[Task], now: datetime) -> TaskStats:
    total = completed = overdue = 0
    by_priority = {p.value: 0 for p in Priority}
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
            continue
        by_priority[task.priority] = by_priority.get(task.priority, 0) + 1
        if task.is_overdue(now):
            overdue += 1
    return TaskStats(
        total=total,
        completed=completed,
        pending=total - completed,
        overdue=overdue,
        pending_by_priority=by_priority,
    )
