from todo.ports.id_provider import IdProvider
from todo.domain.task import TaskId

class SequentialIdProvider(IdProvider):
    """Monotoniczny licznik ID: start od 1, nigdy się nie cofa.
    Licznik nie jest zapisywany na dysku - odtwarzamy go z ID wczytanych zadań."""

    def __init__(self, start: int = 1) -> None:
        self._next = max(1, int(start))

    @property
    def next_id(self) -> int:
        return self._next

    def new_id(self) -> TaskId:
        task_id = self._next
        self._next += 1
        return TaskId(task_id)

    def observe(self, task_id: int) -> None:
        if task_id >= self._next:
            self._next = task_id + 1
