from typing import NewType
from datetime import datetime
from dataclasses import dataclass

from todo.domain.enums import Priority

TaskId = NewType("TaskId", int)

@dataclass
class Task():
    """
    Model domenowy pojedynczego zadania; mutowalny (zmiany robi wyłącznie TaskRegistry);
    czas (aware) dostarczany przez zegar rejestru.
    """
    id: TaskId
    title: str
    created_at: datetime
    description: str = ""
    completed: bool = False
    priority: str = Priority.LOW.value
    due_date: datetime | None = None
    category: str | None = None

    def is_overdue(self, now: datetime) -> bool:
        """True, gdy jest termin, zadanie nie jest zakończone i termin minął (ściśle przed `now`)."""
        if self.due_date is None or self.completed:
            return False
        return self.due_date < now

    def mark_completed(self) -> None:
        self.completed = True

    def mark_incomplete(self) -> None:
        self.completed = False



### COMMENTS
# ======================================
# Dlaczego Task nie jest już frozen
# ======================================
# Rejestr trzyma jedną listę zadań w pamięci i zmienia je "w miejscu"
# (update / complete / uncomplete), a potem zapisuje całość do pliku.
# Dlatego dataclass jest zwykła (bez frozen=True).
#
# Kolejność pól = kolejność w pliku JSON:
#   id, title, description, completed, priority, createdAt, dueDate, category
# (w dataclass created_at musi być przed polami z domyślną wartością,
#  kolejność w pliku ustala codec).

# ======================================
# Czas
# ======================================
# created_at i due_date to datetime "aware" (ze strefą).
# Porównanie w is_overdue wymaga, żeby `now` też było aware
# (SystemClock zwraca UTC).
