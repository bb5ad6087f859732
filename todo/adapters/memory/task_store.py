from dataclasses import replace
from typing import Iterable, Sequence
from todo.domain.task import Task

### COMMENTS
# ==========================================================
# Adapter pamięciowy dla warstwy trwałości (adapters/memory/task_store.py).
# ==========================================================
# - Służy do testów i trybu `--memory` w CLI (bez trwałego zapisu).
# - Trzyma KOPIE zadań, tak jak plik trzyma "zdjęcie" stanu z chwili zapisu:
#   późniejsze zmiany obiektów w rejestrze nie przeciekają do store'a.
# - `save_count` pozwala w testach sprawdzić, czy operacja zapisała dane.


class InMemoryTaskStore:
    """
        Store w pamięci z opcjonalną kolekcją startowych zadań.
        :param initial: Iterable z obiektami Task do wstępnego załadowania.
    """
    def __init__(self, initial: Iterable[Task] | None = None) -> None:
        self._records: list[Task] = [replace(t) for t in (initial or [])]
        self.save_count = 0

    def save(self, tasks: Sequence[Task]) -> None:
        """Podmienia całą zawartość store'a kopią `tasks`."""
        self._records = [replace(t) for t in tasks]
        self.save_count += 1

    def load(self) -> list[Task]:
        """Zwraca kopie zapisanych zadań (w kolejności zapisu)."""
        return [replace(t) for t in self._records]
