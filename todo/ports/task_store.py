from typing import Protocol, Sequence
from todo.domain.task import Task


### COMMENTS
# ==========================================================
# Kontrakt warstwy trwałości zadań (ports/task_store.py).
# ==========================================================
# - Store zna tylko CAŁĄ kolekcję: zapis nadpisuje wszystko, odczyt zwraca wszystko.
# - Brak zapisów przyrostowych, indeksów i blokad (jeden proces, jeden użytkownik).
# - Store nie rzuca wyjątków do rejestru: błędy loguje i degraduje się
#   do bezpiecznej wartości (pusta lista przy odczycie, no-op przy zapisie).
# - Store nie zawiera logiki biznesowej (walidacje są w TaskRegistry).


class TaskStore(Protocol):
    """Interfejs trwałości dla listy obiektów `Task`."""

    def save(self, tasks: Sequence[Task]) -> None:
        """Zapisuje pełną, uporządkowaną listę zadań (nadpisuje poprzednią).

        Wyjątki:
            Brak - błąd zapisu jest logowany, pamięć i dysk mogą się rozjechać.
        """

    def load(self) -> list[Task]:
        """Zwraca wszystkie zapisane zadania w kolejności z pliku.

        Zwraca:
            list[Task]: Pusta lista, gdy plik nie istnieje, jest pusty
                        albo nie daje się sparsować.

        Wyjątki:
            Brak - błędy odczytu są logowane.
        """
