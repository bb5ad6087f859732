from todo.ports.task_store import TaskStore
from todo.ports.clock import Clock
from todo.ports.id_provider import IdProvider
from todo.domain.task import Task
from todo.domain.enums import normalize_priority
from todo.domain.errors import TaskValidationError
from todo.adapters.system.clock_system import SystemClock
from todo.adapters.system.id_provider_sequence import SequentialIdProvider
from todo.services.stats import TaskStats, compute_stats
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


def _as_utc(dt: datetime | None) -> datetime | None:
    # naiwna data -> czas lokalny; w pamięci trzymamy tylko aware UTC
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone(timezone.utc)


### COMMENTS
# ==========================================================
# Warstwa serwisowa (services/task_registry.py) - przypadki użycia.
# ==========================================================
# Rola:
# - Jedyny "właściciel" listy zadań w pamięci (kolejność = kolejność dodania).
# - Jedyne źródło nowych ID (przez IdProvider, zasilany ID wczytanymi ze store'a).
# - Walidacja tytułu przy tworzeniu -> `TaskValidationError`.
#
# Zasady:
# - Write-through: po KAŻDEJ udanej zmianie zapisujemy całą listę (`store.save`).
# - Operacje, które nic nie zmieniły (brak ID, już zakończone, nic do usunięcia),
#   NIE zapisują i zwracają False / None / 0 - bez wyjątków.
# - Rejestr nie formatuje tekstu i nie pyta użytkownika o nic (to robi CLI).


class TaskRegistry:
    """
    Rejestr zadań: CRUD, filtrowanie i operacje masowe nad listą w pamięci.

    :param store: Implementacja portu TaskStore.
    :param clock: Źródło czasu (domyślnie SystemClock).
    :param id_provider: Generator ID (domyślnie SequentialIdProvider).
    """
    def __init__(
        self,
        store: TaskStore,
        clock: Clock | None = None,
        id_provider: IdProvider | None = None,
    ) -> None:
        self.store = store
        self.clock = clock or SystemClock()
        self.id_provider = id_provider or SequentialIdProvider()
        self._tasks: list[Task] = []
        self.reload()

    def reload(self) -> int:
        """
            Wczytuje listę ze store'a od nowa i zasila licznik ID.

            Licznik nigdy się nie cofa: po wczytaniu wynosi co najmniej max(id) + 1.

            :return: Liczba wczytanych zadań.
        """
        self._tasks = list(self.store.load())
        for task in self._tasks:
            self.id_provider.observe(task.id)
        logger.debug("Registry loaded %d tasks", len(self._tasks))
        return len(self._tasks)

    def _save(self) -> None:
        self.store.save(self._tasks)

    # ---------- CRUD ----------

    def create_task(
        self,
        title: str | None,
        description: str | None = None,
        priority: str | None = None,
        due_date: datetime | None = None,
        category: str | None = None,
    ) -> Task:
        """
            Tworzy nowe zadanie, dodaje je na koniec listy i zapisuje.

            - Walidacja: `title` nie może być pusty ani składać się wyłącznie z białych znaków.
            - `description` i `category` są przycinane (`None` description -> "").
            - `priority` zamieniane na wielkie litery, domyślnie "LOW".
            - `created_at` pochodzi z zegara rejestru.

            :raises TaskValidationError: Gdy `title` jest niepoprawny (lista się nie zmienia).
            :return: Utworzony obiekt `Task`.
        """
        if title is None or not title.strip():
            raise TaskValidationError("title", "Tytul nie moze byc pusty")

        task = Task(
            id=self.id_provider.new_id(),
            title=title.strip(),
            description=description.strip() if description is not None else "",
            priority=normalize_priority(priority),
            created_at=self.clock.now(),
            due_date=_as_utc(due_date),
            category=category.strip() if category is not None else None,
        )
        self._tasks.append(task)
        self._save()
        logger.info("Created task %s (%s)", task.id, task.title)
        return task

    def get_all_tasks(self) -> list[Task]:
        """Zwraca kopię listy (zmiany w wyniku nie wpływają na rejestr)."""
        return list(self._tasks)

    def get_task_by_id(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def update_task(
        self,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        priority: str | None = None,
        due_date: datetime | None = None,
        category: str | None = None,
    ) -> bool:
        """
            Częściowa aktualizacja zadania.

            - `title`: nadpisywany tylko, gdy po przycięciu nie jest pusty.
            - `description`: nadpisywany zawsze, gdy nie jest `None` ("" czyści opis).
            - `priority`: gdy podany i niepusty (wielkie litery).
            - `due_date`: gdy nie jest `None`.
            - `category`: gdy podana i niepusta (przycinana).

            :return: False, gdy nie ma zadania o `task_id`; True po zapisie zmian.
        """
        task = self.get_task_by_id(task_id)
        if task is None:
            return False

        if title is not None and title.strip():
            task.title = title.strip()
        if description is not None:
            task.description = description.strip()
        if priority is not None and priority.strip():
            task.priority = normalize_priority(priority)
        if due_date is not None:
            task.due_date = _as_utc(due_date)
        if category is not None and category.strip():
            task.category = category.strip()

        self._save()
        logger.debug("Updated task %s", task_id)
        return True

    def delete_task(self, task_id: int) -> bool:
        kept = [t for t in self._tasks if t.id != task_id]
        if len(kept) == len(self._tasks):
            return False
        self._tasks = kept
        self._save()
        logger.debug("Deleted task %s", task_id)
        return True

    # ---------- status ----------

    def complete_task(self, task_id: int) -> bool:
        """
            Oznacza oczekujące zadanie jako zakończone.

            :return: True (i zapis) tylko, gdy zadanie istnieje i nie było jeszcze zakończone.
        """
        task = self.get_task_by_id(task_id)
        if task is None or task.completed:
            return False
        task.mark_completed()
        self._save()
        return True

    def uncomplete_task(self, task_id: int) -> bool:
        """
            Przywraca zakończone zadanie do stanu oczekującego.

            :return: True (i zapis) tylko, gdy zadanie istnieje i było zakończone.
        """
        task = self.get_task_by_id(task_id)
        if task is None or not task.completed:
            return False
        task.mark_incomplete()
        self._save()
        return True

    # ---------- filtrowanie ----------

    def get_tasks_by_category(self, category: str | None) -> list[Task]:
        """Dokładne dopasowanie bez względu na wielkość liter; `None` pasuje tylko do zadań bez kategorii."""
        if category is None:
            return [t for t in self._tasks if t.category is None]
        wanted = category.casefold()
        return [t for t in self._tasks if t.category is not None and t.category.casefold() == wanted]

    def search_tasks_by_title(self, term: str | None) -> list[Task]:
        """Szukanie fragmentu tytułu bez względu na wielkość liter; pusty term zwraca wszystko."""
        if term is None or not term.strip():
            return self.get_all_tasks()
        needle = term.strip().casefold()
        return [t for t in self._tasks if needle in t.title.casefold()]

    def get_overdue_tasks(self) -> list[Task]:
        now = self.clock.now()
        return [t for t in self._tasks if t.is_overdue(now)]

    def get_statistics(self) -> TaskStats:
        return compute_stats(self._tasks, self.clock.now())

    # ---------- operacje masowe ----------

    def clear_completed_tasks(self) -> int:
        """Usuwa zakończone zadania. Zapis tylko, gdy coś usunięto.

        :return: Liczba usuniętych zadań.
        """
        kept = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(kept)
        if removed > 0:
            self._tasks = kept
            self._save()
            logger.info("Removed %d completed tasks", removed)
        return removed

    def clear_all_tasks(self) -> int:
        removed = len(self._tasks)
        if removed > 0:
            self._tasks = []
            self._save()
            logger.info("Removed all %d tasks", removed)
        return removed

    # ---------- pomocnicze ----------

    def has_tasks(self) -> bool:
        return bool(self._tasks)

    def get_task_count(self) -> int:
        return len(self._tasks)
