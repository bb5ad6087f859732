from todo.ports.task_store import TaskStore
from todo.domain.task import Task, TaskId
from todo.domain.enums import normalize_priority
from todo.domain.errors import StorageError
from todo.config import DEFAULT_DATA_FILE
from pathlib import Path
from typing import Any, Sequence
from datetime import datetime, timezone
import os, json, re, logging

logger = logging.getLogger(__name__)

LEGACY_FORMAT = "%Y-%m-%d %H:%M"
_FRACTION = re.compile(r"(\.\d{6})\d+")


### COMMENTS
# ==========================================================
# Adapter JSON dla warstwy trwałości (adapters/json/task_store.py).
# ==========================================================
# - Cały plik = jedna tablica JSON z obiektami zadań (indent=2, UTF-8).
# - Kolejność pól w rekordzie jest stała:
#     id, title, description, completed, priority, createdAt, dueDate, category
# - Czas zapisujemy jako ISO8601 UTC z 'Z'. Przy odczycie akceptujemy też
#   stare formaty (naiwne ISO z 'T' oraz "YYYY-MM-DD HH:MM" jako czas lokalny).
#   Tolerancja dla starych formatów żyje tylko tutaj, nie w modelu.
# - Zapis przez plik tymczasowy + os.replace (podmiana pliku w jednym kroku).
# - Publiczne metody NIE rzucają: błędy są logowane, odczyt -> [], zapis -> no-op.


def _encode_dt(dt: datetime) -> str:
    # ISO 8601 w UTC z sufiksem 'Z'
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

def _parse_dt(s: Any) -> datetime:
    """Parsuje datę: ISO8601 (z 'Z', z offsetem lub naiwne) albo "YYYY-MM-DD HH:MM".
    Daty bez strefy traktujemy jako czas lokalny. Wynik zawsze aware UTC."""
    if not isinstance(s, str) or not s.strip():
        raise ValueError(f"invalid timestamp: {s!r}")
    raw = _FRACTION.sub(r"\1", s.strip().replace("Z", "+00:00"))
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        dt = datetime.strptime(raw, LEGACY_FORMAT)
    if dt.tzinfo is None:
        dt = dt.astimezone()  # naiwna data -> lokalna strefa
    return dt.astimezone(timezone.utc)

def _encode_task(task: Task) -> dict:
    return {
        "id": int(task.id),
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "priority": str(task.priority),
        "createdAt": _encode_dt(task.created_at),
        "dueDate": _encode_dt(task.due_date) if task.due_date is not None else None,
        "category": task.category,
    }

def _decode_task(row: Any) -> Task:
    if not isinstance(row, dict):
        raise ValueError("record must be a JSON object")

    task_id = row["id"]
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 1:
        raise ValueError(f"invalid id: {task_id!r}")

    raw_title = row["title"]
    if not isinstance(raw_title, str):
        raise ValueError(f"title must be a string, got {raw_title!r}")
    title = raw_title.strip()
    if not title:
        raise ValueError("empty title")

    completed = row.get("completed", False)
    if not isinstance(completed, bool):
        raise ValueError(f"invalid completed flag: {completed!r}")

    due_date = None
    raw_due = row.get("dueDate")
    if raw_due not in (None, ""):
        try:
            due_date = _parse_dt(raw_due)
        except ValueError:
            logger.warning("Task %s: unreadable dueDate %r dropped", task_id, raw_due)

    category = row.get("category")
    return Task(
        id=TaskId(task_id),
        title=title,
        description=str(row.get("description") or ""),
        completed=completed,
        priority=normalize_priority(row.get("priority")),
        created_at=_parse_dt(row["createdAt"]),
        due_date=due_date,
        category=str(category) if category is not None else None,
    )


class JsonTaskStore(TaskStore):
    def __init__(self, path: Path = DEFAULT_DATA_FILE) -> None:
        """Inicjalizuje store JSON.
        Tworzy katalog nadrzędny i pusty plik ('[]'), jeśli nie istnieją."""
        self.path = Path(path)
        self.ensure_ready()

    def ensure_ready(self) -> None:
        """Przygotowuje katalog i plik. Błąd jest logowany - konstrukcja nigdy nie przerywa procesu."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self._atomic_dump([])
                logger.info("Created empty task file %s", self.path)
        except (OSError, StorageError) as e:
            logger.error("Cannot initialize task file %s: %s", self.path, e)

    def _read_text(self) -> str:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(self.path, f"read failed: {e}")

    def _atomic_dump(self, tasks: Sequence[Task]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".swap")
        payload = [_encode_task(t) for t in tasks]
        try:
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                f.write(json.dumps(payload, ensure_ascii=False, indent=2))
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                pass
            raise StorageError(self.path, f"write failed: {e}")

    def save(self, tasks: Sequence[Task]) -> None:
        """Nadpisuje plik pełną listą zadań.
        Błąd zapisu jest logowany; stan w pamięci NIE jest cofany."""
        try:
            self._atomic_dump(tasks)
        except StorageError as e:
            logger.error("Failed to save %d tasks: %s", len(tasks), e)
            return
        logger.debug("Saved %d tasks to %s", len(tasks), self.path)

    def load(self) -> list[Task]:
        """Zwraca zadania z pliku.
        Brak pliku, pusty plik, same białe znaki albo zły JSON -> pusta lista.
        Rekordy, których nie da się zdekodować, są pomijane (z ostrzeżeniem)."""
        try:
            text = self._read_text()
        except StorageError as e:
            logger.error("Failed to load tasks: %s", e)
            return []

        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error("%s: invalid JSON, starting with empty list: %s", self.path.name, e)
            return []

        if not isinstance(data, list):
            logger.error("%s: expected a JSON array, got %s", self.path.name, type(data).__name__)
            return []

        tasks: list[Task] = []
        seen: set[int] = set()
        for index, record in enumerate(data):
            try:
                task = _decode_task(record)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("%s: record #%d skipped: %s", self.path.name, index, e)
                continue
            if task.id in seen:
                logger.warning("%s: record #%d skipped: duplicate id %s", self.path.name, index, task.id)
                continue
            seen.add(task.id)
            tasks.append(task)

        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks
