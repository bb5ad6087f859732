from todo.domain.errors import TaskValidationError, DomainError
from todo.domain.task import Task, TaskId
from todo.domain.enums import Priority
from todo.services.task_registry import TaskRegistry
from todo.adapters.memory.task_store import InMemoryTaskStore
from todo.adapters.json.task_store import JsonTaskStore
from todo.adapters.system.clock_system import SystemClock
from todo.config import load_settings
from todo.logging_setup import setup_logging
from todo.api.colors import TaskColor, PRIORITY_COLORS
from typer import Argument, Option, Typer, BadParameter, Exit, confirm
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional
import logging


### COMMENTS
# ==========================================================
# CLI (Typer + Rich) - interfejs użytkownika dla listy zadań.
# ==========================================================
# Rola:
# - Mapuje komendy na metody TaskRegistry (add/list/show/done/undone/update/rm/...).
# - Wyświetla wyniki w czytelnej formie (tabele, panele, kolory).
# - Pyta o potwierdzenie przy usuwaniu (rejestr nigdy nie pyta).
# - Łapie DomainError i drukuje przyjazne komunikaty.
#
# Zasady:
# - Zero logiki biznesowej - deleguj do TaskRegistry.
# - Jednorazowy bootstrap zależności (logging + store + registry) w callbacku.
# - "Nie znaleziono" przychodzi z rejestru jako False/None, nie jako wyjątek.


app = Typer(help="Todo CLI - zadania zapisywane w pliku JSON")
console = Console()

registry: TaskRegistry | None = None  # ustawimy w callbacku


class ClearTarget(str, Enum):
    COMPLETED = "completed"
    ALL = "all"


def build_registry(file: Optional[Path], memory: bool = False) -> TaskRegistry:
    """Tworzy rejestr na bazie wybranego adaptera.
    - --memory -> InMemory (nic nie trafia na dysk)
    - w przeciwnym razie -> Json (plik z opcji albo z TODO_FILE)
    """
    if memory:
        store = InMemoryTaskStore()
    else:
        store = JsonTaskStore(file or load_settings().data_file)
    return TaskRegistry(store)

@app.callback()
def main(
    file: Optional[Path] = Option(
        None,
        "--file",
        "-f",
        help="Ścieżka do pliku JSON (domyślnie TODO_FILE albo data/tasks.json)",
    ),
    memory: bool = Option(False, "--memory", help="Tryb bez zapisu na dysk"),
    verbose: bool = Option(False, "--verbose", "-v", help="Pokaż logi DEBUG na konsoli"),
) -> None:
    """Bootstrap zależności na starcie procesu CLI."""
    global registry
    settings = load_settings()
    setup_logging(
        log_dir=settings.log_dir,
        console_level=logging.DEBUG if verbose else settings.log_level,
    )
    registry = build_registry(file, memory=memory)


def parse_due(value: str | None) -> datetime | None:
    """Zamienia tekst 'YYYY-MM-DD HH:MM' (lub ISO8601) na datetime aware.
    Data bez strefy jest traktowana jako czas lokalny."""
    if value is None or not value.strip():
        return None
    try:
        dt = datetime.fromisoformat(value.strip())
    except ValueError:
        raise BadParameter(f"Zły format daty: {value!r}. Użyj YYYY-MM-DD HH:MM, np. 2025-06-25 14:30")
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def format_dt(dt: datetime | None, empty: str = "brak") -> str:
    if dt is None:
        return empty
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def color_status(task: Task, now: datetime) -> str:
    """Zwraca status w Rich-markup z kolorem."""
    if task.completed:
        return f"{TaskColor.GREEN}COMPLETED{TaskColor.RESET}"
    if task.is_overdue(now):
        return f"{TaskColor.RED}OVERDUE{TaskColor.RESET}"
    return f"{TaskColor.YELLOW}PENDING{TaskColor.RESET}"


def color_priority(priority: str) -> str:
    color = PRIORITY_COLORS.get(priority)
    if color is None:
        return priority
    return f"{color}{priority}{TaskColor.RESET}"


def render_list(items: list[Task], heading: str | None = None) -> None:
    """Renderuje tabelę Rich z kolumnami: ID, Title, Category, Priority, Status, Due."""
    if not items:
        console.print("[dim]📝 Brak zadań do wyświetlenia[/dim]")
        return

    now = SystemClock().now()
    table = Table(title=heading, show_lines=True, header_style="bold")
    table.add_column("ID", no_wrap=True, style="cyan", justify="right")
    table.add_column("Title")
    table.add_column("Category", style="dim")
    table.add_column("Priority", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Due", no_wrap=True, style="dim")

    for t in items:
        table.add_row(
            str(t.id),
            t.title,
            t.category or "-",
            color_priority(t.priority),
            color_status(t, now),
            format_dt(t.due_date, empty="-"),
        )

    console.print(table)
    console.print(f"[dim]Razem: {len(items)}[/dim]")


def not_found(task_id: int) -> None:
    console.print(Panel.fit(
        f"❌ Nie znaleziono zadania o ID: {task_id}\n"
        f"[dim]Użyj 'todo list', żeby znaleźć poprawne ID[/]",
        title="Nie znaleziono",
        border_style="red",
    ))


@app.command("add")
def add(
    title: str,
    desc: str | None = Option(None, "--desc", "-d"),
    priority: Priority = Option(Priority.LOW, "--priority", "-p", case_sensitive=False),
    due: str | None = Option(None, "--due", help="Termin: YYYY-MM-DD HH:MM"),
    category: str | None = Option(None, "--category", "-c"),
) -> None:
    """
    Dodaje nowe zadanie.

    Flow:
    - Wywołaj: registry.create_task(title, desc, priority, due, category)
    - Sukces: Panel „✅ Dodano zadanie”, pokaż ID.
    - Błąd walidacji: TaskValidationError → czerwony Panel z podpowiedzią.
    """
    due_date = parse_due(due)
    try:
        task = registry.create_task(
            title,
            description=desc,
            priority=priority.value,
            due_date=due_date,
            category=category,
        )
        console.print(Panel.fit(
            f"✅ Dodano zadanie\n"
            f"[cyan]ID:[/cyan] {task.id}\n"
            f"[dim]Title:[/dim] {task.title}"
            + (f"\n[dim]Description:[/dim] {task.description}" if task.description else ""),
            title="Sukces",
            border_style="green",
        ))
        if due_date is not None and due_date < SystemClock().now():
            console.print("[yellow]⚠️ Termin jest w przeszłości[/]")
    except TaskValidationError as e:
        console.print(Panel.fit(
        f"❌ {e}\n[dim]Podpowiedź: użyj np.:[/] todo add 'Tytuł' -d 'Opis'",
        title="Błąd walidacji",
        border_style="red",
        ))
    except DomainError as e:
        console.print(Panel.fit(
            f"❌ {e}",
            title="Błąd domenowy",
            border_style="red",
        ))


@app.command("list")
def list_cmd(
    pending: bool = Option(False, "--pending", help="Tylko niezakończone"),
) -> None:
    """Listuje wszystkie zadania (w kolejności dodania)."""
    items = registry.get_all_tasks()
    if pending:
        items = [t for t in items if not t.completed]
    if not registry.has_tasks():
        console.print("📝 Brak zadań. Użyj 'todo add \"<tytuł>\"', żeby dodać pierwsze!")
        return
    render_list(items, heading="📋 Zadania")


@app.command("show")
def show(task_id: int) -> None:
    """
    Pokazuje szczegóły pojedynczego zadania.

    - Panel z polami: ID, Title, Description, Category, Priority, Status, Due, Created
    - Brak zadania → czerwony Panel.
    """
    task = registry.get_task_by_id(TaskId(task_id))
    if task is None:
        not_found(task_id)
        return

    now = SystemClock().now()
    lines = [
        f"ID: {task.id}",
        f"Title: {task.title}",
        f"Description: {task.description or '[dim]brak[/]'}",
        f"Category: {task.category or '[dim]brak[/]'}",
        f"Priority: {color_priority(task.priority)}",
        f"Status: {color_status(task, now)}",
        f"Due: {format_dt(task.due_date)}",
        f"Created: {format_dt(task.created_at)}",
    ]
    console.print(Panel.fit(
        "\n".join(lines),
        title="Szczegóły zadania",
        border_style="cyan",
    ))


@app.command("done")
def done(task_id: int) -> None:
    """Oznacza zadanie jako zakończone."""
    task = registry.get_task_by_id(TaskId(task_id))
    if task is None:
        not_found(task_id)
        return
    if not registry.complete_task(task.id):
        console.print(f"[yellow]Zadanie {task_id} jest już zakończone[/]")
        return
    console.print(Panel.fit(
        f"✅ Sukces! ID: {task.id}\n[dim]Title:[/dim] {task.title}\nStatus: {color_status(task, SystemClock().now())}",
        title="Sukces",
        border_style="green",
    ))


@app.command("undone")
def undone(task_id: int) -> None:
    """Przywraca zakończone zadanie do stanu oczekującego."""
    task = registry.get_task_by_id(TaskId(task_id))
    if task is None:
        not_found(task_id)
        return
    if not registry.uncomplete_task(task.id):
        console.print(f"[yellow]Zadanie {task_id} nie jest zakończone[/]")
        return
    console.print(Panel.fit(
        f"↩️ Przywrócono ID: {task.id}\n[dim]Title:[/dim] {task.title}\nStatus: {color_status(task, SystemClock().now())}",
        title="Sukces",
        border_style="yellow",
    ))


@app.command("update")
def update(
    task_id: int,
    title: str | None = Option(None, "--title", "-t"),
    desc: str | None = Option(None, "--desc", "-d", help="Pusty string czyści opis"),
    priority: Priority | None = Option(None, "--priority", "-p", case_sensitive=False),
    due: str | None = Option(None, "--due", help="Termin: YYYY-MM-DD HH:MM"),
    category: str | None = Option(None, "--category", "-c"),
) -> None:
    """Aktualizuje tylko podane pola zadania."""
    changed = registry.update_task(
        TaskId(task_id),
        title=title,
        description=desc,
        priority=priority.value if priority is not None else None,
        due_date=parse_due(due),
        category=category,
    )
    if not changed:
        not_found(task_id)
        return
    console.print(Panel.fit(
        f"✅ Zaktualizowano zadanie {task_id}",
        title="Sukces",
        border_style="green",
    ))


@app.command("rm")
def rm(
    task_id: int,
    yes: bool = Option(False, "--yes", "-y", help="Bez pytania o potwierdzenie"),
) -> None:
    """
    Usuwa zadanie.

    Flow:
    - pokaż zadanie i zapytaj o potwierdzenie (chyba że --yes)
    - registry.delete_task(task_id)
    - Sukces: Panel „🟡 Usunięto”.
    """
    task = registry.get_task_by_id(TaskId(task_id))
    if task is None:
        not_found(task_id)
        return
    if not yes:
        render_list([task])
        if not confirm("Na pewno usunąć?"):
            console.print("❌ Anulowano.")
            raise Exit()
    registry.delete_task(task.id)
    console.print(Panel.fit(
        f"🟡 Zadanie usunięte\nID: {task_id}\n[dim] skasowany[/]",
        title="Usunięto",
        border_style="yellow",
    ))


@app.command("search")
def search(term: str) -> None:
    """Szuka zadań po fragmencie tytułu."""
    items = registry.search_tasks_by_title(term)
    if not items:
        console.print(f"📝 Brak zadań pasujących do: {term}")
        return
    render_list(items, heading=f"🔍 Wyniki dla '{term}'")


@app.command("category")
def category_cmd(name: str) -> None:
    """Pokazuje zadania z danej kategorii."""
    items = registry.get_tasks_by_category(name)
    if not items:
        console.print(f"📝 Brak zadań w kategorii: {name}")
        return
    render_list(items, heading=f"📋 Kategoria '{name}'")


@app.command("overdue")
def overdue() -> None:
    """Pokazuje zadania po terminie."""
    items = registry.get_overdue_tasks()
    if not items:
        console.print("[green]Brak zadań po terminie[/]")
        return
    render_list(items, heading="⏰ Po terminie")


@app.command("clear")
def clear(
    what: ClearTarget = Argument(..., case_sensitive=False),
    yes: bool = Option(False, "--yes", "-y", help="Bez pytania o potwierdzenie"),
) -> None:
    """Usuwa zakończone (completed) albo wszystkie (all) zadania."""
    if what is ClearTarget.COMPLETED:
        if not yes and not confirm("Usunąć wszystkie zakończone zadania?"):
            console.print("❌ Anulowano.")
            raise Exit()
        removed = registry.clear_completed_tasks()
        if removed:
            console.print(f"✅ Usunięto {removed} zakończonych zadań")
        else:
            console.print("📝 Brak zakończonych zadań do usunięcia")
        return

    if not yes and not confirm("⚠️ Usunąć WSZYSTKIE zadania na stałe?"):
        console.print("❌ Anulowano.")
        raise Exit()
    removed = registry.clear_all_tasks()
    console.print(f"✅ Usunięto wszystkie zadania: {removed}")


@app.command("stats")
def stats() -> None:
    """Statystyki: wszystkie, zakończone, oczekujące, po terminie."""
    if not registry.has_tasks():
        console.print("📝 Brak zadań. Użyj 'todo add \"<tytuł>\"', żeby zacząć!")
        return
    s = registry.get_statistics()
    by_priority = ", ".join(f"{color_priority(p)}: {n}" for p, n in s.pending_by_priority.items())
    console.print(Panel.fit(
        f"Razem:        {s.total}\n"
        f"✅ Zakończone: {s.completed} ({s.completion_rate}%)\n"
        f"📋 Oczekujące: {s.pending}\n"
        f"⏰ Po terminie: {s.overdue}\n"
        f"[dim]Oczekujące wg priorytetu:[/dim] {by_priority}",
        title="📊 Statystyki",
        border_style="cyan",
    ))


@app.command("demo")
def demo() -> None:
    """
    Pokazowy przebieg działania aplikacji w jednym procesie (InMemory).

    - Tworzy 4 zadania.
    - Oznacza jedno jako zakończone.
    - Usuwa inne.
    - Pokazuje listę po zmianach i statystyki.
    """
    global registry
    registry = TaskRegistry(InMemoryTaskStore())

    console.print(Panel.fit("🚀 Start demonstracji", border_style="cyan"))

    registry.create_task("Buy milk", "2% lactose-free", category="Home")
    t2 = registry.create_task("Call mom", "Sunday afternoon", priority="high")
    t3 = registry.create_task("Read a book", "DDD chapter 3", priority="medium", category="Study")
    registry.create_task("Watch Movie", "Furioza 2", category="home")

    console.print(Panel.fit(f"✅ Utworzono {registry.get_task_count()} zadania", border_style="green"))
    render_list(registry.get_all_tasks(), heading="📋 Lista po utworzeniu")

    registry.complete_task(t2.id)
    console.print(Panel.fit(f"✔️ Zamknięto zadanie: {t2.id} ({t2.title})", border_style="yellow"))

    registry.delete_task(t3.id)
    console.print(Panel.fit(f"🗑️ Usunięto zadanie: {t3.id} ({t3.title})", border_style="red"))

    render_list(registry.get_all_tasks(), heading="📋 Lista po zmianach")
    render_list(registry.get_tasks_by_category("HOME"), heading="📋 Kategoria 'home'")
    stats()

    console.print(Panel.fit("🏁 Demo zakończone", border_style="cyan"))


if __name__ == "__main__":
    app()
