import json
import logging
import pytest
from typer.testing import CliRunner
from todo.api.cli import app, parse_due
from todo.config import load_settings, DEFAULT_DATA_FILE
from typer import BadParameter

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """CLI wywołuje setup_logging, który podmienia handlery roota - przywracamy je po teście."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def invoke(tmp_path, data_file):
    env = {"TODO_LOG_DIR": str(tmp_path / "logs")}

    def _invoke(*args, input=None):
        return runner.invoke(app, ["--file", str(data_file), *args], input=input, env=env)
    return _invoke


def read_tasks(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_add_persists_task(invoke, data_file):
    result = invoke("add", "Buy milk", "-d", "2%", "-p", "high", "-c", "Home", "--due", "2030-01-01 10:00")

    assert result.exit_code == 0, result.output
    assert "Dodano zadanie" in result.output
    [task] = read_tasks(data_file)
    assert task["id"] == 1
    assert task["title"] == "Buy milk"
    assert task["priority"] == "HIGH"
    assert task["category"] == "Home"
    assert task["dueDate"] is not None


def test_add_blank_title_shows_validation_error(invoke, data_file):
    result = invoke("add", "   ")

    assert result.exit_code == 0
    assert "Błąd walidacji" in result.output
    assert read_tasks(data_file) == []


def test_add_bad_due_date_is_rejected(invoke, data_file):
    result = invoke("add", "A", "--due", "next week")

    assert result.exit_code != 0
    assert read_tasks(data_file) == []


def test_list_and_show(invoke):
    invoke("add", "Buy milk")
    invoke("add", "Call mom", "-c", "Family")

    listed = invoke("list")
    shown = invoke("show", "2")

    assert listed.exit_code == 0
    assert "Buy milk" in listed.output
    assert "Call mom" in listed.output
    assert "Family" in shown.output


def test_list_empty(invoke):
    result = invoke("list")
    assert "Brak zadań" in result.output


def test_done_and_undone(invoke, data_file):
    invoke("add", "A")

    first = invoke("done", "1")
    second = invoke("done", "1")
    assert read_tasks(data_file)[0]["completed"] is True

    back = invoke("undone", "1")

    assert "Sukces" in first.output
    assert "już zakończone" in second.output
    assert "Przywrócono" in back.output
    assert read_tasks(data_file)[0]["completed"] is False


def test_missing_id_reports_not_found(invoke):
    for command in ("show", "done", "undone", "rm", "update"):
        result = invoke(command, "42")
        assert result.exit_code == 0
        assert "Nie znaleziono" in result.output


def test_update_clears_description(invoke, data_file):
    invoke("add", "Title", "-d", "old")

    result = invoke("update", "1", "--title", "", "--desc", "", "-p", "medium")

    assert result.exit_code == 0, result.output
    [task] = read_tasks(data_file)
    assert task["title"] == "Title"
    assert task["description"] == ""
    assert task["priority"] == "MEDIUM"


def test_rm_asks_for_confirmation(invoke, data_file):
    invoke("add", "A")

    cancelled = invoke("rm", "1", input="n\n")
    assert "Anulowano" in cancelled.output
    assert len(read_tasks(data_file)) == 1

    confirmed = invoke("rm", "1", input="y\n")
    assert "Zadanie usunięte" in confirmed.output
    assert read_tasks(data_file) == []


def test_search_and_category(invoke):
    invoke("add", "Buy milk", "-c", "work")
    invoke("add", "Call mom")

    found = invoke("search", "MILK")
    by_category = invoke("category", "Work")
    nothing = invoke("category", "Garden")

    assert "Buy milk" in found.output
    assert "Call mom" not in found.output
    assert "Buy milk" in by_category.output
    assert "Brak zadań w kategorii" in nothing.output


def test_clear_completed_and_all(invoke, data_file):
    for title in ("A", "B", "C"):
        invoke("add", title)
    invoke("done", "2")

    completed = invoke("clear", "completed", "--yes")
    assert "Usunięto 1" in completed.output
    assert [t["id"] for t in read_tasks(data_file)] == [1, 3]

    everything = invoke("clear", "all", input="y\n")
    assert "2" in everything.output
    assert read_tasks(data_file) == []


def test_stats_and_overdue(invoke):
    invoke("add", "late", "--due", "2000-01-01 00:00")
    invoke("add", "fresh")

    stats = invoke("stats")
    overdue = invoke("overdue")

    assert "Statystyki" in stats.output
    assert "late" in overdue.output
    assert "fresh" not in overdue.output


def test_memory_mode_does_not_touch_disk(tmp_path):
    env = {"TODO_LOG_DIR": str(tmp_path / "logs"), "TODO_FILE": str(tmp_path / "never.json")}
    result = runner.invoke(app, ["--memory", "add", "A"], env=env)

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "never.json").exists()


def test_env_file_is_used_when_no_option(tmp_path):
    path = tmp_path / "env.json"
    env = {"TODO_LOG_DIR": str(tmp_path / "logs"), "TODO_FILE": str(path)}
    runner.invoke(app, ["add", "From env"], env=env)

    assert read_tasks(path)[0]["title"] == "From env"


def test_demo_runs(invoke):
    result = invoke("demo")
    assert result.exit_code == 0, result.output
    assert "Demo zakończone" in result.output


def test_parse_due_accepts_legacy_format():
    due = parse_due("2025-06-25 14:30")
    assert due.tzinfo is not None
    assert (due.hour, due.minute) == (14, 30)
    assert parse_due("  ") is None
    with pytest.raises(BadParameter):
        parse_due("25/06/2025")


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TODO_FILE", str(tmp_path / "x.json"))
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.data_file == tmp_path / "x.json"
    assert settings.log_level == logging.DEBUG

    monkeypatch.delenv("TODO_FILE")
    monkeypatch.setenv("TODO_LOG_LEVEL", "nonsense")
    settings = load_settings()
    assert settings.data_file == DEFAULT_DATA_FILE
    assert settings.log_level == logging.WARNING
