from enum import Enum

class Priority(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    def __str__(self):
        return self.value


def normalize_priority(raw: str | None, default: str = Priority.LOW.value) -> str:
    """Zamienia wejście na wielkie litery; brak lub pusty string -> default.
    Nie sprawdza przynależności do HIGH/MEDIUM/LOW (celowo przepuszcza inne wartości)."""
    if raw is None:
        return default
    value = str(raw).strip()
    if not value:
        return default
    return value.upper()
