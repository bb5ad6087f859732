

### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Store (adapter JSON):
#     * błędy I/O (OSError) mapuje na StorageError, zły JSON tylko loguje
#     * StorageError NIE wychodzi poza publiczne metody store'a - jest logowany
#
# - Rejestr (TaskRegistry):
#     * waliduje tytuł przy tworzeniu i rzuca TaskValidationError
#     * brak zadania o danym ID to NIE wyjątek - zwracamy False / None
#
# - UI (CLI):
#     * łapie DomainError i wyświetla przyjazny komunikat
#     * wszystko inne traktuje jako błąd techniczny (leci dalej ze stacktrace)


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Umożliwia odróżnienie błędów domeny (logika aplikacji) od błędów technicznych.
    Nie powinna być rzucana bezpośrednio - używaj klas pochodnych.
    """

class TaskValidationError(DomainError):
    """Rzucany, gdy dane wejściowe nie spełniają reguł biznesowych dla zadania.
    Przykłady:
    - tytuł jest pusty lub składa się wyłącznie z białych znaków.
    Zawiera czytelny komunikat (`message`) oraz nazwę pola (`field`),
    którego dotyczy błąd, co ułatwia prezentację w UI.
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd walidacji pola '{self.field}': {self.message}"


class StorageError(DomainError):
    """Problem z odczytem/zapisem pliku z zadaniami.
    Rzucany tylko przez prywatne helpery `JsonTaskStore`; publiczne metody
    store'a łapią go i logują, więc nie dociera do rejestru.
    """
    def __init__(self, path, message: str):
        self.path = path
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"{self.path}: {self.message}"
