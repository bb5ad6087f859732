from typing import Protocol

class IdProvider(Protocol):
    """Port odpowiedzialny za nadawanie kolejnych identyfikatorów zadań."""
    def new_id(self) -> int:
        pass

    def observe(self, task_id: int) -> None:
        """Informuje providera o istniejącym ID (np. wczytanym z pliku),
        żeby kolejne `new_id()` nie dało kolizji."""
        pass
