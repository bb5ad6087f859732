from enum import Enum

class TaskColor(Enum):
    RED = "[red]"
    YELLOW = "[yellow]"
    GREEN = "[green]"
    RESET = "[/]"

    def __str__(self):
        return self.value


PRIORITY_COLORS = {
    "HIGH": TaskColor.RED,
    "MEDIUM": TaskColor.YELLOW,
    "LOW": TaskColor.GREEN,
}
