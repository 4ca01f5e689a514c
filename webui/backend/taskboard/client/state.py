"""Board view-model owned by the controller"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set


@dataclass
class Banner:
    """Transient success/error message shown above the form"""

    id: int
    text: str
    kind: str = "error"  # success, error
    fading: bool = False


@dataclass
class TaskForm:
    """Values of the create form"""

    title: str = ""
    description: str = ""
    status: str = "pending"

    def reset(self):
        self.title = ""
        self.description = ""
        self.status = "pending"


@dataclass
class BoardState:
    """Last known server state plus UI flags

    Never authoritative: task records are always replaced with what the
    server returns, never merged.
    """

    tasks: List[Dict[str, Any]] = field(default_factory=list)
    connected: Optional[bool] = None
    load_error: Optional[str] = None
    editing_id: Optional[str] = None
    removing: Set[str] = field(default_factory=set)
    banners: List[Banner] = field(default_factory=list)
    creating: bool = False
    form: TaskForm = field(default_factory=TaskForm)

    def find_index(self, task_id: str) -> int:
        for index, task in enumerate(self.tasks):
            if task.get("id") == task_id:
                return index
        return -1

    def replace_task(self, task: Dict[str, Any]) -> bool:
        index = self.find_index(task["id"])
        if index == -1:
            return False
        self.tasks[index] = task
        return True

    def remove_task(self, task_id: str):
        self.tasks = [task for task in self.tasks if task.get("id") != task_id]
