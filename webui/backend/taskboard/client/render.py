"""Pure rendering of the board view-model to HTML markup.

Templates are loaded with autoescaping on, so every task field is escaped
when it is interpolated. Nothing here mutates the state it is given.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader

from .state import BoardState
from ..models.task import TASK_STATUSES

TEMPLATES_DIR = Path(__file__).parent / "templates"

EMPTY_PLACEHOLDER = "No tasks yet. Create your first task above!"


def format_status(status: str) -> str:
    """'in-progress' -> 'In Progress'"""
    return " ".join(word[:1].upper() + word[1:] for word in status.split("-"))


def format_date(value: Any) -> str:
    """Render an ISO timestamp in local time, minute precision"""
    if not value:
        return ""
    try:
        moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return str(value)
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.strftime("%Y-%m-%d %H:%M")


def _build_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["format_status"] = format_status
    env.filters["format_date"] = format_date
    return env


_env = _build_env()


@dataclass(frozen=True)
class TaskStats:
    total: int
    pending: int
    in_progress: int
    completed: int

    @property
    def count_text(self) -> str:
        return f"{self.total} task{'' if self.total == 1 else 's'}"

    @property
    def breakdown_text(self) -> str:
        return (
            f"{self.pending} pending, {self.in_progress} in progress, "
            f"{self.completed} completed"
        )

    @property
    def summary(self) -> str:
        return f"{self.count_text}, {self.breakdown_text}"


@dataclass(frozen=True)
class RenderedBoard:
    """Everything the page shows, derived from one BoardState"""

    list_html: str
    stats: TaskStats
    connected: bool
    connection_text: str
    banners_html: str
    create_disabled: bool
    create_label: str

    @property
    def task_count(self) -> str:
        return self.stats.count_text

    @property
    def task_stats(self) -> str:
        return self.stats.breakdown_text

    @property
    def summary(self) -> str:
        return self.stats.summary


def compute_stats(tasks: List[Dict[str, Any]]) -> TaskStats:
    counts = {status: 0 for status in TASK_STATUSES}
    for task in tasks:
        status = task.get("status")
        if status in counts:
            counts[status] += 1
    return TaskStats(
        total=len(tasks),
        pending=counts["pending"],
        in_progress=counts["in-progress"],
        completed=counts["completed"],
    )


def render_task_list(state: BoardState) -> str:
    if state.load_error is not None:
        return _env.get_template("load_error.html").render(message=state.load_error)
    if not state.tasks:
        return _env.get_template("empty.html").render(placeholder=EMPTY_PLACEHOLDER)
    return _env.get_template("task_list.html").render(
        tasks=state.tasks,
        editing_id=state.editing_id,
        removing=state.removing,
        statuses=TASK_STATUSES,
    )


def render_banners(state: BoardState) -> str:
    return _env.get_template("banners.html").render(banners=state.banners)


def render_board(state: BoardState) -> RenderedBoard:
    """Fully redraw the board from the view-model"""
    if state.connected is None:
        connection_text = "Connecting..."
    elif state.connected:
        connection_text = "Connected to database"
    else:
        connection_text = "Connection Error"

    return RenderedBoard(
        list_html=render_task_list(state),
        stats=compute_stats(state.tasks),
        connected=bool(state.connected),
        connection_text=connection_text,
        banners_html=render_banners(state),
        create_disabled=state.creating,
        create_label="" if state.creating else "Create Task",
    )


def render_page(view: RenderedBoard, title: str = "Taskboard") -> str:
    """Wrap an already rendered board in a standalone HTML page"""
    return _env.get_template("page.html").render(view=view, title=title)
