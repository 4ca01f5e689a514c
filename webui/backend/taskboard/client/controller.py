"""Board controller: user actions -> API calls -> view-model -> re-render"""
import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set

import httpx

from .api import ApiError, TaskApiClient
from .render import RenderedBoard, render_board
from .state import Banner, BoardState

logger = logging.getLogger(__name__)


@dataclass
class ClientSettings:
    """Timings of the board, in seconds"""

    banner_visible: float = 5.0
    banner_fade: float = 0.5
    removal_delay: float = 0.3
    health_interval: float = 30.0


class BoardController:
    """Owns the BoardState and is its only writer.

    Each handler awaits the server, applies the response to the state and
    redraws the whole board. Failed calls leave the task list untouched and
    surface the error as a banner.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        settings: Optional[ClientSettings] = None,
        confirm: Optional[Callable[[str], bool]] = None,
    ):
        self.settings = settings or ClientSettings()
        self.state = BoardState()
        self.api = TaskApiClient(http, on_connectivity=self._set_connected)
        self.confirm = confirm or (lambda message: True)
        self.view: RenderedBoard = render_board(self.state)
        self._banner_ids = itertools.count(1)
        self._timers: Set[asyncio.Task] = set()
        self._health_task: Optional[asyncio.Task] = None

    def render(self) -> RenderedBoard:
        self.view = render_board(self.state)
        return self.view

    def _set_connected(self, connected: bool):
        self.state.connected = connected
        self.render()

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._timers.add(task)
        task.add_done_callback(self._timers.discard)
        return task

    # Banners

    def show_message(self, text: str, kind: str = "error") -> Banner:
        banner = Banner(id=next(self._banner_ids), text=text, kind=kind)
        self.state.banners.append(banner)
        self.render()
        self._spawn(self._dismiss(banner))
        return banner

    async def _dismiss(self, banner: Banner):
        await asyncio.sleep(self.settings.banner_visible)
        banner.fading = True
        self.render()
        await asyncio.sleep(self.settings.banner_fade)
        if banner in self.state.banners:
            self.state.banners.remove(banner)
        self.render()

    # Read

    async def check_health(self) -> bool:
        try:
            await self.api.health()
            return True
        except ApiError as e:
            logger.error(f"Health check failed: {e}")
            return False

    async def fetch_tasks(self):
        try:
            self.state.tasks = await self.api.list_tasks()
            self.state.load_error = None
        except ApiError as e:
            self.state.load_error = str(e)
        self.render()

    async def start(self):
        """Initial load: health check, the task list, then the periodic health check"""
        await self.check_health()
        await self.fetch_tasks()
        self.start_health_polling()

    # Create

    async def create(self, title: str, description: str = "", status: str = "pending") -> Optional[Dict[str, Any]]:
        form = self.state.form
        form.title, form.description, form.status = title, description, status

        title = title.strip()
        if not title:
            self.show_message("Title is required!", "error")
            return None
        if self.state.creating:
            return None

        self.state.creating = True
        self.render()
        try:
            task = await self.api.create_task(title, description.strip(), status)
        except ApiError as e:
            self.show_message(f"Failed to create task: {e}", "error")
            return None
        finally:
            self.state.creating = False
            self.render()

        self.state.tasks.insert(0, task)
        self.state.load_error = None
        form.reset()
        self.render()
        self.show_message("Task created successfully!", "success")
        return task

    # Edit

    def edit(self, task_id: str):
        """Open the edit panel for one task, closing any other"""
        self.state.editing_id = task_id
        self.render()

    def cancel_edit(self, task_id: str):
        if self.state.editing_id == task_id:
            self.state.editing_id = None
        self.render()

    async def save_edit(self, task_id: str, title: str, description: str = "", status: str = "pending") -> Optional[Dict[str, Any]]:
        title = title.strip()
        if not title:
            self.show_message("Title is required!", "error")
            return None

        try:
            task = await self.api.update_task(task_id, title, description.strip(), status)
        except ApiError as e:
            self.show_message(f"Failed to update task: {e}", "error")
            return None

        self.state.replace_task(task)
        if self.state.editing_id == task_id:
            self.state.editing_id = None
        self.state.load_error = None
        self.render()
        self.show_message("Task updated successfully!", "success")
        return task

    # Delete

    async def delete(self, task_id: str) -> bool:
        if not self.confirm("Are you sure you want to delete this task?"):
            return False

        self.state.removing.add(task_id)
        self.render()
        try:
            await self.api.delete_task(task_id)
        except ApiError as e:
            self.state.removing.discard(task_id)
            self.render()
            self.show_message(f"Failed to delete task: {e}", "error")
            return False

        # Let the removal transition finish before the item disappears
        await asyncio.sleep(self.settings.removal_delay)
        self.state.removing.discard(task_id)
        self.state.remove_task(task_id)
        if self.state.editing_id == task_id:
            self.state.editing_id = None
        self.render()
        self.show_message("Task deleted successfully!", "success")
        return True

    # Periodic health check

    async def _poll_health(self):
        while True:
            await asyncio.sleep(self.settings.health_interval)
            await self.check_health()

    def start_health_polling(self):
        if self._health_task is None or self._health_task.done():
            self._health_task = asyncio.create_task(self._poll_health())

    async def close(self):
        """Cancel the health poll and any pending banner timers"""
        pending = list(self._timers)
        if self._health_task is not None:
            pending.append(self._health_task)
            self._health_task = None
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
