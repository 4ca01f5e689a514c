"""HTTP client for the Taskboard API"""
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

API_BASE_PATH = "/api/tasks"
HEALTH_PATH = "/api/health"


class ApiError(Exception):
    """Non-2xx response or transport failure"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class TaskApiClient:
    """Thin JSON wrapper around httpx.AsyncClient

    Every call reports its outcome to ``on_connectivity`` so the board can
    flip its connected/disconnected indicator.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        on_connectivity: Optional[Callable[[bool], None]] = None,
    ):
        self.http = http
        self.on_connectivity = on_connectivity

    def _report(self, connected: bool):
        if self.on_connectivity:
            self.on_connectivity(connected)

    async def _call(
        self,
        method: str,
        url: str,
        payload: Optional[Dict[str, Any]] = None,
        expect: Optional[Tuple[str, type]] = None,
    ) -> Dict[str, Any]:
        """Send one request; ``expect`` names the envelope field a success must carry"""
        try:
            response = await self.http.request(
                method,
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            try:
                data = response.json()
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {}

            if not response.is_success:
                raise ApiError(
                    data.get("message") or f"HTTP error! status: {response.status_code}",
                    status_code=response.status_code,
                )
            if expect and not isinstance(data.get(expect[0]), expect[1]):
                raise ApiError(
                    f"Unexpected response from server (status: {response.status_code})",
                    status_code=response.status_code,
                )
        except httpx.HTTPError as e:
            self._report(False)
            raise ApiError(str(e) or e.__class__.__name__) from e
        except ApiError:
            self._report(False)
            raise

        self._report(True)
        return data

    async def list_tasks(self) -> List[Dict[str, Any]]:
        data = await self._call("GET", API_BASE_PATH, expect=("tasks", list))
        return data["tasks"]

    async def get_task(self, task_id: str) -> Dict[str, Any]:
        data = await self._call("GET", f"{API_BASE_PATH}/{task_id}", expect=("task", dict))
        return data["task"]

    async def create_task(self, title: str, description: str = "", status: str = "pending") -> Dict[str, Any]:
        data = await self._call(
            "POST",
            API_BASE_PATH,
            {"title": title, "description": description, "status": status},
            expect=("task", dict),
        )
        return data["task"]

    async def update_task(self, task_id: str, title: str, description: str = "", status: str = "pending") -> Dict[str, Any]:
        data = await self._call(
            "PUT",
            f"{API_BASE_PATH}/{task_id}",
            {"title": title, "description": description, "status": status},
            expect=("task", dict),
        )
        return data["task"]

    async def delete_task(self, task_id: str) -> Dict[str, Any]:
        data = await self._call("DELETE", f"{API_BASE_PATH}/{task_id}", expect=("task", dict))
        return data["task"]

    async def health(self) -> Dict[str, Any]:
        return await self._call("GET", HEALTH_PATH)
