"""Database service - the task store consumed by the API handlers"""
import logging
import sqlite3
from typing import Optional, List, Dict, Any

from ..db import Database, get_db
from ..exceptions import StorageFault

logger = logging.getLogger(__name__)


class TaskStore:
    """Service to interact with the Taskboard SQLite database"""

    def __init__(self, db: Optional[Database] = None):
        self.db = db or get_db()
        logger.info(f"TaskStore initialized with SQLite database at {self.db.db_path}")

    async def is_connected(self) -> bool:
        """Check if database is available"""
        connected = self.db.ping()
        if not connected:
            logger.error(f"Database not available: {self.db.db_path}")
        return connected

    async def insert(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new task record"""
        try:
            task = self.db.insert_task(fields)
        except sqlite3.Error as e:
            raise StorageFault("Failed to create task", str(e)) from e
        logger.info(f"Created task {task['id']}: {task['title']}")
        return task

    async def find_all(self) -> List[Dict[str, Any]]:
        """List all tasks, newest first"""
        try:
            return self.db.list_tasks()
        except sqlite3.Error as e:
            raise StorageFault("Failed to retrieve tasks", str(e)) from e

    async def find_by_id(self, task_id: str) -> Optional[Dict[str, Any]]:
        """Get task by id"""
        try:
            return self.db.get_task(task_id)
        except sqlite3.Error as e:
            raise StorageFault("Failed to retrieve task", str(e)) from e

    async def update_by_id(self, task_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace the mutable fields of a task"""
        try:
            task = self.db.update_task(task_id, fields)
        except sqlite3.Error as e:
            raise StorageFault("Failed to update task", str(e)) from e
        if task:
            logger.info(f"Updated task {task_id}")
        return task

    async def delete_by_id(self, task_id: str) -> Optional[Dict[str, Any]]:
        """Delete a task record"""
        try:
            task = self.db.delete_task(task_id)
        except sqlite3.Error as e:
            raise StorageFault("Failed to delete task", str(e)) from e
        if task:
            logger.info(f"Deleted task {task_id}")
        return task


_store: Optional[TaskStore] = None


def get_task_store() -> TaskStore:
    """FastAPI dependency returning the process-wide task store"""
    global _store
    if _store is None:
        _store = TaskStore()
    return _store
