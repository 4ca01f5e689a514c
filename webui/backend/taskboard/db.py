#!/usr/bin/env python3
"""
SQLite database module for Taskboard.
Stores task records and exposes document-style CRUD keyed by task id.
"""

import sqlite3
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from contextlib import contextmanager
from uuid import uuid4

from . import config


def utcnow() -> str:
    """Current UTC time as a sortable ISO-8601 string"""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class Database:
    """SQLite database manager for tasks"""

    def __init__(self, db_path: str = "./data/taskboard.db"):
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_db()

    def _ensure_db_dir(self):
        """Ensure database directory exists"""
        db_dir = Path(self.db_path).parent
        db_dir.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _get_conn(self):
        """Get database connection with context manager"""
        conn = sqlite3.connect(self.db_path, timeout=30.0)
        conn.row_factory = sqlite3.Row  # Enable dict-like access
        try:
            yield conn
            conn.commit()
        except Exception as e:
            conn.rollback()
            raise e
        finally:
            conn.close()

    def _init_db(self):
        """Initialize database schema"""
        with self._get_conn() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT UNIQUE NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'pending'
                        CHECK (status IN ('pending', 'in-progress', 'completed')),
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)
            """)

            conn.commit()

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
        record = dict(row)
        record.pop("seq", None)
        return record

    # Task CRUD operations

    def insert_task(self, task: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new task; id and both timestamps are assigned here"""
        now = utcnow()
        record = {
            "id": uuid4().hex,
            "title": task["title"],
            "description": task.get("description", ""),
            "status": task.get("status", "pending"),
            "created_at": now,
            "updated_at": now,
        }
        with self._get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                INSERT INTO tasks (id, title, description, status, created_at, updated_at)
                VALUES (:id, :title, :description, :status, :created_at, :updated_at)
            """, record)
        return record

    def list_tasks(self) -> List[Dict[str, Any]]:
        """List all tasks, newest first"""
        with self._get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM tasks ORDER BY created_at DESC, seq DESC")
            return [self._row_to_dict(row) for row in cursor.fetchall()]

    def get_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        """Get task by id"""
        with self._get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            row = cursor.fetchone()
            return self._row_to_dict(row) if row else None

    def update_task(self, task_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Overwrite the mutable fields of a task and refresh updated_at"""
        with self._get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT created_at FROM tasks WHERE id = ?", (task_id,))
            row = cursor.fetchone()
            if row is None:
                return None

            set_clauses = []
            values = []
            for key, value in updates.items():
                if key not in ('id', 'seq', 'created_at', 'updated_at'):  # Immutable fields
                    set_clauses.append(f"{key} = ?")
                    values.append(value)

            # Never let updated_at fall behind created_at
            set_clauses.append("updated_at = ?")
            values.append(max(utcnow(), row["created_at"]))

            values.append(task_id)  # WHERE condition

            query = f"UPDATE tasks SET {', '.join(set_clauses)} WHERE id = ?"
            cursor.execute(query, values)
            cursor.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            return self._row_to_dict(cursor.fetchone())

    def delete_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        """Delete task, returning the removed record"""
        with self._get_conn() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            row = cursor.fetchone()
            if row is None:
                return None
            cursor.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            return self._row_to_dict(row)

    def ping(self) -> bool:
        """Check that the database file can be opened and queried"""
        try:
            with self._get_conn() as conn:
                conn.execute("SELECT 1 FROM tasks LIMIT 1")
            return True
        except sqlite3.Error:
            return False


# Global database instance
_db_instance: Optional[Database] = None


def get_db() -> Database:
    """Get or create global database instance"""
    global _db_instance
    if _db_instance is None:
        _db_instance = Database(config.db_path())
    return _db_instance
