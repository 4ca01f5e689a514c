"""Task CRUD API endpoints"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ..exceptions import TaskNotFound
from ..models.task import ErrorEnvelope, Task, TaskEnvelope, TaskInput, TaskListEnvelope
from ..services.db_service import TaskStore, get_task_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    responses={
        400: {"model": ErrorEnvelope},
        404: {"model": ErrorEnvelope},
        500: {"model": ErrorEnvelope},
    },
)


@router.post("", response_model=TaskEnvelope, status_code=201)
async def create_task(payload: Optional[TaskInput] = None, store: TaskStore = Depends(get_task_store)):
    """Create a new task"""
    fields = (payload or TaskInput()).normalized()
    task = await store.insert(fields)
    return TaskEnvelope(message="Task created successfully", task=Task(**task))


@router.get("", response_model=TaskListEnvelope)
async def list_tasks(store: TaskStore = Depends(get_task_store)):
    """List all tasks, newest first"""
    tasks = await store.find_all()
    return TaskListEnvelope(count=len(tasks), tasks=[Task(**task) for task in tasks])


@router.get("/{task_id}", response_model=TaskEnvelope, response_model_exclude_none=True)
async def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Get task by ID"""
    task = await store.find_by_id(task_id)
    if not task:
        raise TaskNotFound(task_id)
    return TaskEnvelope(task=Task(**task))


@router.put("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: str, payload: Optional[TaskInput] = None, store: TaskStore = Depends(get_task_store)
):
    """
    Replace a task's title, description and status.

    Omitted optional fields are reset to their defaults, not preserved.
    """
    fields = (payload or TaskInput()).normalized()
    task = await store.update_by_id(task_id, fields)
    if not task:
        raise TaskNotFound(task_id)
    return TaskEnvelope(message="Task updated successfully", task=Task(**task))


@router.delete("/{task_id}", response_model=TaskEnvelope)
async def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Delete a task permanently"""
    task = await store.delete_by_id(task_id)
    if not task:
        raise TaskNotFound(task_id)
    return TaskEnvelope(message="Task deleted successfully", task=Task(**task))
