"""Task data models"""
from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import TaskValidationError

TASK_STATUSES = ("pending", "in-progress", "completed")
DEFAULT_STATUS = "pending"
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class TaskInput(BaseModel):
    """Create/update request body (whole-record replacement)"""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None

    def normalized(self) -> Dict[str, Any]:
        """Trim and default the fields, raising TaskValidationError on bad input"""
        title = (self.title or "").strip()
        if not title:
            raise TaskValidationError("Title is required", field="title")
        if len(title) > TITLE_MAX_LENGTH:
            raise TaskValidationError(
                f"Title must be at most {TITLE_MAX_LENGTH} characters", field="title"
            )

        description = self.description.strip() if self.description else ""
        if len(description) > DESCRIPTION_MAX_LENGTH:
            raise TaskValidationError(
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
                field="description",
            )

        status = self.status or DEFAULT_STATUS
        if status not in TASK_STATUSES:
            raise TaskValidationError(
                f"Status must be one of: {', '.join(TASK_STATUSES)}", field="status"
            )

        return {"title": title, "description": description, "status": status}


class Task(BaseModel):
    """Stored task record"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    status: str = Field(default=DEFAULT_STATUS, pattern="^(pending|in-progress|completed)$")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class TaskEnvelope(BaseModel):
    """Single-task response"""
    success: bool = True
    message: Optional[str] = None
    task: Task


class TaskListEnvelope(BaseModel):
    """Task list response"""
    success: bool = True
    count: int
    tasks: List[Task]


class HealthEnvelope(BaseModel):
    """Health check response"""
    success: bool = True
    message: str
    timestamp: datetime
    database: str = Field(..., pattern="^(Connected|Disconnected)$")


class ErrorEnvelope(BaseModel):
    """Failure response"""
    success: bool = False
    message: str
    error: Optional[str] = None
