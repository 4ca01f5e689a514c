"""Health check endpoint"""
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from ..models.task import HealthEnvelope
from ..services.db_service import TaskStore, get_task_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthEnvelope)
async def health_check(store: TaskStore = Depends(get_task_store)):
    """Liveness plus current database connectivity; always 200"""
    connected = await store.is_connected()
    return HealthEnvelope(
        message="Server is running!",
        timestamp=datetime.now(timezone.utc),
        database="Connected" if connected else "Disconnected",
    )
