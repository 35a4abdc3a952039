# neuralarch/api/database.py

from datetime import datetime, timezone

from fastapi import APIRouter

from neuralarch.db import async_database
from neuralarch.db.database import redact_url

router = APIRouter()

SETUP_MESSAGE = "Set DATABASE_URL and run `python setup_database.py` to enable persistence."


@router.get("/status")
async def database_status():
    """Configuration and connectivity, for the dashboard's setup banner"""
    configured = async_database.is_configured()
    connected = await async_database.check_database_health() if configured else False

    if not configured:
        message = f"Database is not configured. {SETUP_MESSAGE}"
    elif not connected:
        message = "Database is configured but not reachable."
    else:
        message = "Database is connected."

    return {
        "configured": configured,
        "connected": connected,
        "url": redact_url(async_database.ASYNC_DATABASE_URL) if configured else None,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
