# neuralarch/main.py

import asyncio
from datetime import datetime, timezone
import os
from fastapi import FastAPI, HTTPException, status
from fastapi.concurrency import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .db import async_database
from .db.async_database import check_database_health, create_tables, dispose_async_engine
from .cache import cache_client, initialize_cache, close_cache, check_redis_health
from .api import (
    discovery,
    chat,
    assistant,
    nas_ai,
    optimization,
    external_ai,
    experiments,
    progress,
    architectures,
    conversations,
    stats,
    profiles,
    database,
)
from .middleware.error_handler import register_error_handlers, request_id_middleware, request_logging_middleware
from .utils.logger import get_logger

get_logger()
logger = logging.getLogger(__name__)

API_VERSION = discovery.API_VERSION


async def _start_cache(max_retries: int = 3, retry_delay: int = 1):
    if not cache_client.enabled:
        logger.info("Cache disabled by CACHE_ENABLED - running in no-cache mode.")
        return

    for attempt in range(max_retries):
        await initialize_cache()
        if await check_redis_health() == "healthy":
            logger.info("✅ Redis cache initialized successfully.")
            return
        if attempt < max_retries - 1:
            logger.warning(f"⚠️ Redis cache health check failed on attempt {attempt + 1}")
            await asyncio.sleep(retry_delay)
            retry_delay *= 2

    logger.warning(f"⚠️ Cache unavailable after {max_retries} attempts - running in no-cache mode.")


async def _start_database(max_retries: int = 5, retry_delay: int = 2):
    if not async_database.is_configured():
        logger.warning("⚠️ DATABASE_URL is not set - persistence endpoints will answer 503.")
        return

    for attempt in range(max_retries):
        try:
            await create_tables()
            logger.info("✅ Database tables ensured.")

            if await check_database_health():
                logger.info("✅ Database connection verified!")
                return
            raise ConnectionError("database health check failed")

        except Exception as e:
            if attempt < max_retries - 1:
                logger.warning(f"⚠️ Database connection attempt {attempt + 1} failed: {e}")
                logger.info(f"🔄 Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
                retry_delay *= 2  # Exponential backoff
            else:
                logger.error(f"❌ Database initialization failed after {max_retries} attempts: {e}")
                logger.warning("⚠️ Starting app without database - persistence requests will fail")


# --- Application Lifecycle Management with asynccontextmanager ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown events."""
    logger.info("🚀 Starting NeuralArch Search API...")
    await _start_cache()
    await _start_database()
    logger.info("🎯 NeuralArch Search API is ready to serve requests!")

    yield

    logger.info("🛑 Shutting down NeuralArch Search API...")
    try:
        await close_cache()
        logger.info("✅ Cache connections closed.")
        await dispose_async_engine()
        logger.info("✅ Database connections closed.")
    except Exception as e:
        logger.error(f"⚠️ Error during shutdown: {e}")
    logger.info("👋 NeuralArch Search API shutdown complete.")


app = FastAPI(title="NeuralArch Search API", version=API_VERSION, lifespan=lifespan)

# --- CORS Middleware ---
cors_origins = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    # browsers reject credentials with a wildcard origin
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# --- Request Logging Middleware ---
app.middleware("http")(request_logging_middleware)

# --- Request ID Middleware ---
# registered last so it runs outermost and the logging middleware sees the id
app.middleware("http")(request_id_middleware)

# --- Routers ---
app.include_router(discovery.router, prefix="/api", tags=["Discovery"])
app.include_router(chat.router, prefix="/api", tags=["Assistant"])
app.include_router(assistant.router, prefix="/api", tags=["Assistant"])
app.include_router(nas_ai.router, prefix="/api", tags=["NAS AI"])
app.include_router(optimization.router, prefix="/api", tags=["Optimization"])
app.include_router(external_ai.router, prefix="/api", tags=["External AI"])
app.include_router(experiments.router, prefix="/api/experiments", tags=["Experiments"])
app.include_router(progress.router, prefix="/api/progress", tags=["Progress"])
app.include_router(architectures.router, prefix="/api/architectures", tags=["Architectures"])
app.include_router(conversations.router, prefix="/api/conversations", tags=["Conversations"])
app.include_router(stats.router, prefix="/api/stats", tags=["Stats"])
app.include_router(profiles.router, prefix="/api/profiles", tags=["Profiles"])
app.include_router(database.router, prefix="/api/database", tags=["Database"])

# --- Register Error Handlers ---
register_error_handlers(app)


# --- Health Check Endpoint ---
@app.get("/health")
async def health_check():
    """
    Health check endpoint that verifies database and cache connectivity.
    An unset DATABASE_URL or a disabled cache is reported but not unhealthy.
    """
    if async_database.is_configured():
        database_state = "healthy" if await check_database_health() else "unhealthy"
    else:
        database_state = "not_configured"

    cache_state = await check_redis_health()

    healthy = database_state != "unhealthy" and cache_state != "unhealthy"
    status_code = status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "database": database_state,
            "cache": cache_state,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": API_VERSION
        }
    )


# --- Performance Monitoring Endpoints ---
@app.get("/monitoring/errors")
async def get_error_monitoring_stats(
    time_window_minutes: int = 60,
    time_window_hours: int = 24
):
    """
    Get error monitoring statistics for the specified time windows.
    """
    from neuralarch.utils.error_monitor import get_error_stats, get_redis_error_stats

    try:
        in_memory_stats = get_error_stats(time_window_minutes)
    except Exception as e:
        logger.error(f"Error getting monitoring stats: {e}")
        raise HTTPException(status_code=500, detail="Failed to get monitoring stats")

    try:
        redis_stats = await get_redis_error_stats(time_window_hours)
    except Exception as e:
        logger.warning(f"Failed to get Redis error stats: {e}")
        redis_stats = {"error": str(e)}

    return {
        "in_memory": in_memory_stats,
        "redis": redis_stats,
        "time_window_minutes": time_window_minutes,
        "time_window_hours": time_window_hours
    }


@app.get("/monitoring/performance")
async def get_performance_metrics():
    """
    Timing statistics for every data access operation called so far.
    """
    from neuralarch.utils.performance_monitor import get_performance_stats
    return {
        "operations": get_performance_stats(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.get("/monitoring/cache")
async def get_cache_stats():
    """
    Get cache statistics and performance metrics.
    """
    from neuralarch.utils.performance_monitor import get_cache_performance_stats

    if not cache_client.available:
        return {"cache_available": False, "decorator_stats": get_cache_performance_stats()}

    info = await cache_client.info()
    hits = info.get('keyspace_hits', 0)
    misses = info.get('keyspace_misses', 0)

    return {
        "cache_available": True,
        "decorator_stats": get_cache_performance_stats(),
        "stats": {
            "used_memory": info.get('used_memory_human', 'N/A'),
            "connected_clients": info.get('connected_clients', 0),
            "total_commands_processed": info.get('total_commands_processed', 0),
            "keyspace_hits": hits,
            "keyspace_misses": misses,
            "hit_rate": f"{(hits / (hits + misses) * 100) if (hits + misses) else 0:.2f}%"
        }
    }


# --- Root Endpoint ---
@app.get("/")
@app.head("/")
async def read_root():
    return {
        "message": "NeuralArch Search backend is running",
        "version": API_VERSION,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
