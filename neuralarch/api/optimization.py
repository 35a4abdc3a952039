# neuralarch/api/optimization.py

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request

from neuralarch.middleware.error_handler import ValidationError, limiter, AI_RATE_LIMIT
from neuralarch.nas_engine import search_simulator
from neuralarch.schemas.nas import OptimizationStartRequest, OptimizationUpdateRequest, to_payload

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/optimization")
@limiter.limit(AI_RATE_LIMIT)
async def start_optimization(request: Request, payload: OptimizationStartRequest):
    try:
        session = search_simulator.start_search(
            payload.algorithm,
            to_payload(payload.search_space),
            payload.objectives,
            to_payload(payload.budget),
            constraints=to_payload(payload.constraints),
            current_best=to_payload(payload.current_best),
        )
    except ValueError as e:
        raise ValidationError(str(e))

    logger.info(f"Started optimization session {session['searchId']}")
    return session


@router.get("/optimization")
async def optimization_status(search_id: Optional[str] = Query(None, alias="searchId")):
    try:
        return search_simulator.search_status(search_id)
    except ValueError as e:
        raise ValidationError(str(e))


@router.put("/optimization")
async def update_optimization(payload: OptimizationUpdateRequest,
                              search_id: Optional[str] = Query(None, alias="searchId")):
    try:
        session = search_simulator.update_search(search_id, payload.action, payload.parameters)
    except ValueError as e:
        raise ValidationError(str(e), {"action": payload.action})

    logger.info(f"Applied '{payload.action}' to optimization session {search_id}")
    return session


@router.delete("/optimization")
async def stop_optimization(search_id: Optional[str] = Query(None, alias="searchId")):
    try:
        session = search_simulator.stop_search(search_id)
    except ValueError as e:
        raise ValidationError(str(e))

    logger.info(f"Stopped optimization session {search_id}")
    return session
