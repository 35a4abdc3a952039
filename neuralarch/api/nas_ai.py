# neuralarch/api/nas_ai.py

import logging

from fastapi import APIRouter, Request

from neuralarch.middleware.error_handler import ValidationError, limiter, AI_RATE_LIMIT
from neuralarch.nas_engine.architecture_evaluator import run_operation
from neuralarch.schemas.nas import NASRequest, to_payload

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/nas-ai")
@limiter.limit(AI_RATE_LIMIT)
async def nas_ai(request: Request, payload: NASRequest):
    try:
        result = run_operation(
            payload.operation,
            architecture=to_payload(payload.architecture),
            constraints=to_payload(payload.constraints),
            dataset=payload.dataset,
            search_space=to_payload(payload.search_space),
            current_best=to_payload(payload.current_best),
        )
    except ValueError as e:
        raise ValidationError(str(e), {"operation": payload.operation})

    logger.info(f"NAS AI operation '{payload.operation}' completed")
    return result
