# neuralarch/api/external_ai.py

import logging

from fastapi import APIRouter, Request

from neuralarch.middleware.error_handler import ValidationError, limiter, AI_RATE_LIMIT
from neuralarch.nas_engine.external_ai import call_external_ai
from neuralarch.schemas.nas import ExternalAIRequest, to_payload

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/external-ai")
@limiter.limit(AI_RATE_LIMIT)
async def external_ai(request: Request, payload: ExternalAIRequest):
    try:
        response = call_external_ai(payload.service, payload.task, to_payload(payload.payload), payload.parameters)
    except ValueError as e:
        raise ValidationError(str(e), {"service": payload.service, "task": payload.task})

    logger.info(f"External AI call {payload.service}/{payload.task} "
                f"({response['metadata']['tokens_used']} tokens)")
    return response
