# neuralarch/api/stats.py

from fastapi import APIRouter

from neuralarch.cache import cache_result
from neuralarch.cache.cache_keys import STATS_TTL, generate_stats_key
from neuralarch.db.nas_db import NeuralArchSearchDB
from neuralarch.schemas.profile import GlobalStatsOut

router = APIRouter()


@router.get("", response_model=GlobalStatsOut)
@cache_result(ttl=STATS_TTL, key_generator=generate_stats_key)
async def get_global_stats():
    return await NeuralArchSearchDB.get_global_stats()
