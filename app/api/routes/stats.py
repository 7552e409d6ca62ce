from fastapi import APIRouter, Depends

from app.api.routes.dependencies import get_essay_repository
from app.services.essay_repository import EssayRepository

router = APIRouter(prefix="/api", tags=["Statistics"])


@router.get("/stats")
async def get_statistics(repository: EssayRepository = Depends(get_essay_repository)):
    """Essay totals, average overall score and counts per level"""
    stats = await repository.stats()
    return {"success": True, "data": stats.to_json()}
