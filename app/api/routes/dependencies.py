import random

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.essay_repository import EssayRepository
from app.services.evaluation_service import EssayEvaluationService
from app.services.heuristic_scorer import RandomSource
from config.settings import settings


def get_random_source() -> RandomSource:
    """A fresh generator per request, seeded when SCORING_SEED is set"""
    return random.Random(settings.scoring_seed)


def get_essay_repository(db: AsyncSession = Depends(get_db)) -> EssayRepository:
    return EssayRepository(db)


def get_evaluation_service(
    repository: EssayRepository = Depends(get_essay_repository),
    rng: RandomSource = Depends(get_random_source),
) -> EssayEvaluationService:
    return EssayEvaluationService(repository, rng=rng)
