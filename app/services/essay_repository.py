import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.models import Essay, EssayLevel, EssayStatus
from app.models.schemas import EssayStats, LevelCount
from app.services.text_analysis import count_words, validate_essay_text
from app.utils.exceptions import NotFoundError, PersistenceError, ValidationError
from config.settings import settings

logger = logging.getLogger(__name__)

# Client-facing sort keys mapped to columns
SORTABLE_FIELDS = {
    "createdAt": Essay.created_at,
    "updatedAt": Essay.updated_at,
    "wordCount": Essay.word_count,
    "charCount": Essay.char_count,
    "overallScore": Essay.overall_score,
    "level": Essay.level,
    "status": Essay.status,
    "university": Essay.university,
}

SORT_ORDERS = ("asc", "desc")


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


class EssayRepository:
    """
    Storage and query access for essay submissions.

    Every write commits on its own and rolls back on failure, so a failed
    call leaves nothing behind. Database errors surface as PersistenceError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, essay: Essay) -> Essay:
        try:
            self.db.add(essay)
            await self.db.commit()
            await self.db.refresh(essay)
        except SQLAlchemyError as e:
            await self._rollback("create essay", e)
        return essay

    async def get(self, essay_id: str) -> Essay:
        try:
            result = await self.db.execute(select(Essay).where(Essay.id == essay_id))
            essay = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._rollback("fetch essay", e)

        if essay is None:
            raise NotFoundError()
        return essay

    async def list(
        self,
        page: int = 1,
        limit: int = settings.default_page_size,
        status: Optional[EssayStatus] = None,
        level: Optional[EssayLevel] = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> Tuple[List[Essay], int]:
        """Return one page of essays and the total matching count"""
        if page < 1:
            raise ValidationError("page must be at least 1")
        if limit < 1 or limit > settings.max_page_size:
            raise ValidationError(f"limit must be between 1 and {settings.max_page_size}")
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"sortBy must be one of: {', '.join(SORTABLE_FIELDS)}"
            )
        if sort_order not in SORT_ORDERS:
            raise ValidationError("sortOrder must be 'asc' or 'desc'")

        filters = []
        if status is not None:
            filters.append(Essay.status == status.value)
        if level is not None:
            filters.append(Essay.level == level.value)

        column = SORTABLE_FIELDS[sort_by]
        order = column.desc() if sort_order == "desc" else column.asc()

        query = (
            select(Essay)
            .where(*filters)
            .order_by(order, Essay.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        count_query = select(func.count(Essay.id)).where(*filters)

        try:
            essays = (await self.db.execute(query)).scalars().all()
            total = (await self.db.execute(count_query)).scalar_one()
        except SQLAlchemyError as e:
            await self._rollback("list essays", e)

        return list(essays), total

    async def update(self, essay_id: str, changes: Dict[str, Any]) -> Essay:
        """
        Apply a partial update.

        A new text re-derives word and character counts; the stored
        assessment is never recomputed here.
        """
        essay = await self.get(essay_id)

        # Validate everything before touching the row
        text = changes.get("text")
        if text is not None:
            validate_essay_text(text, settings.min_essay_length)

        status = EssayStatus(changes["status"]) if "status" in changes else None
        if status == EssayStatus.EVALUATED and essay.assessment is None:
            raise ValidationError("Essay cannot be marked evaluated without an assessment")
        if status == EssayStatus.DRAFT and essay.assessment is not None:
            raise ValidationError("An evaluated essay cannot be moved back to draft")

        if text is not None:
            essay.text = text
            essay.word_count = count_words(text)
            essay.char_count = len(text)
        if "university" in changes:
            essay.university = changes["university"]
        if "level" in changes:
            essay.level = EssayLevel(changes["level"]).value
        if status is not None:
            essay.status = status.value

        try:
            await self.db.commit()
            await self.db.refresh(essay)
        except SQLAlchemyError as e:
            await self._rollback("update essay", e)
        return essay

    async def delete(self, essay_id: str) -> None:
        essay = await self.get(essay_id)
        try:
            await self.db.delete(essay)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._rollback("delete essay", e)

    async def stats(self) -> EssayStats:
        try:
            total = (await self.db.execute(select(func.count(Essay.id)))).scalar_one()
            average = (await self.db.execute(
                select(func.avg(Essay.overall_score)).where(Essay.overall_score.isnot(None))
            )).scalar_one()
            level_rows = (await self.db.execute(
                select(Essay.level, func.count(Essay.id)).group_by(Essay.level).order_by(Essay.level)
            )).all()
        except SQLAlchemyError as e:
            await self._rollback("compute statistics", e)

        return EssayStats(
            total_essays=total,
            average_score=average if average is not None else 0,
            by_level=[LevelCount(level=level, count=count) for level, count in level_rows],
        )

    async def _rollback(self, action: str, error: SQLAlchemyError):
        logger.error(f"Failed to {action}: {error}", exc_info=True)
        await self.db.rollback()
        raise PersistenceError(str(error)) from error
