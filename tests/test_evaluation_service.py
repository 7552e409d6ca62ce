import random
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.models.models import Essay, EssayLevel, EssayStatus, Readability
from app.services.evaluation_service import EssayEvaluationService
from app.services.feedback_service import FeedbackService
from app.utils.exceptions import PersistenceError, ValidationError


async def essay_count(db_session) -> int:
    return (await db_session.execute(select(func.count(Essay.id)))).scalar_one()


class TestAssess:

    def test_deterministic_assessment(self, repository, zero_rng):
        service = EssayEvaluationService(repository, rng=zero_rng)

        result = service.assess("word " * 300)

        assert result.overall_score == 80.0
        assert result.breakdown.grammar == 80.0
        assert result.word_count == 300
        assert result.char_count == 1500
        assert result.readability == Readability.GRADUATE
        assert result.estimated_read_time == 2
        assert result.strengths == FeedbackService.DEFAULT_STRENGTHS
        assert result.improvements == ["Consider breaking down complex sentences for clarity"]
        assert [s.model_dump() for s in result.suggestions] == [FeedbackService.DEFAULT_SUGGESTION]

    def test_three_word_essay(self, repository, zero_rng):
        service = EssayEvaluationService(repository, rng=zero_rng)

        result = service.assess("I like cats")

        assert result.overall_score == 63.0
        assert result.readability == Readability.HIGH_SCHOOL
        assert result.estimated_read_time == 1
        assert result.suggestions[0].original == "I like cats."
        assert "Expand arguments with more supporting evidence" in result.improvements

    def test_same_seed_same_assessment(self, repository, sample_essay):
        first = EssayEvaluationService(repository, rng=random.Random(7)).assess(sample_essay)
        second = EssayEvaluationService(repository, rng=random.Random(7)).assess(sample_essay)

        assert first == second


class TestEvaluate:

    @pytest.mark.asyncio
    async def test_evaluate_persists_submission(self, repository, db_session, zero_rng, sample_essay):
        service = EssayEvaluationService(repository, rng=zero_rng)

        essay = await service.evaluate(sample_essay, university="MIT", level=EssayLevel.MBA)

        assert essay.id
        assert essay.created_at is not None
        assert essay.status == EssayStatus.EVALUATED.value
        assert essay.university == "MIT"
        assert essay.level == "mba"
        assert essay.assessment["overallScore"] == essay.overall_score
        assert essay.assessment["wordCount"] == essay.word_count
        assert essay.assessment["charCount"] == essay.char_count == len(sample_essay)
        assert await essay_count(db_session) == 1

    @pytest.mark.asyncio
    async def test_evaluate_defaults(self, repository, zero_rng, sample_essay):
        essay = await EssayEvaluationService(repository, rng=zero_rng).evaluate(sample_essay)

        assert essay.university == ""
        assert essay.level == EssayLevel.UNDERGRAD.value

    @pytest.mark.asyncio
    async def test_short_text_creates_nothing(self, repository, db_session, zero_rng):
        service = EssayEvaluationService(repository, rng=zero_rng)

        with pytest.raises(ValidationError):
            await service.evaluate("hi")

        assert await essay_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_persistence_failure_propagates(self, repository, db_session, zero_rng, sample_essay):
        service = EssayEvaluationService(repository, rng=zero_rng)
        failure = OperationalError("INSERT INTO essays", {}, Exception("disk I/O error"))

        with patch.object(db_session, "commit", new=AsyncMock(side_effect=failure)):
            with pytest.raises(PersistenceError):
                await service.evaluate(sample_essay)

        assert await essay_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_each_call_creates_one_submission(self, repository, db_session, sample_essay):
        service = EssayEvaluationService(repository, rng=random.Random(3))

        first = await service.evaluate(sample_essay)
        second = await service.evaluate(sample_essay)

        assert first.id != second.id
        assert await essay_count(db_session) == 2
