import logging
import random
import time
from typing import Optional

from app.models.models import Essay, EssayLevel, EssayStatus
from app.models.schemas import EvaluationResult, ScoreBreakdown, Suggestion
from app.services.essay_repository import EssayRepository
from app.services.feedback_service import FeedbackService
from app.services.heuristic_scorer import HeuristicScorer, RandomSource
from app.services.text_analysis import extract_features, validate_essay_text
from config.settings import settings

logger = logging.getLogger(__name__)


class EssayEvaluationService:
    """
    Evaluates essay text and stores the result.

    The assessment is a deterministic heuristic over surface statistics
    plus bounded noise from ``rng``; no language model is involved.
    Pass a seeded ``random.Random`` (or any object with ``uniform``) to
    make evaluations reproducible.
    """

    def __init__(self, repository: EssayRepository, rng: Optional[RandomSource] = None):
        self.repository = repository
        self.rng = rng if rng is not None else random.Random()
        self.scorer = HeuristicScorer(self.rng)
        self.feedback_service = FeedbackService()

    def assess(self, text: str) -> EvaluationResult:
        """Run extraction, scoring and feedback on already validated text"""
        features = extract_features(text)
        scores = self.scorer.score(features)
        feedback = self.feedback_service.generate_feedback(features, scores.breakdown)

        return EvaluationResult(
            overall_score=scores.overall_score,
            breakdown=ScoreBreakdown(**scores.breakdown),
            strengths=feedback.strengths,
            improvements=feedback.improvements,
            suggestions=[Suggestion(**s) for s in feedback.suggestions],
            readability=feedback.readability,
            estimated_read_time=feedback.estimated_read_time,
            word_count=features.word_count,
            char_count=features.char_count,
        )

    async def evaluate(
        self,
        text: str,
        university: Optional[str] = None,
        level: Optional[EssayLevel] = None,
    ) -> Essay:
        """Evaluate ``text`` and persist it as a new evaluated submission"""
        validate_essay_text(text, settings.min_essay_length)

        start_time = time.time()
        result = self.assess(text)

        essay = Essay(
            text=text,
            university=university or "",
            level=EssayLevel(level or EssayLevel.UNDERGRAD).value,
            word_count=result.word_count,
            char_count=result.char_count,
            assessment=result.model_dump(by_alias=True, mode="json"),
            overall_score=result.overall_score,
            status=EssayStatus.EVALUATED.value,
        )
        essay = await self.repository.create(essay)

        logger.info(
            f"Essay {essay.id} evaluated: score {result.overall_score}, {result.word_count} words",
            extra={
                "essay_id": essay.id,
                "overall_score": result.overall_score,
                "duration": round((time.time() - start_time) * 1000, 2),
            },
        )
        return essay
