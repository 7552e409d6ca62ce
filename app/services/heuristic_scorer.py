import math
import random
from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from app.services.text_analysis import TextFeatures


class RandomSource(Protocol):
    """Anything with random.Random's uniform(); injected so scoring is reproducible"""

    def uniform(self, a: float, b: float) -> float:
        ...


@dataclass(frozen=True)
class ScoreResult:
    overall_score: float
    breakdown: Dict[str, float]


class HeuristicScorer:
    """
    Rule-based essay scorer.

    Not a learned model: a fixed base score adjusted by bonuses for
    length, sentence rhythm and lexical diversity, plus bounded noise
    drawn from the injected random source.
    """

    BASE_SCORE = 70.0
    MIN_SCORE = 50.0
    MAX_SCORE = 98.0
    CATEGORY_CEILING = 100.0
    PERTURBATION = 6.0

    # Half-width of the noise band applied to each category
    CATEGORY_SPREAD = {
        "grammar": 5.0,
        "structure": 4.0,
        "coherence": 6.0,
        "vocabulary": 5.0,
        "arguments": 7.0,
    }

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng if rng is not None else random.Random()

    def score(self, features: TextFeatures) -> ScoreResult:
        base_score = self._base_score(features)
        raw_score = base_score + self.rng.uniform(-self.PERTURBATION, self.PERTURBATION)
        clamped = max(self.MIN_SCORE, min(self.MAX_SCORE, raw_score))
        # One decimal, halves rounded up
        overall_score = math.floor(clamped * 10 + 0.5) / 10

        # Category noise is centred on the rounded overall score
        breakdown = {
            category: min(
                self.CATEGORY_CEILING,
                overall_score + self.rng.uniform(-spread, spread),
            )
            for category, spread in self.CATEGORY_SPREAD.items()
        }

        return ScoreResult(overall_score=overall_score, breakdown=breakdown)

    def _base_score(self, features: TextFeatures) -> float:
        score = self.BASE_SCORE

        # Length
        if 300 <= features.word_count <= 800:
            score += 10
        elif features.word_count < 100:
            score -= 15

        # Sentence rhythm
        if 15 <= features.avg_sentence_length <= 25:
            score += 5

        # Lexical diversity
        if features.vocabulary_richness > 0.6:
            score += 8

        return score
