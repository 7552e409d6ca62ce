import math
from dataclasses import dataclass
from typing import Dict, List

from app.models.models import Readability
from app.services.text_analysis import TextFeatures


@dataclass(frozen=True)
class Feedback:
    strengths: List[str]
    improvements: List[str]
    suggestions: List[Dict[str, str]]
    readability: Readability
    estimated_read_time: int


class FeedbackService:
    """Turns scores and text statistics into written feedback"""

    DEFAULT_STRENGTHS = [
        "Clear writing style",
        "Good effort in addressing the topic",
    ]

    DEFAULT_IMPROVEMENTS = [
        "Continue refining your arguments",
        "Consider adding more specific examples",
    ]

    DEFAULT_SUGGESTION = {
        "original": "Sample text for improvement",
        "improved": "Enhanced version with better structure and vocabulary",
        "reason": "Improved clarity and impact",
    }

    OPENING_REWRITE = (
        "Consider expanding your opening statement to provide more context "
        "and engage the reader immediately."
    )

    SHORT_OPENING_LENGTH = 80
    WORDS_PER_MINUTE = 200

    def generate_feedback(self, features: TextFeatures, breakdown: Dict[str, float]) -> Feedback:
        return Feedback(
            strengths=self._strengths(features, breakdown),
            improvements=self._improvements(features, breakdown),
            suggestions=self._suggestions(features),
            readability=self.readability_level(features.avg_sentence_length),
            estimated_read_time=self.estimated_read_time(features.word_count),
        )

    def _strengths(self, features: TextFeatures, breakdown: Dict[str, float]) -> List[str]:
        strengths = []

        if breakdown["grammar"] > 85:
            strengths.append("Excellent grammar with minimal errors")
        if breakdown["structure"] > 80:
            strengths.append("Well-organized essay structure with clear progression")
        if features.word_count > 500:
            strengths.append("Comprehensive coverage of the topic")
        if features.vocabulary_richness > 0.65:
            strengths.append("Rich and varied vocabulary usage")

        return strengths or list(self.DEFAULT_STRENGTHS)

    def _improvements(self, features: TextFeatures, breakdown: Dict[str, float]) -> List[str]:
        improvements = []

        if breakdown["coherence"] < 75:
            improvements.append("Improve logical flow between paragraphs")
        if features.avg_sentence_length > 30:
            improvements.append("Consider breaking down complex sentences for clarity")
        if features.word_count < 300:
            improvements.append("Expand arguments with more supporting evidence")
        if breakdown["arguments"] < 80:
            improvements.append("Strengthen main arguments with specific examples")

        return improvements or list(self.DEFAULT_IMPROVEMENTS)

    def _suggestions(self, features: TextFeatures) -> List[Dict[str, str]]:
        suggestions = []

        # Only the opening sentence is currently rewritten
        for index, sentence in enumerate(features.sentences[:3]):
            opening = sentence.strip()
            if index == 0 and len(opening) < self.SHORT_OPENING_LENGTH:
                suggestions.append({
                    "original": opening + ".",
                    "improved": self.OPENING_REWRITE,
                    "reason": "Stronger opening statement",
                })

        return suggestions or [dict(self.DEFAULT_SUGGESTION)]

    @staticmethod
    def readability_level(avg_sentence_length: float) -> Readability:
        if avg_sentence_length < 15:
            return Readability.HIGH_SCHOOL
        if avg_sentence_length > 25:
            return Readability.GRADUATE
        return Readability.COLLEGE

    @classmethod
    def estimated_read_time(cls, word_count: int) -> int:
        """Minutes to read at 200 words per minute, never less than one"""
        return max(1, math.ceil(word_count / cls.WORDS_PER_MINUTE))
