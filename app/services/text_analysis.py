import re
from dataclasses import dataclass
from typing import List

from app.utils.exceptions import ValidationError

# Literal split on runs of terminal punctuation. Ellipses and abbreviations
# such as "U.S." produce extra fragments; this is a known limitation.
SENTENCE_SPLIT_PATTERN = re.compile(r'[.!?]+')


@dataclass(frozen=True)
class TextFeatures:
    """Surface statistics of an essay used by scoring and feedback"""
    word_count: int
    char_count: int
    sentences: List[str]
    sentence_count: int
    avg_sentence_length: float
    vocabulary_richness: float


def count_words(text: str) -> int:
    return len(text.strip().split())


def split_sentences(text: str) -> List[str]:
    """Split text into non-empty sentence fragments"""
    return [s for s in SENTENCE_SPLIT_PATTERN.split(text) if s.strip()]


def extract_features(text: str) -> TextFeatures:
    """
    Derive word/char/sentence counts and vocabulary richness

    char_count measures the untrimmed text; every other figure is taken
    from the trimmed text. Callers guarantee non-empty input.
    """
    words = text.strip().split()
    word_count = len(words)
    sentences = split_sentences(text)
    sentence_count = max(len(sentences), 1)

    unique_words = {word.lower() for word in words}
    vocabulary_richness = len(unique_words) / word_count if word_count else 0.0

    return TextFeatures(
        word_count=word_count,
        char_count=len(text),
        sentences=sentences,
        sentence_count=sentence_count,
        avg_sentence_length=word_count / sentence_count,
        vocabulary_richness=vocabulary_richness,
    )


def validate_essay_text(text: str, min_length: int) -> str:
    """Reject essays whose trimmed text is shorter than min_length"""
    if text is None or len(text.strip()) < min_length:
        raise ValidationError(f"Essay text must be at least {min_length} characters long")
    return text
