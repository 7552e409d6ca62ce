from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.models.models import EssayLevel, EssayStatus, Readability


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys for the web client"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# --- Assessment ---

class ScoreBreakdown(CamelModel):
    grammar: float
    structure: float
    coherence: float
    vocabulary: float
    arguments: float


class Suggestion(CamelModel):
    original: str
    improved: str
    reason: str


class EvaluationResult(CamelModel):
    overall_score: float
    breakdown: ScoreBreakdown
    strengths: List[str]
    improvements: List[str]
    suggestions: List[Suggestion]
    readability: Readability
    estimated_read_time: int
    word_count: int
    char_count: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        frozen = True


# --- Essays ---

class EssayEvaluateRequest(CamelModel):
    text: str
    university: Optional[str] = None
    level: Optional[EssayLevel] = None


class EssayUpdateRequest(CamelModel):
    text: Optional[str] = None
    university: Optional[str] = None
    level: Optional[EssayLevel] = None
    status: Optional[EssayStatus] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent, without explicit nulls"""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class EssayOut(CamelModel):
    id: str
    text: str
    university: str
    level: EssayLevel
    word_count: int
    char_count: int
    assessment: Optional[EvaluationResult] = None
    status: EssayStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- Listing & stats ---

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class LevelCount(BaseModel):
    level: EssayLevel
    count: int

    def to_json(self) -> Dict[str, Any]:
        # The client groups by "_id"
        return {"_id": self.level.value, "count": self.count}


class EssayStats(CamelModel):
    total_essays: int
    average_score: float
    by_level: List[LevelCount]

    def to_json(self) -> Dict[str, Any]:
        return {
            "totalEssays": self.total_essays,
            "averageScore": self.average_score,
            "byLevel": [entry.to_json() for entry in self.by_level],
        }
