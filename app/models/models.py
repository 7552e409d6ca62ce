import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, Text, Float, JSON, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class EssayLevel(str, Enum):
    UNDERGRAD = "undergrad"
    MBA = "mba"


class EssayStatus(str, Enum):
    DRAFT = "draft"
    EVALUATED = "evaluated"
    ARCHIVED = "archived"


class Readability(str, Enum):
    HIGH_SCHOOL = "High School Level"
    COLLEGE = "College Level"
    GRADUATE = "Graduate Level"


def _new_essay_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Essay(Base):
    """Essays table - stores submissions and their embedded assessment"""
    __tablename__ = "essays"

    id = Column(String(32), primary_key=True, default=_new_essay_id)
    text = Column(Text, nullable=False)
    university = Column(String(200), nullable=False, default="")
    level = Column(String(20), nullable=False, default=EssayLevel.UNDERGRAD.value, index=True)
    word_count = Column(Integer, nullable=False)
    char_count = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=EssayStatus.DRAFT.value, index=True)

    # Full EvaluationResult as JSON; overall_score is copied out for sorting and stats
    assessment = Column(JSON)
    overall_score = Column(Float, index=True)

    # Client-side, microsecond resolution; SQLite CURRENT_TIMESTAMP is whole-second
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), onupdate=_utcnow)

    __table_args__ = (
        Index('ix_essays_status_created', 'status', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<Essay id={self.id} status={self.status} words={self.word_count}>"
