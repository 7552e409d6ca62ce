import pytest

from app.models.models import Essay, EssayLevel, EssayStatus
from app.services.essay_repository import page_count
from app.utils.exceptions import NotFoundError, ValidationError


def draft_essay(text="A draft that was never evaluated.", level=EssayLevel.UNDERGRAD):
    return Essay(
        text=text,
        level=level.value,
        word_count=len(text.split()),
        char_count=len(text),
    )


@pytest.mark.asyncio
async def test_create_assigns_id_and_defaults(repository):
    essay = await repository.create(draft_essay())

    assert essay.id
    assert essay.status == EssayStatus.DRAFT.value
    assert essay.university == ""
    assert essay.assessment is None
    assert essay.created_at is not None
    assert essay.updated_at is not None


@pytest.mark.asyncio
async def test_draft_cannot_be_marked_evaluated(repository):
    essay = await repository.create(draft_essay())

    with pytest.raises(ValidationError):
        await repository.update(essay.id, {"status": EssayStatus.EVALUATED})

    archived = await repository.update(essay.id, {"status": EssayStatus.ARCHIVED})
    assert archived.status == "archived"


@pytest.mark.asyncio
async def test_update_text_counts_trimmed_words(repository):
    essay = await repository.create(draft_essay())

    updated = await repository.update(essay.id, {"text": "  one two three four five  "})

    assert updated.word_count == 5
    assert updated.char_count == 27


@pytest.mark.asyncio
async def test_stats_ignore_unevaluated_essays(repository):
    await repository.create(draft_essay())
    evaluated = draft_essay(level=EssayLevel.MBA)
    evaluated.overall_score = 71.26
    evaluated.assessment = {"overallScore": 71.26}
    evaluated.status = EssayStatus.EVALUATED.value
    await repository.create(evaluated)

    stats = await repository.stats()

    assert stats.total_essays == 2
    assert stats.average_score == pytest.approx(71.26)
    assert stats.to_json()["byLevel"] == [
        {"_id": "mba", "count": 1},
        {"_id": "undergrad", "count": 1},
    ]


@pytest.mark.asyncio
async def test_missing_essay_raises(repository):
    with pytest.raises(NotFoundError):
        await repository.get("missing")

    with pytest.raises(NotFoundError):
        await repository.delete("missing")


@pytest.mark.parametrize("total,limit,pages", [
    (0, 10, 0),
    (1, 10, 1),
    (10, 10, 1),
    (11, 10, 2),
])
def test_page_count(total, limit, pages):
    assert page_count(total, limit) == pages
