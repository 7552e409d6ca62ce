from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, Optional

from app.api.routes.dependencies import get_essay_repository, get_evaluation_service
from app.models.models import Essay, EssayLevel, EssayStatus
from app.models.schemas import EssayEvaluateRequest, EssayOut, EssayUpdateRequest, Pagination
from app.services.essay_repository import EssayRepository, page_count
from app.services.evaluation_service import EssayEvaluationService
from config.settings import settings

router = APIRouter(prefix="/api/essays", tags=["Essays"])


def serialize_essay(essay: Essay) -> Dict[str, Any]:
    return EssayOut.model_validate(essay).model_dump(by_alias=True, mode="json")


@router.get("")
async def list_essays(
    page: int = Query(1),
    limit: int = Query(settings.default_page_size),
    status: Optional[EssayStatus] = Query(None),
    level: Optional[EssayLevel] = Query(None),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    repository: EssayRepository = Depends(get_essay_repository)
):
    """List essays with filtering, sorting and pagination"""
    essays, total = await repository.list(
        page=page,
        limit=limit,
        status=status,
        level=level,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    return {
        "success": True,
        "data": [serialize_essay(essay) for essay in essays],
        "pagination": Pagination(
            page=page, limit=limit, total=total, pages=page_count(total, limit)
        ).model_dump(),
    }


@router.post("/evaluate", status_code=201)
async def evaluate_essay(
    request: EssayEvaluateRequest,
    service: EssayEvaluationService = Depends(get_evaluation_service)
):
    """Score an essay with the heuristic evaluator and store it"""
    essay = await service.evaluate(
        text=request.text,
        university=request.university,
        level=request.level,
    )

    return {
        "success": True,
        "data": serialize_essay(essay),
        "message": "Essay evaluated successfully"
    }


@router.get("/{essay_id}")
async def get_essay(
    essay_id: str,
    repository: EssayRepository = Depends(get_essay_repository)
):
    """Get a single essay with its assessment"""
    essay = await repository.get(essay_id)
    return {"success": True, "data": serialize_essay(essay)}


@router.put("/{essay_id}")
async def update_essay(
    essay_id: str,
    request: EssayUpdateRequest,
    repository: EssayRepository = Depends(get_essay_repository)
):
    """Partially update an essay; a new text does not trigger re-evaluation"""
    essay = await repository.update(essay_id, request.changes())

    return {
        "success": True,
        "data": serialize_essay(essay),
        "message": "Essay updated successfully"
    }


@router.delete("/{essay_id}")
async def delete_essay(
    essay_id: str,
    repository: EssayRepository = Depends(get_essay_repository)
):
    """Delete an essay"""
    await repository.delete(essay_id)
    return {"success": True, "message": "Essay deleted successfully"}
