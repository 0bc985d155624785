"""AI writing suggestion API routes."""
from typing import Any, Dict
from fastapi import APIRouter, Depends, HTTPException, status
from writespace.schemas.suggestion import AISuggestionRequest
from writespace.services.llm_service import (
    SuggestionError,
    SuggestionService,
    get_suggestion_service,
)

router = APIRouter()


@router.post("", response_model=None)
async def create_suggestions(
    request: AISuggestionRequest,
    service: SuggestionService = Depends(get_suggestion_service),
) -> Dict[str, Any]:
    """
    Get writing feedback for a post.

    The model's JSON reply is returned as-is:
    {"suggestions": [...], "overallScore": n, "summary": "..."}
    """
    try:
        return await service.suggest(request.content, request.title)
    except SuggestionError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Failed to generate AI suggestions",
                "message": str(e),
            },
        )
