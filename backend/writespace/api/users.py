"""Current user's dashboard API routes."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from writespace.api.auth import get_current_user
from writespace.models.user import User
from writespace.repository import Repository, get_repository
from writespace.schemas.post import PostResponse, PostStats, PostStatusType
from writespace.services import post_service

router = APIRouter()


@router.get("/me/posts", response_model=List[PostResponse])
async def list_my_posts(
    status_filter: Optional[PostStatusType] = Query(None, alias="status"),
    repository: Repository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """All of the current user's posts, drafts included, newest first."""
    return await post_service.list_author_posts(repository, current_user.id, status_filter)


@router.get("/me/stats", response_model=PostStats)
async def get_my_stats(
    repository: Repository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """Post counts and total views for the current user."""
    return await post_service.get_author_stats(repository, current_user.id)
