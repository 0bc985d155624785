"""Posts API routes."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from writespace.api.auth import get_current_user
from writespace.models.post import Post
from writespace.models.user import User
from writespace.repository import Repository, get_repository
from writespace.schemas.post import (
    PostCreate,
    PostUpdate,
    PostResponse,
    PostSortType,
)
from writespace.services import post_service

router = APIRouter()


async def get_own_post(
    post_id: int,
    repository: Repository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
) -> Post:
    """Dependency loading a post that the current user wrote."""
    post = await repository.get_post(post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    if post.author_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to modify this post",
        )
    return post


@router.get("", response_model=List[PostResponse])
async def list_posts(
    search: Optional[str] = None,
    category: Optional[str] = None,
    author_id: Optional[int] = None,
    sort: Optional[PostSortType] = Query(None),
    repository: Repository = Depends(get_repository),
):
    """
    List published posts, newest first.

    - search: Case-insensitive match on title, content or excerpt
    - category: Only posts in this category
    - author_id: Only posts by this author
    - sort: newest, oldest or popular
    """
    return await post_service.list_published_posts(
        repository,
        search=search,
        category=category,
        author_id=author_id,
        sort=sort,
    )


@router.get("/categories", response_model=List[str])
async def list_categories(repository: Repository = Depends(get_repository)):
    """Categories that have at least one published post."""
    return await post_service.list_categories(repository)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    data: PostCreate,
    repository: Repository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """Create a new post authored by the current user."""
    return await post_service.create_post(repository, current_user.id, data)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    repository: Repository = Depends(get_repository),
):
    """Get a post by ID. Reading a published post counts as a view."""
    post = await post_service.read_post(repository, post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    data: PostUpdate,
    post: Post = Depends(get_own_post),
    repository: Repository = Depends(get_repository),
):
    """
    Update a post.

    Can update: title, excerpt, content, category, tags, status
    """
    updated = await post_service.update_post(repository, post.id, data)
    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return updated


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post: Post = Depends(get_own_post),
    repository: Repository = Depends(get_repository),
):
    """Delete a post."""
    success = await post_service.delete_post(repository, post.id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
