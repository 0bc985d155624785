"""API routes."""
from fastapi import APIRouter
from writespace.api import auth, posts, users, suggestions

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(posts.router, prefix="/posts", tags=["Posts"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(suggestions.router, prefix="/ai-suggestions", tags=["AI Suggestions"])
