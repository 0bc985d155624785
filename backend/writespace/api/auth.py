"""Authentication API routes."""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from writespace.config import Settings, get_app_settings
from writespace.repository import Repository, get_repository
from writespace.schemas.auth import LoginRequest, LoginResponse, SignupRequest, UserResponse
from writespace.services import auth_service

router = APIRouter()
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    repository: Repository = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
):
    """Dependency to get the current authenticated user."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = auth_service.decode_access_token(credentials.credentials, settings)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await repository.get_user(payload.sub)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


@router.post("/signup", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    repository: Repository = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
):
    """Register and log in."""
    try:
        user = await auth_service.register_user(repository, request)
    except auth_service.EmailAlreadyRegistered:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    access_token = auth_service.create_access_token(user.id, settings)
    return LoginResponse(access_token=access_token)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    repository: Repository = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
):
    """User login endpoint."""
    try:
        user = await auth_service.authenticate_user(repository, request.email, request.password)
    except auth_service.InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    access_token = auth_service.create_access_token(user.id, settings)
    return LoginResponse(access_token=access_token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user = Depends(get_current_user)):
    """Get current user information."""
    return current_user
