"""Authentication service."""
from datetime import timedelta
from typing import Optional
import jwt
import bcrypt
from writespace.config import Settings
from writespace.database import utcnow
from writespace.models.user import User
from writespace.repository import Repository
from writespace.schemas.auth import SignupRequest, TokenPayload
from writespace.utils.logging import get_logger

logger = get_logger(__name__)


class AuthError(Exception):
    """Base class for signup and login failures."""


class EmailAlreadyRegistered(AuthError):
    """Signup with an email that already belongs to a user."""


class InvalidCredentials(AuthError):
    """Login with an unknown email or a wrong password."""


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        return False


def create_access_token(user_id: int, settings: Settings) -> str:
    """Create a JWT access token."""
    expire = utcnow() + timedelta(hours=settings.jwt_expire_hours)
    payload = {
        "sub": str(user_id),
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Optional[TokenPayload]:
    """Decode and validate a JWT access token."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.PyJWTError:
        return None


async def register_user(repository: Repository, data: SignupRequest) -> User:
    """
    Create a new account.

    Raises:
        EmailAlreadyRegistered: the email belongs to an existing user
    """
    user = await repository.create_user_if_email_free(
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
    )
    if user is None:
        raise EmailAlreadyRegistered(data.email)
    logger.info("Registered user %s", user.id)
    return user


async def authenticate_user(
    repository: Repository,
    email: str,
    password: str
) -> User:
    """
    Authenticate a user by email and password.

    Raises:
        InvalidCredentials: unknown email or wrong password
    """
    user = await repository.get_user_by_email(email)

    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentials(email)

    return user
