# services/auth.py
import logging

from fastapi import Depends, HTTPException, Request, status
from passlib.context import CryptContext

from config import settings
from models.user import User
from repositories.dependencies import get_user_repository
from repositories.user_repository import UserRepository
from services.token_service import Principal, TokenError, TokenService, get_token_service, principal_from_claims

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

_UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}

# ========================
# Password helpers
# ========================

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def dummy_verify() -> None:
    """Spend roughly the same time as a real verify when the user is unknown."""
    pwd_context.dummy_verify()

# ========================
# Request dependencies
# ========================

def _get_bearer_token(request: Request) -> str:
    auth = request.headers.get("Authorization")
    if not auth or not auth.lower().startswith("bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers=_UNAUTHORIZED_HEADERS,
        )
    return auth.split(" ", 1)[1].strip()


def get_current_principal(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> Principal:
    token = _get_bearer_token(request)
    try:
        return principal_from_claims(tokens.decode_token(token))
    except TokenError as exc:
        logger.info("token_rejected reason=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers=_UNAUTHORIZED_HEADERS,
        )


def get_current_user(
    principal: Principal = Depends(get_current_principal),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    user = users.get_by_id(principal.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
            headers=_UNAUTHORIZED_HEADERS,
        )
    return user
