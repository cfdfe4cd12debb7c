# services/token_service.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from jose import JWTError, jwt

from config import settings
from models.user import User

Clock = Callable[[], datetime]


class TokenError(Exception):
    """Token could not be verified or does not carry a usable identity."""


@dataclass(frozen=True)
class Principal:
    user_id: int
    username: str
    email: str
    roles: Tuple[str, ...] = ()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and verifies HS256 bearer tokens.

    Stateless: a token stays valid until its `exp`; there is no refresh flow
    and no revocation list.
    """

    def __init__(
        self,
        signing_key: str,
        issuer: str,
        audience: str,
        expire_minutes: int,
        clock: Optional[Clock] = None,
        algorithm: str = settings.JWT_ALGORITHM,
    ):
        if not signing_key:
            raise ValueError("signing_key must not be empty")
        self.signing_key = signing_key
        self.issuer = issuer
        self.audience = audience
        self.expire_minutes = expire_minutes
        self.clock = clock or _utc_now
        self.algorithm = algorithm

    def create_token(self, user: User, roles: Iterable[str] = ()) -> str:
        now = self.clock()
        expire = now + timedelta(minutes=self.expire_minutes)
        claims: Dict[str, Any] = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "roles": list(roles),
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(claims, self.signing_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                self.signing_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise TokenError("Invalid or expired token") from exc

        # expiry is judged on this service's clock, not the wall clock
        exp = payload.get("exp")
        if not isinstance(exp, int) or exp <= int(self.clock().timestamp()):
            raise TokenError("Invalid or expired token")
        return payload


def principal_from_claims(payload: Dict[str, Any]) -> Principal:
    sub = payload.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise TokenError("Invalid token subject")

    username = payload.get("username")
    if not username:
        raise TokenError("Invalid token payload")

    roles = payload.get("roles") or []
    if not isinstance(roles, list):
        raise TokenError("Invalid token payload")

    return Principal(
        user_id=user_id,
        username=str(username),
        email=str(payload.get("email") or ""),
        roles=tuple(str(r) for r in roles),
    )


def get_token_service() -> TokenService:
    return TokenService(
        signing_key=settings.JWT_SIGNING_KEY,
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
