# services/account_service.py
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from config import settings
from models.user import User
from repositories.user_repository import UserRepository
from services.auth import dummy_verify, get_password_hash, verify_password

logger = logging.getLogger(__name__)


class RegistrationError(ValueError):
    """Username or email already taken."""


def register_user(
    users: UserRepository,
    *,
    username: str,
    email: str,
    password: str,
) -> Tuple[User, List[str]]:
    if users.get_by_username(username) is not None:
        raise RegistrationError("Username is already taken")
    if users.get_by_email(email) is not None:
        raise RegistrationError("Email is already registered")

    user = User(username=username, email=email, hashed_password=get_password_hash(password))
    try:
        users.add(user, settings.DEFAULT_ROLE)
        users.db.commit()
    except IntegrityError as exc:
        users.db.rollback()
        raise RegistrationError("Username or email is already registered") from exc

    users.db.refresh(user)
    logger.info("user_registered id=%s", user.id)
    return user, users.get_role_names(user.id)


def authenticate_user(users: UserRepository, *, username: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, None otherwise (same outcome for both failures)."""
    user = users.get_by_username(username)
    if user is None:
        dummy_verify()
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user
