# repositories/user_repository.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from models.user import Role, User, UserRole


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_role_names(self, user_id: int) -> List[str]:
        rows = (
            self.db.query(Role.name)
            .join(UserRole, UserRole.role_id == Role.id)
            .filter(UserRole.user_id == user_id)
            .order_by(Role.name.asc())
            .all()
        )
        return [name for (name,) in rows]

    def get_or_create_role(self, name: str) -> Role:
        role = self.db.query(Role).filter(Role.name == name).first()
        if role is None:
            role = Role(name=name)
            self.db.add(role)
            self.db.flush()
        return role

    def add(self, user: User, role_name: str) -> User:
        """Stage a new user with one role; the caller commits."""
        self.db.add(user)
        self.db.flush()
        role = self.get_or_create_role(role_name)
        self.db.add(UserRole(user_id=user.id, role_id=role.id))
        return user
