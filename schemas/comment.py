from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.comment import Comment


class CommentCreate(BaseModel):
    title: str = Field(min_length=5, max_length=280)
    content: str = Field(min_length=5, max_length=280)


class CommentUpdate(BaseModel):
    title: str = Field(min_length=5, max_length=280)
    content: str = Field(min_length=5, max_length=280)


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    created_on: datetime
    created_by: Optional[str] = None
    stock_id: int


def to_comment_dto(comment: Comment) -> CommentOut:
    # comment.user must have been loaded explicitly (lazy="raise").
    return CommentOut(
        id=comment.id,
        title=comment.title,
        content=comment.content,
        created_on=comment.created_on,
        created_by=comment.user.username if comment.user is not None else None,
        stock_id=comment.stock_id,
    )


def comment_from_create(payload: CommentCreate, *, stock_id: int, user_id: int) -> Comment:
    return Comment(
        title=payload.title,
        content=payload.content,
        stock_id=stock_id,
        user_id=user_id,
    )
