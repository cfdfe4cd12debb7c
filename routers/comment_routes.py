# routers/comment_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from models.user import User
from repositories.comment_repository import CommentQuery, CommentRepository
from repositories.dependencies import get_comment_repository, get_stock_repository
from repositories.stock_repository import StockRepository
from schemas.comment import CommentCreate, CommentOut, CommentUpdate, comment_from_create, to_comment_dto
from services.auth import get_current_user
from services.fmp_service import FmpService, get_fmp_service
from services.stock_lookup_service import resolve_stock

router = APIRouter()


@router.get("", response_model=List[CommentOut])
def list_comments(
    symbol: Optional[str] = Query(None),
    is_descending: bool = Query(True, alias="isDescending"),
    comments: CommentRepository = Depends(get_comment_repository),
):
    rows = comments.get_all(CommentQuery(symbol=symbol, is_descending=is_descending))
    return [to_comment_dto(c) for c in rows]


@router.get("/{comment_id}", response_model=CommentOut)
def get_comment(
    comment_id: int,
    comments: CommentRepository = Depends(get_comment_repository),
):
    comment = comments.get_by_id(comment_id)
    if comment is None:
        raise HTTPException(status_code=404, detail="Comment not found")
    return to_comment_dto(comment)


@router.post("/{symbol}", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
async def create_comment(
    symbol: str,
    payload: CommentCreate,
    request: Request,
    response: Response,
    user: User = Depends(get_current_user),
    stocks: StockRepository = Depends(get_stock_repository),
    comments: CommentRepository = Depends(get_comment_repository),
    fmp: FmpService = Depends(get_fmp_service),
):
    stock = await resolve_stock(symbol, stocks, fmp)
    if stock is None:
        raise HTTPException(status_code=400, detail="Stock does not exist")

    comment = comments.create(comment_from_create(payload, stock_id=stock.id, user_id=user.id))
    response.headers["Location"] = str(request.url_for("get_comment", comment_id=comment.id))
    return to_comment_dto(comment)


@router.put("/{comment_id}", response_model=CommentOut)
def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    comments: CommentRepository = Depends(get_comment_repository),
):
    comment = comments.update(comment_id, title=payload.title, content=payload.content)
    if comment is None:
        raise HTTPException(status_code=404, detail="Comment not found")
    return to_comment_dto(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    comments: CommentRepository = Depends(get_comment_repository),
):
    if not comments.delete(comment_id):
        raise HTTPException(status_code=404, detail="Comment does not exist")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
