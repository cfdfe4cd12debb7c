# routers/account_routes.py
from fastapi import APIRouter, Depends, HTTPException, Request, status

from middleware.rate_limit import AUTH_LIMIT, limiter
from models.user import User
from repositories.dependencies import get_user_repository
from repositories.user_repository import UserRepository
from schemas.account import LoginRequest, MeOut, NewUserOut, RegisterRequest
from services.account_service import RegistrationError, authenticate_user, register_user
from services.auth import get_current_user
from services.token_service import TokenService, get_token_service

router = APIRouter()


@router.post("/register", response_model=NewUserOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_LIMIT)
def register(
    request: Request,
    payload: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        user, roles = register_user(
            users,
            username=payload.username,
            email=str(payload.email),
            password=payload.password,
        )
    except RegistrationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return NewUserOut(
        username=user.username,
        email=user.email,
        token=tokens.create_token(user, roles),
    )


@router.post("/login", response_model=NewUserOut)
@limiter.limit(AUTH_LIMIT)
def login(
    request: Request,
    payload: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    user = authenticate_user(users, username=payload.username, password=payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return NewUserOut(
        username=user.username,
        email=user.email,
        token=tokens.create_token(user, users.get_role_names(user.id)),
    )


@router.get("/me", response_model=MeOut)
def me(
    current_user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    return MeOut(
        id=current_user.id,
        username=current_user.username,
        email=current_user.email,
        roles=users.get_role_names(current_user.id),
    )
