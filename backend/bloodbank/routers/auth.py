from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ..errors import DuplicateIdentityError, InvalidCredentialsError
from ..models.user import LoginResponse, UserCreate, UserLogin, UserPublic
from ..services.accounts import authenticate, register_user
from .deps import StoreDep

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, store: StoreDep) -> UserPublic:
    try:
        return await register_user(store, payload)
    except DuplicateIdentityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email exists") from exc


@router.post("/login", response_model=LoginResponse)
async def login(payload: UserLogin, store: StoreDep) -> LoginResponse:
    try:
        return await authenticate(store, payload)
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
