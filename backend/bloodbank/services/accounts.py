from __future__ import annotations

from loguru import logger
from pymongo.errors import DuplicateKeyError

from ..errors import DuplicateIdentityError, InvalidCredentialsError
from ..models.user import LoginResponse, UserCreate, UserLogin, UserPublic
from ..schemas.documents import serialize_id, user_document
from ..store import MongoStore
from ..utils.security import hash_password, verify_password


async def register_user(store: MongoStore, payload: UserCreate) -> UserPublic:
    if await store.find_user(payload.email):
        raise DuplicateIdentityError(payload.email)
    try:
        stored = await store.insert_user(user_document(payload, hash_password(payload.password)))
    except DuplicateKeyError as exc:
        # lost a race with a concurrent registration for the same address
        raise DuplicateIdentityError(payload.email) from exc
    logger.info("Registered {} as {}", payload.email, payload.role)
    return UserPublic(**serialize_id(stored))


async def authenticate(store: MongoStore, credentials: UserLogin) -> LoginResponse:
    user = await store.find_user(credentials.email)
    if not user or not verify_password(credentials.password, user.get("password", "")):
        raise InvalidCredentialsError("Incorrect email or password")
    if user.get("role") != credentials.role:
        raise InvalidCredentialsError("Role mismatch for this account")
    return LoginResponse(
        name=user["name"],
        email=user["email"],
        role=user["role"],
        city=(user.get("location") or {}).get("city", ""),
    )
