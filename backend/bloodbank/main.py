from __future__ import annotations

from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pymongo.errors import PyMongoError

from .database import db, settings
from .routers import analytics, auth, donations, inventory, requests
from .services.inventory import seed_inventory
from .store import MongoStore
from .utils.logging import configure_logging, log_db_error
from .utils.notifications import notification_service

configure_logging(settings.log_level)

app = FastAPI(title="Blood Bank API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(inventory.router)
app.include_router(requests.router)
app.include_router(donations.router)
app.include_router(analytics.router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        {"detail": "All fields required", "errors": jsonable_encoder(exc.errors())},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    log_db_error(f"{request.method} {request.url.path}", exc)
    return JSONResponse(
        {"detail": "Database unavailable. Try again shortly."},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@app.get("/health")
async def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}


@app.on_event("startup")
async def prepare_database() -> None:
    store = MongoStore(db)
    await store.ensure_indexes()
    if not settings.seed_inventory:
        return
    try:
        await seed_inventory(store)
    except PyMongoError as exc:  # pragma: no cover - external service
        logger.warning("MongoDB unavailable; skipping inventory seeding: {}", exc)


@app.on_event("shutdown")
async def flush_notifications() -> None:
    await notification_service.drain()


def run() -> None:  # pragma: no cover - entry point
    import uvicorn

    uvicorn.run("bloodbank.main:app", host="0.0.0.0", port=3000)
