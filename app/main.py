# File: app\main.py
# Project: swapify-admin-backend

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import cors_origins_list, settings
from app.core.ratelimit import limiter
from app.routers import auth, setup, admin_manage, listings, offers, users

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="Swapify Club Admin API")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins_list(),
    # the dashboard authenticates with an httpOnly cookie
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(SQLAlchemyError)
async def database_error(request: Request, exc: SQLAlchemyError):
    log.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

@app.on_event("startup")
def _on_startup() -> None:
    if settings.auto_create_tables:
        from app.db.init_db import create_tables
        create_tables()

@app.get("/health")
def health():
    return {"ok": True}

app.include_router(auth.router)
app.include_router(setup.router)
app.include_router(admin_manage.router)
app.include_router(listings.router)
app.include_router(offers.router)
app.include_router(users.router)
