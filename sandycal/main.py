"""sandycal FastAPI application."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from sandycal.api import auth, friends, health, ratings
from sandycal.core.config import settings

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
)

logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(ratings.router)
app.include_router(friends.router)
