"""FastAPI application entry point."""
from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prereq_coach.api import concepts, questions, quiz
from prereq_coach.core.logging import configure_logging
from prereq_coach.domain.common.errors import DataAccessError
from prereq_coach.persistence.db import init_db

configure_logging()
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# App creation
# ------------------------------------------------------------------
app = FastAPI(
    title="Prereq Coach API",
    description="Quiz evaluation with prerequisite-based practice recommendations",
    version="1.0.0",
)

# CORS: allow everything for local dev (restrict for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------
# Startup: initialise DB schema
# ------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    init_db()


# ------------------------------------------------------------------
# Error mapping
# ------------------------------------------------------------------
@app.exception_handler(DataAccessError)
async def on_data_access_error(request: Request, exc: DataAccessError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"success": False, "detail": f"Data store unavailable ({exc.operation})"},
    )


# ------------------------------------------------------------------
# Routers
# ------------------------------------------------------------------
app.include_router(concepts.router)
app.include_router(questions.router)
app.include_router(quiz.router)
