from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hrms.api.v1.router import api_router
from hrms.core.config import settings
from hrms.services.employee_store import employee_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        employee_store.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize EmployeeStore, continuing without storage")
    yield
    employee_store.close()


app = FastAPI(
    title="HRMS API",
    description="Employee registration and records",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "HRMS API"}
