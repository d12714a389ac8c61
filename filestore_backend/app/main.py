# filestore_backend/app/main.py
from __future__ import annotations

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .dependencies import get_storage
from .routers import files as files_router
from .routers import health as health_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("filestore.main")

app = FastAPI(title="FileStore API", version="0.1.0")

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routers
app.include_router(files_router.router)
app.include_router(files_router.exists_router)
app.include_router(health_router.router)


@app.on_event("startup")
def on_startup():
    storage = get_storage()
    storage.create_dir(storage.directory)
    logger.info("FileStore started, storage dir %s", storage.directory)


@app.on_event("shutdown")
def on_shutdown():
    logger.info("FileStore shutdown")
