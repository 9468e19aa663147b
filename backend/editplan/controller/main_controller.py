"""FastAPI application bootstrap and routing setup."""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from termcolor import colored

from editplan.controller.edit_controller import router as edit_router
from editplan.handlers.error_handler import MapExceptions as me
from editplan.utility.logger import AppLogger

AppLogger.init(level=logging.INFO)

app = FastAPI(title="editplan", version="0.1.0")
me.register_exception_handlers(app)
logger = AppLogger.get_logger(__name__)

mode = os.getenv("RUN_MODE", "actual")
logger.info(colored(f"Running in {mode} mode", "yellow"))

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(edit_router)


@app.get("/", tags=["Health"])
def root():
    """Health probe indicating API wiring and logger setup succeeded."""
    return {"status": "ok", "message": "Setup successful", "mode": mode}


@app.get("/health", tags=["Health"])
def health_check():
    """Secondary health endpoint used by deployments and monitoring probes."""
    return {"status": "ok", "message": "FastAPI server running!", "mode": mode}
