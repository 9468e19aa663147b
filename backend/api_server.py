"""Development entry point: serves the editplan FastAPI app with uvicorn."""

import os

import uvicorn

from editplan.controller.main_controller import app

__all__ = ["app"]


if __name__ == "__main__":
    uvicorn.run(
        "editplan.controller.main_controller:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level="info",
    )
