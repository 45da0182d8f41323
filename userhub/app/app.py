# This file loads env variables and must thus be imported before anything else.
from . import env_loader  # noqa: F401

import os
import logging

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .errors import register_error_handlers
from .routers import auth_router, profile_router, admin_router, export_router

"""FastAPI application setup for the userhub API.

Exposes Google sign-in, profile read/update, the admin stub, and CSV export.
This module configures sessions, CORS, error rendering, and logging.
"""

logger = logging.getLogger(__name__)

app = FastAPI(title="userhub")
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(admin_router)
app.include_router(export_router)
app.add_middleware(
    SessionMiddleware,  # type: ignore[arg-type]
    secret_key=os.environ["SESSION_SECRET"],
    same_site="lax",
    https_only=os.getenv("ENV", "dev") != "dev",
)
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=[
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "").split(",")
        if origin.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)


# Configure basic logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(filename)s:%(lineno)d",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Configure the logging for the API itself if the user specifies it.
if "LOG_LEVEL" in os.environ:
    match os.environ["LOG_LEVEL"].upper():
        case "DEBUG":
            log_level = logging.DEBUG
        case "INFO":
            log_level = logging.INFO
        case "WARNING":
            log_level = logging.WARNING
        case "ERROR":
            log_level = logging.ERROR
        case "CRITICAL":
            log_level = logging.CRITICAL
        case _:
            raise ValueError(f"Invalid log level: {os.environ['LOG_LEVEL']}")
    logging.getLogger("userhub").setLevel(log_level)


@app.get("/health")
@app.options("/health")
def health_check(response: Response) -> dict[str, str]:
    """Health check endpoint that returns 200 status with CORS from anywhere."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "*"
    return {"status": "healthy"}
