# contact_relay/main.py
import logging
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact_relay.core.settings import get_settings
from contact_relay.routers.contact import router as contact_router

log = logging.getLogger("uvicorn.error")


def create_app(cors_origins: Optional[List[str]] = None) -> FastAPI:
    app = FastAPI(title="Contact Relay", docs_url=None, redoc_url=None, openapi_url=None)

    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["POST", "OPTIONS"],
            allow_headers=["*"],
        )

    app.include_router(contact_router)
    return app


def build_app() -> FastAPI:
    """uvicorn factory: each worker resolves its configuration before serving."""
    config = get_settings()
    log.info(f"[main] relaying contact submissions via {config.smtp_server}:{config.smtp_port}")
    return create_app(config.allowed_origins)
