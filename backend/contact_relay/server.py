# contact_relay/server.py
import logging
import sys

import uvicorn
from pydantic import ValidationError

from contact_relay.core.settings import SmtpConfig, get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
log = logging.getLogger("uvicorn.error")

HOST = "0.0.0.0"


def _describe(error: dict) -> str:
    name = ".".join(str(part) for part in error.get("loc", ())) or "configuration"
    if error.get("type") == "missing":
        return f"{name} must be set"
    return f"{name}: {error.get('msg')}"


def load_config() -> SmtpConfig:
    """Load configuration or terminate the process with one line per problem."""
    try:
        return get_settings()
    except ValidationError as exc:
        for error in exc.errors():
            log.error(f"[server] {_describe(error)}")
        sys.exit(1)


def main() -> None:
    config = load_config()
    log.info(f"Starting server on port {config.port}")
    uvicorn.run(
        "contact_relay.main:build_app",
        factory=True,
        host=HOST,
        port=config.port,
        workers=config.workers,
    )


if __name__ == "__main__":
    main()
