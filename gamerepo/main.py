import contextlib
import logging
import socket
from typing import Optional

from fastapi import FastAPI

from gamerepo.api.games import router as games_router
from gamerepo.core.config import (
    default_base_url,
    get_base_url,
    get_host,
    get_log_level,
    get_preferred_port,
    load_settings,
)
from gamerepo.domain.entities import GameRepository
from gamerepo.domain.models import RepositorySettings

# Configure logging
logging.basicConfig(
    level=get_log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# How many ports past the preferred one to try before giving up.
MAX_PORT_OFFSET = 1024


def create_app(settings: Optional[RepositorySettings] = None) -> FastAPI:
    """
    Build the FastAPI app serving the resource store described by ``settings``
    (read from the environment when omitted).
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="Local Game Repository",
        version="0.1.0",
        description="Serves versioned game definition packages from a local directory tree.",
    )
    app.state.repository = GameRepository(settings)
    logger.info(f"Serving games from {settings.root_dir} as {settings.base_url}")

    @app.get("/health")
    async def health() -> dict:
        """
        Lightweight health check endpoint.
        """
        return {"status": "ok"}

    # The games router is a catch-all, so it goes last.
    app.include_router(games_router, tags=["games"])
    return app


def _port_is_free(host: str, port: int) -> bool:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        try:
            s.bind((host, port))
        except OSError:
            return False
    return True


def find_available_port(host: str, preferred: int, max_offset: int = MAX_PORT_OFFSET) -> int:
    for offset in range(max_offset):
        port = preferred + offset
        if _port_is_free(host, port):
            return port
        logger.warning(f"Port {port} unavailable -- trying next port")
    raise RuntimeError("Local server creation failed")


def run() -> None:
    """
    Start the repository server on the first free port at or above the
    preferred one; the chosen port becomes the default base URL.
    """
    import uvicorn

    host = get_host()
    port = find_available_port(host, get_preferred_port())
    if get_base_url() is None:
        settings = load_settings(base_url=default_base_url(port, host))
    else:
        settings = load_settings()

    logger.info(f"Starting game repository on {host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port)


if __name__ == "__main__":
    run()
