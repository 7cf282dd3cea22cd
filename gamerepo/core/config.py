from pathlib import Path
from typing import Any, Optional
import os

from gamerepo.domain.models import RepositorySettings

ROOT_DIR_ENV_VAR = "GAME_REPO_ROOT_DIR"
BASE_URL_ENV_VAR = "GAME_REPO_BASE_URL"
BOARD_INTERFACE_ENV_VAR = "GAME_REPO_BOARD_INTERFACE_JS"
HOST_ENV_VAR = "GAME_REPO_HOST"
PORT_ENV_VAR = "GAME_REPO_PORT"
LOG_LEVEL_ENV_VAR = "GAME_REPO_LOG_LEVEL"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9140

_REPO_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_ROOT_DIR = _REPO_ROOT / "games"


def _env(name: str) -> Optional[str]:
    # Empty strings count as unset.
    value = os.environ.get(name)
    return value or None


def get_root_dir() -> Path:
    """
    Determine the resource store root.

    Priority:
    1. Environment variable GAME_REPO_ROOT_DIR
    2. '<workspace root>/games'
    """
    env_path = _env(ROOT_DIR_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return _DEFAULT_ROOT_DIR


def get_host() -> str:
    return _env(HOST_ENV_VAR) or DEFAULT_HOST


def get_preferred_port() -> int:
    raw = _env(PORT_ENV_VAR)
    return int(raw) if raw else DEFAULT_PORT


def get_base_url() -> Optional[str]:
    return _env(BASE_URL_ENV_VAR)


def get_log_level() -> str:
    return (_env(LOG_LEVEL_ENV_VAR) or "INFO").upper()


def default_base_url(port: int, host: str = DEFAULT_HOST) -> str:
    if host in ("0.0.0.0", ""):
        host = DEFAULT_HOST
    return f"http://{host}:{port}"


def load_settings(**overrides: Any) -> RepositorySettings:
    """
    Build repository settings from the environment; keyword arguments win
    over environment values.
    """
    values: dict = {
        "root_dir": get_root_dir(),
        "base_url": get_base_url() or default_base_url(get_preferred_port(), get_host()),
    }
    board_interface = _env(BOARD_INTERFACE_ENV_VAR)
    if board_interface:
        values["board_interface_path"] = Path(board_interface).expanduser()

    values.update(overrides)
    return RepositorySettings(**values)
