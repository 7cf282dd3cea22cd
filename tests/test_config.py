from __future__ import annotations

import socket
from pathlib import Path

import pytest

from gamerepo.core import config
from gamerepo.main import find_available_port


def test_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(config.ROOT_DIR_ENV_VAR, str(tmp_path / "store"))
    monkeypatch.setenv(config.BASE_URL_ENV_VAR, "http://repo.example:8080")
    monkeypatch.setenv(config.BOARD_INTERFACE_ENV_VAR, str(tmp_path / "Board.js"))

    settings = config.load_settings()

    assert settings.root_dir == tmp_path / "store"
    assert settings.base_url == "http://repo.example:8080"
    assert settings.shared_script_path == tmp_path / "Board.js"


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (config.BASE_URL_ENV_VAR, config.BOARD_INTERFACE_ENV_VAR, config.PORT_ENV_VAR, config.HOST_ENV_VAR):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(config.ROOT_DIR_ENV_VAR, "")

    settings = config.load_settings(root_dir=tmp_path)

    assert settings.root_dir == tmp_path
    assert settings.base_url == "http://127.0.0.1:9140"
    assert settings.namespace_prefix == "/games/"
    assert settings.aggregate_metadata_uri == "/games/metadata"
    assert settings.shared_script_path == tmp_path / "resources" / "scripts" / "BoardInterface.js"


def test_empty_root_dir_variable_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(config.ROOT_DIR_ENV_VAR, "")

    assert config.get_root_dir().name == "games"


def test_default_base_url_replaces_wildcard_host() -> None:
    assert config.default_base_url(9141, "0.0.0.0") == "http://127.0.0.1:9141"


def test_find_available_port_skips_busy_port() -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        busy_port = busy.getsockname()[1]

        port = find_available_port("127.0.0.1", busy_port, max_offset=50)

    assert port != busy_port
    assert busy_port < port < busy_port + 50


def test_find_available_port_gives_up(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("gamerepo.main._port_is_free", lambda host, port: False)

    with pytest.raises(RuntimeError, match="Local server creation failed"):
        find_available_port("127.0.0.1", 9140, max_offset=3)
