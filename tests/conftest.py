"""Shared fixtures for the game repository tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Union

import pytest
from fastapi.testclient import TestClient

from gamerepo.domain.entities import GameRepository
from gamerepo.domain.models import RepositorySettings
from gamerepo.main import create_app

BASE_URL = "http://127.0.0.1:9140"


def write_files(root: Path, files: Mapping[str, Union[str, bytes]]) -> None:
    """Create ``files`` (store-relative path -> content) under ``root``."""

    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8", newline="")


@pytest.fixture()
def store_root(tmp_path: Path) -> Path:
    root = tmp_path / "store"
    (root / "games").mkdir(parents=True)
    return root


@pytest.fixture()
def settings(store_root: Path) -> RepositorySettings:
    return RepositorySettings(root_dir=store_root, base_url=BASE_URL)


@pytest.fixture()
def repository(settings: RepositorySettings) -> GameRepository:
    return GameRepository(settings)


@pytest.fixture()
def make_store(store_root: Path) -> Callable[[Mapping[str, Union[str, bytes]]], Path]:
    def _factory(files: Mapping[str, Union[str, bytes]]) -> Path:
        write_files(store_root, files)
        return store_root

    return _factory


@pytest.fixture()
def client(settings: RepositorySettings) -> TestClient:
    return TestClient(create_app(settings=settings))
