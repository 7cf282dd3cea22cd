"""
Pydantic models for the versioned game repository.

This module defines the data models used throughout the application, including:
- Repository settings (resource root, base URL, reserved names)
- Parsed request paths
- Materialized response payloads

All models use Pydantic for validation, serialization, and type safety.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


# Payload returned for files that are absent or could not be read.
EMPTY_OBJECT_PAYLOAD = b"{}"


# ---------------------------------------------------------------------------
# Repository Configuration Models
# ---------------------------------------------------------------------------


class RepositorySettings(BaseModel):
    """
    Runtime configuration for the game repository server.

    Built once at startup (see ``gamerepo.core.config.load_settings``) and
    owned by the ``GameRepository`` instance for the lifetime of the app.
    """

    model_config = ConfigDict(frozen=True)

    root_dir: Path = Field(
        description="Directory under which all resource and version directories live.",
    )
    base_url: str = Field(
        default="http://127.0.0.1:9140",
        description="The server's own base URL, bound to the ROOT entity in stylesheets.",
    )
    namespace: str = Field(
        default="games",
        description="Top-level path segment under which resources are versioned.",
    )
    metadata_leaf: str = Field(
        default="METADATA",
        description="Reserved leaf name holding a resource's metadata JSON object.",
    )
    ignored_entries: List[str] = Field(
        default_factory=lambda: [".svn"],
        description="Housekeeping entry names hidden from listings and version scans.",
    )
    binary_extensions: List[str] = Field(
        default_factory=lambda: [".png", ".gif", ".jpg", ".jpeg", ".ico"],
        description="Image extensions returned verbatim as opaque bytes.",
    )
    stylesheet_extension: str = Field(
        default=".xsl",
        description="Extension of stylesheet templates that receive the ROOT entity declaration.",
    )
    script_extension: str = Field(
        default=".js",
        description="Extension of scripts that may splice in the shared board interface.",
    )
    board_interface_path: Optional[Path] = Field(
        default=None,
        description="Shared script fragment; defaults to <root_dir>/resources/scripts/BoardInterface.js.",
    )
    board_interface_token: str = Field(
        default="[BOARD_INTERFACE_JS]",
        description="Placeholder replaced (first occurrence only) by the shared script fragment.",
    )

    @property
    def namespace_prefix(self) -> str:
        """URI prefix of the versioned namespace, e.g. ``/games/``."""
        return f"/{self.namespace}/"

    @property
    def aggregate_metadata_uri(self) -> str:
        return f"/{self.namespace}/metadata"

    @property
    def shared_script_path(self) -> Path:
        if self.board_interface_path is not None:
            return self.board_interface_path
        return self.root_dir / "resources" / "scripts" / "BoardInterface.js"


# ---------------------------------------------------------------------------
# Request Path Models
# ---------------------------------------------------------------------------


class ResourcePath(BaseModel):
    """
    A parsed request path: ``prefix [/v<explicit_version>] /leaf``.

    ``prefix`` never contains the version segment; reconstructing the URI from
    the three parts must give back the original request path.
    """

    model_config = ConfigDict(frozen=True)

    prefix: str
    explicit_version: Optional[int] = None
    leaf: str

    def to_uri(self) -> str:
        if self.explicit_version is None:
            return f"{self.prefix}/{self.leaf}"
        return f"{self.prefix}/v{self.explicit_version}/{self.leaf}"

    def versioned_file(self, version: int) -> str:
        """Store-relative location of ``leaf`` at the given version."""
        if version == 0:
            return f"{self.prefix}/{self.leaf}"
        return f"{self.prefix}/v{version}/{self.leaf}"


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------


class ContentKind(str, Enum):
    """Classification of a materialized payload, derived from the file it came from."""

    MISSING = "missing"
    UNREADABLE = "unreadable"
    LISTING = "listing"
    BINARY = "binary"
    STYLESHEET = "stylesheet"
    SCRIPT = "script"
    TEXT = "text"
    METADATA = "metadata"
    AGGREGATE = "aggregate"


class MaterializedContent(BaseModel):
    """
    Immutable response bytes plus their content classification.

    ``MISSING`` and ``UNREADABLE`` both carry the empty-object payload; only
    ``MISSING`` lets version fallback move on to an earlier version.
    """

    model_config = ConfigDict(frozen=True)

    body: bytes
    kind: ContentKind
    media_type: str = "application/json"

    @property
    def found(self) -> bool:
        return self.kind is not ContentKind.MISSING

    @classmethod
    def missing(cls) -> "MaterializedContent":
        return cls(body=EMPTY_OBJECT_PAYLOAD, kind=ContentKind.MISSING)

    @classmethod
    def unreadable(cls) -> "MaterializedContent":
        return cls(body=EMPTY_OBJECT_PAYLOAD, kind=ContentKind.UNREADABLE)
