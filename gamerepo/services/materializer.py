"""
Turns a concrete store path into response bytes.

Dispatch, in priority order:
- missing path -> empty-object payload (``MISSING``)
- directory -> JSON array of child names
- image extension -> raw bytes
- stylesheet template -> ROOT entity declaration + text
- script -> text with the shared board interface spliced in
- anything else -> text, reassembled line by line

Read failures never escape: they produce the empty-object payload with kind
``UNREADABLE``.
"""
from __future__ import annotations

import json
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from gamerepo.domain.models import ContentKind, MaterializedContent, RepositorySettings
from gamerepo.storage.store_manager import ResourceStore

logger = logging.getLogger(__name__)


class ContentMaterializer:
    def __init__(self, store: ResourceStore, settings: RepositorySettings):
        self.store = store
        self.settings = settings
        self._binary_extensions = {ext.lower() for ext in settings.binary_extensions}
        self._stylesheet_extension = settings.stylesheet_extension.lower()
        self._script_extension = settings.script_extension.lower()

    async def materialize(self, path: Optional[Path]) -> MaterializedContent:
        if path is None or not await self.store.exists(path):
            return MaterializedContent.missing()

        try:
            if await self.store.is_dir(path):
                return await self._read_directory(path)

            suffix = path.suffix.lower()
            if suffix in self._binary_extensions:
                return MaterializedContent(
                    body=await self.store.read_bytes(path),
                    kind=ContentKind.BINARY,
                    media_type=_guess_media_type(path, "application/octet-stream"),
                )
            if suffix == self._stylesheet_extension:
                text = self.transform_stylesheet(await self.store.read_text(path))
                return MaterializedContent(
                    body=text.encode("utf-8"),
                    kind=ContentKind.STYLESHEET,
                    media_type="text/xsl",
                )
            if suffix == self._script_extension:
                text = await self.transform_script(await self.store.read_text(path))
                return MaterializedContent(
                    body=text.encode("utf-8"),
                    kind=ContentKind.SCRIPT,
                    media_type="application/javascript",
                )

            text = await self.store.read_text(path)
            return MaterializedContent(
                body=text.encode("utf-8"),
                kind=ContentKind.TEXT,
                media_type=_guess_media_type(path, "text/plain"),
            )
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read {path}, serving empty object: {e}")
            return MaterializedContent.unreadable()

    def transform_stylesheet(self, content: str) -> str:
        """
        Bind a ROOT entity to the server's base URL so stylesheets can refer to
        other repository resources without a hardcoded host.
        """
        return f'<!DOCTYPE stylesheet [<!ENTITY ROOT "{self.settings.base_url}">]>\n\n' + content

    async def transform_script(self, content: str) -> str:
        """
        Replace the first board interface placeholder with the shared script.
        The shared script is re-read on every substitution.
        """
        token = self.settings.board_interface_token
        if token not in content:
            return content
        shared = await self.store.read_text(self.settings.shared_script_path)
        return content.replace(token, shared, 1)

    async def _read_directory(self, path: Path) -> MaterializedContent:
        children = await self.store.list_children(path)
        return MaterializedContent(
            body=json.dumps(children).encode("utf-8"),
            kind=ContentKind.LISTING,
        )


def _guess_media_type(path: Path, default: str) -> str:
    media_type, _ = mimetypes.guess_type(path.name)
    return media_type or default
