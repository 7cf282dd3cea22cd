from typing import Any, Dict, Optional
import json
import logging

from gamerepo.domain.errors import RepositoryError
from gamerepo.domain.models import ContentKind, MaterializedContent, RepositorySettings
from gamerepo.domain.paths import expand_directory_uri, parse_resource_path
from gamerepo.services.materializer import ContentMaterializer
from gamerepo.services.metadata import adjust_metadata_json, parse_metadata_object
from gamerepo.storage.filesystem_store import FileSystemStore
from gamerepo.storage.store_manager import ResourceStore

logger = logging.getLogger(__name__)


class GameRepository:
    """
    Resolves request paths against the versioned resource store.

    Everything under the namespace prefix (``/games/`` by default) is
    versioned: version 0 lives directly in the resource directory and
    version N > 0 in its ``v<N>`` child. A file missing at the requested
    version is inherited from the nearest earlier version that has it.
    Paths outside the namespace are served directly from the store root.
    """

    def __init__(self, settings: RepositorySettings, store: Optional[ResourceStore] = None):
        self.settings = settings
        self.store = store or FileSystemStore(settings.root_dir, settings.ignored_entries)
        self.materializer = ContentMaterializer(self.store, settings)

    async def get_response_bytes(self, uri: str) -> Optional[bytes]:
        content = await self.get_content(uri)
        return None if content is None else content.body

    async def get_content(self, uri: str) -> Optional[MaterializedContent]:
        """
        Resolve ``uri`` to a payload, or None when there is nothing to serve.

        Raises ``MalformedResourcePath`` when the path does not survive
        parsing, and ``MetadataFormatError`` when a metadata file is not a
        JSON object.
        """
        settings = self.settings

        # Shared assets outside the namespace are not versioned.
        if not uri.startswith(settings.namespace_prefix):
            return await self.materializer.materialize(self.store.resolve(uri))

        if uri == settings.aggregate_metadata_uri:
            return await self.get_aggregate_metadata()

        uri = expand_directory_uri(uri, settings.namespace_prefix, settings.metadata_leaf)
        parsed = parse_resource_path(uri)

        max_version = await self.store.get_max_version(parsed.prefix)
        target_version = parsed.explicit_version
        if target_version is None:
            target_version = max_version
        if target_version < 0 or target_version > max_version:
            logger.debug(f"{uri}: version {target_version} outside 0..{max_version}")
            return None

        for version in range(target_version, -1, -1):
            content = await self.materializer.materialize(
                self.store.resolve(parsed.versioned_file(version))
            )
            if not content.found:
                continue

            logger.debug(f"{uri}: resolved at version {version}")
            if parsed.leaf == settings.metadata_leaf:
                body = adjust_metadata_json(content.body, parsed.explicit_version, max_version)
                return MaterializedContent(body=body, kind=ContentKind.METADATA)
            return content

        logger.debug(f"{uri}: not present at any version up to {target_version}")
        return None

    async def get_aggregate_metadata(self) -> MaterializedContent:
        """
        Build a JSON object mapping every resource name to its current
        metadata. Resources whose metadata cannot be resolved are left out.
        """
        namespace = self.settings.namespace
        aggregate: Dict[str, Any] = {}

        resource_root = self.store.resolve(f"/{namespace}")
        try:
            names = await self.store.list_children(resource_root)
        except OSError as e:
            logger.warning(f"Could not list resources under /{namespace}: {e}")
            names = []

        for name in names:
            try:
                content = await self.get_content(f"/{namespace}/{name}/")
                if content is None:
                    logger.debug(f"Skipping {name}: no metadata")
                    continue
                aggregate[name] = parse_metadata_object(content.body)
            except RepositoryError as e:
                logger.warning(f"Skipping {name} in aggregate metadata: {e}")

        return MaterializedContent(
            body=json.dumps(aggregate).encode("utf-8"),
            kind=ContentKind.AGGREGATE,
        )
