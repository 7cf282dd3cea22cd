import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

import aiofiles
import aiofiles.os

from gamerepo.domain.paths import version_of_dir_name
from gamerepo.storage.store_manager import ResourceStore

logger = logging.getLogger(__name__)


class FileSystemStore(ResourceStore):
    def __init__(self, root_dir: Path, ignored_entries: Iterable[str] = (".svn",)):
        self._root_dir = Path(os.path.normpath(Path(root_dir).expanduser().absolute()))
        self._ignored = frozenset(ignored_entries)

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    def resolve(self, relative: str) -> Optional[Path]:
        candidate = Path(os.path.normpath(self._root_dir / relative.lstrip("/")))
        if candidate != self._root_dir and self._root_dir not in candidate.parents:
            logger.warning(f"Refusing path outside of store root: {relative!r}")
            return None
        return candidate

    async def exists(self, path: Path) -> bool:
        return await aiofiles.os.path.exists(path)

    async def is_dir(self, path: Path) -> bool:
        return await aiofiles.os.path.isdir(path)

    async def list_children(self, path: Path) -> List[str]:
        names = await aiofiles.os.listdir(path)
        return [name for name in names if name not in self._ignored]

    async def read_text(self, path: Path) -> str:
        # Universal newlines turn "\r\n" and "\r" into "\n"; every line,
        # including the last one, is terminated with a single "\n".
        lines: List[str] = []
        async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
            async for line in f:
                lines.append(line[:-1] if line.endswith("\n") else line)
        return "".join(line + "\n" for line in lines)

    async def read_bytes(self, path: Path) -> bytes:
        async with aiofiles.open(path, "rb") as f:
            return await f.read()

    async def get_max_version(self, relative: str) -> int:
        resource_dir = self.resolve(relative)
        if resource_dir is None or not await self.is_dir(resource_dir):
            return 0

        try:
            children = await self.list_children(resource_dir)
        except OSError as e:
            logger.warning(f"Could not scan versions of {resource_dir}: {e}")
            return 0

        max_version = 0
        for name in children:
            version = version_of_dir_name(name)
            if version is not None and version > max_version:
                max_version = version
        return max_version
