from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional


class ResourceStore(ABC):
    """
    Abstract base class for the read-only resource store.

    These are the only filesystem primitives the resolver and materializer
    need; nothing here writes to the store.
    """

    @abstractmethod
    def resolve(self, relative: str) -> Optional[Path]:
        """
        Map a store-relative location (e.g. "/games/ticTacToe/METADATA") to a
        concrete path, or None when it would fall outside the store root.
        """
        pass

    @abstractmethod
    async def exists(self, path: Path) -> bool:
        pass

    @abstractmethod
    async def is_dir(self, path: Path) -> bool:
        pass

    @abstractmethod
    async def list_children(self, path: Path) -> List[str]:
        """Immediate child names in native enumeration order, housekeeping entries excluded."""
        pass

    @abstractmethod
    async def read_text(self, path: Path) -> str:
        """Read a text file line by line, normalizing every line terminator to "\\n"."""
        pass

    @abstractmethod
    async def read_bytes(self, path: Path) -> bytes:
        pass

    @abstractmethod
    async def get_max_version(self, relative: str) -> int:
        """
        Highest N such that a ``v<N>`` child exists in the resource directory,
        or 0 when there is none or the directory is absent.
        """
        pass
