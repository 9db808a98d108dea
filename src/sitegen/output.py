"""Artifact targets: where generated files go."""

from pathlib import Path
from typing import Protocol

from .core import get_logger

logger = get_logger(__name__)


class ArtifactTarget(Protocol):
    """Destination of generated files, addressed by relative POSIX paths."""

    def exists(self, path: str) -> bool:
        """Check whether a file already exists."""
        ...

    def read(self, path: str) -> str:
        """Read a file back."""
        ...

    def write(self, path: str, content: str) -> None:
        """Create or replace a file."""
        ...


class DirectoryTarget:
    """Writes artifacts below a root directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        full = (self.root / path).resolve()
        if not full.is_relative_to(self.root):
            raise ValueError(f"Path escapes output directory: {path}")
        return full

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def write(self, path: str, content: str) -> None:
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        full.write_text(content, encoding="utf-8")
        logger.debug("artifact_written", path=path, bytes=len(content))


class MemoryTarget:
    """In-memory target (tests, dry runs)."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.writes = 0

    def exists(self, path: str) -> bool:
        return path in self.files

    def read(self, path: str) -> str:
        return self.files[path]

    def write(self, path: str, content: str) -> None:
        self.files[path] = content
        self.writes += 1
