"""Storage interfaces for processes and generated projects."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.process.model import Process


class ProcessRepository(ABC):
    """Abstract base class for process repositories."""

    @abstractmethod
    async def get_by_id(self, process_id: str) -> Optional[Process]:
        """Return the process with the given id, or None."""
        pass

    @abstractmethod
    async def get_all(self) -> List[Process]:
        """Return all processes, most recently updated first."""
        pass

    @abstractmethod
    async def add(self, process: Process) -> None:
        """Store a new process."""
        pass

    @abstractmethod
    async def update(self, process: Process) -> None:
        """Replace a stored process."""
        pass

    @abstractmethod
    async def delete(self, process_id: str) -> bool:
        """Delete a process. Returns False if it did not exist."""
        pass


class ProjectFileSink(ABC):
    """Persists generated files into a project tree.

    Paths are ``/``-separated and relative to the project root; folders
    are implied by the path segments.
    """

    @abstractmethod
    async def create_project(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> str:
        """Create a project and return its location."""
        pass

    @abstractmethod
    async def save_file(self, location: str, path: str, content: str) -> None:
        """Write one file into a project."""
        pass


def split_project_path(path: str) -> List[str]:
    """Split a relative project path into segments, rejecting escapes."""
    if not path or path.startswith(("/", "\\")) or (len(path) > 1 and path[1] == ":"):
        raise ValueError(f"Project paths must be relative: {path!r}")
    segments = path.replace("\\", "/").split("/")
    if any(segment in ("", ".", "..") for segment in segments):
        raise ValueError(f"Invalid project path: {path!r}")
    return segments
