"""In-memory storage adapters."""

import threading
from typing import Any, Dict, List, Optional

import structlog

from core.errors import ProcessNotFoundError
from core.process.model import Process
from core.process.samples import approval_process, order_processing_process

from .interface import ProcessRepository, ProjectFileSink, split_project_path

logger = structlog.get_logger(__name__)


class InMemoryProcessRepository(ProcessRepository):
    """Thread-safe dictionary repository.

    Processes are copied on the way in and out, so callers always work
    on a snapshot.
    """

    def __init__(self):
        self._processes: Dict[str, Process] = {}
        self._lock = threading.Lock()

    @classmethod
    def with_samples(cls) -> "InMemoryProcessRepository":
        repository = cls()
        for process in (order_processing_process(), approval_process()):
            repository._processes[process.id] = process
        return repository

    async def get_by_id(self, process_id: str) -> Optional[Process]:
        with self._lock:
            process = self._processes.get(process_id)
            return process.copy() if process else None

    async def get_all(self) -> List[Process]:
        with self._lock:
            processes = [p.copy() for p in self._processes.values()]
        return sorted(processes, key=lambda p: p.updated_at, reverse=True)

    async def add(self, process: Process) -> None:
        with self._lock:
            if process.id in self._processes:
                raise ValueError(f"Process {process.id} already exists")
            self._processes[process.id] = process.copy()

    async def update(self, process: Process) -> None:
        with self._lock:
            if process.id not in self._processes:
                raise ProcessNotFoundError(process.id)
            self._processes[process.id] = process.copy()

    async def delete(self, process_id: str) -> bool:
        with self._lock:
            return self._processes.pop(process_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._processes)


class InMemoryProjectSink(ProjectFileSink):
    """Keeps generated projects in memory, mainly for tests and previews."""

    def __init__(self):
        self.projects: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    async def create_project(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> str:
        split_project_path(name)
        location = f"memory://{name}"
        with self._lock:
            self.projects[location] = {"metadata": dict(metadata or {}), "files": {}}
        logger.debug("project_created", location=location)
        return location

    async def save_file(self, location: str, path: str, content: str) -> None:
        split_project_path(path)
        with self._lock:
            if location not in self.projects:
                raise KeyError(f"Unknown project {location}")
            self.projects[location]["files"][path] = content

    def files(self, location: str) -> Dict[str, str]:
        return dict(self.projects[location]["files"])

    def tree(self, location: str) -> Dict[str, Any]:
        """Nested folder view: folders are dicts, files map to their content."""
        root: Dict[str, Any] = {}
        for path, content in sorted(self.projects[location]["files"].items()):
            *folders, filename = split_project_path(path)
            node = root
            for folder in folders:
                node = node.setdefault(folder, {})
            node[filename] = content
        return root
