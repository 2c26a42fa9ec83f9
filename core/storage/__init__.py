"""Repositories and project sinks."""

from .interface import ProcessRepository, ProjectFileSink
from .memory import InMemoryProcessRepository, InMemoryProjectSink
from .filesystem import FileSystemProjectSink

__all__ = [
    "ProcessRepository",
    "ProjectFileSink",
    "InMemoryProcessRepository",
    "InMemoryProjectSink",
    "FileSystemProjectSink",
]
