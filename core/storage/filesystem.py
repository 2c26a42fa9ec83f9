"""Filesystem project sink."""

import json
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from .interface import ProjectFileSink, split_project_path

logger = structlog.get_logger(__name__)

METADATA_FILE = ".flowforge.json"


class FileSystemProjectSink(ProjectFileSink):
    """Writes generated projects under ``root/<name>/``."""

    def __init__(self, root, overwrite: bool = False):
        self.root = Path(root)
        self.overwrite = overwrite

    async def create_project(self, name: str, metadata: Optional[Dict[str, Any]] = None) -> str:
        split_project_path(name)
        project_dir = self.root / name

        if project_dir.exists():
            if not self.overwrite:
                raise FileExistsError(f"Project directory already exists: {project_dir}")
            shutil.rmtree(project_dir)

        project_dir.mkdir(parents=True)
        if metadata:
            (project_dir / METADATA_FILE).write_text(
                json.dumps(metadata, indent=2, sort_keys=True, default=str),
                encoding="utf-8",
            )

        logger.info("project_created", location=str(project_dir))
        return str(project_dir)

    async def save_file(self, location: str, path: str, content: str) -> None:
        target = Path(location).joinpath(*split_project_path(path))
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        logger.debug("project_file_saved", path=path, size=len(content))
