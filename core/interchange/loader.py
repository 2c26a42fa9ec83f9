"""Load a process from a file, choosing the format by suffix."""

from pathlib import Path

from core.process.model import Process

from .bpmn_xml import import_process
from .yaml_loader import load_process_file

BPMN_SUFFIXES = (".bpmn", ".xml")
YAML_SUFFIXES = (".yaml", ".yml")


def load_process(path: Path) -> Process:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in BPMN_SUFFIXES:
        return import_process(path.read_bytes())
    if suffix in YAML_SUFFIXES:
        return load_process_file(path)
    raise ValueError(
        f"Unsupported process file '{path.name}': expected one of "
        + ", ".join(BPMN_SUFFIXES + YAML_SUFFIXES)
    )
