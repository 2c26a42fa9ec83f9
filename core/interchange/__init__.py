"""Interchange formats for process graphs."""

from .bpmn_xml import BPMN_NAMESPACE, export_process, import_process
from .yaml_loader import load_process_file, load_process_string
from .loader import load_process

__all__ = [
    "BPMN_NAMESPACE",
    "export_process",
    "import_process",
    "load_process",
    "load_process_file",
    "load_process_string",
]
