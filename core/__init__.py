"""FlowForge Generator core: process graphs, validation and project emission."""

__version__ = "1.0.0"

from core.process.model import Activity, Gateway, Process, SequenceFlow
from core.process.validation import ValidationReport, validate_process
from core.process.complexity import ProcessComplexity, analyze_complexity
from core.generator.engine import CodeEmitter
from core.orchestration.orchestrator import GenerationOrchestrator

__all__ = [
    "Activity",
    "Gateway",
    "Process",
    "SequenceFlow",
    "ValidationReport",
    "validate_process",
    "ProcessComplexity",
    "analyze_complexity",
    "CodeEmitter",
    "GenerationOrchestrator",
]
