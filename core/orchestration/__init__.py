"""Generation orchestration: phases, progress and result aggregation."""

from .orchestrator import GenerationOrchestrator
from .progress import ProgressReporter

__all__ = ["GenerationOrchestrator", "ProgressReporter"]
