"""Process graph model, structural validation and complexity analysis."""

from .model import Activity, Gateway, Process, SequenceFlow, ActivityType, GatewayType
from .validation import ValidationIssue, ValidationReport, validate_process
from .complexity import ProcessComplexity, analyze_complexity

__all__ = [
    "Activity",
    "Gateway",
    "Process",
    "SequenceFlow",
    "ActivityType",
    "GatewayType",
    "ValidationIssue",
    "ValidationReport",
    "validate_process",
    "ProcessComplexity",
    "analyze_complexity",
]
