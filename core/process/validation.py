"""Structural validation of process graphs.

All rules run on every call; none short-circuits. The checks are local
(per node incoming/outgoing) and do not walk the graph from start to end.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from .model import ActivityType, Process

logger = structlog.get_logger(__name__)

NO_START_EVENT = "NO_START_EVENT"
MULTIPLE_START_EVENTS = "MULTIPLE_START_EVENTS"
NO_END_EVENT = "NO_END_EVENT"
NO_INCOMING_FLOW = "NO_INCOMING_FLOW"
NO_OUTGOING_FLOW = "NO_OUTGOING_FLOW"
DEADLOCK_DETECTED = "DEADLOCK_DETECTED"


@dataclass
class ValidationIssue:
    """A single validation finding."""
    code: str
    message: str
    element_id: Optional[str] = None
    severity: str = "error"  # error, warning

    def __str__(self) -> str:
        suffix = f" [{self.element_id}]" if self.element_id else ""
        return f"{self.code}: {self.message}{suffix}"


@dataclass
class ValidationReport:
    """Outcome of :func:`validate_process`."""
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def codes(self) -> List[str]:
        return [issue.code for issue in self.errors + self.warnings]

    def _error(self, code: str, message: str, element_id: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(code, message, element_id, "error"))

    def _warning(self, code: str, message: str, element_id: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(code, message, element_id, "warning"))


def validate_process(process: Process) -> ValidationReport:
    """Compute errors and warnings for a process. Never raises for bad graphs."""
    report = ValidationReport()
    activities = process.activities
    flows = process.sequence_flows

    sources = {flow.source_ref for flow in flows}
    targets = {flow.target_ref for flow in flows}

    # Start events
    start_count = sum(1 for a in activities if a.type == ActivityType.START_EVENT)
    if start_count == 0:
        report._error(NO_START_EVENT, "Process must have a start event")
    elif start_count > 1:
        report._warning(
            MULTIPLE_START_EVENTS,
            f"Process has {start_count} start events",
        )

    # End events
    if not any(a.type == ActivityType.END_EVENT for a in activities):
        report._error(NO_END_EVENT, "Process must have an end event")

    # Connectivity of intermediate nodes
    for activity in activities:
        if activity.type in (ActivityType.START_EVENT, ActivityType.END_EVENT):
            continue
        if activity.id not in targets:
            report._warning(
                NO_INCOMING_FLOW,
                f"Activity '{activity.name}' has no incoming flow",
                activity.id,
            )
        if activity.id not in sources:
            report._warning(
                NO_OUTGOING_FLOW,
                f"Activity '{activity.name}' has no outgoing flow",
                activity.id,
            )

    # Dead ends; overlaps with NO_OUTGOING_FLOW for the same node
    for activity in activities:
        if activity.type == ActivityType.END_EVENT:
            continue
        if activity.id not in sources:
            report._error(
                DEADLOCK_DETECTED,
                f"Activity '{activity.name}' is a dead end",
                activity.id,
            )

    logger.debug(
        "process_validated",
        process_id=process.id,
        valid=report.is_valid,
        errors=len(report.errors),
        warnings=len(report.warnings),
    )
    return report
