"""Process complexity metrics."""

from dataclasses import dataclass, field
from typing import Dict

from .model import Process

LOW = "Low"
MEDIUM = "Medium"
HIGH = "High"


@dataclass(frozen=True)
class ProcessComplexity:
    activity_count: int
    gateway_count: int
    flow_count: int
    path_count: int
    cyclomatic_complexity: int
    complexity_level: str
    activity_type_distribution: Dict[str, int] = field(default_factory=dict)


def complexity_level(cyclomatic: int) -> str:
    if cyclomatic <= 10:
        return LOW
    if cyclomatic <= 20:
        return MEDIUM
    return HIGH


def analyze_complexity(process: Process) -> ProcessComplexity:
    """Compute McCabe-style complexity for a process graph.

    Nodes are activities plus gateways, edges are sequence flows and the
    graph is treated as one connected component. ``path_count`` assumes
    every gateway is a binary split, regardless of its type.
    """
    activity_count = len(process.activities)
    gateway_count = len(process.gateways)
    flow_count = len(process.sequence_flows)

    nodes = activity_count + gateway_count
    cyclomatic = flow_count - nodes + 2 * 1

    distribution: Dict[str, int] = {}
    for activity in process.activities:
        distribution[activity.type] = distribution.get(activity.type, 0) + 1

    return ProcessComplexity(
        activity_count=activity_count,
        gateway_count=gateway_count,
        flow_count=flow_count,
        path_count=2 ** gateway_count,
        cyclomatic_complexity=cyclomatic,
        complexity_level=complexity_level(cyclomatic),
        activity_type_distribution=distribution,
    )
