"""Process graph model.

A process is an append-only aggregate of activities, gateways and the
sequence flows between them. Flows refer to nodes by id only; nothing
checks that the referenced node exists; that is the validator's job.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Tuple
from uuid import uuid4

import structlog

logger = structlog.get_logger(__name__)


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityType:
    """Well-known activity type names. Activity.type stays an open string."""

    START_EVENT = "StartEvent"
    END_EVENT = "EndEvent"
    INTERMEDIATE_EVENT = "IntermediateEvent"
    TASK = "Task"
    USER_TASK = "UserTask"
    SERVICE_TASK = "ServiceTask"
    SEND_TASK = "SendTask"
    RECEIVE_TASK = "ReceiveTask"
    MANUAL_TASK = "ManualTask"
    SCRIPT_TASK = "ScriptTask"
    BUSINESS_RULE_TASK = "BusinessRuleTask"

    ALL = (
        START_EVENT,
        END_EVENT,
        INTERMEDIATE_EVENT,
        TASK,
        USER_TASK,
        SERVICE_TASK,
        SEND_TASK,
        RECEIVE_TASK,
        MANUAL_TASK,
        SCRIPT_TASK,
        BUSINESS_RULE_TASK,
    )


class GatewayType:
    """Well-known gateway type names."""

    EXCLUSIVE = "Exclusive"
    PARALLEL = "Parallel"
    INCLUSIVE = "Inclusive"
    EVENT_BASED = "EventBased"
    COMPLEX = "Complex"

    ALL = (EXCLUSIVE, PARALLEL, INCLUSIVE, EVENT_BASED, COMPLEX)


@dataclass
class Activity:
    """A unit of work or lifecycle event in a process."""
    id: str
    name: str
    type: str
    properties: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        name: str,
        type: str,
        activity_id: Optional[str] = None,
        properties: Optional[Dict[str, str]] = None,
    ) -> "Activity":
        return cls(
            id=activity_id or _new_id(),
            name=name,
            type=type,
            properties=dict(properties or {}),
        )

    @property
    def is_start(self) -> bool:
        return self.type == ActivityType.START_EVENT

    @property
    def is_end(self) -> bool:
        return self.type == ActivityType.END_EVENT


@dataclass
class SequenceFlow:
    """Directed edge between two nodes, optionally guarded by a condition."""
    id: str
    source_ref: str
    target_ref: str
    condition_expression: Optional[str] = None

    @classmethod
    def create(
        cls,
        source_ref: str,
        target_ref: str,
        condition_expression: Optional[str] = None,
        flow_id: Optional[str] = None,
    ) -> "SequenceFlow":
        return cls(
            id=flow_id or _new_id(),
            source_ref=source_ref,
            target_ref=target_ref,
            condition_expression=condition_expression,
        )


@dataclass
class Gateway:
    """Branching or merging node."""
    id: str
    name: str
    type: str

    @classmethod
    def create(cls, name: str, type: str, gateway_id: Optional[str] = None) -> "Gateway":
        return cls(id=gateway_id or _new_id(), name=name, type=type)


class Process:
    """Aggregate root for a process graph.

    Use :meth:`create` for new processes; it seeds a start and an end
    event. :meth:`restore` rebuilds a process whose elements are already
    complete (imports, repository copies) and seeds nothing.
    """

    DEFAULT_VERSION = "1.0"
    START_ID = "start"
    END_ID = "end"

    def __init__(
        self,
        id: str,
        name: str,
        description: str = "",
        version: str = DEFAULT_VERSION,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        now = _utcnow()
        self.id = id
        self.name = name
        self.description = description
        self.version = version
        self.created_at = created_at or now
        self.updated_at = updated_at or self.created_at
        self._activities: list = []
        self._sequence_flows: list = []
        self._gateways: list = []

    @classmethod
    def create(
        cls,
        name: str,
        description: str = "",
        process_id: Optional[str] = None,
    ) -> "Process":
        """Create a new process seeded with a start and an end event."""
        process = cls(id=process_id or _new_id(), name=name, description=description)
        # ASCII names: the identifier sanitizer keeps only ASCII letters.
        process._activities.append(
            Activity(id=cls.START_ID, name="Start", type=ActivityType.START_EVENT)
        )
        process._activities.append(
            Activity(id=cls.END_ID, name="End", type=ActivityType.END_EVENT)
        )
        return process

    @classmethod
    def restore(
        cls,
        id: str,
        name: str,
        description: str = "",
        version: str = DEFAULT_VERSION,
        activities: Iterable[Activity] = (),
        sequence_flows: Iterable[SequenceFlow] = (),
        gateways: Iterable[Gateway] = (),
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> "Process":
        process = cls(
            id=id,
            name=name,
            description=description,
            version=version,
            created_at=created_at,
            updated_at=updated_at,
        )
        process._activities.extend(activities)
        process._sequence_flows.extend(sequence_flows)
        process._gateways.extend(gateways)
        return process

    @property
    def activities(self) -> Tuple[Activity, ...]:
        return tuple(self._activities)

    @property
    def sequence_flows(self) -> Tuple[SequenceFlow, ...]:
        return tuple(self._sequence_flows)

    @property
    def gateways(self) -> Tuple[Gateway, ...]:
        return tuple(self._gateways)

    def add_activity(self, activity: Activity) -> Activity:
        """Append an activity."""
        self._activities.append(activity)
        self._touch()
        return activity

    def add_sequence_flow(self, flow: SequenceFlow) -> SequenceFlow:
        """Append a sequence flow. Endpoints are not checked."""
        self._sequence_flows.append(flow)
        self._touch()
        return flow

    def add_gateway(self, gateway: Gateway) -> Gateway:
        """Append a gateway."""
        self._gateways.append(gateway)
        self._touch()
        return gateway

    def update(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        """Replace the fields that are given; others keep their value."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        self._touch()

    def find_activity(self, activity_id: str) -> Optional[Activity]:
        for activity in self._activities:
            if activity.id == activity_id:
                return activity
        return None

    def incoming(self, node_id: str) -> Tuple[SequenceFlow, ...]:
        return tuple(f for f in self._sequence_flows if f.target_ref == node_id)

    def outgoing(self, node_id: str) -> Tuple[SequenceFlow, ...]:
        return tuple(f for f in self._sequence_flows if f.source_ref == node_id)

    def copy(self) -> "Process":
        """Detached copy; element objects are duplicated too."""
        return Process.restore(
            id=self.id,
            name=self.name,
            description=self.description,
            version=self.version,
            activities=[
                Activity(a.id, a.name, a.type, dict(a.properties)) for a in self._activities
            ],
            sequence_flows=[
                SequenceFlow(f.id, f.source_ref, f.target_ref, f.condition_expression)
                for f in self._sequence_flows
            ],
            gateways=[Gateway(g.id, g.name, g.type) for g in self._gateways],
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def _touch(self) -> None:
        # Never move backwards if the clock does.
        self.updated_at = max(_utcnow(), self.updated_at)

    def __repr__(self) -> str:
        return (
            f"Process(id={self.id!r}, name={self.name!r}, "
            f"activities={len(self._activities)}, flows={len(self._sequence_flows)}, "
            f"gateways={len(self._gateways)})"
        )
