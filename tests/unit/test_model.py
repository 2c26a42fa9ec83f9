"""
Tests for core.process.model.

Tests cover:
- Factory seeding of start and end events
- Append-only construction and updated_at bookkeeping
- Partial updates
- restore() and copy()
"""

from datetime import datetime, timezone

import pytest

from core.process.model import Activity, ActivityType, Gateway, GatewayType, Process, SequenceFlow


class TestProcessCreate:
    """Process.create factory."""

    def test_seeds_start_and_end(self):
        """The first two activities are the start and end events."""
        process = Process.create("Order", "desc")

        assert len(process.activities) == 2
        assert process.activities[0].type == ActivityType.START_EVENT
        assert process.activities[1].type == ActivityType.END_EVENT
        assert process.activities[0].id == "start"
        assert process.activities[1].id == "end"

    def test_seeded_names_are_ascii(self):
        process = Process.create("审批")

        assert [a.name for a in process.activities] == ["Start", "End"]

    def test_defaults(self):
        process = Process.create("Order")

        assert process.version == "1.0"
        assert process.description == ""
        assert process.id
        assert process.sequence_flows == ()
        assert process.gateways == ()
        assert process.created_at.tzinfo is not None

    def test_generated_ids_are_unique(self):
        assert Process.create("a").id != Process.create("b").id

    def test_explicit_id(self):
        assert Process.create("a", process_id="p-1").id == "p-1"


class TestProcessAppend:
    """add_* operations."""

    def test_add_activity_appends_after_seeded_events(self):
        process = Process.create("Order")
        activity = process.add_activity(Activity.create("Ship", ActivityType.SERVICE_TASK))

        assert process.activities[-1] is activity
        assert [a.type for a in process.activities[:2]] == ["StartEvent", "EndEvent"]

    def test_add_bumps_updated_at(self):
        process = Process.create("Order")
        old = datetime(2000, 1, 1, tzinfo=timezone.utc)

        for add in (
            lambda: process.add_activity(Activity.create("A", "Task")),
            lambda: process.add_gateway(Gateway.create("G", GatewayType.EXCLUSIVE)),
            lambda: process.add_sequence_flow(SequenceFlow.create("start", "end")),
        ):
            process.updated_at = old
            add()
            assert process.updated_at > old

    def test_flows_are_not_checked(self):
        """Dangling references are accepted; validation is separate."""
        process = Process.create("Order")
        process.add_sequence_flow(SequenceFlow.create("nowhere", "missing"))

        assert len(process.sequence_flows) == 1

    def test_collections_are_read_only(self):
        process = Process.create("Order")

        assert isinstance(process.activities, tuple)
        with pytest.raises(AttributeError):
            process.activities.append(Activity.create("x", "Task"))

    def test_incoming_and_outgoing(self, task_process):
        assert [f.id for f in task_process.outgoing("review")] == ["flow2"]
        assert [f.id for f in task_process.incoming("review")] == ["flow1"]
        assert task_process.outgoing("end") == ()


class TestProcessUpdate:
    """Partial updates."""

    def test_update_name_only(self):
        process = Process.create("Old", "keep me")
        process.update(name="New")

        assert process.name == "New"
        assert process.description == "keep me"

    def test_update_description_only(self):
        process = Process.create("Name", "old")
        process.update(description="new")

        assert process.name == "Name"
        assert process.description == "new"

    def test_update_bumps_timestamp(self):
        process = Process.create("Name")
        process.updated_at = datetime(2000, 1, 1, tzinfo=timezone.utc)
        process.update(name="Other")

        assert process.updated_at.year > 2000


class TestRestoreAndCopy:
    """restore() and copy()."""

    def test_restore_does_not_seed(self):
        process = Process.restore(
            id="p",
            name="Imported",
            activities=[Activity("a1", "A", "Task")],
        )

        assert [a.id for a in process.activities] == ["a1"]

    def test_copy_is_detached(self, order_process):
        clone = order_process.copy()
        clone.add_activity(Activity.create("Extra", "Task"))
        clone.activities[2].properties["k"] = "v"
        clone.activities[2].name = "Renamed"

        assert len(order_process.activities) == 8
        assert order_process.activities[2].properties == {}
        assert order_process.activities[2].name == "Receive Order"

    def test_copy_preserves_identity_fields(self, order_process):
        clone = order_process.copy()

        assert clone.id == order_process.id
        assert clone.created_at == order_process.created_at
        assert clone.updated_at == order_process.updated_at
        assert [f.id for f in clone.sequence_flows] == [f.id for f in order_process.sequence_flows]


class TestElementFactories:
    """Activity, SequenceFlow and Gateway factories."""

    def test_activity_create(self):
        activity = Activity.create("名称", ActivityType.USER_TASK, properties={"owner": "ops"})

        assert activity.id
        assert activity.name == "名称"
        assert activity.properties == {"owner": "ops"}
        assert not activity.is_start and not activity.is_end

    def test_sequence_flow_condition(self):
        flow = SequenceFlow.create("a", "b", condition_expression="x > 1", flow_id="f")

        assert flow.id == "f"
        assert flow.condition_expression == "x > 1"

    def test_gateway_create(self):
        gateway = Gateway.create("Split", GatewayType.PARALLEL)

        assert gateway.type == "Parallel"
        assert gateway.id
