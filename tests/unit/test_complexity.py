"""Tests for core.process.complexity."""

import pytest

from core.process.complexity import analyze_complexity, complexity_level
from core.process.model import Activity, Gateway, Process, SequenceFlow


def _graph(activity_count, gateway_count, flow_count):
    return Process.restore(
        id="p",
        name="Synthetic",
        activities=[Activity(f"a{i}", f"A{i}", "Task") for i in range(activity_count)],
        gateways=[Gateway(f"g{i}", f"G{i}", "Exclusive") for i in range(gateway_count)],
        sequence_flows=[SequenceFlow(f"f{i}", "a0", "a1") for i in range(flow_count)],
    )


class TestCyclomaticComplexity:

    def test_seven_flows_six_nodes(self):
        metrics = analyze_complexity(_graph(5, 1, 7))

        assert metrics.cyclomatic_complexity == 3
        assert metrics.complexity_level == "Low"

    def test_order_sample(self, order_process):
        metrics = analyze_complexity(order_process)

        assert metrics.activity_count == 8
        assert metrics.gateway_count == 0
        assert metrics.flow_count == 7
        assert metrics.path_count == 1
        assert metrics.cyclomatic_complexity == 1

    def test_approval_sample(self, approval):
        metrics = analyze_complexity(approval)

        assert metrics.gateway_count == 1
        assert metrics.path_count == 2
        assert metrics.cyclomatic_complexity == 7 - 7 + 2

    def test_no_flows(self):
        assert analyze_complexity(Process.create("Empty")).cyclomatic_complexity == 0


class TestPathCount:

    def test_two_to_the_gateway_count(self):
        assert analyze_complexity(_graph(2, 3, 0)).path_count == 8

    def test_gateway_type_is_ignored(self):
        process = _graph(2, 0, 0)
        process.add_gateway(Gateway.create("Fork", "Parallel"))
        process.add_gateway(Gateway.create("Maybe", "Inclusive"))

        assert analyze_complexity(process).path_count == 4


class TestComplexityLevel:

    @pytest.mark.parametrize("value,level", [
        (1, "Low"),
        (10, "Low"),
        (11, "Medium"),
        (20, "Medium"),
        (21, "High"),
    ])
    def test_thresholds(self, value, level):
        assert complexity_level(value) == level

    def test_high_graph(self):
        assert analyze_complexity(_graph(2, 0, 30)).complexity_level == "High"


class TestTypeDistribution:

    def test_counts_in_first_seen_order(self, order_process):
        distribution = analyze_complexity(order_process).activity_type_distribution

        assert list(distribution) == ["StartEvent", "EndEvent", "ReceiveTask", "ServiceTask", "UserTask", "SendTask"]
        assert distribution["ServiceTask"] == 3
