"""
Pytest configuration and shared fixtures for FlowForge Generator.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from core.config import Settings
from core.generator.engine import CodeEmitter
from core.generator.models import GenerationRequest, PackageDependency, ProjectConfig
from core.process.model import Activity, ActivityType, Process, SequenceFlow
from core.process.samples import approval_process, order_processing_process
from core.storage.memory import InMemoryProcessRepository


FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def order_process():
    """Sample linear order processing graph."""
    return order_processing_process()


@pytest.fixture
def approval():
    """Sample approval graph with one exclusive gateway."""
    return approval_process()


@pytest.fixture
def minimal_process():
    """Freshly created process with a single start -> end flow."""
    process = Process.create("Minimal", "Smallest valid process")
    process.add_sequence_flow(SequenceFlow.create("start", "end", flow_id="flow1"))
    return process


@pytest.fixture
def task_process():
    """start -> Review Claim -> end."""
    process = Process.create("Claims", process_id="process-claims")
    process.add_activity(Activity.create("Review Claim", ActivityType.USER_TASK, activity_id="review"))
    process.add_sequence_flow(SequenceFlow.create("start", "review", flow_id="flow1"))
    process.add_sequence_flow(SequenceFlow.create("review", "end", flow_id="flow2"))
    return process


@pytest.fixture
def orders_request():
    """Generation request for the order sample with default options."""
    return GenerationRequest(
        process_id="process-order",
        config=ProjectConfig(project_name="Orders", namespace="Orders.Gen"),
        dependencies=[
            PackageDependency(package_id="Microsoft.Extensions.DependencyInjection", version="9.0.0"),
            PackageDependency(package_id="Microsoft.Extensions.Logging.Console", version="9.0.0"),
        ],
    )


@pytest.fixture
def emitter():
    """Emitter with a frozen clock."""
    return CodeEmitter(clock=lambda: FIXED_TIME)


@pytest.fixture
def repository():
    """Repository seeded with the sample processes."""
    return InMemoryProcessRepository.with_samples()
