"""Test configuration and fixtures."""

from __future__ import annotations

import pytest

from temporal_apig.config import GatewaySettings
from temporal_apig.engine.models import (
    ExecuteWorkflowResponse,
    InteractionResponse,
    QueryResponse,
    SignalResponse,
)
from temporal_apig.interaction.models import (
    ExecuteInteraction,
    Interaction,
    QueryInteraction,
    SignalInteraction,
)


@pytest.fixture
def signal() -> SignalInteraction:
    """Provide a Signal without input."""
    return SignalInteraction(
        namespace="test-namespace",
        task_queue="test-task-queue-rs",
        workflow_id="some-super-long-uuid-string",
        run_id="some-equally-long-uuid-string",
        signal_name="signal_name_thats_defined_in_workflow",
    )


@pytest.fixture
def execute() -> ExecuteInteraction:
    """Provide an Execute with arguments."""
    return ExecuteInteraction(
        namespace="test-namespace",
        task_queue="test-task-queue-rs",
        workflow_id="some-super-long-uuid-string",
        workflow_type="some-wf-function-name",
        args=[{"arg1": "value1"}],
    )


@pytest.fixture
def query() -> QueryInteraction:
    """Provide a Query without arguments."""
    return QueryInteraction(
        namespace="test-namespace",
        task_queue="test-task-queue-rs",
        workflow_id="some-super-long-uuid-string",
        run_id="some-equally-long-uuid-string",
        query_type="current_state",
    )


@pytest.fixture
def settings() -> GatewaySettings:
    """Provide gateway settings that ignore the environment's .env file."""
    return GatewaySettings(
        _env_file=None,
        temporal_service_host="temporal.test",
        temporal_service_port=7233,
        api_token="test-token",
    )


class FakeEngine:
    """Records dispatched interactions instead of calling Temporal."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[Interaction] = []
        self.error = error

    async def execute(self, interaction: Interaction) -> InteractionResponse:
        self.calls.append(interaction)
        if self.error is not None:
            raise self.error
        match interaction:
            case ExecuteInteraction():
                return ExecuteWorkflowResponse(run_id="run-1")
            case SignalInteraction():
                return SignalResponse()
            case _:
                return QueryResponse(query_result={"state": "waiting"})


@pytest.fixture
def make_engine() -> type[FakeEngine]:
    return FakeEngine


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()
