"""Workflow-engine boundary: dispatch interactions to Temporal."""

from temporal_apig.engine.client import (
    EngineRequestError,
    InteractionNotRoutableError,
    TemporalEngineClient,
    WorkflowEngineClient,
)
from temporal_apig.engine.models import (
    ExecuteWorkflowResponse,
    InteractionResponse,
    QueryResponse,
    SignalResponse,
)

__all__ = [
    "EngineRequestError",
    "ExecuteWorkflowResponse",
    "InteractionNotRoutableError",
    "InteractionResponse",
    "QueryResponse",
    "SignalResponse",
    "TemporalEngineClient",
    "WorkflowEngineClient",
]
