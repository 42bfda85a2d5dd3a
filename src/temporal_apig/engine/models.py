"""Responses returned to callers after an interaction reaches Temporal."""

from __future__ import annotations

from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field, JsonValue


class ExecuteWorkflowResponse(BaseModel):
    type: Literal["ExecuteWorkflow"] = "ExecuteWorkflow"
    run_id: str


class SignalResponse(BaseModel):
    type: Literal["Signal"] = "Signal"


class QueryResponse(BaseModel):
    type: Literal["Query"] = "Query"
    query_result: JsonValue = None
    # Workflow execution status when the query was rejected.
    query_rejected: int | None = None


InteractionResponse: TypeAlias = Annotated[
    ExecuteWorkflowResponse | SignalResponse | QueryResponse,
    Field(discriminator="type"),
]
