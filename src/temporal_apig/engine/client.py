"""Temporal client wrapper.

This intentionally wraps temporalio to keep engine calls out of HTTP code and
make tests easy: the HTTP layer only sees :class:`WorkflowEngineClient`.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import Protocol

from temporalio.api.common.v1 import Payloads, WorkflowExecution
from temporalio.api.workflowservice.v1 import SignalWorkflowExecutionRequest
from temporalio.client import Client, WorkflowQueryRejectedError
from temporalio.exceptions import TemporalError
from temporalio.service import RPCError

from temporal_apig.config import GatewaySettings
from temporal_apig.engine.models import (
    ExecuteWorkflowResponse,
    InteractionResponse,
    QueryResponse,
    SignalResponse,
)
from temporal_apig.interaction.errors import UnhandledInteractionError
from temporal_apig.interaction.models import (
    ExecuteInteraction,
    Interaction,
    QueryInteraction,
    SignalInteraction,
    kind_tag,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Awaitable[Client]]


class EngineRequestError(RuntimeError):
    """Raised when Temporal could not be reached or rejected the request."""


class InteractionNotRoutableError(ValueError):
    """The interaction lacks the ids needed to address a workflow execution."""


class WorkflowEngineClient(Protocol):
    """Dispatches a fully populated interaction to the workflow engine."""

    async def execute(self, interaction: Interaction) -> InteractionResponse: ...


class TemporalEngineClient:
    """Temporal-backed :class:`WorkflowEngineClient`.

    One connection per namespace is opened lazily and reused for the lifetime of
    the client.
    """

    def __init__(self, settings: GatewaySettings, *, connect: ClientFactory | None = None) -> None:
        self._target = settings.temporal_target
        self._identity = settings.temporal_identity
        self._connect = connect or self._connect_namespace
        self._clients: dict[str, Client] = {}
        self._lock = asyncio.Lock()

    async def _connect_namespace(self, namespace: str) -> Client:
        return await Client.connect(self._target, namespace=namespace, identity=self._identity)

    async def _client(self, namespace: str) -> Client:
        async with self._lock:
            client = self._clients.get(namespace)
            if client is None:
                logger.info(
                    "Connecting to Temporal",
                    extra={"target": self._target, "namespace": namespace},
                )
                try:
                    client = await self._connect(namespace)
                except (RPCError, RuntimeError) as e:
                    raise EngineRequestError(
                        f"Failed to create Temporal client at {self._target}: {e}"
                    ) from e
                self._clients[namespace] = client
            return client

    async def execute(self, interaction: Interaction) -> InteractionResponse:
        logger.info(
            "Dispatching interaction",
            extra={
                "kind": kind_tag(interaction),
                "namespace": interaction.namespace,
                "workflow_id": interaction.workflow_id,
            },
        )
        try:
            match interaction:
                case ExecuteInteraction():
                    return await self.start_workflow(interaction)
                case SignalInteraction():
                    return await self.signal_workflow(interaction)
                case QueryInteraction():
                    return await self.query_workflow(interaction)
                case _:
                    raise UnhandledInteractionError(interaction)
        except TemporalError as e:
            raise EngineRequestError(f"Temporal rejected {kind_tag(interaction)}: {e}") from e

    async def start_workflow(self, interaction: ExecuteInteraction) -> ExecuteWorkflowResponse:
        client = await self._client(interaction.namespace)
        handle = await client.start_workflow(
            interaction.workflow_type,
            args=list(interaction.args or []),
            id=interaction.workflow_id,
            task_queue=interaction.task_queue,
        )
        return ExecuteWorkflowResponse(run_id=handle.result_run_id or "")

    async def signal_workflow(self, interaction: SignalInteraction) -> SignalResponse:
        if not interaction.workflow_id:
            raise InteractionNotRoutableError("Signal requires a workflow_id")

        client = await self._client(interaction.namespace)

        # The raw service call carries identity, request_id and control, which the
        # workflow handle API does not expose.
        request = SignalWorkflowExecutionRequest(
            namespace=interaction.namespace,
            workflow_execution=WorkflowExecution(
                workflow_id=interaction.workflow_id,
                run_id=interaction.run_id or "",
            ),
            signal_name=interaction.signal_name,
            identity=interaction.identity or self._identity,
            request_id=interaction.request_id or str(uuid.uuid4()),
            control=interaction.control or "",
        )
        if interaction.input is not None:
            payloads = await client.data_converter.encode(list(interaction.input))
            request.input.CopyFrom(Payloads(payloads=payloads))

        await client.workflow_service.signal_workflow_execution(request)
        return SignalResponse()

    async def query_workflow(self, interaction: QueryInteraction) -> QueryResponse:
        if not interaction.workflow_id:
            raise InteractionNotRoutableError("Query requires a workflow_id")

        client = await self._client(interaction.namespace)
        handle = client.get_workflow_handle(interaction.workflow_id, run_id=interaction.run_id)
        try:
            result = await handle.query(
                interaction.query_type, args=list(interaction.query_args or [])
            )
        except WorkflowQueryRejectedError as e:
            return QueryResponse(query_rejected=int(e.status) if e.status is not None else None)
        return QueryResponse(query_result=result)
