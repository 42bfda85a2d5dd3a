"""Interaction commands routed to the workflow engine.

An interaction is one of three commands: start a workflow (Execute), signal a
running workflow (Signal) or query a running workflow (Query). The JSON form is
a flat object tagged by ``type``:

    {
        "type": "Signal",
        "namespace": "test-namespace",
        "task_queue": "test-task-queue",
        "workflow_id": "some-super-long-uuid-string",
        "run_id": "some-equally-long-uuid-string",
        "signal_name": "signal_name_thats_defined_in_workflow"
    }

Argument fields (``args``, ``input``, ``query_args``) never travel inside a
callback id. They are attached after decoding with :func:`with_args`.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, JsonValue, TypeAdapter

from temporal_apig.interaction.errors import UnhandledInteractionError


class EventKind(str, Enum):
    """Discriminant of :data:`Interaction`. Values are the wire tags."""

    EXECUTE = "Execute"
    SIGNAL = "Signal"
    QUERY = "Query"

    def __str__(self) -> str:
        return self.value


class _InteractionBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    namespace: str = Field(min_length=1)
    task_queue: str = Field(min_length=1)


class ExecuteInteraction(_InteractionBase):
    """Start a new workflow execution."""

    type: Literal["Execute"] = "Execute"

    workflow_id: str
    # The workflow's function name.
    workflow_type: str
    args: list[JsonValue] | None = None


class SignalInteraction(_InteractionBase):
    """Send a signal to a running workflow."""

    type: Literal["Signal"] = "Signal"

    workflow_id: str | None = None
    run_id: str | None = None
    signal_name: str
    input: list[JsonValue] | None = None
    identity: str | None = None
    request_id: str | None = None
    control: str | None = None


class QueryInteraction(_InteractionBase):
    """Query a running workflow."""

    type: Literal["Query"] = "Query"

    workflow_id: str | None = None
    run_id: str | None = None
    query_type: str
    query_args: list[JsonValue] | None = None


Interaction: TypeAlias = Annotated[
    ExecuteInteraction | SignalInteraction | QueryInteraction,
    Field(discriminator="type"),
]

INTERACTION_ADAPTER: TypeAdapter[Interaction] = TypeAdapter(Interaction)


class SignalWithoutInput(BaseModel):
    """Routing metadata of a Signal, without its input payload.

    Useful for routing webhook events back to a workflow: the event itself is
    sent as the signal's input once the callback id comes back.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(min_length=1)
    task_queue: str = Field(min_length=1)
    workflow_id: str | None = None
    run_id: str | None = None
    signal_name: str

    def to_signal(self) -> SignalInteraction:
        return SignalInteraction(**self.model_dump())


def kind_of(interaction: Interaction) -> EventKind:
    match interaction:
        case ExecuteInteraction():
            return EventKind.EXECUTE
        case SignalInteraction():
            return EventKind.SIGNAL
        case QueryInteraction():
            return EventKind.QUERY
        case _:
            raise UnhandledInteractionError(interaction)


def kind_tag(interaction: Interaction) -> str:
    """Canonical discriminant name: ``"Execute"``, ``"Signal"`` or ``"Query"``."""

    return kind_of(interaction).value


def namespace_of(interaction: Interaction) -> str:
    return interaction.namespace


def task_queue_of(interaction: Interaction) -> str:
    return interaction.task_queue


def workflow_id_of(interaction: Interaction) -> str:
    """Workflow id of any variant; absence is normalized to ``""``."""

    return interaction.workflow_id or ""


def with_args(interaction: Interaction, args: list[JsonValue] | None) -> Interaction:
    """Return a copy with the variant's argument field replaced by ``args``."""

    match interaction:
        case ExecuteInteraction():
            return interaction.model_copy(update={"args": args})
        case SignalInteraction():
            return interaction.model_copy(update={"input": args})
        case QueryInteraction():
            return interaction.model_copy(update={"query_args": args})
        case _:
            raise UnhandledInteractionError(interaction)


def parse_interaction(obj: object) -> Interaction:
    """Validate a decoded JSON value into an interaction.

    Raises:
        pydantic.ValidationError: if the value does not match any variant.
    """

    return INTERACTION_ADAPTER.validate_python(obj)


def parse_interaction_json(text: str | bytes) -> Interaction:
    return INTERACTION_ADAPTER.validate_json(text)


def interaction_to_json(interaction: Interaction) -> str:
    return INTERACTION_ADAPTER.dump_json(interaction).decode("utf-8")
