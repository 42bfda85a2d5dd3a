"""Encoder version ``A``: comma separated ``code:value`` pairs.

    A~E:Signal,W:some-super-long-uuid-string,N:test-namespace,T:test-task-queue,R:some-equally-long-uuid-string,S:signal_name_thats_defined_in_workflow~Some user data

The third-party callback id is limited to 255 characters and the routing pairs
take up around 170 of them, which leaves roughly 80 characters for user data
appended after a second ``~``.

Values are written as-is. A value containing ``~``, ``,`` or ``:`` corrupts the
string; keeping names and ids free of those characters is the caller's job.

Only routing fields have codes. Argument fields and the Signal ``identity``,
``request_id`` and ``control`` are not encoded and decode as absent.
"""

from __future__ import annotations

import logging
from enum import Enum

from temporal_apig.interaction.errors import (
    MalformedPairError,
    MissingEventKindError,
    MissingRequiredFieldError,
    UnhandledInteractionError,
    UnknownEventKindError,
    UnknownKeyError,
)
from temporal_apig.interaction.models import (
    EventKind,
    ExecuteInteraction,
    Interaction,
    QueryInteraction,
    SignalInteraction,
    kind_tag,
    namespace_of,
    task_queue_of,
    workflow_id_of,
)
from temporal_apig.interaction.strategy import (
    KEY_DELIMITER,
    PAIR_DELIMITER,
    SECTION_DELIMITER,
    VersionStrategy,
)

logger = logging.getLogger(__name__)


class FieldKey(str, Enum):
    """Short field codes used by version ``A``."""

    E = "E"  # Event kind (Execute, Signal, Query)
    W = "W"  # Workflow id
    N = "N"  # Namespace
    T = "T"  # Task queue
    Y = "Y"  # workflow tYpe, aka function name
    R = "R"  # workflow Run id
    S = "S"  # Signal name
    Q = "Q"  # Query type
    U = "U"  # qUery args

    def __str__(self) -> str:
        return self.value

    @property
    def field_name(self) -> str:
        return _FIELD_NAMES[self]

    def to_pair(self, value: str) -> str:
        return f"{self.value}{KEY_DELIMITER}{value}"

    @classmethod
    def parse(cls, code: str) -> FieldKey:
        try:
            return cls(code)
        except ValueError:
            raise UnknownKeyError(code) from None


_FIELD_NAMES: dict[FieldKey, str] = {
    FieldKey.E: "type",
    FieldKey.W: "workflow_id",
    FieldKey.N: "namespace",
    FieldKey.T: "task_queue",
    FieldKey.Y: "workflow_type",
    FieldKey.R: "run_id",
    FieldKey.S: "signal_name",
    FieldKey.Q: "query_type",
    FieldKey.U: "query_args",
}

# Canonical emission order. Changing it changes every string version A produces.
EMISSION_ORDER: tuple[FieldKey, ...] = (
    FieldKey.E,
    FieldKey.W,
    FieldKey.N,
    FieldKey.T,
    FieldKey.Y,
    FieldKey.R,
    FieldKey.S,
    FieldKey.Q,
    FieldKey.U,
)


def iterate() -> tuple[FieldKey, ...]:
    return EMISSION_ORDER


def _relevant_values(interaction: Interaction) -> dict[FieldKey, str]:
    values: dict[FieldKey, str] = {
        FieldKey.N: namespace_of(interaction),
        FieldKey.T: task_queue_of(interaction),
    }
    match interaction:
        case ExecuteInteraction():
            values[FieldKey.W] = workflow_id_of(interaction)
            values[FieldKey.Y] = interaction.workflow_type
        case SignalInteraction():
            if interaction.workflow_id is not None:
                values[FieldKey.W] = interaction.workflow_id
            if interaction.run_id is not None:
                values[FieldKey.R] = interaction.run_id
            values[FieldKey.S] = interaction.signal_name
        case QueryInteraction():
            if interaction.workflow_id is not None:
                values[FieldKey.W] = interaction.workflow_id
            if interaction.run_id is not None:
                values[FieldKey.R] = interaction.run_id
            values[FieldKey.Q] = interaction.query_type
        case _:
            raise UnhandledInteractionError(interaction)
    return values


def _parse_pairs(routing: str) -> dict[FieldKey, str]:
    fields: dict[FieldKey, str] = {}
    for token in routing.split(PAIR_DELIMITER):
        code, sep, value = token.partition(KEY_DELIMITER)
        if not sep:
            raise MalformedPairError(token)
        # Encode never emits duplicates; last write wins.
        fields[FieldKey.parse(code)] = value
    return fields


def _take_required(
    fields: dict[FieldKey, str], key: FieldKey, *, allow_empty: bool = True
) -> str:
    value = fields.pop(key, None)
    if value is None or (not allow_empty and not value):
        raise MissingRequiredFieldError(key.field_name)
    return value


class VersionA(VersionStrategy):
    def emitted_values(self, interaction: Interaction) -> list[tuple[str, str]]:
        values = _relevant_values(interaction)
        out = [(FieldKey.E.field_name, kind_tag(interaction))]
        out.extend((key.field_name, values[key]) for key in iterate() if key in values)
        return out

    def encode(self, interaction: Interaction) -> str:
        values = _relevant_values(interaction)
        pairs = [FieldKey.E.to_pair(kind_tag(interaction))]
        pairs.extend(key.to_pair(values[key]) for key in iterate() if key in values)
        return PAIR_DELIMITER.join(pairs)

    def decode(self, body: str) -> Interaction:
        # Anything after a second section delimiter is caller data.
        routing, _, _user_data = body.partition(SECTION_DELIMITER)
        fields = _parse_pairs(routing)

        kind_raw = fields.pop(FieldKey.E, None)
        if kind_raw is None:
            raise MissingEventKindError("Interaction event kind not supplied in callback id")
        try:
            kind = EventKind(kind_raw)
        except ValueError:
            raise UnknownEventKindError(kind_raw) from None

        namespace = _take_required(fields, FieldKey.N, allow_empty=False)
        task_queue = _take_required(fields, FieldKey.T, allow_empty=False)

        interaction: Interaction
        if kind is EventKind.EXECUTE:
            interaction = ExecuteInteraction(
                namespace=namespace,
                task_queue=task_queue,
                workflow_id=_take_required(fields, FieldKey.W),
                workflow_type=_take_required(fields, FieldKey.Y),
                args=None,
            )
        elif kind is EventKind.SIGNAL:
            interaction = SignalInteraction(
                namespace=namespace,
                task_queue=task_queue,
                workflow_id=fields.pop(FieldKey.W, None),
                run_id=fields.pop(FieldKey.R, None),
                signal_name=_take_required(fields, FieldKey.S),
                input=None,
            )
        elif kind is EventKind.QUERY:
            interaction = QueryInteraction(
                namespace=namespace,
                task_queue=task_queue,
                workflow_id=fields.pop(FieldKey.W, None),
                run_id=fields.pop(FieldKey.R, None),
                query_type=_take_required(fields, FieldKey.Q),
                query_args=None,
            )
        else:
            raise UnknownEventKindError(kind_raw)

        if fields:
            logger.debug(
                "Ignoring unconsumed callback id fields",
                extra={"kind": kind.value, "fields": [key.value for key in fields]},
            )
        return interaction
