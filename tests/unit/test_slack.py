from __future__ import annotations

import asyncio
import json

import pytest

from temporal_apig.interaction import DecodeError, QueryInteraction, encode
from temporal_apig.slack import (
    CallbackIdMissingError,
    SlackPayloadError,
    UnsupportedInteractionError,
    callback_id_of,
    handle_slack_interaction,
    parse_interaction_payload,
)

CALLBACK_ID = "A~E:Signal,W:wf,N:ns,T:tq,S:go"


def _event(raw: dict[str, object]):
    event, _ = parse_interaction_payload(json.dumps(raw))
    return event


@pytest.mark.parametrize(
    "raw",
    [
        {"type": "block_actions", "actions": [{"action_id": CALLBACK_ID}, {"action_id": "x"}]},
        {"type": "dialog_submission", "callback_id": CALLBACK_ID},
        {"type": "message_action", "callback_id": CALLBACK_ID},
        {"type": "shortcut", "callback_id": CALLBACK_ID},
        {"type": "view_submission", "view": {"callback_id": CALLBACK_ID}},
        {"type": "view_closed", "view": {"callback_id": CALLBACK_ID}},
    ],
)
def test_callback_id_location_per_type(raw: dict[str, object]) -> None:
    assert callback_id_of(_event(raw)) == CALLBACK_ID


def test_parse_keeps_raw_event() -> None:
    raw = {"type": "shortcut", "callback_id": CALLBACK_ID, "trigger_id": "123.456"}

    event, parsed = parse_interaction_payload(json.dumps(raw))

    assert parsed == raw
    assert event.type == "shortcut"


@pytest.mark.parametrize("payload", ["{not json", "[]", json.dumps({"callback_id": "x"})])
def test_parse_rejects_non_interactions(payload: str) -> None:
    with pytest.raises(SlackPayloadError):
        parse_interaction_payload(payload)


@pytest.mark.parametrize(
    "raw",
    [
        {"type": "block_actions"},
        {"type": "block_actions", "actions": [{"value": "no action id"}]},
        {"type": "message_action"},
        {"type": "view_submission"},
        {"type": "view_closed", "view": {"callback_id": ""}},
    ],
)
def test_missing_callback_id(raw: dict[str, object]) -> None:
    with pytest.raises(CallbackIdMissingError):
        callback_id_of(_event(raw))


def test_unsupported_interaction_type() -> None:
    with pytest.raises(UnsupportedInteractionError):
        callback_id_of(_event({"type": "interactive_message", "callback_id": CALLBACK_ID}))


def test_handle_forwards_event_as_single_argument(fake_engine, query: QueryInteraction) -> None:
    raw = {"type": "message_action", "callback_id": encode(query) + "~from-menu"}

    response = asyncio.run(handle_slack_interaction(json.dumps(raw), fake_engine))

    assert response.type == "Query"
    (dispatched,) = fake_engine.calls
    assert dispatched == query.model_copy(update={"query_args": [raw]})


def test_handle_rejects_foreign_callback_ids(fake_engine) -> None:
    raw = {"type": "shortcut", "callback_id": "someone-elses-shortcut"}

    with pytest.raises(DecodeError):
        asyncio.run(handle_slack_interaction(json.dumps(raw), fake_engine))
    assert fake_engine.calls == []
