"""Slack interactivity adapter.

Slack posts interactions as a form body with a single ``payload`` field holding
JSON. The callback id we issued earlier comes back in a different place for each
interaction type:
https://api.slack.com/interactivity/handling#payloads
"""

from __future__ import annotations

import json
import logging

from pydantic import BaseModel, ConfigDict, ValidationError

from temporal_apig.engine import InteractionResponse, WorkflowEngineClient
from temporal_apig.interaction import decode, with_args
from temporal_apig.interaction.models import kind_tag

logger = logging.getLogger(__name__)


class SlackPayloadError(ValueError):
    """The interaction payload is not valid JSON or not a Slack interaction."""


class CallbackIdMissingError(ValueError):
    pass


class UnsupportedInteractionError(ValueError):
    pass


class SlackAction(BaseModel):
    model_config = ConfigDict(extra="allow")

    action_id: str | None = None


class SlackView(BaseModel):
    model_config = ConfigDict(extra="allow")

    callback_id: str | None = None


class SlackInteractionEvent(BaseModel):
    """The subset of a Slack interaction payload needed for routing."""

    model_config = ConfigDict(extra="allow")

    type: str
    callback_id: str | None = None
    actions: list[SlackAction] | None = None
    view: SlackView | None = None


def parse_interaction_payload(payload: str) -> tuple[SlackInteractionEvent, dict[str, object]]:
    """Parse the form ``payload`` field.

    Returns:
        The routing view of the event and the raw JSON object, which is what gets
        forwarded to the workflow.
    """

    try:
        raw = json.loads(payload)
        event = SlackInteractionEvent.model_validate(raw)
    except (json.JSONDecodeError, ValidationError) as e:
        raise SlackPayloadError(f"Failed to read slack interaction event: {e}") from e
    return event, raw


def callback_id_of(event: SlackInteractionEvent) -> str:
    match event.type:
        case "block_actions":
            if not event.actions:
                raise CallbackIdMissingError("No actions in block actions event")
            callback_id = event.actions[0].action_id
        case "dialog_submission" | "message_action" | "shortcut":
            callback_id = event.callback_id
        case "view_submission" | "view_closed":
            callback_id = event.view.callback_id if event.view is not None else None
        case _:
            raise UnsupportedInteractionError(f"Unsupported interaction type: {event.type!r}")

    if not callback_id:
        raise CallbackIdMissingError(f"callback_id not provided in {event.type} event")
    return callback_id


async def handle_slack_interaction(
    payload: str, engine: WorkflowEngineClient
) -> InteractionResponse:
    """Decode the callback id of a Slack interaction and forward the event.

    The whole interaction event becomes the single argument of the command.

    Raises:
        SlackPayloadError, CallbackIdMissingError, UnsupportedInteractionError,
        DecodeError: the request is not routable.
        EngineRequestError: Temporal could not be reached or rejected the call.
    """

    event, raw = parse_interaction_payload(payload)
    callback_id = callback_id_of(event)
    interaction = with_args(decode(callback_id), [raw])

    logger.info(
        "Routing slack interaction",
        extra={"slack_type": event.type, "kind": kind_tag(interaction)},
    )
    return await engine.execute(interaction)
