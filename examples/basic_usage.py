#!/usr/bin/env python3
"""Slack button example.

This demonstrates embedding signal routing into a Slack block:

* build the routing metadata for a running workflow
* encode it as the button's ``action_id`` (with a short user-data suffix)
* show what the gateway recovers when Slack posts the click back

No Slack or Temporal connection is made.
"""

from __future__ import annotations

import argparse
import json
from typing import Sequence

from temporal_apig.interaction import SignalWithoutInput, encode_signal_no_args
from temporal_apig.interaction.codec import decode_with_user_data
from temporal_apig.interaction.models import interaction_to_json


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a Slack button that signals a workflow.")
    parser.add_argument("--namespace", required=True, help="Temporal namespace")
    parser.add_argument("--task-queue", required=True, help="Task queue of the workflow")
    parser.add_argument("--workflow-id", required=True, help="Workflow id to signal")
    parser.add_argument("--run-id", default=None, help="Run id (optional)")
    parser.add_argument("--signal", required=True, help="Signal name defined in the workflow")
    parser.add_argument("--user-data", default="", help="Short suffix echoed back by Slack")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    routing = SignalWithoutInput(
        namespace=args.namespace,
        task_queue=args.task_queue,
        workflow_id=args.workflow_id,
        run_id=args.run_id,
        signal_name=args.signal,
    )
    action_id = encode_signal_no_args(routing)
    if args.user_data:
        action_id = f"{action_id}~{args.user_data}"

    block = {
        "type": "actions",
        "elements": [
            {
                "type": "button",
                "text": {"type": "plain_text", "text": "Approve"},
                "action_id": action_id,
                "value": "approve",
            }
        ],
    }
    print(json.dumps(block, indent=2))

    interaction, user_data = decode_with_user_data(action_id)
    print("Gateway routes the click to:")
    print(interaction_to_json(interaction))
    print(f"user data: {user_data!r}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
