"""CLI entrypoint for the gateway.

Subcommands:
- serve:  run the HTTP gateway
- encode: turn an interaction (JSON) into a callback id
- decode: turn a callback id back into an interaction (JSON)
"""

from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from pydantic import ValidationError

from temporal_apig import __version__
from temporal_apig.config import GatewaySettings
from temporal_apig.interaction.codec import EncoderVersion, decode, encode
from temporal_apig.interaction.errors import DecodeError, UnsafeValueError
from temporal_apig.interaction.models import interaction_to_json, parse_interaction_json
from temporal_apig.logging import configure_logging
from temporal_apig.server.app import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="temporal-apig",
        description="Route third-party webhook callbacks to Temporal workflows",
    )
    parser.add_argument("--version", action="version", version=f"temporal-apig {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP gateway")
    serve.add_argument("--host", default=None, help="Bind address (defaults to APIG_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (defaults to APIG_PORT)")

    encode_cmd = subparsers.add_parser("encode", help="Encode an interaction into a callback id")
    encode_cmd.add_argument(
        "--json",
        dest="json_text",
        required=True,
        help='Interaction as JSON, e.g. \'{"type": "Signal", "namespace": ...}\'',
    )
    encode_cmd.add_argument(
        "--encoder-version",
        choices=[v.value for v in EncoderVersion],
        default=None,
        help="Encoder version (defaults to the current default)",
    )
    encode_cmd.add_argument(
        "--strict",
        action="store_true",
        help="Fail if a value contains a reserved delimiter (~ , :)",
    )

    decode_cmd = subparsers.add_parser("decode", help="Decode a callback id into JSON")
    decode_cmd.add_argument("encoded", help="The encoded callback id")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = GatewaySettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "serve":
            host = args.host or settings.host
            port = args.port or settings.port
            logger.info(
                "Starting gateway",
                extra={
                    "host": host,
                    "port": port,
                    "temporal_target": settings.temporal_target,
                    "environment": settings.environment.value,
                },
            )
            uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
            return 0

        if args.command == "encode":
            interaction = parse_interaction_json(args.json_text)
            version = EncoderVersion(args.encoder_version) if args.encoder_version else None
            print(encode(interaction, version, strict=args.strict))
            return 0

        if args.command == "decode":
            print(interaction_to_json(decode(args.encoded)))
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (DecodeError, UnsafeValueError, ValidationError) as e:
        logger.warning(str(e), extra={"command": args.command, "error": type(e).__name__})
        print(str(e), file=sys.stderr)
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
