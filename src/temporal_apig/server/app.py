"""FastAPI app factory.

Endpoints are intentionally thin wrappers over the codec, the Slack adapter and
the workflow-engine client. Routes are versioned under ``/api/{version}``:

- ``/api/{version}/``
- ``/api/{version}/slack/interaction``
- ``/api/{version}/temporal/interact`` (bearer-token protected)
- ``/api/{version}/temporal/encode``
- ``/api/{version}/temporal/decode``
"""

from __future__ import annotations

import logging
import secrets
from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, Form, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from temporal_apig import __version__
from temporal_apig.config import GatewaySettings
from temporal_apig.engine import (
    EngineRequestError,
    InteractionNotRoutableError,
    InteractionResponse,
    TemporalEngineClient,
    WorkflowEngineClient,
)
from temporal_apig.interaction import DecodeError, Interaction, UnsafeValueError
from temporal_apig.interaction.codec import decode, encode
from temporal_apig.interaction.models import interaction_to_json, parse_interaction
from temporal_apig.server.models import DecodeRequest, HealthResponse
from temporal_apig.server.versions import (
    UNSUPPORTED_API_VERSION_MSG,
    ApiVersion,
    UnsupportedApiVersionError,
    resolve_api_version,
)
from temporal_apig.slack import (
    CallbackIdMissingError,
    SlackPayloadError,
    UnsupportedInteractionError,
    handle_slack_interaction,
)

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def _parse_body(payload: dict[str, Any]) -> Interaction:
    try:
        return parse_interaction(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


def _engine(request: Request) -> WorkflowEngineClient:
    return request.app.state.engine


def create_app(
    settings: GatewaySettings | None = None,
    engine: WorkflowEngineClient | None = None,
) -> FastAPI:
    settings = settings or GatewaySettings()

    app = FastAPI(
        title="Temporal API Gateway",
        version=__version__,
        description="Routes third-party webhook callbacks to Temporal workflows.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Expose settings and the engine client for request handlers.
    app.state.settings = settings
    app.state.engine = engine or TemporalEngineClient(settings)

    _install_error_handlers(app)

    def require_api_token(
        credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    ) -> None:
        if not settings.api_token.strip():
            raise HTTPException(
                status_code=409,
                detail="APIG_API_TOKEN is required for this endpoint",
            )
        if credentials is None or not secrets.compare_digest(
            credentials.credentials, settings.api_token
        ):
            raise HTTPException(
                status_code=401,
                detail="Invalid or missing bearer token",
                headers={"WWW-Authenticate": "Bearer"},
            )

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(environment=settings.environment.value)

    api = APIRouter()

    @api.get("", response_class=PlainTextResponse)
    @api.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def version_check(api_version: ApiVersion = Depends(resolve_api_version)) -> str:
        message = f"received request with version {api_version.name}"
        logger.info(message)
        return message

    @api.post("/temporal/encode", status_code=201, response_class=PlainTextResponse)
    def temporal_encode(
        payload: dict[str, Any] = Body(...),
        api_version: ApiVersion = Depends(resolve_api_version),
    ) -> str:
        interaction = _parse_body(payload)
        match api_version:
            case ApiVersion.V1:
                return encode(interaction, strict=True)

    @api.post("/temporal/decode", status_code=201)
    def temporal_decode(
        req: DecodeRequest,
        api_version: ApiVersion = Depends(resolve_api_version),
    ) -> Response:
        match api_version:
            case ApiVersion.V1:
                interaction = decode(req.encoded)
                return Response(
                    content=interaction_to_json(interaction),
                    media_type="application/json",
                    status_code=201,
                )

    @api.post(
        "/temporal/interact",
        status_code=201,
        dependencies=[Depends(require_api_token)],
        response_model=InteractionResponse,
    )
    async def temporal_interact(
        request: Request,
        payload: dict[str, Any] = Body(...),
        api_version: ApiVersion = Depends(resolve_api_version),
    ) -> InteractionResponse:
        interaction = _parse_body(payload)
        match api_version:
            case ApiVersion.V1:
                return await _engine(request).execute(interaction)

    @api.post("/slack/interaction")
    async def slack_interaction(
        request: Request,
        payload: str = Form(...),
        api_version: ApiVersion = Depends(resolve_api_version),
    ) -> Response:
        match api_version:
            case ApiVersion.V1:
                await handle_slack_interaction(payload, _engine(request))
                return Response(status_code=200)

    app.include_router(api, prefix="/api/{version}")
    return app


def _install_error_handlers(app: FastAPI) -> None:
    """Map gateway errors to HTTP responses.

    Everything caused by the caller's input is a 4xx; only engine failures are
    reported as a bad gateway.
    """

    @app.exception_handler(UnsupportedApiVersionError)
    async def _unsupported_version(_request: Request, _exc: UnsupportedApiVersionError) -> Response:
        return PlainTextResponse(UNSUPPORTED_API_VERSION_MSG, status_code=404)

    @app.exception_handler(DecodeError)
    async def _decode_error(_request: Request, exc: DecodeError) -> Response:
        logger.warning(
            "Rejected callback id",
            extra={"error": type(exc).__name__, "encoded": exc.encoded},
        )
        return JSONResponse({"detail": str(exc)}, status_code=400)

    @app.exception_handler(UnsafeValueError)
    async def _unsafe_value(_request: Request, exc: UnsafeValueError) -> Response:
        return JSONResponse({"detail": str(exc), "field": exc.field}, status_code=422)

    @app.exception_handler(SlackPayloadError)
    @app.exception_handler(CallbackIdMissingError)
    @app.exception_handler(UnsupportedInteractionError)
    @app.exception_handler(InteractionNotRoutableError)
    async def _bad_request(_request: Request, exc: Exception) -> Response:
        logger.warning("Rejected request", extra={"error": str(exc)})
        return JSONResponse({"detail": str(exc)}, status_code=400)

    @app.exception_handler(EngineRequestError)
    async def _engine_error(_request: Request, exc: EngineRequestError) -> Response:
        logger.error("Temporal request failed", exc_info=exc)
        return JSONResponse({"detail": str(exc)}, status_code=502)
