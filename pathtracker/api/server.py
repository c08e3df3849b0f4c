"""aiohttp application exposing the tracking service over HTTP."""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar

from aiohttp import web
from pydantic import BaseModel, ValidationError

from ..config import PathTrackerConfig
from ..errors import InvalidArgumentError, PathTrackerError
from ..export.formatter import GPX_CONTENT_TYPE, ExportFormat, track_filename
from ..services.tracking_service import TrackingService
from .schemas import LocationUpdateRequest, StartSessionRequest

logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("tracking_service", TrackingService)
CORS_ORIGIN_KEY = web.AppKey("cors_origin", str)

STATUS_BY_KIND = {
    "invalid_argument": 400,
    "invalid_state": 400,
    "expired": 400,
    "not_found": 404,
}

ModelT = TypeVar("ModelT", bound=BaseModel)


async def _read_body(request: web.Request, model: Type[ModelT], message: str) -> ModelT:
    try:
        body = await request.json()
    except json.JSONDecodeError:
        raise InvalidArgumentError("Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise InvalidArgumentError(message)
    try:
        return model.model_validate(body)
    except ValidationError as e:
        logger.debug(f"Rejected {model.__name__}: {e}")
        raise InvalidArgumentError(message) from None


def _json(data: Dict[str, Any], status: int = 200) -> web.Response:
    return web.json_response(data, status=status)


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Map core error kinds to status codes; anything unexpected becomes 500."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except PathTrackerError as e:
        status = STATUS_BY_KIND.get(e.kind, 400)
        logger.info(f"{request.method} {request.path} -> {status}: {e.message}")
        return _json({"error": e.message, "kind": e.kind}, status=status)
    except Exception:
        logger.exception(f"Unhandled error for {request.method} {request.path}")
        return _json({"error": "Something went wrong!"}, status=500)


@web.middleware
async def cors_middleware(request: web.Request, handler):
    if request.method == "OPTIONS":
        response = web.Response(status=204)
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = request.headers.get(
            "Access-Control-Request-Headers", "Content-Type")
    else:
        response = await handler(request)
    response.headers["Access-Control-Allow-Origin"] = request.app[CORS_ORIGIN_KEY]
    return response


async def start_session(request: web.Request) -> web.Response:
    body = await _read_body(request, StartSessionRequest, "userId and duration are required")
    result = request.app[SERVICE_KEY].start_session(body.user_id, body.duration)
    return _json(result)


async def update_location(request: web.Request) -> web.Response:
    body = await _read_body(request, LocationUpdateRequest, "Missing required fields")
    result = request.app[SERVICE_KEY].update_location(
        body.session_id,
        body.latitude,
        body.longitude,
        accuracy=body.accuracy,
        timestamp=body.timestamp,
    )
    return _json(result)


async def get_path(request: web.Request) -> web.Response:
    session_id = request.match_info["session_id"]
    optimize = request.query.get("optimize") == "true"

    min_distance: Optional[float] = None
    raw = request.query.get("min_distance")
    if raw is not None:
        try:
            min_distance = float(raw)
        except ValueError:
            raise InvalidArgumentError("min_distance must be a number") from None
        if min_distance < 0:
            raise InvalidArgumentError("min_distance must not be negative")

    result = request.app[SERVICE_KEY].get_path(session_id, optimize=optimize, min_distance_m=min_distance)
    return _json(result)


async def get_stats(request: web.Request) -> web.Response:
    return _json(request.app[SERVICE_KEY].get_stats(request.match_info["session_id"]))


async def stop_session(request: web.Request) -> web.Response:
    return _json(request.app[SERVICE_KEY].stop_session(request.match_info["session_id"]))


async def list_user_sessions(request: web.Request) -> web.Response:
    return _json(request.app[SERVICE_KEY].list_user_sessions(request.match_info["user_id"]))


async def export_session(request: web.Request) -> web.Response:
    session_id = request.match_info["session_id"]
    # Anything other than a track-file request falls back to the structured record
    try:
        fmt = ExportFormat.parse(request.query.get("format"))
    except InvalidArgumentError:
        fmt = ExportFormat.STRUCTURED

    payload = request.app[SERVICE_KEY].export(session_id, fmt)
    if fmt is ExportFormat.TRACK_FILE:
        return web.Response(
            text=payload,
            content_type=GPX_CONTENT_TYPE,
            charset="utf-8",
            headers={"Content-Disposition": f'attachment; filename="{track_filename(session_id)}"'},
        )
    return _json(payload)


async def health(request: web.Request) -> web.Response:
    return _json(request.app[SERVICE_KEY].health())


def create_app(config: Optional[PathTrackerConfig] = None,
               service: Optional[TrackingService] = None) -> web.Application:
    """Build the aiohttp application.

    Args:
        config: Application configuration (defaults if None)
        service: Tracking service; built from config if None

    Returns:
        Configured web.Application
    """
    config = config if config is not None else PathTrackerConfig()
    app = web.Application(middlewares=[cors_middleware, error_middleware])
    app[SERVICE_KEY] = service if service is not None else TrackingService(config)
    app[CORS_ORIGIN_KEY] = str(config.get('server.cors_origin', '*'))

    app.router.add_post("/api/session/start", start_session)
    app.router.add_post("/api/location/update", update_location)
    app.router.add_get("/api/session/{session_id}/path", get_path)
    app.router.add_get("/api/session/{session_id}/stats", get_stats)
    app.router.add_post("/api/session/{session_id}/stop", stop_session)
    app.router.add_get("/api/user/{user_id}/sessions", list_user_sessions)
    app.router.add_get("/api/session/{session_id}/export", export_session)
    app.router.add_get("/health", health)

    logger.info("HTTP application created")
    return app
