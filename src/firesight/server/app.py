"""Starlette ASGI application exposing repository heat analysis."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..api import HeatmapReport, analyze
from ..config import MAX_TIME_RANGE_DAYS, AnalysisConfig, load_config
from ..exceptions import AnalysisTimeoutError, FireSightError
from .serializers import error_response, report_to_response

logger = logging.getLogger(__name__)

Analyzer = Callable[..., HeatmapReport]


class _BadRequest(Exception):
    pass


def _parse_request(body: Any, config: AnalysisConfig) -> dict[str, Any]:
    """Validate an analyze request body and apply defaults."""
    if not isinstance(body, dict):
        raise _BadRequest("Invalid request body")

    repo_url = body.get("repo_url")
    if not repo_url or not isinstance(repo_url, str):
        raise _BadRequest("repo_url is required")

    branch = body.get("branch") or config.default_branch
    if not isinstance(branch, str):
        raise _BadRequest("branch must be a string")

    days = body.get("time_range_days") or config.time_range_days
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise _BadRequest("time_range_days must be a non-negative integer")
    if days > MAX_TIME_RANGE_DAYS:
        raise _BadRequest(f"time_range_days must be at most {MAX_TIME_RANGE_DAYS}")

    auth_token = body.get("auth_token") or None
    if auth_token is not None and not isinstance(auth_token, str):
        raise _BadRequest("auth_token must be a string")

    return {
        "repo": repo_url,
        "branch": branch,
        "time_range_days": days,
        "auth_token": auth_token,
    }


def create_app(
    config: Optional[AnalysisConfig] = None, analyzer: Analyzer = analyze
) -> Starlette:
    """Build the Starlette application.

    Args:
        config: Analysis configuration (default: load_config())
        analyzer: Callable running one analysis; injectable for tests
    """
    config = config or load_config()

    async def analyze_repo(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JSONResponse(error_response("Invalid request body"), status_code=400)

        try:
            params = _parse_request(body, config)
        except _BadRequest as e:
            return JSONResponse(error_response(str(e)), status_code=400)

        try:
            report = await run_in_threadpool(analyzer, config=config, **params)
        except AnalysisTimeoutError as e:
            logger.warning("Analysis timed out: %s", e)
            return JSONResponse(error_response(f"Analysis failed: {e}"), status_code=504)
        except FireSightError as e:
            logger.warning("Analysis failed: %s", e)
            return JSONResponse(error_response(f"Analysis failed: {e}"), status_code=500)

        return JSONResponse(report_to_response(report))

    async def health(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "healthy",
                "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            }
        )

    routes = [
        Route("/analyze", analyze_repo, methods=["POST"]),
        Route("/health", health, methods=["GET"]),
    ]

    return Starlette(routes=routes)
