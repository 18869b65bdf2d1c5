# api/server.py
import json
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import Settings
from api.gemini import HandoverSummarizer, build_tracer
from api.models import ErrorResponse, ProxyRequest, SummaryResponse

SUMMARY_PATH = "/api/summary"
FAILURE_MESSAGE = "Failed to generate summary via Cloud Function."
MISSING_QUERY_MESSAGE = "Missing userQuery in request body."
PREFLIGHT_METHODS = "GET,HEAD,PUT,PATCH,POST,DELETE"


def _error_response(details: str) -> JSONResponse:
    body = ErrorResponse(error=FAILURE_MESSAGE, details=details)
    return JSONResponse(status_code=500, content=body.model_dump())


async def _read_payload(request: Request) -> Optional[ProxyRequest]:
    try:
        data = await request.json()
        return ProxyRequest.model_validate(data)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
        return None


def create_app(settings: Settings, summarizer: Optional[HandoverSummarizer] = None) -> FastAPI:
    """Builds the proxy app. The summarizer defaults to one configured from `settings`."""
    if summarizer is None:
        summarizer = HandoverSummarizer(settings, tracer=build_tracer(settings))

    app = FastAPI()

    # --- Master Error Handler ---
    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        return _error_response(str(exc))

    # Any method the route does not take gets a plain-text 405.
    @app.exception_handler(StarletteHTTPException)
    async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return PlainTextResponse("Method Not Allowed", status_code=405, headers=exc.headers)
        return await http_exception_handler(request, exc)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Summary Endpoint ---
    @app.api_route(SUMMARY_PATH, methods=["POST", "OPTIONS"])
    async def generate_handover_summary(request: Request):
        # Real preflights never get here; CORSMiddleware answers them.
        if request.method == "OPTIONS":
            return Response(status_code=204, headers={"Access-Control-Allow-Methods": PREFLIGHT_METHODS})

        payload = await _read_payload(request)
        if payload is None or payload.user_query is None:
            return PlainTextResponse(MISSING_QUERY_MESSAGE, status_code=400)

        result = await run_in_threadpool(summarizer.summarize, payload.user_query, payload.system_prompt)
        if not result.ok:
            return _error_response(result.error)

        return SummaryResponse(summary=result.summary).model_dump()

    return app
