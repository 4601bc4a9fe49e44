"""
Request logging middleware for the local HTTP API.

Pure ASGI middleware (not BaseHTTPMiddleware), so request bodies can be
observed without consuming them for the route handlers.

Each request produces one "started" line and one "completed" line. Bodies are
logged with profile fields such as email and address masked, and the log
level follows the status code.
"""

import itertools
import json
import logging
import time
from typing import Dict, List, Optional
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.logging_config import filter_sensitive_data, truncate_large_data

logger = logging.getLogger(__name__)

MAX_BODY_LOG = 2000

_request_ids = itertools.count(1)


def _headers(raw: List) -> Dict[str, str]:
    return {
        k.decode("utf-8", errors="ignore"): v.decode("utf-8", errors="ignore")
        for k, v in raw
    }


def _body_for_log(chunks: List[bytes]) -> Optional[str]:
    """Masked, truncated body text, or None for an empty body."""
    data = b"".join(chunks)
    if not data:
        return None
    text = data.decode("utf-8", errors="ignore")
    try:
        payload = filter_sensitive_data(json.loads(text))
        text = json.dumps(payload, ensure_ascii=False)
    except json.JSONDecodeError:
        pass
    return truncate_large_data(text, max_length=MAX_BODY_LOG)


def _error_reason(body: Optional[str]) -> Optional[str]:
    """FastAPI's "detail" field if present, else the start of the body."""
    if not body:
        return None
    try:
        payload = json.loads(body)
        if isinstance(payload, dict) and payload.get("detail"):
            return truncate_large_data(str(payload["detail"]), max_length=500)
    except json.JSONDecodeError:
        pass
    return truncate_large_data(body, max_length=500)


class RequestLoggingMiddleware:
    """Pure ASGI middleware that logs each API request and its outcome."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Args:
            app: The ASGI application
            exclude_paths: Paths that are passed through without logging
        """
        self.app = app
        self.exclude_paths = exclude_paths or ["/health", "/"]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        request_id = next(_request_ids)
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        query = scope.get("query_string", b"").decode("utf-8", errors="ignore") or None
        start_time = time.time()

        request_chunks: List[bytes] = []
        response_chunks: List[bytes] = []
        status_code = 0
        json_response = False

        async def logging_receive() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                request_chunks.append(message.get("body", b""))
            return message

        async def logging_send(message: Message) -> None:
            nonlocal status_code, json_response
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
                content_type = _headers(message.get("headers", [])).get("content-type", "")
                json_response = content_type.startswith("application/json")
            elif message["type"] == "http.response.body" and json_response:
                response_chunks.append(message.get("body", b""))
            await send(message)

        logger.info(
            f"Request started: {method} {path}",
            extra={"extra_fields": {
                "request_id": request_id,
                "method": method,
                "path": path,
                "query": query,
            }}
        )

        try:
            await self.app(scope, logging_receive, logging_send)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {method} {path} - {str(e)}",
                exc_info=True,
                extra={"extra_fields": {
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "duration_ms": duration_ms,
                    "error": str(e),
                }}
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        request_body = _body_for_log(request_chunks)
        response_body = _body_for_log(response_chunks)
        error_reason = _error_reason(response_body) if status_code >= 400 else None

        if status_code < 400:
            log_level = logging.INFO
        elif status_code < 500:
            log_level = logging.WARNING
        else:
            log_level = logging.ERROR

        message = f"Request completed: {method} {path} - {status_code} ({duration_ms:.2f}ms)"
        if error_reason:
            message += f" | error_reason={error_reason}"

        logger.log(
            log_level,
            message,
            extra={"extra_fields": {
                "request_id": request_id,
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "request_body": request_body,
                "response_body": response_body,
                "error_reason": error_reason,
            }}
        )
