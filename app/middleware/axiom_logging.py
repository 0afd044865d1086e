"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures each search request (path, query string, status, duration,
error reason) and ships it to Axiom as a structured event. When Axiom
is not configured the same event goes to the module logger instead.
"""

import json
import logging
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_ERROR_LEN = 500


def _query_params(request: Request) -> dict[str, Any] | None:
    """반복 파라미터(sort)는 리스트로 유지 — Keep repeated params (sort) as lists."""
    if not request.query_params:
        return None
    params: dict[str, Any] = {}
    for key in request.query_params.keys():
        values: list[str] = request.query_params.getlist(key)
        params[key] = values if len(values) > 1 else values[0]
    return params


def _error_detail(body: bytes) -> str:
    """에러 응답 body에서 사유 추출 — Extract the error reason from a response body."""
    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
        text = detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = body.decode("utf-8", errors="replace")
    if len(text) > _MAX_ERROR_LEN:
        return text[:_MAX_ERROR_LEN] + "..."
    return text


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs every API request/response to Axiom
    (or to the module logger when Axiom is not configured).
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            logger.info("%s %s -> %s (%.2f ms)", event["method"], event["path"],
                        event["status_code"], event["duration_ms"])
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure
            logger.warning("failed to ship request log to Axiom", exc_info=True)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 후 다시 감싸서 반환
            # Read the error body, then re-wrap the consumed body
            if status_code >= 400:
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _error_detail(body)
                response = Response(
                    content=body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }
            params = _query_params(request)
            if params:
                event["query_params"] = params
            if error_detail:
                event["error"] = error_detail
            self._emit(event)

        return response
