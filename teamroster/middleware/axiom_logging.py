"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per API request to Axiom: method, path,
query parameters (search filters, paging), status code, duration, and
the error detail of 4xx/5xx responses. Sensitive query keys are masked.
Without an Axiom token/dataset the middleware passes requests through.
"""

import json
import re
import time
from typing import Any, Protocol

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from teamroster.config import settings

# 마스킹 대상 키 패턴 — Keys whose values are masked
_SENSITIVE_KEYS = re.compile(r"(password|secret|token|authorization|api_key)", re.IGNORECASE)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 에러 사유 최대 길이 — Maximum length of a logged error detail
_MAX_ERROR_LEN = 500


class EventSink(Protocol):
    """이벤트 전송 대상 — anything with Axiom's ingest_events signature."""

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> Any: ...


def mask_params(params: dict[str, Any]) -> dict[str, Any]:
    """민감 키의 값을 마스킹합니다 — Mask values of sensitive keys."""
    return {k: "***" if _SENSITIVE_KEYS.search(k) else v for k, v in params.items()}


def extract_error(body: bytes) -> str:
    """에러 응답 본문에서 detail을 추출합니다.

    Extract FastAPI's "detail" from an error body, falling back to raw text.
    """
    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
        text = detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = body.decode("utf-8", errors="replace")
    return text[:_MAX_ERROR_LEN]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs every API request/response to Axiom.

    Args:
        app: ASGI 애플리케이션 (Wrapped ASGI app)
        client: 이벤트 전송 클라이언트, None이면 설정에서 생성
                (Event sink; built from settings when omitted)
        dataset: Axiom 데이터셋 이름 (Dataset name, defaults to settings)
    """

    def __init__(self, app: Any, client: EventSink | None = None, dataset: str | None = None) -> None:
        super().__init__(app)
        self._dataset: str = dataset if dataset is not None else settings.AXIOM_DATASET
        self._client: EventSink | None = client
        if self._client is None and settings.AXIOM_API_TOKEN and self._dataset:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time: float = time.perf_counter()
        event: dict[str, Any] = {"method": request.method, "path": request.url.path}
        if request.query_params:
            event["query_params"] = mask_params(dict(request.query_params))

        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code

            # 에러 응답 본문을 읽어 사유 기록 후 재구성 — Read, record, and re-wrap error bodies
            if status_code >= 400:
                body: bytes = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = extract_error(body)
                response = Response(
                    content=body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["status_code"] = status_code
            event["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            try:
                self._client.ingest_events(self._dataset, [event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure

        return response
