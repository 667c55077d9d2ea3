"""Axiom 로깅 미들웨어 테스트.

Axiom logging middleware tests with an in-memory event sink.
"""

from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from teamroster.middleware.axiom_logging import AxiomLoggingMiddleware, extract_error, mask_params
from teamroster.utils.exceptions import InvalidArgumentError


class RecordingSink:
    """ingest_events 호출을 기록하는 가짜 클라이언트."""

    def __init__(self, fail: bool = False) -> None:
        self.events: list[dict[str, Any]] = []
        self.fail = fail

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> None:
        if self.fail:
            raise RuntimeError("axiom down")
        self.events.extend(events)


def build_app(sink: RecordingSink) -> FastAPI:
    app = FastAPI()
    app.add_middleware(AxiomLoggingMiddleware, client=sink, dataset="test-logs")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/items")
    async def items(per_page: int = 5) -> dict[str, int]:
        if per_page <= 0:
            raise InvalidArgumentError("limit must be positive")
        return {"per_page": per_page}

    return app


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


async def _get(app: FastAPI, path: str, **kwargs):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.get(path, **kwargs)


class TestAxiomLoggingMiddleware:
    async def test_logs_successful_request(self, sink):
        res = await _get(build_app(sink), "/items", params={"per_page": 3})
        assert res.status_code == 200
        assert len(sink.events) == 1
        event = sink.events[0]
        assert event["method"] == "GET"
        assert event["path"] == "/items"
        assert event["status_code"] == 200
        assert event["query_params"] == {"per_page": "3"}
        assert "error" not in event

    async def test_logs_error_detail_and_keeps_body(self, sink):
        """에러 응답의 detail을 기록하고 본문은 그대로 반환."""
        res = await _get(build_app(sink), "/items", params={"per_page": 0})
        assert res.status_code == 400
        assert res.json() == {"detail": "limit must be positive"}
        assert sink.events[0]["error"] == "limit must be positive"

    async def test_skips_health(self, sink):
        await _get(build_app(sink), "/health")
        assert sink.events == []

    async def test_sink_failure_does_not_break_request(self):
        res = await _get(build_app(RecordingSink(fail=True)), "/items")
        assert res.status_code == 200


def test_mask_params():
    assert mask_params({"api_key": "abc", "username": "member1"}) == {"api_key": "***", "username": "member1"}


def test_extract_error_non_json():
    assert extract_error(b"plain failure") == "plain failure"
