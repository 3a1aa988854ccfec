from __future__ import annotations

import logging
import ssl

import httpx
import pytest

from alephium_indexer.domain.exceptions import APIError, DecodeError, TransportError
from alephium_indexer.infrastructure.clients.http_gateway import (
    DebugDumpTransport,
    RateLimitedGateway,
    build_http_client,
    build_ssl_context,
)
from alephium_indexer.schemas.node import ChainInfoResponse


def _make_gateway(handler, *, sleep_seconds: float = 0.3, debug: bool = False) -> RateLimitedGateway:
    http_client = build_http_client(transport=httpx.MockTransport(handler), debug=debug)
    return RateLimitedGateway(http_client, sleep_between_calls_seconds=sleep_seconds)


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    recorded: list[float] = []
    monkeypatch.setattr(
        "alephium_indexer.infrastructure.clients.http_gateway.time.sleep",
        lambda seconds: recorded.append(seconds),
    )
    return recorded


def test_ssl_context_requires_tls_1_2():
    context = build_ssl_context()
    assert context.minimum_version >= ssl.TLSVersion.TLSv1_2


def test_call_decodes_payload_and_sleeps_once(sleeps: list[float]):
    gateway = _make_gateway(lambda request: httpx.Response(200, json={"currentHeight": 42}))
    request = gateway.build_request("GET", "https://node.test/blockflow/chain-info")

    response = gateway.call(request, ChainInfoResponse)

    assert response.current_height == 42
    assert sleeps == [0.3]


def test_call_raises_api_error_with_body_and_still_sleeps(sleeps: list[float]):
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(500, text="node exploded")

    gateway = _make_gateway(handler)
    request = gateway.build_request("GET", "https://node.test/blockflow/chain-info")

    with pytest.raises(APIError) as exc_info:
        gateway.call(request, ChainInfoResponse)

    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "node exploded"
    assert calls["count"] == 1
    assert sleeps == [0.3]


def test_call_raises_decode_error_on_shape_mismatch(sleeps: list[float]):
    gateway = _make_gateway(lambda request: httpx.Response(200, json={"height": "nope"}))
    request = gateway.build_request("GET", "https://node.test/blockflow/chain-info")

    with pytest.raises(DecodeError):
        gateway.call(request, ChainInfoResponse)
    assert sleeps == [0.3]


def test_call_raises_decode_error_on_invalid_json(sleeps: list[float]):
    gateway = _make_gateway(lambda request: httpx.Response(200, text="<html>"))
    request = gateway.build_request("GET", "https://node.test/blockflow/chain-info")

    with pytest.raises(DecodeError):
        gateway.call(request, ChainInfoResponse)


def test_call_maps_network_failure_to_transport_error(sleeps: list[float]):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    gateway = _make_gateway(handler)
    request = gateway.build_request("GET", "https://node.test/blockflow/chain-info")

    with pytest.raises(TransportError):
        gateway.call(request, ChainInfoResponse)
    assert sleeps == []


def test_zero_delay_does_not_sleep(sleeps: list[float]):
    gateway = _make_gateway(lambda request: httpx.Response(200, json={"currentHeight": 1}), sleep_seconds=0)
    gateway.call(gateway.build_request("GET", "https://node.test/x"), ChainInfoResponse)
    assert sleeps == []


def test_debug_mode_dumps_request_and_response(sleeps: list[float], caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="alephium_indexer.infrastructure.clients.http_gateway")
    gateway = _make_gateway(
        lambda request: httpx.Response(200, json={"currentHeight": 7}),
        debug=True,
    )
    request = gateway.build_request("POST", "https://node.test/contracts/call-contract", json={"group": 0})

    response = gateway.call(request, ChainInfoResponse)

    assert response.current_height == 7
    messages = [record.getMessage() for record in caplog.records]
    assert any("dump_request" in message and '"group"' in message for message in messages)
    assert any("dump_response" in message and "currentHeight" in message for message in messages)


class _BrokenLog:
    def __init__(self):
        self.warnings: list[str] = []

    def info(self, *args, **kwargs):
        raise RuntimeError("log sink unavailable")

    def warning(self, message, *args):
        self.warnings.append(message % args)


def test_dump_failure_does_not_mask_call_outcome():
    broken_log = _BrokenLog()
    transport = DebugDumpTransport(
        httpx.MockTransport(lambda request: httpx.Response(200, json={"currentHeight": 3})),
        log=broken_log,  # type: ignore[arg-type]
    )
    gateway = RateLimitedGateway(
        httpx.Client(transport=transport),
        sleep_between_calls_seconds=0,
    )

    response = gateway.call(gateway.build_request("GET", "https://node.test/x"), ChainInfoResponse)

    assert response.current_height == 3
    assert len(broken_log.warnings) == 2
