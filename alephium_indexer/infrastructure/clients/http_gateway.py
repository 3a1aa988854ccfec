from __future__ import annotations

import logging
import ssl
import time
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from alephium_indexer.domain.exceptions import APIError, DecodeError, TransportError


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_TIMEOUT_SECONDS = 10.0


def build_ssl_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


def build_http_client(
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    debug: bool = False,
    log: logging.Logger | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    base_transport = transport or httpx.HTTPTransport(verify=build_ssl_context())
    if debug:
        base_transport = DebugDumpTransport(base_transport, log=log)
    return httpx.Client(transport=base_transport, timeout=timeout_seconds)


def _format_headers(headers: httpx.Headers) -> str:
    return "\n".join(f"{name}: {value}" for name, value in headers.multi_items())


class DebugDumpTransport(httpx.BaseTransport):
    """Logs the raw request and response around another transport."""

    def __init__(self, inner: httpx.BaseTransport, *, log: logging.Logger | None = None):
        self._inner = inner
        self._log = log or logger

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._dump_request(request)
        response = self._inner.handle_request(request)
        response.read()
        self._dump_response(request, response)
        return response

    def close(self) -> None:
        self._inner.close()

    def _dump_request(self, request: httpx.Request) -> None:
        try:
            body = request.read().decode("utf-8", errors="replace")
            self._log.info(
                "http_gateway: dump_request\n%s %s\n%s\n\n%s",
                request.method,
                request.url,
                _format_headers(request.headers),
                body,
            )
        except Exception as exc:
            self._log.warning("http_gateway: dump_request_failed url=%s error=%s", request.url, exc)

    def _dump_response(self, request: httpx.Request, response: httpx.Response) -> None:
        try:
            self._log.info(
                "http_gateway: dump_response url=%s\nHTTP %s %s\n%s\n\n%s",
                request.url,
                response.status_code,
                response.reason_phrase,
                _format_headers(response.headers),
                response.content.decode("utf-8", errors="replace"),
            )
        except Exception as exc:
            self._log.warning("http_gateway: dump_response_failed url=%s error=%s", request.url, exc)


class RateLimitedGateway:
    """Sends requests one at a time and sleeps a fixed delay after each response."""

    def __init__(
        self,
        http_client: httpx.Client,
        *,
        sleep_between_calls_seconds: float,
        log: logging.Logger | None = None,
    ):
        self._http_client = http_client
        self._sleep_between_calls_seconds = max(0.0, sleep_between_calls_seconds)
        self._log = log or logger

    def build_request(
        self,
        method: str,
        url: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
    ) -> httpx.Request:
        return self._http_client.build_request(method, url, params=params, json=json)

    def call(self, request: httpx.Request, response_model: type[ModelT]) -> ModelT:
        try:
            response = self._http_client.send(request)
        except httpx.HTTPError as exc:
            self._log.error(
                "http_gateway: transport_failed method=%s url=%s error=%s",
                request.method,
                request.url,
                exc,
            )
            raise TransportError(f"{request.method} {request.url} failed: {exc}") from exc

        try:
            return self._decode(request, response, response_model)
        finally:
            self._wait()

    def close(self) -> None:
        self._http_client.close()

    def _decode(
        self,
        request: httpx.Request,
        response: httpx.Response,
        response_model: type[ModelT],
    ) -> ModelT:
        body = response.text
        if not response.is_success:
            self._log.error(
                "http_gateway: failed_to_call_api status=%s url=%s body=%s",
                response.status_code,
                request.url,
                body,
            )
            raise APIError(response.status_code, body, str(request.url))

        try:
            return response_model.model_validate_json(response.content)
        except ValidationError as exc:
            self._log.error(
                "http_gateway: decode_failed model=%s url=%s body=%s error=%s",
                response_model.__name__,
                request.url,
                body,
                exc,
            )
            raise DecodeError(f"unexpected {response_model.__name__} payload: {exc}") from exc

    def _wait(self) -> None:
        if self._sleep_between_calls_seconds > 0:
            time.sleep(self._sleep_between_calls_seconds)
