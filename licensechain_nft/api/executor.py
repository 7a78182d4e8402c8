from __future__ import annotations

import asyncio
import json
import logging
import time
from collections import defaultdict, deque
from dataclasses import dataclass, field
from secrets import token_hex
from typing import Any, Awaitable, Callable, Mapping
from urllib.parse import quote, urlencode

import httpx

from licensechain_nft import __version__
from licensechain_nft.api.classify import classify_status, extract_error_message
from licensechain_nft.config import ClientConfig
from licensechain_nft.errors import LicenseChainError, NetworkError, ServerError
from licensechain_nft.obs.logging import log_event

API_VERSION = "1.0"
PLATFORM = "nft-sdk"
USER_AGENT = f"LicenseChain-NFT-SDK/{__version__}"

SleepFn = Callable[[float], Awaitable[None]]

LATENCY_SAMPLES = 1000


@dataclass
class ExecutorMetrics:
    http_requests_total: dict[tuple[str, str], int] = field(default_factory=lambda: defaultdict(int))
    http_retries_total: dict[tuple[str, str], int] = field(default_factory=lambda: defaultdict(int))
    http_latency_ms: dict[str, deque[float]] = field(
        default_factory=lambda: defaultdict(lambda: deque(maxlen=LATENCY_SAMPLES))
    )

    def record_request(self, path: str, status: str, latency_ms: float) -> None:
        self.http_requests_total[(path, status)] += 1
        self.http_latency_ms[path].append(latency_ms)

    def record_retry(self, path: str, reason: str) -> None:
        self.http_retries_total[(path, reason)] += 1


def _format_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def expand_route(route: str, path_params: Mapping[str, Any] | None = None) -> str:
    """Fill ``{name}`` placeholders in a route with percent-encoded path segments."""
    if not path_params:
        return route
    return route.format_map({key: quote(str(value), safe="") for key, value in path_params.items()})


def build_url(base_url: str, path: str, params: Mapping[str, Any] | None = None) -> str:
    url = f"{base_url}{path}"
    query = {key: _format_query_value(value) for key, value in (params or {}).items() if value is not None}
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


class RequestExecutor:
    def __init__(
        self,
        config: ClientConfig,
        *,
        logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFn | None = None,
    ) -> None:
        self._config = config
        self._logger = logger or logging.getLogger(__name__)
        self._sleep = sleep or asyncio.sleep
        self._metrics = ExecutorMetrics()
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout_s),
            transport=transport,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Accept": "application/json",
                "X-API-Version": API_VERSION,
                "X-Platform": PLATFORM,
                "User-Agent": USER_AGENT,
            },
        )

    @property
    def metrics(self) -> ExecutorMetrics:
        return self._metrics

    async def aclose(self) -> None:
        await self._client.aclose()

    def backoff_delay(self, attempt: int) -> float:
        return self._config.retry_initial_delay_s * (2 ** (attempt - 1))

    async def execute(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        *,
        route: str | None = None,
    ) -> Any:
        """
        Send one logical call, retrying transport failures.

        ``route`` is the unexpanded path template (``/nfts/{nft_id}``); it
        labels metrics and log events so they stay bounded by endpoint. Each
        attempt, body read included, is cut off after ``timeout_s``.
        """
        label = route or path
        url = build_url(self._config.base_url, path, params)
        headers: dict[str, str] = {}
        content: str | None = None
        if body is not None:
            content = json.dumps(body)
            headers["Content-Type"] = "application/json"

        call_id = token_hex(4)
        attempts = self._config.max_retries
        failure: tuple[NetworkError, Exception] | None = None

        for attempt in range(1, attempts + 1):
            start = time.monotonic()
            try:
                response = await asyncio.wait_for(
                    self._client.request(method, url, content=content, headers=headers),
                    timeout=self._config.timeout_s,
                )
            except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
                failure = (NetworkError("Request timeout"), exc)
                reason = "timeout"
            except httpx.RequestError as exc:
                failure = (NetworkError(str(exc) or "Request failed"), exc)
                reason = "connection_error"
            else:
                latency_ms = (time.monotonic() - start) * 1000
                self._metrics.record_request(label, str(response.status_code), latency_ms)
                log_event(
                    self._logger,
                    logging.INFO,
                    "http_request",
                    f"{method} {label}",
                    call_id=call_id,
                    path=label,
                    status=response.status_code,
                    attempt=attempt,
                    latency_ms=round(latency_ms, 2),
                )
                return self._handle_response(method, label, response, call_id)

            latency_ms = (time.monotonic() - start) * 1000
            self._metrics.record_request(label, reason, latency_ms)
            log_event(
                self._logger,
                logging.WARNING,
                "http_request",
                f"{method} {label}",
                call_id=call_id,
                path=label,
                status=None,
                attempt=attempt,
                latency_ms=round(latency_ms, 2),
                reason=reason,
            )
            if attempt < attempts:
                delay_s = self.backoff_delay(attempt)
                self._metrics.record_retry(label, reason)
                log_event(
                    self._logger,
                    logging.WARNING,
                    "http_retry",
                    "Transport failure; backing off",
                    call_id=call_id,
                    path=label,
                    attempt=attempt,
                    delay_s=delay_s,
                    reason=reason,
                )
                await self._sleep(delay_s)

        if failure is None:
            raise NetworkError("Request failed after retries")
        error, cause = failure
        self._log_fail(method, label, call_id, error)
        raise error from cause

    def _handle_response(self, method: str, path: str, response: httpx.Response, call_id: str) -> Any:
        text = response.text
        if response.is_success:
            if not text.strip():
                return {}
            try:
                return json.loads(text)
            except ValueError as exc:
                error = ServerError(
                    "Invalid JSON response", status_code=response.status_code, response_text=text
                )
                self._log_fail(method, path, call_id, error)
                raise error from exc

        error = classify_status(
            response.status_code,
            extract_error_message(text),
            response_text=text or None,
        )
        self._log_fail(method, path, call_id, error)
        raise error

    def _log_fail(self, method: str, path: str, call_id: str, error: LicenseChainError) -> None:
        log_event(
            self._logger,
            logging.ERROR,
            "http_fail",
            f"Request failed for {method} {path}",
            call_id=call_id,
            path=path,
            error_type=type(error).__name__,
            error_kind=error.kind.value,
        )
