"""Transports that carry classification requests to the proxy."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict
from urllib import error as url_error
from urllib import request as url_request

from cattle_vision.domain.errors import TransportError

logger = logging.getLogger(__name__)

CLASSIFY_PATH = "/api/classify"


@dataclass(frozen=True)
class ApiReply:
    """Status and decoded body of a proxy response."""

    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpTransport:
    """Posts JSON to a running proxy over HTTP."""

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 60.0) -> None:
        self._url = base_url.rstrip("/") + CLASSIFY_PATH
        self._timeout = timeout

    def post_classify(self, payload: Dict[str, Any]) -> ApiReply:
        http_request = url_request.Request(
            self._url,
            data=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with url_request.urlopen(http_request, timeout=self._timeout) as response:
                return ApiReply(status_code=response.status, body=self._decode(response.read()))
        except url_error.HTTPError as exc:
            return ApiReply(status_code=exc.code, body=self._decode(exc.read()))
        except (url_error.URLError, TimeoutError) as exc:
            raise TransportError(f"Request to {self._url} failed: {exc}") from exc

    @staticmethod
    def _decode(raw: bytes) -> Any:
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError:
            logger.warning("Proxy returned a non-JSON body")
            return None
