"""HTTP transport and body factory for Hetzner Cloud API access."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .auth.base import AuthStrategy
from .config import ClientConfig
from .exceptions import TransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Verb-level interface the resource layer dispatches through."""

    def get(self, path: str, headers: Mapping[str, str]) -> Any: ...

    def post(self, path: str, headers: Mapping[str, str], body: bytes | None) -> Any: ...

    def put(self, path: str, headers: Mapping[str, str], body: bytes | None) -> Any: ...

    def delete(self, path: str, headers: Mapping[str, str]) -> Any: ...


class StreamFactory:
    """Create request bodies from encoded payloads."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def create_stream(self, content: str | bytes) -> bytes:
        if isinstance(content, bytes):
            return content
        return content.encode(self.encoding)


class RequestsTransport:
    """`Transport` backed by a `requests.Session`.

    Paths are resolved against `ClientConfig.base_url`. Failures raised by
    requests are re-raised as `TransportError`; HTTP error statuses are
    returned untouched for the response mediator to handle.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        auth_strategy: AuthStrategy | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self._auth = auth_strategy
        self._session = session or requests.Session()
        self._suppress_insecure_warning_if_needed()

    def get(self, path: str, headers: Mapping[str, str]) -> requests.Response:
        return self.send("GET", path, headers)

    def post(self, path: str, headers: Mapping[str, str], body: bytes | None) -> requests.Response:
        return self.send("POST", path, headers, body)

    def put(self, path: str, headers: Mapping[str, str], body: bytes | None) -> requests.Response:
        return self.send("PUT", path, headers, body)

    def delete(self, path: str, headers: Mapping[str, str]) -> requests.Response:
        return self.send("DELETE", path, headers)

    def send(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> requests.Response:
        url = self.resolve_url(path)
        merged = self._prepare_headers(headers)
        logger.info("Hetzner Cloud request %s %s", method.upper(), url)
        try:
            prepared = self._session.prepare_request(
                requests.Request(method=method, url=url, headers=merged, data=body)
            )
            # prepare_request requotes the URL, which decodes %2E back to a dot
            prepared.url = url
            settings = self._session.merge_environment_settings(
                prepared.url, {}, None, self.config.verify_ssl, None
            )
            return self._session.send(prepared, timeout=self.config.timeout, **settings)
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            raise TransportError(
                f"Failed to communicate with Hetzner Cloud API: {reason}", details=reason
            ) from exc

    def resolve_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def close(self) -> None:
        self._session.close()

    def _prepare_headers(self, headers: Mapping[str, str]) -> dict[str, str]:
        merged = self.config.resolved_headers()
        if self._auth is not None:
            self._auth.apply(merged)
        merged.update(headers)
        return merged

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
