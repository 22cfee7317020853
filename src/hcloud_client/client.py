"""High-level Hetzner Cloud REST client."""

from __future__ import annotations

from collections.abc import Mapping

import requests

from .auth.base import AuthStrategy
from .auth.token import TokenAuth
from .config import DEFAULT_ENDPOINT, ClientConfig
from .http import RequestsTransport, StreamFactory, Transport
from .resources import ImagesResource, ServersResource, VolumesResource


class HetznerCloudClient:
    """Wire a transport and body factory into the resource wrappers."""

    def __init__(
        self,
        token: str | None = None,
        *,
        auth_strategy: AuthStrategy | None = None,
        base_url: str = DEFAULT_ENDPOINT,
        verify_ssl: bool | str = True,
        timeout: float = 30.0,
        default_headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
        transport: Transport | None = None,
        stream_factory: StreamFactory | None = None,
    ) -> None:
        if token is not None and auth_strategy is not None:
            raise ValueError("Pass either token or auth_strategy, not both.")
        self.config = ClientConfig(
            base_url=base_url.rstrip("/"),
            verify_ssl=verify_ssl,
            timeout=timeout,
            default_headers=default_headers,
        )
        self._auth = TokenAuth(token) if token is not None else auth_strategy
        self._transport = transport or RequestsTransport(
            self.config, auth_strategy=self._auth, session=session
        )
        self._stream_factory = stream_factory or StreamFactory()
        self.servers = ServersResource(self._transport, self._stream_factory)
        self.volumes = VolumesResource(self._transport, self._stream_factory)
        self.images = ImagesResource(self._transport, self._stream_factory)

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> HetznerCloudClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    @property
    def transport(self) -> Transport:
        return self._transport

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()
