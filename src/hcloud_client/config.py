"""Configuration helpers for the Hetzner Cloud client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_ENDPOINT = "https://api.hetzner.cloud/v1"
DEFAULT_USER_AGENT = "hcloud-client-python"


@dataclass(slots=True)
class ClientConfig:
    """Typed configuration for `HetznerCloudClient`."""

    base_url: str = DEFAULT_ENDPOINT
    verify_ssl: bool | str = True
    timeout: float = 30.0
    default_headers: Mapping[str, str] | None = None
    user_agent: str = DEFAULT_USER_AGENT

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.default_headers:
            headers.update(self.default_headers)
        return headers
