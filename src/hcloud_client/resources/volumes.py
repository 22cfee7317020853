"""Volume operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import ResourceBase


class VolumesResource(ResourceBase):
    """Interact with Hetzner Cloud block storage volumes."""

    def list(self, **options: Any) -> dict[str, Any]:
        schema = (
            self._create_options_schema()
            .define("name", str)
            .define("label_selector", str)
            .define("status", str, lambda value: value in ("available", "creating"), "available or creating")
            .define("sort", str)
        )
        return self._get("volumes", schema.validate(options))

    def get(self, volume_id: int | str) -> dict[str, Any]:
        return self._get(f"volumes/{self._encode_path(volume_id)}")

    def create(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._post("volumes", payload)

    def update(self, volume_id: int | str, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._put(f"volumes/{self._encode_path(volume_id)}", payload)

    def delete(self, volume_id: int | str) -> Any:
        return self._delete(f"volumes/{self._encode_path(volume_id)}")

    def attach(self, volume_id: int | str, server_id: int, automount: bool | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"server": server_id}
        if automount is not None:
            payload["automount"] = automount
        return self._post(self._action_path(volume_id, "attach"), payload)

    def detach(self, volume_id: int | str) -> dict[str, Any]:
        return self._post(self._action_path(volume_id, "detach"))

    def resize(self, volume_id: int | str, size: int) -> dict[str, Any]:
        """Grow a volume to ``size`` GB; volumes can never shrink."""
        if size <= 0:
            raise ValueError(f"Invalid volume size: {size}. Size must be a positive number of GB")
        return self._post(self._action_path(volume_id, "resize"), {"size": size})

    def _action_path(self, volume_id: int | str, action: str) -> str:
        return f"volumes/{self._encode_path(volume_id)}/actions/{action}"
