"""Server operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..options import OptionsSchema
from .base import ResourceBase

SERVER_STATUSES = (
    "initializing",
    "starting",
    "running",
    "stopping",
    "off",
    "deleting",
    "rebuilding",
    "migrating",
    "unknown",
)
METRIC_TYPES = ("cpu", "disk", "network")


def _str_or_str_list(value: Any) -> bool:
    if isinstance(value, str):
        return True
    return all(isinstance(item, str) for item in value)


class ServersResource(ResourceBase):
    """Interact with Hetzner Cloud servers."""

    def list(self, **options: Any) -> dict[str, Any]:
        params = self._list_schema().validate(options)
        return self._get("servers", params)

    def get(self, server_id: int | str) -> dict[str, Any]:
        return self._get(f"servers/{self._encode_path(server_id)}")

    def create(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._post("servers", payload)

    def update(self, server_id: int | str, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._put(f"servers/{self._encode_path(server_id)}", payload)

    def delete(self, server_id: int | str) -> dict[str, Any]:
        return self._delete(f"servers/{self._encode_path(server_id)}")

    def list_actions(self, server_id: int | str, **options: Any) -> dict[str, Any]:
        schema = self._create_options_schema().define(
            "status", (str, list), _str_or_str_list, "a status or list of statuses"
        ).define("sort", (str, list), _str_or_str_list, "a sort key or list of sort keys")
        return self._get(self._server_path(server_id, "actions"), schema.validate(options))

    def power_on(self, server_id: int | str) -> dict[str, Any]:
        return self._post(self._server_path(server_id, "actions/poweron"))

    def power_off(self, server_id: int | str) -> dict[str, Any]:
        return self._post(self._server_path(server_id, "actions/poweroff"))

    def reboot(self, server_id: int | str) -> dict[str, Any]:
        return self._post(self._server_path(server_id, "actions/reboot"))

    def shutdown(self, server_id: int | str) -> dict[str, Any]:
        return self._post(self._server_path(server_id, "actions/shutdown"))

    def metrics(
        self,
        server_id: int | str,
        type: str | list[str],
        start: str,
        end: str,
        step: int | None = None,
    ) -> dict[str, Any]:
        """Fetch CPU, disk or network metrics for a time range.

        Args:
            server_id: The server identifier.
            type: One metric type or a list of them (cpu, disk, network).
            start: ISO-8601 start of the range.
            end: ISO-8601 end of the range.
            step: Optional resolution in seconds.

        Returns:
            The decoded ``metrics`` payload.
        """
        types = [type] if isinstance(type, str) else list(type)
        unknown = [item for item in types if item not in METRIC_TYPES]
        if unknown:
            raise ValueError(
                f"Invalid metric type: {', '.join(unknown)}. Supported types: {', '.join(METRIC_TYPES)}"
            )
        params: dict[str, Any] = {"type": ",".join(types), "start": start, "end": end}
        if step is not None:
            params["step"] = step
        return self._get(self._server_path(server_id, "metrics"), params)

    def _list_schema(self) -> OptionsSchema:
        return (
            self._create_options_schema()
            .define("name", str)
            .define("label_selector", str)
            .define("sort", (str, list), _str_or_str_list, "a sort key or list of sort keys")
            .define(
                "status",
                (str, list),
                lambda value: all(
                    item in SERVER_STATUSES for item in ([value] if isinstance(value, str) else value)
                ),
                f"one of {', '.join(SERVER_STATUSES)}",
            )
        )
