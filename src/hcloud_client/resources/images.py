"""Image operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import ResourceBase

IMAGE_TYPES = ("system", "snapshot", "backup", "app")


class ImagesResource(ResourceBase):
    """Work with Hetzner Cloud images."""

    def list(self, **options: Any) -> dict[str, Any]:
        schema = (
            self._create_options_schema()
            .define("name", str)
            .define("label_selector", str)
            .define("sort", str)
            .define("type", str, lambda value: value in IMAGE_TYPES, f"one of {', '.join(IMAGE_TYPES)}")
            .define("status", str)
            .define("bound_to", (int, str))
            .define("architecture", str, lambda value: value in ("x86", "arm"), "x86 or arm")
        )
        return self._get("images", schema.validate(options))

    def get(self, image_id: int | str) -> dict[str, Any]:
        return self._get(f"images/{self._encode_path(image_id)}")

    def update(self, image_id: int | str, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self._put(f"images/{self._encode_path(image_id)}", payload)

    def delete(self, image_id: int | str) -> Any:
        return self._delete(f"images/{self._encode_path(image_id)}")
