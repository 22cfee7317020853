"""Query string and path segment encoding."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import quote


class QueryStringBuilder:
    """Serialize request parameters into a query string.

    Sequences use bracket notation (``ids[]=1&ids[]=2``) and nested mappings
    use bracket paths (``filter[status]=running``). Keys keep their insertion
    order at every depth.
    """

    @classmethod
    def build(cls, parameters: Mapping[str, Any] | None) -> str:
        if not parameters:
            return ""
        return "&".join(
            f"{key}={value}"
            for key, value in cls._pairs(parameters, prefix=None)
        )

    @classmethod
    def _pairs(cls, value: Mapping[str, Any], prefix: str | None) -> Iterator[tuple[str, str]]:
        for key, item in value.items():
            encoded_key = _quote(key)
            name = encoded_key if prefix is None else f"{prefix}[{encoded_key}]"
            yield from cls._encode(item, name)

    @classmethod
    def _encode(cls, value: Any, name: str) -> Iterator[tuple[str, str]]:
        if isinstance(value, Mapping):
            yield from cls._pairs(value, prefix=name)
        elif isinstance(value, (list, tuple)):
            for item in value:
                yield from cls._encode(item, f"{name}[]")
        else:
            yield name, _quote(_scalar(value))


def encode_path(segment: Any) -> str:
    """Percent-encode a single path segment, escaping literal dots as ``%2E``."""

    return quote(str(segment), safe="").replace(".", "%2E")


def _scalar(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    if value is None:
        return ""
    return str(value)


def _quote(value: Any) -> str:
    return quote(str(value), safe="")


__all__ = ["QueryStringBuilder", "encode_path"]
