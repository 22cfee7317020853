"""Common helpers for resource wrappers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..body import FilePath, RequestBodyBuilder
from ..http import StreamFactory, Transport
from ..options import OptionsSchema, pagination_schema
from ..query import QueryStringBuilder, encode_path
from ..response import ResponseMediator


class ResourceBase:
    """Build requests for a resource family and mediate the responses."""

    def __init__(self, transport: Transport, stream_factory: StreamFactory) -> None:
        self._transport = transport
        self._stream_factory = stream_factory
        self._body_builder = RequestBodyBuilder(stream_factory)

    def _get_as_response(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self._transport.get(self._prepare_path(path, params), dict(headers or {}))

    def _get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return ResponseMediator.get_content(self._get_as_response(path, params, headers))

    def _post(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        files: Mapping[str, FilePath] | None = None,
    ) -> Any:
        request_headers = dict(headers or {})
        body = self._body_builder.build(params, files)
        body.apply(request_headers)
        response = self._transport.post(self._prepare_path(path), request_headers, body.content)
        return ResponseMediator.get_content(response)

    def _put(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        request_headers = dict(headers or {})
        body = self._body_builder.build(params)
        body.apply(request_headers)
        response = self._transport.put(self._prepare_path(path), request_headers, body.content)
        return ResponseMediator.get_content(response)

    def _delete(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        response = self._transport.delete(self._prepare_path(path, params), dict(headers or {}))
        return ResponseMediator.get_content(response)

    def _server_path(self, server_id: int | str, path: str) -> str:
        return f"servers/{encode_path(server_id)}/{path}"

    @staticmethod
    def _encode_path(segment: int | str) -> str:
        return encode_path(segment)

    def _create_options_schema(self) -> OptionsSchema:
        return pagination_schema()

    @staticmethod
    def _prepare_path(path: str, params: Mapping[str, Any] | None = None) -> str:
        query = QueryStringBuilder.build(params)
        if query:
            return f"{path}?{query}"
        return path
