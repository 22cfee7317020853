"""Request body construction for JSON and multipart payloads."""

from __future__ import annotations

import json
import logging
import mimetypes
import os
from collections.abc import Mapping, MutableMapping
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Union

import filetype
from urllib3 import encode_multipart_formdata
from urllib3.fields import RequestField

from .exceptions import SerializationError
from .http import StreamFactory

logger = logging.getLogger(__name__)

FilePath = Union[str, os.PathLike]

JSON_CONTENT_TYPE = "application/json"
DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class PreparedBody:
    """Encoded request body and the content type that describes it."""

    content: bytes | None = None
    content_type: str | None = None

    def apply(self, headers: MutableMapping[str, str]) -> None:
        if self.content_type:
            headers["Content-Type"] = self.content_type


class RequestBodyBuilder:
    """Choose between no body, a JSON body and a multipart form body."""

    def __init__(self, stream_factory: StreamFactory) -> None:
        self._stream_factory = stream_factory

    def build(
        self,
        parameters: Mapping[str, Any] | None = None,
        files: Mapping[str, FilePath] | None = None,
    ) -> PreparedBody:
        if files:
            return self._multipart(parameters or {}, files)
        if parameters:
            return self._json(parameters)
        return PreparedBody()

    def _json(self, parameters: Mapping[str, Any]) -> PreparedBody:
        try:
            encoded = json.dumps(parameters, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Request parameters are not JSON serializable: {exc}", details=str(exc)
            ) from exc
        logger.debug("Prepared JSON body with %d top-level keys", len(parameters))
        return PreparedBody(self._stream_factory.create_stream(encoded), JSON_CONTENT_TYPE)

    def _multipart(self, parameters: Mapping[str, Any], files: Mapping[str, FilePath]) -> PreparedBody:
        fields: list[RequestField] = []
        for name, value in parameters.items():
            field = RequestField(name=name, data=_form_value(name, value))
            field.make_multipart()
            fields.append(field)

        with ExitStack() as stack:
            for name, path in files.items():
                handle = stack.enter_context(open(path, "rb"))
                data = handle.read()
                field = RequestField(
                    name=name,
                    data=data,
                    filename=os.path.basename(os.fspath(path)),
                )
                field.make_multipart(content_type=guess_content_type(path, data))
                fields.append(field)

        body, content_type = encode_multipart_formdata(fields)
        logger.debug(
            "Prepared multipart body with %d fields and %d files",
            len(parameters),
            len(files),
        )
        return PreparedBody(self._stream_factory.create_stream(body), content_type)


def guess_content_type(path: FilePath, data: bytes | None = None) -> str:
    """Return the MIME type for a file, or ``application/octet-stream``.

    The file's leading bytes are sniffed first; the file name is only
    consulted when no signature matches.
    """

    kind = filetype.guess(data) if data else None
    if kind is not None:
        return kind.mime
    content_type, _ = mimetypes.guess_type(os.fspath(path))
    return content_type or DEFAULT_FILE_CONTENT_TYPE


def _form_value(name: str, value: Any) -> str | bytes:
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    raise SerializationError(
        f"Form field '{name}' has unsupported type {type(value).__name__}",
        details={"field": name},
    )
