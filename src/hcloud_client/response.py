"""Translate transport responses into decoded payloads or typed errors."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from .exceptions import UnexpectedResponseError, error_class_for_status

logger = logging.getLogger(__name__)


class ResponseMediator:
    """Single place where HTTP status codes are inspected."""

    @classmethod
    def get_content(cls, response: Any) -> Any:
        """Decode a successful response or raise the matching `ApiError`.

        JSON bodies are parsed, other content types are returned as raw
        bytes and an empty success body yields ``None``.
        """

        status_code = response.status_code
        body: bytes = response.content or b""
        content_type = response.headers.get("Content-Type", "")

        if not 200 <= status_code < 300:
            raise cls._build_error(status_code, body)
        if not body:
            return None
        if not is_json_content_type(content_type):
            return body
        try:
            return json.loads(body)
        except ValueError as exc:
            raise UnexpectedResponseError(
                "Response did not contain valid JSON",
                status_code=status_code,
                details=body[:200],
            ) from exc

    @staticmethod
    def get_pagination(payload: Any) -> Mapping[str, Any] | None:
        """Return ``meta.pagination`` from a decoded list payload, if any."""

        if not isinstance(payload, Mapping):
            return None
        meta = payload.get("meta")
        if not isinstance(meta, Mapping):
            return None
        pagination = meta.get("pagination")
        return pagination if isinstance(pagination, Mapping) else None

    @staticmethod
    def _build_error(status_code: int, body: bytes):
        error_class = error_class_for_status(status_code)
        envelope = _error_envelope(body)
        if envelope is None:
            logger.debug("Hetzner Cloud API error %s without error payload", status_code)
            return error_class(
                status_description(status_code),
                status_code=status_code,
                raw_body=body,
            )
        error_code = envelope.get("code")
        message = envelope.get("message") or status_description(status_code)
        logger.debug("Hetzner Cloud API error %s (%s)", status_code, error_code)
        return error_class(
            str(message),
            status_code=status_code,
            error_code=str(error_code) if error_code is not None else None,
            raw_body=body,
            details=envelope.get("details"),
        )


def is_json_content_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def status_description(status_code: int) -> str:
    try:
        return f"{status_code} {HTTPStatus(status_code).phrase}"
    except ValueError:
        return f"HTTP {status_code}"


def _error_envelope(body: bytes) -> Mapping[str, Any] | None:
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, Mapping):
        return None
    error = payload.get("error")
    return error if isinstance(error, Mapping) else None
