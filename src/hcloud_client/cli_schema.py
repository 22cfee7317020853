"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """Describe how to pull and format a column for Rich tables."""

    header: str
    keys: tuple[str, ...] = ()
    extractor: ValueExtractor | None = None
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value: Any | None = None
        for key in self.keys:
            value = row.get(key)
            if value is not None:
                break
        if value is None and self.extractor:
            value = self.extractor(row)
        if value is None:
            return ""
        if self.formatter:
            return str(self.formatter(value))
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command.

    `collection` names the key holding the rows in a list payload
    (``{"servers": [...], "meta": {...}}``).
    """

    title: str
    collection: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None


def _nested(*path: str) -> ValueExtractor:
    def _extractor(row: Row) -> Any:
        value: Any = row
        for key in path:
            if not isinstance(value, Mapping):
                return None
            value = value.get(key)
        return value

    return _extractor


def _labels_formatter(value: Any) -> str:
    if not isinstance(value, Mapping):
        return str(value)
    return ", ".join(f"{key}={item}" for key, item in value.items())


def _size_gb(value: Any) -> str:
    return f"{value} GB"


def _sort_name(row: Row) -> str:
    return str(row.get("name") or row.get("description") or "").lower()


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "servers.list": TableView(
        title="Servers",
        collection="servers",
        columns=(
            Column("ID", keys=("id",), justify="right"),
            Column("Name", keys=("name",)),
            Column("Status", keys=("status",)),
            Column("Type", extractor=_nested("server_type", "name")),
            Column("Location", extractor=_nested("datacenter", "location", "name")),
            Column("IPv4", extractor=_nested("public_net", "ipv4", "ip")),
            Column("Labels", keys=("labels",), formatter=_labels_formatter),
        ),
        sort_key=_sort_name,
    ),
    "volumes.list": TableView(
        title="Volumes",
        collection="volumes",
        columns=(
            Column("ID", keys=("id",), justify="right"),
            Column("Name", keys=("name",)),
            Column("Size", keys=("size",), formatter=_size_gb, justify="right"),
            Column("Server", keys=("server",), justify="right"),
            Column("Location", extractor=_nested("location", "name")),
            Column("Status", keys=("status",)),
        ),
        sort_key=_sort_name,
    ),
    "images.list": TableView(
        title="Images",
        collection="images",
        columns=(
            Column("ID", keys=("id",), justify="right"),
            Column("Name", keys=("name", "description")),
            Column("Type", keys=("type",)),
            Column("Architecture", keys=("architecture",)),
            Column("Status", keys=("status",)),
        ),
        sort_key=_sort_name,
    ),
}

__all__ = ["CLI_TABLE_VIEWS", "Column", "TableView"]
