"""Command-line interface for the Hetzner Cloud API."""
from __future__ import annotations

import json
import os
from typing import Any

import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install hcloud-client[cli]' to enable this command."
    ) from exc

from . import HetznerCloudClient
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .config import DEFAULT_ENDPOINT
from .exceptions import ApiError, HetznerCloudError

app = typer.Typer(help="Hetzner Cloud management CLI.", no_args_is_help=True)

servers_app = typer.Typer(help="Server operations.")
volumes_app = typer.Typer(help="Volume operations.")
images_app = typer.Typer(help="Image operations.")
app.add_typer(servers_app, name="servers")
app.add_typer(volumes_app, name="volumes")
app.add_typer(images_app, name="images")


def _build_client(
    token: str | None,
    endpoint: str,
    verify_ssl: bool,
    timeout: float,
) -> HetznerCloudClient:
    if not token:
        raise typer.BadParameter("--token (or HCLOUD_TOKEN) is required.")
    return HetznerCloudClient(
        token,
        base_url=endpoint,
        verify_ssl=verify_ssl,
        timeout=timeout,
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


console = Console(force_terminal=False, color_system=None)


def _render_rich_table(view: TableView, rows: list[dict[str, Any]]) -> None:
    table = Table(
        title=view.title,
        box=box.SIMPLE,
        show_lines=False,
        header_style="bold cyan",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    if view.sort_key:
        rows = sorted(rows, key=view.sort_key)
    for row in rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_output(payload: Any, *, view_id: str, json_output: bool) -> None:
    view = CLI_TABLE_VIEWS.get(view_id)
    if json_output or view is None or not isinstance(payload, dict):
        _echo_json(payload)
        return
    rows = [row for row in payload.get(view.collection) or [] if isinstance(row, dict)]
    if not rows:
        _echo_json(payload)
        return
    _render_rich_table(view, rows)


def _handle_error(exc: HetznerCloudError) -> None:
    if isinstance(exc, ApiError):
        message = f"Request failed (status {exc.status_code}): {exc}"
        if exc.error_code:
            message += f" [{exc.error_code}]"
    else:
        message = f"Request failed: {exc}"
    if exc.details:
        message += f"\nDetails: {exc.details}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _paging(page: int | None, per_page: int | None, **filters: Any) -> dict[str, Any]:
    options = {key: value for key, value in filters.items() if value is not None}
    if page is not None:
        options["page"] = page
    if per_page is not None:
        options["per_page"] = per_page
    return options


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    env_verify = os.getenv("HCLOUD_VERIFY_SSL")
    default_verify = True
    if env_verify is not None and env_verify.strip().lower() in {"0", "false", "no", "off"}:
        default_verify = False

    return {
        "token": typer.Option(
            None,
            "--token",
            "-t",
            envvar="HCLOUD_TOKEN",
            help="Hetzner Cloud project API token.",
            hide_input=True,
        ),
        "endpoint": typer.Option(
            DEFAULT_ENDPOINT,
            "--endpoint",
            envvar="HCLOUD_ENDPOINT",
            help="Hetzner Cloud API base URL.",
            show_default=True,
        ),
        "verify_ssl": typer.Option(
            default_verify,
            "--verify/--no-verify",
            envvar="HCLOUD_VERIFY_SSL",
            help="Enable or disable TLS certificate verification.",
            show_default=True,
        ),
        "timeout": typer.Option(30.0, help="Request timeout (seconds).", show_default=True),
        "page": typer.Option(None, "--page", help="Page number to fetch."),
        "per_page": typer.Option(None, "--per-page", help="Entries per page (max 100)."),
        "label_selector": typer.Option(
            None, "--label-selector", "-l", help="Filter by label selector."
        ),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
    }


_SHARED_OPTIONS = _shared_options()


@servers_app.command("list")
def servers_list(
    token: str | None = _SHARED_OPTIONS["token"],
    endpoint: str = _SHARED_OPTIONS["endpoint"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    page: int | None = _SHARED_OPTIONS["page"],
    per_page: int | None = _SHARED_OPTIONS["per_page"],
    label_selector: str | None = _SHARED_OPTIONS["label_selector"],
    name: str | None = typer.Option(None, "--name", help="Filter by exact server name."),
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List servers."""

    with _build_client(token, endpoint, verify_ssl, timeout) as client:
        try:
            payload = client.servers.list(
                **_paging(page, per_page, name=name, label_selector=label_selector)
            )
        except HetznerCloudError as exc:
            _handle_error(exc)
            return

    _present_output(payload, view_id="servers.list", json_output=output_json)


@servers_app.command("get")
def servers_get(
    server_id: str = typer.Argument(..., help="Server identifier."),
    token: str | None = _SHARED_OPTIONS["token"],
    endpoint: str = _SHARED_OPTIONS["endpoint"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show a single server as JSON."""

    with _build_client(token, endpoint, verify_ssl, timeout) as client:
        try:
            payload = client.servers.get(server_id)
        except HetznerCloudError as exc:
            _handle_error(exc)
            return

    _echo_json(payload)


@volumes_app.command("list")
def volumes_list(
    token: str | None = _SHARED_OPTIONS["token"],
    endpoint: str = _SHARED_OPTIONS["endpoint"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    page: int | None = _SHARED_OPTIONS["page"],
    per_page: int | None = _SHARED_OPTIONS["per_page"],
    label_selector: str | None = _SHARED_OPTIONS["label_selector"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List volumes."""

    with _build_client(token, endpoint, verify_ssl, timeout) as client:
        try:
            payload = client.volumes.list(**_paging(page, per_page, label_selector=label_selector))
        except HetznerCloudError as exc:
            _handle_error(exc)
            return

    _present_output(payload, view_id="volumes.list", json_output=output_json)


@volumes_app.command("get")
def volumes_get(
    volume_id: str = typer.Argument(..., help="Volume identifier."),
    token: str | None = _SHARED_OPTIONS["token"],
    endpoint: str = _SHARED_OPTIONS["endpoint"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show a single volume as JSON."""

    with _build_client(token, endpoint, verify_ssl, timeout) as client:
        try:
            payload = client.volumes.get(volume_id)
        except HetznerCloudError as exc:
            _handle_error(exc)
            return

    _echo_json(payload)


@images_app.command("list")
def images_list(
    token: str | None = _SHARED_OPTIONS["token"],
    endpoint: str = _SHARED_OPTIONS["endpoint"],
    verify_ssl: bool = _SHARED_OPTIONS["verify_ssl"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    page: int | None = _SHARED_OPTIONS["page"],
    per_page: int | None = _SHARED_OPTIONS["per_page"],
    label_selector: str | None = _SHARED_OPTIONS["label_selector"],
    image_type: str | None = typer.Option(
        None, "--type", help="Filter by image type (system, snapshot, backup, app)."
    ),
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List images."""

    with _build_client(token, endpoint, verify_ssl, timeout) as client:
        try:
            payload = client.images.list(
                **_paging(page, per_page, label_selector=label_selector, type=image_type)
            )
        except HetznerCloudError as exc:
            _handle_error(exc)
            return

    _present_output(payload, view_id="images.list", json_output=output_json)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    app()
