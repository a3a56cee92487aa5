"""CLI interface for portfolio-cms."""

import json
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from portfolio_cms.bootstrap import CmsService, activate, build_service
from portfolio_cms.config import load_config, merge_cli_overrides
from portfolio_cms.diagnostics import CheckStatus, run_diagnostics
from portfolio_cms.errors import CmsError
from portfolio_cms.fieldgroups import load_field_groups, load_paths

app = typer.Typer(
    name="portfolio-cms",
    help="Content schema and author-profile projection for a headless portfolio CMS.",
)

console = Console()
_stderr_console = Console(stderr=True)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .portfolio-cms.toml file."),
]
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", help="Directory holding the JSON stores."),
]
PluginDirOption = Annotated[
    Optional[Path],
    typer.Option("--plugin-dir", help="Plugin directory holding field-group definitions."),
]

_STATUS_STYLE = {
    CheckStatus.PASS: "[green]PASS[/green]",
    CheckStatus.FAIL: "[red]FAIL[/red]",
    CheckStatus.SKIP: "[yellow]SKIP[/yellow]",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from portfolio_cms import __version__

        console.print(f"portfolio-cms {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Portfolio CMS - content schema and author profiles."""
    pass


def _load_service(
    config_path: Path | None,
    data_dir: Path | None = None,
    plugin_dir: Path | None = None,
) -> CmsService:
    config = load_config(config_path)
    config = merge_cli_overrides(config, data_dir=data_dir, plugin_dir=plugin_dir)
    return build_service(config)


def _fail(message: str) -> NoReturn:
    _stderr_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _echo_json(data: object) -> None:
    typer.echo(json.dumps(data, indent=2))


@app.command(name="activate")
def activate_cmd(
    config: ConfigOption = None,
    data_dir: DataDirOption = None,
    plugin_dir: PluginDirOption = None,
) -> None:
    """Run one-time setup: schema, definitions directory, routes."""
    service = _load_service(config, data_dir, plugin_dir)
    report = activate(service)
    console.print(report.summary_text(), markup=False)
    if not report.success:
        raise typer.Exit(1)


@app.command(name="schema")
def schema_cmd(config: ConfigOption = None) -> None:
    """Show the declared content types and taxonomies."""
    service = _load_service(config)
    registry = service.registry

    types_table = Table(title="Content types")
    for column in ("Key", "Name", "URL prefix", "REST base", "GraphQL"):
        types_table.add_column(column)
    for ct in registry.content_types():
        types_table.add_row(
            ct.key,
            ct.labels.name,
            f"/{ct.rewrite_slug}",
            ct.rest_base,
            f"{ct.graphql_single_name}/{ct.graphql_plural_name}" if ct.show_in_graphql else "-",
        )
    console.print(types_table)

    tax_table = Table(title="Taxonomies")
    for column in ("Key", "Name", "Hierarchical", "Applies to"):
        tax_table.add_column(column)
    for tax in registry.taxonomies():
        tax_table.add_row(
            tax.key,
            tax.labels.name,
            "yes" if tax.hierarchical else "no",
            ", ".join(sorted(tax.object_types)),
        )
    console.print(tax_table)


@app.command(name="routes")
def routes_cmd(
    resolve: Annotated[
        Optional[str],
        typer.Option("--resolve", "-r", help="Resolve a URL path against the table."),
    ] = None,
    config: ConfigOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """List the generated URL routes."""
    service = _load_service(config, data_dir)
    routes = service.routes
    if resolve is not None:
        match = routes.resolve(resolve)
        if match is None:
            _fail(f"No route matches {resolve}")
        _echo_json(match.model_dump(mode="json"))
        return

    if not routes.rules:
        console.print("[yellow]No routes generated yet. Run 'activate' first.[/yellow]")
        return
    console.print(f"Route table generation {routes.generation}")
    for rule in routes.rules:
        console.print(f"  /{rule.prefix}/  →  {rule.kind.value}:{rule.key}")


@app.command(name="user")
def user_cmd(
    user_id: Annotated[int, typer.Argument(help="User id.")],
    config: ConfigOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Print a user's representation as JSON."""
    service = _load_service(config, data_dir)
    try:
        _echo_json(service.api.get_user(user_id))
    except CmsError as exc:
        _fail(str(exc))


@app.command(name="item")
def item_cmd(
    rest_base: Annotated[str, typer.Argument(help="Content type REST base, e.g. article.")],
    item_id: Annotated[int, typer.Argument(help="Content item id.")],
    config: ConfigOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Print a published content item's representation as JSON."""
    service = _load_service(config, data_dir)
    try:
        _echo_json(service.api.get_item(rest_base, item_id))
    except CmsError as exc:
        _fail(str(exc))


@app.command(name="set-field")
def set_field_cmd(
    user_id: Annotated[int, typer.Argument(help="User id.")],
    field: Annotated[str, typer.Argument(help="Profile field name, e.g. linkedin_url.")],
    value: Annotated[str, typer.Argument(help="New value.")],
    config: ConfigOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Set one author-profile field for a user."""
    service = _load_service(config, data_dir)
    try:
        results = service.api.update_user(user_id, {field: value})
    except CmsError as exc:
        _fail(str(exc))
    if not results[field]:
        _fail(f"Could not store {field} for user {user_id}")
    console.print(f"[green]Updated[/green] {field} for user {user_id}")


@app.command(name="clear-field")
def clear_field_cmd(
    user_id: Annotated[int, typer.Argument(help="User id.")],
    field: Annotated[str, typer.Argument(help="Profile field name.")],
    config: ConfigOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Remove one author-profile field for a user."""
    service = _load_service(config, data_dir)
    try:
        results = service.api.update_user(user_id, {field: None})
    except CmsError as exc:
        _fail(str(exc))
    if not results[field]:
        _fail(f"Could not clear {field} for user {user_id}")
    console.print(f"[green]Cleared[/green] {field} for user {user_id}")


@app.command(name="field-groups")
def field_groups_cmd(
    path: Annotated[
        Optional[list[Path]],
        typer.Option(
            "--path",
            "-p",
            help="Incoming load path (repeatable). The first one is the theme "
            "default and is replaced by the plugin directory.",
        ),
    ] = None,
    config: ConfigOption = None,
    plugin_dir: PluginDirOption = None,
) -> None:
    """List exported field groups from the definition load paths."""
    service = _load_service(config, plugin_dir=plugin_dir)
    groups = load_field_groups(load_paths(service.config, path or []))
    if not groups:
        console.print("[yellow]No field groups found.[/yellow]")
        return
    for group in groups:
        console.print(f"{group.key}: {group.title} ({len(group.fields)} fields)")


@app.command(name="diagnose")
def diagnose_cmd(
    config: ConfigOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Check field registration and projection against the live stores."""
    service = _load_service(config, data_dir)
    report = run_diagnostics(service)

    for result in report.results:
        console.print(f"{_STATUS_STYLE[result.status]} {result.name}")
        for line in result.details:
            console.print(f"    {line}", markup=False)

    console.print(
        f"\nTotal: {len(report.results)}  Passed: {report.passed}  "
        f"Failed: {report.failed}  Skipped: {report.skipped}"
    )
    if report.failed:
        raise typer.Exit(1)
