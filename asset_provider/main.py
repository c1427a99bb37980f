"""Command-line interface for inspecting what the asset provider serves."""

from pathlib import Path

import click
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from .compression import build_platform_archive
from .console import console
from .console import error_console
from .environment import detect_install_context
from .environment import detect_platform_layout
from .errors import AssetNotFoundError
from .errors import AssetProviderError
from .errors import InvalidAssetIdError
from .logging_setup import init_json_logging
from .models import AssetId
from .package_graph import load_package_graph
from .provider import AssetProvider
from .provider import create_asset_provider
from .settings import SettingsManager


def _create_provider(ctx: click.Context) -> AssetProvider:
    """Build the provider from the manifest and settings on the context."""
    try:
        graph = load_package_graph(ctx.obj["manifest"])
        return create_asset_provider(graph, ctx.obj["settings"])
    except AssetProviderError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)


@click.group()
@click.version_option(package_name="pkg-asset-provider")
@click.option(
    "--manifest",
    "-m",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("packages.yaml"),
    show_default=True,
    help="Package graph manifest",
)
@click.option("--log-path", type=click.Path(dir_okay=False), default=None, help="JSONL log file")
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details")
@click.pass_context
def cli(ctx: click.Context, manifest: Path, log_path: str | None, verbose: bool):
    """Resolve package assets for the asset graph."""
    init_json_logging(log_path, "DEBUG" if verbose else None)
    ctx.ensure_object(dict)
    ctx.obj["manifest"] = manifest
    try:
        ctx.obj["settings"] = SettingsManager().load()
    except ValidationError as e:
        error_console.print(f"[red]Invalid settings:[/red] {escape(str(e))}")
        ctx.exit(1)


@cli.command("namespaces")
@click.pass_context
def namespaces(ctx: click.Context):
    """List every namespace the provider serves."""
    provider = _create_provider(ctx)

    table = Table(title="Provided Namespaces", show_header=True, header_style="bold cyan")
    table.add_column("Namespace", style="green")
    table.add_column("Resolver", style="yellow")
    table.add_column("Version", style="magenta")

    for name in sorted(provider.list_namespaces()):
        package = provider.graph.packages.get(name)
        table.add_row(name, provider.resolver_kind(name).value, package.version if package else "-")

    console.print(table)


@cli.command("list")
@click.argument("namespace")
@click.pass_context
def list_assets(ctx: click.Context, namespace: str):
    """List the asset ids in NAMESPACE."""
    provider = _create_provider(ctx)
    try:
        ids = provider.get_all_asset_ids(namespace)
        for asset_id in ids:
            click.echo(str(asset_id))
    except InvalidAssetIdError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(2)


@cli.command("cat")
@click.argument("asset_id")
@click.pass_context
def cat(ctx: click.Context, asset_id: str):
    """Write the content of ASSET_ID ("package|path") to stdout."""
    provider = _create_provider(ctx)
    try:
        asset = provider.get_asset(AssetId.parse(asset_id))
    except AssetNotFoundError as e:
        error_console.print(f"[red]Not found:[/red] {escape(str(e.id))}")
        ctx.exit(1)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(2)

    out = click.get_binary_stream("stdout")
    for chunk in asset.chunks():
        out.write(chunk)
    out.flush()


@cli.command("env")
@click.pass_context
def env(ctx: click.Context):
    """Show the detected install context and platform layout."""
    settings = ctx.obj["settings"]
    context = detect_install_context(settings)
    console.print(f"Install context: [cyan]{context}[/cyan]")
    try:
        layout = detect_platform_layout(settings)
    except AssetProviderError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)
    console.print(f"Platform mode:   [cyan]{layout.mode.value}[/cyan]")
    console.print(f"Library dir:     [cyan]{escape(str(layout.library_dir))}[/cyan]")


@cli.command("archive")
@click.argument("source", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("dest", type=click.Path(file_okay=False, path_type=Path))
@click.option("--extension", default=".py", show_default=True, help="Source file extension to archive")
def archive(source: Path, dest: Path, extension: str):
    """Build an archived platform tree from SOURCE into DEST."""
    count = build_platform_archive(source, dest, extension)
    console.print(f"[green]✓ Archived {count} files into {dest}[/green]")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
