"""content-mcp command line interface."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from pathlib import Path
from typing import Any
from typing import NoReturn
from typing import TypeVar

import click
import yaml
from rich.markup import escape
from rich.table import Table

from .console import console
from .console import error_console
from .host import HostContext
from .logging_setup import init_json_logging
from .tools import ContentToolsState
from .tools import ToolError
from .tools import ToolRegistry
from .tools import register_content_tools
from .tools.content import collection_json_schema

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_CONTENT_MODULE = "Content module is not installed in this project"


def _fail(error: BaseException | str) -> NoReturn:
    message = str(error) or type(error).__name__
    error_console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(1)


def _run_with_tools(ctx: click.Context, action: Callable[[ToolRegistry, ContentToolsState | None], Awaitable[T]]) -> T:
    """Load the host's content tools, run an async action against them, then close the host."""
    root: Path = ctx.obj["root"]
    dev: bool | None = ctx.obj["dev"]

    async def runner() -> T:
        host = HostContext.from_project(root, dev=dev)
        try:
            registry = ToolRegistry()
            state = await register_content_tools(host, registry)
            return await action(registry, state)
        finally:
            await host.close()

    try:
        return asyncio.run(runner())
    except (ToolError, ValueError, OSError, yaml.YAMLError) as e:
        logger.error(f"Command failed: {e}")
        _fail(e)


@click.group()
@click.version_option(package_name="content-mcp")
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    envvar="CONTENT_MCP_ROOT",
    show_default=True,
    help="Host project directory",
)
@click.option("--dev/--no-dev", default=None, envvar="CONTENT_MCP_DEV", help="Watch content config files for changes")
@click.option("--log-file", envvar="CONTENT_MCP_LOG_PATH", help="JSONL log file path")
@click.option("--log-level", envvar="CONTENT_MCP_LOG_LEVEL", help="Log level (default INFO)")
@click.pass_context
def cli(ctx: click.Context, root: Path, dev: bool | None, log_file: str | None, log_level: str | None):
    """Discover content collections of a layered host project and serve them as tools."""
    init_json_logging(log_file, log_level)
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    ctx.obj["dev"] = dev


@cli.group()
def collections():
    """Inspect resolved content collections."""


@collections.command(name="list")
@click.pass_context
def collections_list(ctx: click.Context):
    """List resolved collections."""

    async def action(registry: ToolRegistry, state: ContentToolsState | None):
        return state

    state = _run_with_tools(ctx, action)
    if state is None:
        _fail(NO_CONTENT_MODULE)
    if not state.collections:
        console.print("[yellow]No collections configured[/yellow]")
        return

    table = Table(title="Content collections")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Table", no_wrap=True)
    table.add_column("Source")
    table.add_column("Private")
    for item in state.collections:
        sources = ", ".join(s.include for s in item.source or [])
        table.add_row(item.name, item.type, item.table_name, sources or "-", "yes" if item.private else "")
    console.print(table)

    if state.dropped.count:
        console.print(f"[yellow]Ignored invalid collection names:[/yellow] {escape(', '.join(state.dropped.names))}")


@collections.command(name="schema")
@click.argument("name")
@click.pass_context
def collections_schema(ctx: click.Context, name: str):
    """Print the JSON schema of collection NAME."""

    async def action(registry: ToolRegistry, state: ContentToolsState | None):
        return state

    state = _run_with_tools(ctx, action)
    if state is None:
        _fail(NO_CONTENT_MODULE)
    item = state.find(name)
    if item is None:
        _fail(f"Collection {name} not found")
    click.echo(json.dumps(collection_json_schema(item), indent=2))


@cli.group()
def tools():
    """Inspect and call the registered tools."""


@tools.command(name="list")
@click.pass_context
def tools_list(ctx: click.Context):
    """List registered tools and their parameters."""

    async def action(registry: ToolRegistry, state: ContentToolsState | None):
        return registry.list_tools()

    definitions = _run_with_tools(ctx, action)
    if not definitions:
        console.print("[yellow]No tools registered[/yellow]")
        return

    table = Table(title="Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Parameters")
    table.add_column("Description")
    for definition in definitions:
        params = ", ".join(f"{p.name}: {p.type}" for p in definition.parameters)
        table.add_row(definition.name, params or "-", definition.description)
    console.print(table)


@tools.command(name="call")
@click.argument("name")
@click.option("--collection", "-c", help="Value of the 'collection' argument")
@click.option("--json", "as_json", is_flag=True, help="Print the raw response object")
@click.pass_context
def tools_call(ctx: click.Context, name: str, collection: str | None, as_json: bool):
    """Call tool NAME and print its response."""
    arguments: dict[str, Any] = {}
    if collection is not None:
        arguments["collection"] = collection

    async def action(registry: ToolRegistry, state: ContentToolsState | None):
        return await registry.call(name, arguments)

    response = _run_with_tools(ctx, action)
    click.echo(json.dumps(response.to_dict(), indent=2) if as_json else response.joined_text)
    if response.is_error:
        raise SystemExit(1)


@cli.command()
@click.pass_context
def serve(ctx: click.Context):
    """Serve the content tools over MCP stdio."""
    from .server import serve as serve_stdio

    try:
        host = HostContext.from_project(ctx.obj["root"], dev=ctx.obj["dev"])
        asyncio.run(serve_stdio(host))
    except (ValueError, OSError, yaml.YAMLError) as e:
        logger.error(f"Server failed: {e}")
        _fail(e)


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
