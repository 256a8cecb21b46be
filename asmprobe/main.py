"""asmprobe command line interface."""

import json
import logging
import sys
import time
from pathlib import Path

import click
import yaml
from rich.markup import escape
from rich.table import Table

from .console import console
from .console import err_console
from .exclusion_filter import ExclusionFilter
from .logging_setup import DEFAULT_PATH
from .logging_setup import init_json_logging
from .path_tokens import contains_reserved_chars
from .path_tokens import extension_priority
from .path_tokens import remove_assembly_extension
from .resolvers import DefaultAssemblyResolver
from .settings import SettingsError
from .settings import SettingsManager

logger = logging.getLogger(__name__)

SCOPES = ["local", "project", "global"]


def create_settings_manager() -> SettingsManager:
    return SettingsManager()


@click.group()
@click.version_option(package_name="asmprobe")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for --log-file (default: ASMPROBE_LOG_LEVEL or INFO)",
)
def cli(log_file: str | None, log_level: str | None):
    """asmprobe - resolve namespace and assembly references to files."""
    if log_file:
        init_json_logging(log_file, log_level)


@cli.command("resolve")
@click.argument("name")
@click.option(
    "--dir",
    "-d",
    "dirs",
    multiple=True,
    help="Search directory (repeatable, probed in order before configured ones)",
)
@click.option("--ignore", default=None, help="Assembly file name that must never be resolved")
@click.option("--shared-dir", default=None, help="Override the shared runtime directory")
@click.option("--no-config", is_flag=True, help="Ignore settings files and environment")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def resolve_cmd(name: str, dirs: tuple[str, ...], ignore: str | None, shared_dir: str | None, no_config: bool, as_json: bool):
    """Resolve NAME (namespace, assembly name or rooted path) to assembly files."""
    search_dirs = list(dirs)
    ignore_file = ""

    if not no_config:
        try:
            probe = create_settings_manager().get_settings(strict=True).probe
        except SettingsError as e:
            err_console.print(f"[red]Invalid settings:[/red] {escape(e.message)}")
            sys.exit(2)
        search_dirs += [d for d in probe.search_dirs if d not in search_dirs]
        ignore_file = probe.ignore_file
        shared_dir = shared_dir or probe.shared_dir

    if ignore is not None:
        ignore_file = ignore

    resolver = DefaultAssemblyResolver(ExclusionFilter(ignore_file), shared_dir)
    paths, stage = resolver.resolve_with_location(name, search_dirs)
    logger.info(f"Resolved {name!r} via {stage}: {paths}")

    if as_json:
        click.echo(json.dumps({"name": name, "stage": stage, "paths": paths}))
    elif paths:
        table = Table(title=f"Resolved '{escape(name)}'", show_header=True, header_style="bold cyan")
        table.add_column("Path", style="green", overflow="fold")
        table.add_column("Stage", style="magenta")
        for path in paths:
            table.add_row(path, stage)
        console.print(table)

    if not paths:
        err_console.print(f"[yellow]Could not resolve '{escape(name)}'[/yellow]")
        if search_dirs:
            err_console.print(f"[dim]Searched: {escape(', '.join(search_dirs))} and the shared location[/dim]")
        else:
            err_console.print("[dim]No search directories given; only the shared location was probed[/dim]")
        sys.exit(1)


@cli.command("classify")
@click.argument("name")
def classify_cmd(name: str):
    """Show how NAME would be interpreted by the resolver."""
    if contains_reserved_chars(name):
        console.print(f"[cyan]{escape(name)}[/cyan] is a [bold]literal path[/bold] (contains reserved characters)")
        console.print("[dim]Only an existing rooted file is accepted; no directory search[/dim]")
        return

    kind = "symbolic name" if name else "empty name"
    console.print(f"[cyan]{escape(name)}[/cyan] is a [bold]{kind}[/bold]")
    order = ", ".join(f"{name}{ext}" for ext in extension_priority(name))
    console.print(f"Probe order: {escape(order)}")
    console.print(f"Shared location lookup: {escape(remove_assembly_extension(name))}")


@cli.group("config")
def config_group():
    """Show or edit probing settings."""


@config_group.command("show")
def config_show():
    """Show effective settings and the files they come from."""
    manager = create_settings_manager()

    table = Table(title="Settings files", show_header=True, header_style="bold cyan")
    table.add_column("Scope", style="green")
    table.add_column("Path", overflow="fold")
    table.add_column("Exists", style="yellow")
    for scope in SCOPES:
        path = manager.scope_path(scope)
        table.add_row(scope, str(path), "yes" if path.exists() else "no")
    console.print(table)

    try:
        settings = manager.get_settings(strict=True)
    except SettingsError as e:
        err_console.print(f"[red]Invalid settings:[/red] {escape(e.message)}")
        sys.exit(2)
    click.echo(yaml.safe_dump(settings.model_dump(), default_flow_style=False, sort_keys=False))


@config_group.command("set-ignore")
@click.argument("file_name")
@click.option("--scope", type=click.Choice(SCOPES), default="local", show_default=True)
def config_set_ignore(file_name: str, scope: str):
    """Exclude FILE_NAME from resolution results ("" to clear)."""
    manager = create_settings_manager()
    manager.set_ignore_file(file_name, scope)  # type: ignore[arg-type]
    console.print(f"[green]✓ ignore_file set to '{escape(file_name)}' ({scope})[/green]")


@config_group.command("add-dir")
@click.argument("directory")
@click.option("--scope", type=click.Choice(SCOPES), default="local", show_default=True)
def config_add_dir(directory: str, scope: str):
    """Append DIRECTORY to the configured search directories."""
    manager = create_settings_manager()
    if manager.add_search_dir(directory, scope):  # type: ignore[arg-type]
        console.print(f"[green]✓ Added {escape(directory)} ({scope})[/green]")
    else:
        console.print(f"[dim]{escape(directory)} already configured ({scope})[/dim]")


@cli.command("logs")
@click.option("--path", default=DEFAULT_PATH, help="Path to JSONL log file")
@click.option("--follow/--no-follow", default=False, help="Tail the log")
@click.option("--filter", "filter_text", default=None, help="Substring to filter lines")
def logs_cmd(path: str, follow: bool, filter_text: str | None):
    """Print the JSONL resolution log."""
    p = Path(path)
    if not p.exists():
        click.echo(f"No log file at {p}")
        return

    with p.open("r", encoding="utf-8") as f:
        if follow:
            # seek to end
            f.seek(0, 2)
            while True:
                line = f.readline()
                if not line:
                    time.sleep(0.25)
                    continue
                if filter_text and filter_text not in line:
                    continue
                click.echo(line.rstrip())
        else:
            for line in f:
                if filter_text and filter_text not in line:
                    continue
                click.echo(line.rstrip())


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
