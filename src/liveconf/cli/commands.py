"""
CLI commands for liveconf.

Scans packages for configuration roots and shows or exports the resulting
variable tree.
"""

from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from liveconf.core.errors import FieldAccessError
from liveconf.core.scanner import scan_packages
from liveconf.core.settings import (
    ScanSettings,
    SettingsLoader,
    merge_cli_overrides,
    settings_summary,
)
from liveconf.core.snapshot import SnapshotWriter
from liveconf.core.types import VariableType
from liveconf.core.variables import CustomVariable
from liveconf.utils.helpers import count_variables
from liveconf.utils.logging import level_for_flags, setup_logging


def _resolve_settings(
    packages: Tuple[str, ...],
    ignore: Tuple[str, ...],
    settings_file: Optional[Path],
    verbose: bool,
    debug: bool,
) -> ScanSettings:
    """Load the settings file (if any) and apply command-line values."""
    settings = ScanSettings()
    if settings_file:
        settings = SettingsLoader().load(str(settings_file))

    settings = merge_cli_overrides(settings, packages, ignore)
    settings.log_level = level_for_flags(settings.log_level, verbose, debug)
    return settings


def _format_value(variable) -> str:
    try:
        value = variable.get_value()
    except FieldAccessError:
        return "[red]<unreadable>[/red]"
    if variable.type is VariableType.ENUM and value is not None:
        return str(value.name)
    return repr(value)


def _build_rich_tree(
    node: Tree, variable: CustomVariable, show_values: bool
) -> Tree:
    """Add a variable tree's children to a rich Tree node."""
    for name, child in variable.items():
        if isinstance(child, CustomVariable):
            branch = node.add(f"[bold cyan]{name}[/bold cyan]")
            _build_rich_tree(branch, child, show_values)
            continue

        label = f"{name} [dim]({child.type.value})[/dim]"
        if show_values:
            label += f" = [green]{_format_value(child)}[/green]"
        node.add(label)
    return node


def _show_summary(console: Console, tree: CustomVariable) -> None:
    """Show variable counts for a scanned tree."""
    counts = count_variables(tree)

    table = Table(title="Configuration Scan Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green")

    table.add_row("Config Roots", str(len(tree)))
    table.add_row("Nested Custom Variables", str(counts["custom"] - len(tree)))
    table.add_row("Basic Variables", str(counts["basic"]))

    console.print(table)


def _scan_options(func):
    """Options shared by every scanning command."""
    func = click.option("--debug", is_flag=True, help="Debug output")(func)
    func = click.option("-v", "--verbose", is_flag=True, help="Verbose output")(func)
    func = click.option(
        "--settings",
        "settings_file",
        type=click.Path(exists=True, path_type=Path),
        help="Path to scan settings YAML file",
    )(func)
    func = click.option(
        "-i",
        "--ignore",
        multiple=True,
        help="Fully-qualified class name prefix to ignore (repeatable)",
    )(func)
    func = click.argument("packages", nargs=-1)(func)
    return func


@click.command()
@_scan_options
@click.option("--values", "show_values", is_flag=True, help="Show current values")
@click.option("--summary", is_flag=True, help="Show scan summary")
def show(
    packages: Tuple[str, ...],
    ignore: Tuple[str, ...],
    settings_file: Optional[Path],
    verbose: bool,
    debug: bool,
    show_values: bool,
    summary: bool,
):
    """
    Scan PACKAGES for @config classes and display the variable tree.

    Arguments:
        PACKAGES: Importable package or module names to scan
    """
    console = Console()
    logger = setup_logging("WARNING")

    try:
        settings = _resolve_settings(packages, ignore, settings_file, verbose, debug)
        logger = setup_logging(settings.log_level)
        logger.debug(f"Scan settings: {settings_summary(settings)}")

        if not settings.packages:
            raise click.UsageError("No packages to scan")

        tree = scan_packages(settings.packages, settings.ignore_prefixes)
        logger.info(f"Found {len(tree)} config root(s)")

        if len(tree) == 0:
            console.print("[yellow]No config classes found[/yellow]")
        else:
            console.print(
                _build_rich_tree(Tree("[bold blue]Configuration[/bold blue]"), tree, show_values)
            )

        if summary:
            _show_summary(console, tree)

    except click.UsageError:
        raise
    except Exception as e:
        logger.error(f"Error: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise click.Abort()


@click.command()
@_scan_options
@click.option(
    "-o",
    "--output",
    default="liveconf_snapshot.yaml",
    help="Output file name (default: liveconf_snapshot.yaml)",
)
def export(
    packages: Tuple[str, ...],
    ignore: Tuple[str, ...],
    settings_file: Optional[Path],
    verbose: bool,
    debug: bool,
    output: str,
):
    """
    Scan PACKAGES and export the current variable values to a YAML file.

    Arguments:
        PACKAGES: Importable package or module names to scan
    """
    console = Console()
    logger = setup_logging("WARNING")

    try:
        settings = _resolve_settings(packages, ignore, settings_file, verbose, debug)
        logger = setup_logging(settings.log_level)

        if not settings.packages:
            raise click.UsageError("No packages to scan")

        tree = scan_packages(settings.packages, settings.ignore_prefixes)

        logger.debug(f"Saving snapshot to: {output}")
        SnapshotWriter().save_snapshot(tree, output)

        console.print(
            Panel.fit(
                f"[bold green]Snapshot exported![/bold green]\n"
                f"{len(tree)} config root(s) → {output}",
                title="liveconf",
                border_style="green",
            )
        )
        logger.info(f"Snapshot export completed: {output}")

    except click.UsageError:
        raise
    except Exception as e:
        logger.error(f"Error: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise click.Abort()


@click.group()
def cli():
    """liveconf - Live tunable configuration variables discovered from your classes."""


cli.add_command(show)
cli.add_command(export)
