"""Relaunch CLI entry point.

    relaunch                    normal startup
    relaunch version <token>    run a specific version (``2.3.1``, ``beta-2.3.1``, ``latest``)
    relaunch update <phase>     continue a launcher self-update (0 = download, 1 = copy)
"""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from relaunch.config import ConfigError, LauncherConfig, load_config
from relaunch.domain import SelfUpdatePhase
from relaunch.notify import Notifier
from relaunch.orchestrator import build_launcher

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)],
    )


def _run(ctx: click.Context, version_token: str | None = None, phase: SelfUpdatePhase | None = None) -> None:
    config: LauncherConfig = ctx.obj["config"]
    launcher = build_launcher(config, Notifier(config.app_name, console=console))
    ctx.exit(launcher.run(version_token=version_token, phase=phase))


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a relaunch.yaml configuration file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Relaunch - keeps the application and its launcher up to date."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)

    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]✗[/red] {e}")
        ctx.exit(1)

    if ctx.invoked_subcommand is None:
        _run(ctx)


@cli.command("version")
@click.argument("token")
@click.pass_context
def version_cmd(ctx: click.Context, token: str) -> None:
    """Launch a specific version, overriding the preference file."""
    _run(ctx, version_token=token)


@cli.command("update")
@click.argument("phase", type=click.Choice([str(p.value) for p in SelfUpdatePhase]))
@click.pass_context
def update_cmd(ctx: click.Context, phase: str) -> None:
    """Enter the launcher self-update at PHASE (0 = download, 1 = copy)."""
    _run(ctx, phase=SelfUpdatePhase(int(phase)))


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
