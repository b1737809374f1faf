"""Main CLI implementation using Typer."""

from typing import Any, Callable, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from hostbox import __version__
from hostbox.cli.commands import create_container, enter_container
from hostbox.config import ConfigManager
from hostbox.errors import HostboxError, UserDeclinedError
from hostbox.utils.logging import setup_logging


app = typer.Typer(
    name="hostbox",
    help="Hostbox - containers that feel like the host shell",
    add_completion=False,
)

# Console for user-facing messages; stdout belongs to the container command
console = Console(stderr=True)


def _confirm(message: str) -> bool:
    return typer.confirm(message, default=True)


def _run_cli_command(handler: Callable[..., int], verbose: bool, **kwargs: Any):
    """Helper to run a CLI command with configuration and error handling."""
    try:
        config = ConfigManager().load()
        setup_logging("DEBUG" if verbose else config.log_level)
        code = handler(config, verbose=verbose, **kwargs)
    except UserDeclinedError as e:
        console.print(escape(str(e)))
        raise typer.Exit(e.exit_code) from e
    except HostboxError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code) from e
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid arguments: {escape(str(e))}")
        raise typer.Exit(2) from e
    except KeyboardInterrupt:
        console.print("\nInterrupted")
        raise typer.Exit(130)
    raise typer.Exit(code or 0)


def _version_callback(value: bool):
    if value:
        console.print(f"hostbox {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback, is_eager=True,
        help="Show version and exit",
    ),
):
    """Create and enter host-integrated containers."""


@app.command("create")
def create_command(
    image: Optional[str] = typer.Option(
        None, "--image", "-i", envvar="HOSTBOX_CONTAINER_IMAGE", help="Image to use for the container"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", envvar="HOSTBOX_CONTAINER_NAME", help="Name for the container"
    ),
    clone: Optional[str] = typer.Option(
        None, "--clone", "-c", help="Name of a stopped container to clone"
    ),
    home: Optional[str] = typer.Option(
        None, "--home", "-H", help="Custom HOME directory for the container"
    ),
    yes: bool = typer.Option(
        False, "--yes", "-Y", envvar="HOSTBOX_NON_INTERACTIVE", help="Non-interactive, pull images without asking"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Only print the container manager command"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show more verbosity"
    ),
):
    """Create a new container."""
    _run_cli_command(
        create_container,
        verbose=verbose,
        name=name,
        image=image,
        clone=clone,
        home=home,
        non_interactive=yes,
        dry_run=dry_run,
        confirm=_confirm,
    )


@app.command(
    "enter",
    context_settings={"allow_interspersed_args": False},
)
def enter_command(
    command: Optional[List[str]] = typer.Argument(
        None, help="Command to run instead of the login shell"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", envvar="HOSTBOX_CONTAINER_NAME", help="Name of the container to enter"
    ),
    headless: bool = typer.Option(
        False, "--headless", "-H", help="Do not allocate a tty"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-d", help="Only print the container manager command"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show more verbosity"
    ),
):
    """Enter a container, starting it first if needed."""
    _run_cli_command(
        enter_container,
        verbose=verbose,
        name=name,
        command=command,
        headless=headless,
        dry_run=dry_run,
    )


def main():
    """Main entry point for CLI."""
    app()
