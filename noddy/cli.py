"""Command-line interface for the noddy launcher."""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from noddy import __version__
from noddy.capabilities import default_capabilities
from noddy.config import Config, load_config, save_example_config
from noddy.dispatcher import ActionDispatcher
from noddy.engine import build_registry
from noddy.output.render import render_human, render_json
from noddy.util.log import setup_logging


app = typer.Typer(add_completion=False)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        print(f"noddy version {__version__}")
        raise typer.Exit()


@app.command()
def run_action(
    action: str = typer.Argument(
        "list_apps",
        help="Action to run: list_apps, open_app, open_url or kill_process"
    ),
    value: str = typer.Argument(
        "",
        help="App name, URL or process name for the action"
    ),
    json: bool = typer.Option(
        False,
        "--json",
        help="Output the response in JSON format"
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Accept a fallback offer (e.g. open the app's website) without asking"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to configuration file (default: ~/.noddy.yaml)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log discovery and resolution details"
    ),
    generate_config: Optional[Path] = typer.Option(
        None,
        "--generate-config",
        help="Generate example configuration file at specified path and exit"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """
    Run one launcher action against the installed applications.
    
    Installed apps are discovered at startup (PATH everywhere; Start Menu,
    LocalAppData and the uninstall registry on Windows).
    When an app cannot be opened, its website is offered instead.
    
    Examples:
        noddy                               # List installed apps
        noddy open_app spotify              # Open Spotify
        noddy open_app zzz --yes            # Open https://www.zzz.com if zzz is not installed
        noddy open_url https://example.com  # Open a URL in the default browser
        noddy kill_process notepad.exe      # Terminate a process by name
        noddy list_apps --json              # Machine-readable output
    """
    if generate_config:
        try:
            save_example_config(generate_config)
        except OSError as e:
            print(f"Error generating config: {e}", file=sys.stderr)
            raise typer.Exit(2)
        print(f"✓ Example configuration saved to {generate_config}", file=sys.stderr)
        raise typer.Exit(0)
    
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        print("Continuing with default settings...", file=sys.stderr)
        config = Config()
    
    setup_logging(logging.DEBUG if verbose else config.log_level, config.log_file)
    
    registry = build_registry(config)
    dispatcher = ActionDispatcher(
        registry,
        default_capabilities(),
        min_substring_length=config.min_substring_query_length
    )
    
    response = dispatcher.execute(action, value)
    
    if response.requires_confirmation and response.fallback_action:
        if json and not yes:
            print(render_json(response))
            raise typer.Exit(1)
        
        if not json:
            print(render_human(response), end="")
        accepted = yes or typer.confirm(f"Open {response.fallback_value}?", default=False)
        if not accepted:
            raise typer.Exit(1)
        response = dispatcher.execute(response.fallback_action, response.fallback_value or "")
    
    if json:
        print(render_json(response))
    else:
        print(render_human(response), end="")
    
    raise typer.Exit(0 if response.success else 1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
