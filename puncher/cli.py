#!/usr/bin/env python3
"""
Puncher CLI - keep track of your Kiho worktime from the command line
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from puncher import __version__
from puncher.client import PunchClient
from puncher.config import PuncherConfig, RuntimeSettings, load_config, resolve_config_path
from puncher.constants import APP_NAME, USER_AGENT
from puncher.costcentre import resolve_cost_centre
from puncher.errors import PuncherException, classify_exception
from puncher.output import print_banner, print_punch_line, print_punch_lines, stamp
from puncher.punch import (
    EXAMPLE_LOGIN,
    EXAMPLE_LOGIN_RESPONSE,
    EXAMPLE_LOGOUT,
    EXAMPLE_LOGOUT_RESPONSE,
    PunchType,
    create_punch_json,
    summarize_response,
)
from puncher.tasks import ask_recurring_description, group_task_descriptions

app = typer.Typer(
    name="puncher",
    help="Command line application for keeping track of your Kiho worktime.",
    add_completion=False,
)
get_app = typer.Typer(help="Get things like current configuration or latest worktime lines.")
app.add_typer(get_app, name="get")

console = Console(stderr=False)
logger = logging.getLogger(__name__)

EXIT_CANCELLED = 130


@dataclass
class CliState:
    settings: RuntimeSettings
    started: datetime
    _config: Optional[PuncherConfig] = None

    @property
    def config(self) -> PuncherConfig:
        if self._config is None:
            self._config = load_config(self.settings.config_path)
        return self._config


def _configure_logging(verbose: int) -> None:
    if verbose > 1:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _fail(exc: Exception) -> NoReturn:
    error = classify_exception(exc)
    console.print(f"[bold red]Error:[/bold red] {escape(error.message)}", style="red")
    if error.hint:
        console.print(f"[dim]{error.hint}[/dim]")
    logger.debug(f"Error details: {error.to_dict()}")
    raise typer.Exit(1)


def _post_punch(state: CliState, body: dict) -> None:
    console.print(f"{stamp()} :: Starting HTTP POST request...")
    result = PunchClient(state.config, state.settings).post(body)
    if result is None:
        console.print(f"{stamp()} :: DRY RUN - Skipping HTTP POST and response processing!")
        return
    console.print(f"{stamp()} :: Following new punch line created:")
    print_punch_line(console, result)


def _print_elapsed(state: CliState) -> None:
    stopped = datetime.now()
    console.print()
    console.print(f"Stop time: {stamp(stopped)}")
    console.print(f"Elapsed:   {stopped - state.started}")


@app.callback()
def main_callback(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-d",
        help="Skip doing anything concrete, e.g HTTP GET/POST requests, which MIGHT have side effects",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Print additional information. Use -vv to get even more detailed output",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
):
    _configure_logging(verbose)
    settings = RuntimeSettings(verbose=verbose, dry_run=dry_run, config_path=config)
    state = CliState(settings=settings, started=datetime.now())
    ctx.obj = state

    if ctx.invoked_subcommand == "version":
        return
    print_banner(console)
    if verbose:
        try:
            api_url = state.config.api.url
        except PuncherException as exc:
            _fail(exc)
        console.print(f"API URL:     {api_url}", markup=False)
        console.print(f"USER AGENT:  {USER_AGENT}", markup=False)
        console.print(f"Config path: {resolve_config_path(config)}", markup=False)
        console.print(f"Dry-run:     {dry_run}")
        console.print(f"Verbosity:   {verbose}")
        console.print(f"Start time:  {stamp(state.started)}")
        ctx.call_on_close(lambda: _print_elapsed(state))
    elif dry_run:
        console.print("NOTE: This is a DRY-RUN!")


@get_app.command("config")
def get_config(ctx: typer.Context):
    """Get current loaded configuration."""
    try:
        cfg = _state(ctx).config
    except PuncherException as exc:
        _fail(exc)
    console.print("Current WHOLE config:")
    console.print(cfg.model_dump())


@get_app.command("ccc")
def get_cost_centres(ctx: typer.Context):
    """Get 'customer cost centres' that are available in configuration."""
    try:
        cfg = _state(ctx).config
    except PuncherException as exc:
        _fail(exc)
    console.print("Available 'Customer Cost Centres':")
    console.print(cfg.cost_centres)


@get_app.command("tasks")
def get_tasks(ctx: typer.Context):
    """Get list of configured 'recurring tasks'."""
    try:
        cfg = _state(ctx).config
    except PuncherException as exc:
        _fail(exc)
    console.print("Available 'Recurring Tasks':")
    console.print(group_task_descriptions(cfg.recurring_tasks).as_dict())


@get_app.command("json")
def get_json():
    """Print example login/logout JSONs."""
    console.print("JSON BODY FOR LOGIN (NOTE: With 'CustomerCostcentre'!):")
    console.print_json(data=EXAMPLE_LOGIN)
    console.print()
    console.print("JSON BODY FOR LOGOUT:")
    console.print_json(data=EXAMPLE_LOGOUT)
    console.print()
    console.print("EXAMPLE JSON LOGIN/LOGOUT RESPONSES")
    for response in (EXAMPLE_LOGIN_RESPONSE, EXAMPLE_LOGOUT_RESPONSE):
        console.print(summarize_response(response), markup=False)
        console.print("'CustomerCostcentre'")
        console.print_json(data=response["result"]["customerCostcentre"])


@get_app.command("latest")
def get_latest(
    ctx: typer.Context,
    count: int = typer.Argument(..., min=1, metavar="COUNT", help="Number of punch lines to get"),
    punch_type: Optional[PunchType] = typer.Argument(
        None,
        metavar="[TYPE]",
        case_sensitive=False,
        help="Punch type to get (default: all types)",
    ),
):
    """Get latest COUNT worktime BREAK/LOGIN/LOGOUT punch lines."""
    state = _state(ctx)
    kind = f"{punch_type.value} " if punch_type else ""
    header = f"Latest {count} worktime {kind}punch line(s) in ascending order"
    console.print(f"{stamp()} :: Starting HTTP GET request...")
    try:
        punches = PunchClient(state.config, state.settings).latest(count, punch_type)
    except PuncherException as exc:
        _fail(exc)
    if punches is None:
        console.print(f"{stamp()} :: DRY RUN - Skipping HTTP GET and response processing!")
        return
    console.print(f"{stamp()} :: {header}:")
    print_punch_lines(console, punches)


@app.command()
def start(
    ctx: typer.Context,
    description: Optional[str] = typer.Argument(
        None,
        help="Punch description; choose from the recurring tasks when omitted",
    ),
):
    """Start working on something work related."""
    state = _state(ctx)
    try:
        cfg = state.config
        if not description or not description.strip():
            console.print(f"{stamp()} :: No punch description given!")
            try:
                description = ask_recurring_description(
                    cfg.recurring_tasks, console=console, settings=state.settings
                )
            except (KeyboardInterrupt, EOFError):
                console.print("\nCancelled.")
                raise typer.Exit(EXIT_CANCELLED)
        cost_centre = resolve_cost_centre(description, cfg)
        console.print(f"{stamp()} :: Starting '{description}' (ccc id: {cost_centre})", markup=False)
        body = create_punch_json(PunchType.LOGIN, description, cost_centre)
        if state.settings.verbose:
            console.print("CREATED PUNCH JSON:")
            console.print_json(data=body)
        _post_punch(state, body)
    except PuncherException as exc:
        _fail(exc)


@app.command()
def stop(ctx: typer.Context):
    """Stop whatever worktime task was active."""
    state = _state(ctx)
    console.print(f"{stamp()} :: Stopping worktime")
    try:
        body = create_punch_json(PunchType.LOGOUT)
        if state.settings.verbose:
            console.print("CREATED PUNCH JSON:")
            console.print_json(data=body)
        _post_punch(state, body)
    except PuncherException as exc:
        _fail(exc)


@app.command("break")
def break_():
    """Add worktime break (not supported yet)."""
    console.print(f"{stamp()} :: Starting a BREAK")
    try:
        create_punch_json(PunchType.BREAK)
    except PuncherException as exc:
        _fail(exc)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]{APP_NAME}[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
