"""envprofiles CLI - manage named configuration profiles for an application."""

from __future__ import annotations

import functools
import logging
import sys
from dataclasses import dataclass

import click
from rich.table import Table

from .console import console
from .console import err_console
from .environment import render_shell_exports
from .errors import ProfileError
from .hooks import HookRegistry
from .hooks import register_command_hooks
from .logging_setup import init_logging
from .profiles import ProfileManager
from .profiles import ProfileStore
from .profiles.schema import SOURCE_PROFILE
from .settings import ProfileSettings
from .ui import ConsoleMessenger
from .ui import ConsolePrompter
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)


class ReportingMessenger(ConsoleMessenger):
    """Console messenger that marks the errors it has shown."""

    def __init__(self) -> None:
        super().__init__()
        self.reported: list[str] = []

    def error(self, message: str) -> None:
        self.reported.append(message)
        super().error(message)


@dataclass
class CLIState:
    settings: ProfileSettings
    manager: ProfileManager
    messenger: ReportingMessenger


def _fail(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape_markup(message)}")
    sys.exit(1)


def handle_errors(func):
    """Map engine and OS errors to exit code 1.

    ProfileManager reports its own failures through the messenger before
    raising, so those are not printed twice.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ProfileError as e:
            state = click.get_current_context().find_object(CLIState)
            if state is None or str(e) not in state.messenger.reported:
                err_console.print(f"[red]Error:[/red] {escape_markup(str(e))}")
            sys.exit(1)
        except OSError as e:
            _fail(format_error_message(e))

    return wrapper


def build_manager(settings: ProfileSettings, messenger: ConsoleMessenger) -> ProfileManager:
    """Wire a ProfileManager from effective settings."""
    hooks = HookRegistry()
    register_command_hooks(hooks, settings.hooks, working_dir=settings.config_dir)

    return ProfileManager(
        ProfileStore(settings.config_dir),
        settings.template(),
        app_name=settings.app_name,
        hooks=hooks,
        prompter=ConsolePrompter(),
        messenger=messenger,
        interactive=settings.interactive,
        placeholder_names=settings.placeholders,
        extra_vars=settings.extra_vars,
        profile_var=settings.profile_var,
    )


def _state(ctx: click.Context) -> CLIState:
    state = ctx.find_object(CLIState)
    if state is None:
        raise click.UsageError("CLI state not initialized")
    return state


@click.group()
@click.option("--app-name", "-a", envvar="ENVPROFILES_APP_NAME", help="Application whose profiles to manage")
@click.option("--config-dir", "-c", envvar="ENVPROFILES_CONFIG_DIR", help="Configuration directory override")
@click.option("--prefix", envvar="ENVPROFILES_PREFIX", help="Installation prefix used to derive the config dir")
@click.option("--interactive/--no-interactive", default=None, help="Prompt for input and open the editor")
@click.option("--log-level", envvar="ENVPROFILES_LOG_LEVEL", help="Logging level (default: WARNING)")
@click.version_option(package_name="envprofiles")
@click.pass_context
@handle_errors
def cli(
    ctx: click.Context,
    app_name: str | None,
    config_dir: str | None,
    prefix: str | None,
    interactive: bool | None,
    log_level: str | None,
):
    """Manage named configuration profiles for an application."""
    init_logging(level=log_level)

    settings = ProfileSettings.load(app_name, config_dir=config_dir, prefix=prefix, interactive=interactive)
    messenger = ReportingMessenger()
    ctx.obj = CLIState(settings=settings, manager=build_manager(settings, messenger), messenger=messenger)


@cli.command(name="list")
@click.argument("pattern", required=False)
@click.pass_context
@handle_errors
def list_cmd(ctx: click.Context, pattern: str | None):
    """List profiles, optionally matching a glob PATTERN."""
    names = _state(ctx).manager.list(pattern, glob=True)
    if not names:
        err_console.print("[yellow]No profiles found.[/yellow]")
        return
    for name in names:
        click.echo(name)


@cli.command()
@click.argument("name", required=False)
@click.option(
    "--placeholder",
    "-p",
    "placeholders",
    multiple=True,
    metavar="KEY=VALUE",
    help="Extra template placeholder value (repeatable)",
)
@click.pass_context
@handle_errors
def create(ctx: click.Context, name: str | None, placeholders: tuple[str, ...]):
    """Create profile NAME from the default template."""
    values: dict[str, str] = {}
    for item in placeholders:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", param_hint="--placeholder")
        values[key] = value

    path = _state(ctx).manager.create(name, values)
    err_console.print(f"[green]✓[/green] Created {escape_markup(path)}")


@cli.command()
@click.argument("name", required=False)
@click.pass_context
@handle_errors
def edit(ctx: click.Context, name: str | None):
    """Open profile NAME in $EDITOR."""
    _state(ctx).manager.edit(name)


@cli.command()
@click.argument("name", required=False)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@handle_errors
def delete(ctx: click.Context, name: str | None, yes: bool):
    """Delete profile NAME."""
    if _state(ctx).manager.delete(name, assume_yes=yes):
        err_console.print("[green]✓[/green] Profile deleted")


@cli.command()
@click.argument("name", required=False)
@click.pass_context
@handle_errors
def load(ctx: click.Context, name: str | None):
    """Print shell code exporting profile NAME.

    Use it as: eval "$(envprofiles load NAME)"
    """
    state = _state(ctx)
    resolved = state.manager.load(name)
    click.echo(
        render_shell_exports(resolved, state.manager.resolver.clear_names(), state.settings.profile_var),
        nl=False,
    )


@cli.command()
@click.argument("name", required=False)
@click.pass_context
@handle_errors
def show(ctx: click.Context, name: str | None):
    """Show the resolved variables of profile NAME."""
    resolved = _state(ctx).manager.load(name)

    table = Table(title=f"Profile: {escape_markup(resolved.name)}", show_header=True, header_style="bold cyan")
    table.add_column("Variable", style="green")
    table.add_column("Value")
    table.add_column("Source", style="dim")

    for var_name, value in resolved.items():
        shown = " ".join(value) if isinstance(value, list) else value
        source = resolved.source_of(var_name) or ""
        style = "yellow" if source == SOURCE_PROFILE else "cyan"
        table.add_row(var_name, escape_markup(shown), f"[{style}]{source}[/{style}]")

    console.print(table)


@cli.command(name="vars")
@click.option("--required", is_flag=True, help="Only list required variables")
@click.pass_context
@handle_errors
def vars_cmd(ctx: click.Context, required: bool):
    """List the variables declared by the default template."""
    template = _state(ctx).manager.template
    names = template.required_names() if required else template.names()
    for var_name in names:
        click.echo(var_name)


@cli.command()
@click.argument("name", required=False)
@click.pass_context
@handle_errors
def path(ctx: click.Context, name: str | None):
    """Print the file path of profile NAME, or the profile directory."""
    store = _state(ctx).manager.store
    click.echo(str(store.path_for(name) if name else store.profile_dir))


@cli.command()
@click.pass_context
@handle_errors
def select(ctx: click.Context):
    """Pick a profile interactively and print its name."""
    click.echo(_state(ctx).manager.select())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
