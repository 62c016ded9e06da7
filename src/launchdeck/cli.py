"""CLI entry point for launchdeck.

This module provides the Typer-based CLI with commands:
- launchdeck show: Print groups and apps
- launchdeck path: Print the database location
- launchdeck group add|rename|remove|activate: Edit groups
- launchdeck app add|remove|move|args: Edit app shortcuts
- launchdeck launch: Start a stored app
- launchdeck export / import: Dump or restore a snapshot as JSON

Every editing command loads the stored snapshot, applies one edit and
saves the complete result.

Exit codes:
- 0: Success
- 1: Configuration error
- 2: Storage error
- 3: Invalid input (unknown id, bad snapshot file)
- 4: Launch error
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from pydantic import ValidationError

from launchdeck import __version__
from launchdeck.config import ConfigError, load_config
from launchdeck.errors import (
    LaunchError,
    PathResolutionError,
    SnapshotEditError,
    StorageIOError,
)
from launchdeck.launcher import launch_app
from launchdeck.logging import (
    configure_logging,
    get_logger,
    log_app_launched,
    log_state_loaded,
    log_state_saved,
)
from launchdeck.state import LauncherState, StateRepository
from launchdeck.state import editing

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class ExitCode(IntEnum):
    """CLI exit codes."""

    SUCCESS = 0
    CONFIG_ERROR = 1
    STORAGE_ERROR = 2
    INPUT_ERROR = 3
    LAUNCH_ERROR = 4


app = typer.Typer(
    name="launchdeck",
    help="launchdeck - grouped application launcher.",
    add_completion=False,
    no_args_is_help=True,
)
group_app = typer.Typer(help="Add, rename, remove and activate groups.", no_args_is_help=True)
app_app = typer.Typer(help="Add, remove, move and configure app shortcuts.", no_args_is_help=True)
app.add_typer(group_app, name="group")
app.add_typer(app_app, name="app")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"launchdeck {__version__}")
        raise typer.Exit()


def _fail(message: str, code: ExitCode) -> typer.Exit:
    typer.echo(typer.style(f"✗ {message}", fg=typer.colors.RED), err=True)
    return typer.Exit(code)


@contextmanager
def _exit_on_error() -> Iterator[None]:
    """Translate launchdeck errors into CLI exit codes."""
    try:
        yield
    except (PathResolutionError, StorageIOError) as e:
        get_logger("launchdeck.cli").error("storage_error", error=str(e))
        raise _fail(str(e), ExitCode.STORAGE_ERROR) from e
    except SnapshotEditError as e:
        raise _fail(str(e), ExitCode.INPUT_ERROR) from e
    except LaunchError as e:
        raise _fail(str(e), ExitCode.LAUNCH_ERROR) from e


def _repository(ctx: typer.Context) -> StateRepository:
    return ctx.ensure_object(StateRepository)


def _load(repo: StateRepository) -> LauncherState | None:
    state = repo.load()
    log_state_loaded(state, str(repo.db_path))
    return state


def _save(repo: StateRepository, state: LauncherState, reason: str) -> None:
    repo.save(state)
    log_state_saved(state, str(repo.db_path), reason)


def _edit(
    ctx: typer.Context,
    reason: str,
    edit: Callable[[LauncherState], LauncherState],
) -> LauncherState:
    """Load the snapshot (empty on first run), apply ``edit`` and save it."""
    repo = _repository(ctx)
    with _exit_on_error():
        state = _load(repo) or LauncherState()
        updated = edit(state)
        _save(repo, updated, reason)
    return updated


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file.",
        ),
    ] = None,
    data_dir: Annotated[
        Path | None,
        typer.Option(
            "--data-dir",
            help="Directory holding the launcher database.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """launchdeck - grouped application launcher."""
    try:
        cfg = load_config(config)
    except ConfigError as e:
        raise _fail(str(e), ExitCode.CONFIG_ERROR) from e

    configure_logging(
        verbose=verbose or cfg.logging.verbose,
        json_output=cfg.logging.json_output,
    )

    storage = cfg.storage
    if data_dir is not None:
        storage = storage.model_copy(update={"data_dir": str(data_dir)})
    ctx.obj = StateRepository.from_config(storage)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show all groups and their apps. The active group is marked with '*'."""
    repo = _repository(ctx)
    with _exit_on_error():
        state = _load(repo)

    if state is None:
        typer.echo(
            typer.style(
                f"No launcher state found at {repo.db_path}", fg=typer.colors.YELLOW
            )
        )
        typer.echo("Run 'launchdeck group add NAME' to create the first group.")
        raise typer.Exit(ExitCode.SUCCESS)

    for group in state.groups:
        marker = "*" if group.id == state.active_group_id else " "
        typer.echo(typer.style(f"{marker} {group.name} ({group.id})", bold=True))
        if not group.apps:
            typer.echo("    (empty)")
        for entry in group.apps:
            line = f"    {entry.name}  {entry.path}"
            if entry.args:
                line += f"  {entry.args}"
            typer.echo(f"{line}  [{entry.id}]")


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the location of the launcher database."""
    with _exit_on_error():
        typer.echo(str(_repository(ctx).db_path))


# -----------------------------------------------------------------------------
# Groups
# -----------------------------------------------------------------------------


@group_app.command("add")
def group_add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Display name of the group.")],
) -> None:
    """Add a new group. The first group becomes the active one."""
    group_id = editing.new_id()
    _edit(ctx, "group_add", lambda s: editing.add_group(s, name, group_id=group_id))
    typer.echo(group_id)


@group_app.command("rename")
def group_rename(
    ctx: typer.Context,
    group_id: Annotated[str, typer.Argument(help="Id of the group.")],
    name: Annotated[str, typer.Argument(help="New display name.")],
) -> None:
    """Rename a group. A blank name is ignored."""
    _edit(ctx, "group_rename", lambda s: editing.rename_group(s, group_id, name))


@group_app.command("remove")
def group_remove(
    ctx: typer.Context,
    group_id: Annotated[str, typer.Argument(help="Id of the group.")],
) -> None:
    """Remove a group together with its apps."""
    _edit(ctx, "group_remove", lambda s: editing.remove_group(s, group_id))


@group_app.command("activate")
def group_activate(
    ctx: typer.Context,
    group_id: Annotated[str, typer.Argument(help="Id of the group.")],
) -> None:
    """Make a group the active one."""
    _edit(ctx, "group_activate", lambda s: editing.set_active_group(s, group_id))


# -----------------------------------------------------------------------------
# Apps
# -----------------------------------------------------------------------------


@app_app.command("add")
def app_add(
    ctx: typer.Context,
    group_id: Annotated[str, typer.Argument(help="Id of the target group.")],
    paths: Annotated[list[str], typer.Argument(help="Executable or file paths.")],
) -> None:
    """Add one shortcut per path. Paths already in the group are skipped."""
    added = []

    def _add(state: LauncherState) -> LauncherState:
        result, entries = editing.add_apps(state, group_id, paths)
        added.extend(entries)
        return result

    _edit(ctx, "app_add", _add)
    typer.echo(f"Added {len(added)} item(s)")
    for entry in added:
        typer.echo(f"  {entry.id}  {entry.name}")


@app_app.command("remove")
def app_remove(
    ctx: typer.Context,
    app_id: Annotated[str, typer.Argument(help="Id of the app.")],
) -> None:
    """Remove an app shortcut."""
    _edit(ctx, "app_remove", lambda s: editing.remove_app(s, app_id))


@app_app.command("move")
def app_move(
    ctx: typer.Context,
    app_id: Annotated[str, typer.Argument(help="Id of the app.")],
    group_id: Annotated[str, typer.Argument(help="Id of the target group.")],
    index: Annotated[
        int | None,
        typer.Option("--index", "-i", help="Position in the target group (default: end)."),
    ] = None,
) -> None:
    """Move an app within its group or into another group."""
    _edit(ctx, "app_move", lambda s: editing.move_app(s, app_id, group_id, index))


@app_app.command("args")
def app_args(
    ctx: typer.Context,
    app_id: Annotated[str, typer.Argument(help="Id of the app.")],
    args: Annotated[str, typer.Argument(help="Argument string; empty clears it.")],
) -> None:
    """Set the launch arguments of an app."""
    _edit(ctx, "app_args", lambda s: editing.set_app_args(s, app_id, args))


# -----------------------------------------------------------------------------
# Launch / export / import
# -----------------------------------------------------------------------------


@app.command()
def launch(
    ctx: typer.Context,
    app_id: Annotated[str, typer.Argument(help="Id of the app to start.")],
) -> None:
    """Start the program behind an app shortcut."""
    repo = _repository(ctx)
    with _exit_on_error():
        state = _load(repo) or LauncherState()
        entry = editing.find_app(state, app_id)
        try:
            launch_app(entry)
        except LaunchError as e:
            log_app_launched(entry, error=str(e))
            raise
        log_app_launched(entry)
    typer.echo(f"Launched {entry.name}")


@app.command("export")
def export_state(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write JSON to this file instead of stdout."),
    ] = None,
) -> None:
    """Export the stored snapshot as JSON."""
    repo = _repository(ctx)
    with _exit_on_error():
        state = _load(repo) or LauncherState()

    payload = state.to_json()
    if output is None:
        typer.echo(payload)
        return

    try:
        output.write_text(payload + "\n", encoding="utf-8")
    except OSError as e:
        raise _fail(f"Cannot write {output}: {e}", ExitCode.STORAGE_ERROR) from e
    typer.echo(f"Exported {len(state.groups)} group(s) to {output}")


@app.command("import")
def import_state(
    ctx: typer.Context,
    source: Annotated[Path, typer.Argument(help="JSON snapshot file.")],
) -> None:
    """Replace the stored snapshot with one read from a JSON file."""
    try:
        content = source.read_text(encoding="utf-8")
    except OSError as e:
        raise _fail(f"Cannot read {source}: {e}", ExitCode.INPUT_ERROR) from e

    try:
        state = LauncherState.model_validate_json(content)
    except ValidationError as e:
        raise _fail(f"Invalid snapshot in {source}:\n{e}", ExitCode.INPUT_ERROR) from e

    repo = _repository(ctx)
    with _exit_on_error():
        _save(repo, state, "import")
    typer.echo(f"Imported {len(state.groups)} group(s) from {source}")
