"""Snapshot editing helpers.

The shell mutates the launcher hierarchy (add/remove/rename groups, add,
remove and reorder apps, switch the active group) and then saves the
whole snapshot. These helpers perform those mutations on a copy of the
snapshot and return it, leaving the input untouched.
"""

from __future__ import annotations

import time
import uuid
from pathlib import PurePath
from typing import TYPE_CHECKING

from launchdeck.errors import SnapshotEditError
from launchdeck.state.models import AppEntry, Group, LauncherState

if TYPE_CHECKING:
    from collections.abc import Iterable


def new_id() -> str:
    """Return a fresh opaque identifier for a group or app."""
    return uuid.uuid4().hex


def now_millis() -> int:
    """Return the current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def _copy(state: LauncherState) -> LauncherState:
    return state.model_copy(deep=True)


def _require_group(state: LauncherState, group_id: str) -> Group:
    group = state.get_group(group_id)
    if group is None:
        msg = f"Unknown group: {group_id}"
        raise SnapshotEditError(msg)
    return group


def _locate_app(state: LauncherState, app_id: str) -> tuple[Group, int]:
    for group in state.groups:
        for index, app in enumerate(group.apps):
            if app.id == app_id:
                return group, index
    msg = f"Unknown app: {app_id}"
    raise SnapshotEditError(msg)


def find_app(state: LauncherState, app_id: str) -> AppEntry:
    """Return the app with the given id.

    Raises:
        SnapshotEditError: If no group contains the app
    """
    group, index = _locate_app(state, app_id)
    return group.apps[index]


# -----------------------------------------------------------------------------
# Groups
# -----------------------------------------------------------------------------


def add_group(
    state: LauncherState,
    name: str,
    group_id: str | None = None,
) -> LauncherState:
    """Append a new, empty group.

    The first group added to an empty snapshot becomes the active one.

    Raises:
        SnapshotEditError: If the name is blank or the id already exists
    """
    trimmed = name.strip()
    if not trimmed:
        msg = "Group name must not be empty"
        raise SnapshotEditError(msg)

    group_id = group_id or new_id()
    if state.get_group(group_id) is not None:
        msg = f"Group already exists: {group_id}"
        raise SnapshotEditError(msg)

    result = _copy(state)
    result.groups.append(Group(id=group_id, name=trimmed))
    if not result.active_group_id or result.active_group() is None:
        result.active_group_id = result.groups[0].id
    return result


def rename_group(state: LauncherState, group_id: str, name: str) -> LauncherState:
    """Rename a group. A blank name leaves the snapshot unchanged."""
    _require_group(state, group_id)
    trimmed = name.strip()
    if not trimmed:
        return state

    result = _copy(state)
    _require_group(result, group_id).name = trimmed
    return result


def remove_group(state: LauncherState, group_id: str) -> LauncherState:
    """Remove a group and its apps.

    If the removed group was active, the first remaining group becomes
    active (or none, when no group is left).
    """
    _require_group(state, group_id)

    result = _copy(state)
    result.groups = [g for g in result.groups if g.id != group_id]
    if result.active_group_id == group_id or result.active_group() is None:
        result.active_group_id = result.groups[0].id if result.groups else ""
    return result


def set_active_group(state: LauncherState, group_id: str) -> LauncherState:
    """Make ``group_id`` the active group."""
    _require_group(state, group_id)
    result = _copy(state)
    result.active_group_id = group_id
    return result


# -----------------------------------------------------------------------------
# Apps
# -----------------------------------------------------------------------------


def _display_name(path: str) -> str:
    stem = PurePath(path).stem
    return stem or path


def add_apps(
    state: LauncherState,
    group_id: str,
    paths: Iterable[str],
) -> tuple[LauncherState, list[AppEntry]]:
    """Append one app per path to a group.

    Blank paths and paths already present in the group are skipped. Each
    new entry is named after the path's file stem and has no arguments.

    Returns:
        Tuple of (new snapshot, entries that were added)
    """
    result = _copy(state)
    group = _require_group(result, group_id)
    known = {app.path for app in group.apps}

    added: list[AppEntry] = []
    for raw in paths:
        path = raw.strip()
        if not path or path in known:
            continue
        entry = AppEntry(
            id=new_id(),
            name=_display_name(path),
            path=path,
            args=None,
            added_at=now_millis(),
        )
        group.apps.append(entry)
        known.add(path)
        added.append(entry)

    return result, added


def remove_app(state: LauncherState, app_id: str) -> LauncherState:
    """Remove an app from whichever group holds it."""
    result = _copy(state)
    group, index = _locate_app(result, app_id)
    del group.apps[index]
    return result


def move_app(
    state: LauncherState,
    app_id: str,
    group_id: str,
    index: int | None = None,
) -> LauncherState:
    """Move an app to ``index`` within ``group_id``.

    ``index`` is the position the app ends up at, counted in the target
    group after the app has been taken out of its current place. It is
    clamped into range; None appends at the end. Moving within the same
    group reorders it.
    """
    result = _copy(state)
    target = _require_group(result, group_id)
    source, source_index = _locate_app(result, app_id)
    entry = source.apps.pop(source_index)

    if index is None:
        index = len(target.apps)
    index = max(0, min(index, len(target.apps)))
    target.apps.insert(index, entry)
    return result


def set_app_args(state: LauncherState, app_id: str, args: str | None) -> LauncherState:
    """Set the launch argument string of an app. Blank means no arguments."""
    result = _copy(state)
    group, index = _locate_app(result, app_id)
    group.apps[index].args = args if args and args.strip() else None
    return result
