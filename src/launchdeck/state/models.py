"""Pydantic models for the launcher snapshot.

A snapshot is the complete in-memory hierarchy handed to
``StateRepository.save`` or returned by ``StateRepository.load``:

- LauncherState: version tag, active group pointer, ordered groups
- Group: named, ordered list of app shortcuts
- AppEntry: one launchable shortcut

Field names are snake_case; the JSON form uses the camelCase aliases
(``activeGroupId``, ``addedAt``) and both spellings are accepted on input.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Snapshot version tag, reserved for future migrations
STATE_VERSION = 1


class AppEntry(BaseModel):
    """A launchable application shortcut.

    Attributes:
        id: Opaque identifier, unique across the whole store
        name: Display label
        path: Filesystem path or executable reference
        args: Launch argument string; None means no arguments
        added_at: Creation time in epoch milliseconds
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    path: str
    args: str | None = None
    added_at: int = Field(alias="addedAt")


class Group(BaseModel):
    """A named, ordered collection of app shortcuts."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    apps: list[AppEntry] = Field(default_factory=list)


class LauncherState(BaseModel):
    """The complete launcher snapshot.

    Attributes:
        version: Fixed version tag (currently 1)
        active_group_id: Id of the group shown by default; empty only when
            there are no groups
        groups: Groups in display order

    Invariants:
        - active_group_id names one of ``groups`` once loaded from the store
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: Literal[1] = STATE_VERSION
    active_group_id: str = Field(default="", alias="activeGroupId")
    groups: list[Group] = Field(default_factory=list)

    def get_group(self, group_id: str) -> Group | None:
        """Return the group with the given id, or None."""
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def active_group(self) -> Group | None:
        """Return the active group, or None if the pointer is dangling."""
        return self.get_group(self.active_group_id)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON using the camelCase wire names."""
        return self.model_dump_json(by_alias=True, indent=indent)
