"""Snapshot models for an exported OmniFocus database.

Entities live in flat containers keyed by id; every relationship is stored as
an id (or list of ids) and resolved by lookup when needed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from omnifocus_mcp.enums import FolderStatus, ProjectStatus, TaskStatus


class SnapshotModel(BaseModel):
    """Base for snapshot entities: camelCase on the wire, null lists become empty."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def none_list_to_empty(cls, v: Any, info: Any) -> Any:
        field = cls.model_fields.get(info.field_name)
        if v is None and field is not None and field.default_factory is list:
            return []
        return v


class Folder(SnapshotModel):
    """A folder; subfolders and projects are referenced by id."""

    id: str
    name: str = ""
    status: str = FolderStatus.ACTIVE.value
    parent_folder_id: str | None = None
    project_ids: list[str] = Field(default_factory=list)
    subfolder_ids: list[str] = Field(default_factory=list)


class Project(SnapshotModel):
    """A project; its tasks are referenced by id."""

    id: str
    name: str = ""
    note: str = ""
    status: str = ProjectStatus.ACTIVE.value
    folder_id: str | None = None
    due_date: datetime | None = None
    defer_date: datetime | None = None
    flagged: bool = False
    sequential: bool = False
    contains_singleton_actions: bool = False
    estimated_minutes: int | None = Field(default=None, ge=0)
    task_ids: list[str] = Field(default_factory=list)


class Task(SnapshotModel):
    """A task (action); subtasks are referenced through child_ids."""

    id: str
    name: str = ""
    note: str = ""
    task_status: str = TaskStatus.AVAILABLE.value
    flagged: bool = False
    due_date: datetime | None = None
    defer_date: datetime | None = None
    estimated_minutes: int | None = Field(default=None, ge=0)
    tag_ids: list[str] = Field(default_factory=list, alias="tags")
    tag_names: list[str] = Field(default_factory=list)
    project_id: str | None = None
    parent_task_id: str | None = None
    child_ids: list[str] = Field(default_factory=list)
    sequential: bool = False
    completed_by_children: bool = False
    in_inbox: bool = False

    @property
    def active(self) -> bool:
        return self.task_status not in (TaskStatus.COMPLETED.value, TaskStatus.DROPPED.value)

    @property
    def has_children(self) -> bool:
        return bool(self.child_ids)


class Tag(SnapshotModel):
    """A tag; referenced from tasks by id, displayed by name."""

    id: str
    name: str = ""
    parent_tag_id: str | None = None
    active: bool = True
    allows_next_action: bool = True
    task_ids: list[str] = Field(default_factory=list)


class Database(SnapshotModel):
    """Point-in-time copy of the whole database."""

    export_date: str | None = None
    tasks: list[Task] = Field(default_factory=list)
    projects: dict[str, Project] = Field(default_factory=dict)
    folders: dict[str, Folder] = Field(default_factory=dict)
    tags: dict[str, Tag] = Field(default_factory=dict)

    @field_validator("projects", "folders", "tags", mode="before")
    @classmethod
    def none_map_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    def task_map(self) -> dict[str, Task]:
        """Index tasks by id (first occurrence wins)."""
        index: dict[str, Task] = {}
        for task in self.tasks:
            index.setdefault(task.id, task)
        return index
