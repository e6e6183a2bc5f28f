"""Enums for OmniFocus MCP."""

from enum import Enum


class ItemType(str, Enum):
    """Kind of database item a tool operates on."""

    TASK = "task"
    PROJECT = "project"


class TaskStatus(str, Enum):
    """Task status as exported from OmniFocus (Task.Status)."""

    AVAILABLE = "Available"
    BLOCKED = "Blocked"
    COMPLETED = "Completed"
    DROPPED = "Dropped"
    DUE_SOON = "DueSoon"
    NEXT = "Next"
    OVERDUE = "Overdue"


class ProjectStatus(str, Enum):
    """Project status as exported from OmniFocus (Project.Status)."""

    ACTIVE = "Active"
    DONE = "Done"
    DROPPED = "Dropped"
    ON_HOLD = "OnHold"


class FolderStatus(str, Enum):
    """Folder status as exported from OmniFocus (Folder.Status)."""

    ACTIVE = "Active"
    DROPPED = "Dropped"


class TaskEditStatus(str, Enum):
    """Status a task can be moved to with edit_item."""

    INCOMPLETE = "incomplete"
    COMPLETED = "completed"
    DROPPED = "dropped"


class ProjectEditStatus(str, Enum):
    """Status a project can be moved to with edit_item."""

    ACTIVE = "active"
    COMPLETED = "completed"
    DROPPED = "dropped"
    ON_HOLD = "onHold"


class ScriptLanguage(str, Enum):
    """OSA languages accepted by osascript -l."""

    APPLESCRIPT = "AppleScript"
    JAVASCRIPT = "JavaScript"
