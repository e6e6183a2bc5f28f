"""Pydantic models for OmniFocus MCP."""

from omnifocus_mcp.models.database import Database, Folder, Project, Tag, Task
from omnifocus_mcp.models.inputs import (
    AddProjectInput,
    AddTaskInput,
    BatchAddItem,
    BatchAddItemsInput,
    BatchRemoveItemsInput,
    DumpDatabaseInput,
    EditItemInput,
    GetTaskDetailsInput,
    RemoveItemInput,
)
from omnifocus_mcp.models.results import BatchItemResult, ScriptResult, TaskDetails

__all__ = [
    # Snapshot models
    "Database",
    "Folder",
    "Project",
    "Tag",
    "Task",
    # Database tool input models
    "DumpDatabaseInput",
    "GetTaskDetailsInput",
    # Item tool input models
    "AddTaskInput",
    "AddProjectInput",
    "RemoveItemInput",
    "EditItemInput",
    "BatchAddItem",
    "BatchAddItemsInput",
    "BatchRemoveItemsInput",
    # Result models
    "ScriptResult",
    "BatchItemResult",
    "TaskDetails",
]
