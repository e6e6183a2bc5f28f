"""
MCP Server for OmniFocus.

This server exposes an OmniFocus database to MCP clients: a compact report of
folders, projects and tasks, task details, and tools to add, edit and remove
tasks and projects. OmniFocus is driven through osascript on macOS.
"""

# Re-export enums
from omnifocus_mcp.enums import (
    FolderStatus,
    ItemType,
    ProjectEditStatus,
    ProjectStatus,
    ScriptLanguage,
    TaskEditStatus,
    TaskStatus,
)

# Re-export models
from omnifocus_mcp.models import (
    AddProjectInput,
    AddTaskInput,
    BatchAddItem,
    BatchAddItemsInput,
    BatchItemResult,
    BatchRemoveItemsInput,
    Database,
    DumpDatabaseInput,
    EditItemInput,
    Folder,
    GetTaskDetailsInput,
    Project,
    RemoveItemInput,
    ScriptResult,
    Tag,
    Task,
    TaskDetails,
)

# Re-export MCP server instance
from omnifocus_mcp.server import mcp

# Re-export tools
from omnifocus_mcp.tools import (
    add_omnifocus_task,
    add_project,
    batch_add_items,
    batch_remove_items,
    dump_database,
    edit_item,
    get_task_details,
    remove_item,
)

# Re-export utilities (including private functions used by tests)
from omnifocus_mcp.utils import (
    _compute_tag_prefixes,
    _find_task,
    _format_compact_report,
    _format_task_details,
    _get_database,
    _parse_database,
    _run_osascript,
    _run_script_result,
)

__all__ = [
    # Enums
    "ItemType",
    "TaskStatus",
    "ProjectStatus",
    "FolderStatus",
    "TaskEditStatus",
    "ProjectEditStatus",
    "ScriptLanguage",
    # Snapshot models
    "Database",
    "Folder",
    "Project",
    "Tag",
    "Task",
    # Input models
    "DumpDatabaseInput",
    "GetTaskDetailsInput",
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
    # Utility functions
    "_run_osascript",
    "_run_script_result",
    "_get_database",
    "_parse_database",
    "_find_task",
    "_compute_tag_prefixes",
    "_format_compact_report",
    "_format_task_details",
    # Database tools
    "dump_database",
    "get_task_details",
    # Item tools
    "add_omnifocus_task",
    "add_project",
    "remove_item",
    "edit_item",
    "batch_add_items",
    "batch_remove_items",
    # MCP server instance
    "mcp",
]
