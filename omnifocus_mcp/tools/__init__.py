"""MCP tool definitions for OmniFocus."""

# Import all tools to register them with the MCP server
from omnifocus_mcp.tools.database import dump_database, get_task_details
from omnifocus_mcp.tools.items import (
    add_omnifocus_task,
    add_project,
    batch_add_items,
    batch_remove_items,
    edit_item,
    remove_item,
)

__all__ = [
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
]
