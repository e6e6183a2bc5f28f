"""Read-only MCP tool definitions for the OmniFocus database."""

from mcp.types import ToolAnnotations

from omnifocus_mcp.models.database import Database
from omnifocus_mcp.models.inputs import DumpDatabaseInput, GetTaskDetailsInput
from omnifocus_mcp.server import mcp
from omnifocus_mcp.utils.cli import _get_database
from omnifocus_mcp.utils.formatters import _format_compact_report, _format_task_details
from omnifocus_mcp.utils.parsers import _enrich_task_details, _find_task

OMNIFOCUS_TIP = "Tip: Make sure OmniFocus is running and that automation access is allowed for your terminal."


@mcp.tool(
    name="dump_database",
    annotations=ToolAnnotations(
        title="Dump OmniFocus Database",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def dump_database(params: DumpDatabaseInput) -> str:
    """
    Get the current state of your OmniFocus database as a compact report.

    USE THIS WHEN:
    - You need an overview of folders, projects and tasks
    - You want to find task names or spot flagged, due or overdue work
    - You are about to add or edit items and need to know what exists

    DO NOT USE WHEN:
    - You need every field of a single task → use get_task_details instead

    REPORT FORMAT:
    - "F: Folder", "P: Project", "• Task", nested with three-space indents
    - 🚩 marks flagged items; [DUE:M/D] and [defer:M/D] show dates
    - (30m)/(2h) is the estimate; <tag1,tag2> uses shortest unique tag prefixes
    - #next #avail #block #due #over #compl #drop is the task status

    Args:
        params: DumpDatabaseInput containing hide_completed and hide_recurring_duplicates

    Returns:
        The report text, or an error message

    Examples:
        - Active items only: params with hide_completed=True
        - Include completed and dropped items: params with hide_completed=False
    """
    success, result = _get_database(include_completed=not params.hide_completed)

    if not success:
        return f"{result}\n{OMNIFOCUS_TIP}"

    database = result if isinstance(result, Database) else Database()
    return _format_compact_report(
        database,
        hide_completed=params.hide_completed,
        hide_recurring_duplicates=params.hide_recurring_duplicates,
    )


@mcp.tool(
    name="get_task_details",
    annotations=ToolAnnotations(
        title="Get Task Details",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def get_task_details(params: GetTaskDetailsInput) -> str:
    """
    Get detailed information about a specific task by ID or name.

    Looks the task up in a full export that includes completed and dropped
    tasks. IDs match exactly; names match case-insensitively as a substring,
    with an exact name preferred when several tasks match.

    Args:
        params: GetTaskDetailsInput containing task_id or task_name

    Returns:
        Markdown block with the task's fields and relationships, or an error message

    Examples:
        - By ID: params with task_id="hK2mX9vQ1aB"
        - By name: params with task_name="Call dentist"
    """
    success, result = _get_database(include_completed=True)

    if not success:
        return f"{result}\n{OMNIFOCUS_TIP}"

    database = result if isinstance(result, Database) else Database()
    found, task = _find_task(database, params.task_id, params.task_name)

    if not found:
        return f"❌ {task}\nTip: Use dump_database to find valid task names and IDs."

    return _format_task_details(_enrich_task_details(task, database))
