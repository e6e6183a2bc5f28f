"""MCP tool definitions that create, edit and remove OmniFocus items."""

from mcp.types import ToolAnnotations

from omnifocus_mcp.dates import parse_iso_datetime
from omnifocus_mcp.enums import ItemType
from omnifocus_mcp.log import get_logger
from omnifocus_mcp.models.inputs import (
    AddProjectInput,
    AddTaskInput,
    BatchAddItemsInput,
    BatchRemoveItemsInput,
    EditItemInput,
    RemoveItemInput,
)
from omnifocus_mcp.models.results import BatchItemResult, ScriptResult
from omnifocus_mcp.server import mcp
from omnifocus_mcp.utils.cli import _run_script_result
from omnifocus_mcp.utils.scripts import (
    _build_add_project_script,
    _build_add_task_script,
    _build_edit_item_script,
    _build_remove_item_script,
)

logger = get_logger(__name__)


def _due_text(due_date: str | None) -> str:
    if not due_date:
        return ""
    return f" due on {parse_iso_datetime(due_date).strftime('%Y-%m-%d')}"


def _tags_text(tags: list[str] | None) -> str:
    if not tags:
        return ""
    return f" with tags: {', '.join(tags)}"


def _not_found_message(item_type: ItemType, item_id: str | None, name: str | None) -> str:
    """Build 'Task not found with ID "x" or name "y".' style messages."""
    message = f"{item_type.value.capitalize()} not found"
    if item_id:
        message += f' with ID "{item_id}"'
    if name:
        message += f'{" or" if item_id else " with"} name "{name}"'
    return message + "."


def _failure_message(
    action: str, item_type: ItemType, params: EditItemInput | RemoveItemInput, error: str | None
) -> str:
    if error and "Item not found" in error:
        return _not_found_message(item_type, params.id, params.name)
    if error:
        return f"Failed to {action} {item_type.value}: {error}"
    return f"Failed to {action} {item_type.value}"


def _add_task(params: AddTaskInput) -> ScriptResult:
    return _run_script_result(_build_add_task_script(params))


def _add_project(params: AddProjectInput) -> ScriptResult:
    return _run_script_result(_build_add_project_script(params))


def _remove_item(params: RemoveItemInput) -> ScriptResult:
    return _run_script_result(_build_remove_item_script(params))


def _format_batch_results(results: list[BatchItemResult], verb: str, past: str) -> str:
    """
    Summarize a batch as a count line followed by one line per item.

    When every item failed the summary becomes 'Failed to process batch operation:'.
    """
    succeeded = sum(1 for r in results if r.result.success)
    failed = len(results) - succeeded

    details = []
    for item in results:
        if item.result.success:
            details.append(f'- ✅ {item.item_type.value}: "{item.result.name or item.label}"')
        else:
            error = item.result.error or "Unknown error"
            details.append(f'- ❌ {item.item_type.value}: "{item.label}" - Error: {error}')

    if succeeded == 0:
        return "Failed to process batch operation:\n" + "\n".join(details)

    message = f"✅ Successfully {past} {succeeded} items."
    if failed:
        message += f" ⚠️ Failed to {verb} {failed} items."
    return f"{message}\n\n" + "\n".join(details)


@mcp.tool(
    name="add_omnifocus_task",
    annotations=ToolAnnotations(
        title="Add OmniFocus Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def add_omnifocus_task(params: AddTaskInput) -> str:
    """
    Add a new task to OmniFocus.

    The task goes under a parent task when parent_task_id or parent_task_name
    is given, otherwise into project_name, otherwise into the inbox. Tags that
    do not exist in OmniFocus are skipped.

    Args:
        params: AddTaskInput containing name, note, dates, flagged, estimate,
            tags and the destination

    Returns:
        Confirmation message or error

    Examples:
        - Inbox task: params with name="Buy milk"
        - Project task: params with name="Draft outline", project_name="Book", due_date="2025-03-15"
        - Subtask: params with name="Pick venue", parent_task_name="Plan offsite"
    """
    result = _add_task(params)

    if not result.success:
        return f"Failed to create task: {result.error}"

    if params.parent_task_id or params.parent_task_name:
        location = f'as subtask of "{params.parent_task_name or params.parent_task_id}"'
    elif params.project_name:
        location = f'in project "{params.project_name}"'
    else:
        location = "in your inbox"

    return (
        f'✅ Task "{params.name}" created successfully {location}'
        f"{_due_text(params.due_date)}{_tags_text(params.tags)}."
    )


@mcp.tool(
    name="add_project",
    annotations=ToolAnnotations(
        title="Add OmniFocus Project",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def add_project(params: AddProjectInput) -> str:
    """
    Add a new project to OmniFocus.

    Args:
        params: AddProjectInput containing name, note, dates, flagged, estimate,
            tags, folder_name and sequential

    Returns:
        Confirmation message or error

    Examples:
        - Root project: params with name="Home renovation"
        - In a folder: params with name="Q3 Planning", folder_name="Work", sequential=True
    """
    result = _add_project(params)

    if not result.success:
        return f"Failed to create project: {result.error}"

    location = f'in folder "{params.folder_name}"' if params.folder_name else "at the root level"
    ordering = "sequential" if params.sequential else "parallel"

    return (
        f'✅ Project "{params.name}" created successfully {location}'
        f"{_due_text(params.due_date)}{_tags_text(params.tags)} ({ordering})."
    )


@mcp.tool(
    name="remove_item",
    annotations=ToolAnnotations(
        title="Remove OmniFocus Item",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def remove_item(params: RemoveItemInput) -> str:
    """
    Remove a task or project from OmniFocus.

    The item is looked up by id first and by exact name as a fallback.

    Args:
        params: RemoveItemInput containing id and/or name, and item_type

    Returns:
        Confirmation message or error

    Examples:
        - By ID: params with id="hK2mX9vQ1aB", item_type="task"
        - By name: params with name="Old project", item_type="project"
    """
    logger.info("Removing %s id=%s name=%s", params.item_type.value, params.id, params.name)
    result = _remove_item(params)

    if not result.success:
        return _failure_message("remove", params.item_type, params, result.error)

    label = params.item_type.value.capitalize()
    return f'✅ {label} "{result.name}" removed successfully.'


@mcp.tool(
    name="edit_item",
    annotations=ToolAnnotations(
        title="Edit OmniFocus Item",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def edit_item(params: EditItemInput) -> str:
    """
    Edit a task or project in OmniFocus.

    The item is looked up by id first and by exact name as a fallback. Only
    the fields you pass are changed; pass an empty string for new_due_date or
    new_defer_date to clear it.

    TASK-ONLY FIELDS: new_status, add_tags, remove_tags, replace_tags
    (replace_tags wins over add/remove; missing tags are created)

    PROJECT-ONLY FIELDS: new_sequential, new_project_status, new_folder_name
    (the folder is created if it does not exist)

    Args:
        params: EditItemInput containing the identifier and the new values

    Returns:
        Confirmation listing the changed properties, or error

    Examples:
        - Complete a task: params with id="hK2mX9vQ1aB", item_type="task", new_status="completed"
        - Retag: params with name="Call Bob", item_type="task", replace_tags=["phone"]
        - Pause a project: params with name="Garden", item_type="project", new_project_status="onHold"
    """
    result = _run_script_result(_build_edit_item_script(params))

    if not result.success:
        return _failure_message("update", params.item_type, params, result.error)

    label = params.item_type.value.capitalize()
    changed = f" ({result.changed_properties})" if result.changed_properties else ""
    return f'✅ {label} "{result.name}" updated successfully{changed}.'


@mcp.tool(
    name="batch_add_items",
    annotations=ToolAnnotations(
        title="Batch Add OmniFocus Items",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def batch_add_items(params: BatchAddItemsInput) -> str:
    """
    Add multiple tasks or projects to OmniFocus in one call.

    Items are processed in order; a failing item does not stop the rest.

    Args:
        params: BatchAddItemsInput containing items, each with item_type and
            the fields of add_omnifocus_task or add_project

    Returns:
        Summary line followed by one result line per item

    Examples:
        - params with items=[{"itemType": "project", "name": "Trip"},
          {"itemType": "task", "name": "Book flights", "projectName": "Trip"}]
    """
    results: list[BatchItemResult] = []

    for item in params.items:
        if item.item_type == ItemType.PROJECT:
            result = _add_project(item.to_project_input())
        else:
            result = _add_task(item.to_task_input())
        results.append(BatchItemResult(item_type=item.item_type, label=item.name, result=result))

    failed = sum(1 for r in results if not r.result.success)
    logger.info("Batch add finished: %d succeeded, %d failed", len(results) - failed, failed)
    return _format_batch_results(results, "add", "added")


@mcp.tool(
    name="batch_remove_items",
    annotations=ToolAnnotations(
        title="Batch Remove OmniFocus Items",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def batch_remove_items(params: BatchRemoveItemsInput) -> str:
    """
    Remove multiple tasks or projects from OmniFocus in one call.

    Items are processed in order; a failing item does not stop the rest.

    Args:
        params: BatchRemoveItemsInput containing items with id and/or name, and item_type

    Returns:
        Summary line followed by one result line per item

    Examples:
        - params with items=[{"id": "hK2mX9vQ1aB", "itemType": "task"},
          {"name": "Old project", "itemType": "project"}]
    """
    results: list[BatchItemResult] = []

    for item in params.items:
        result = _remove_item(item)
        results.append(BatchItemResult(item_type=item.item_type, label=item.id or item.name or "", result=result))

    failed = sum(1 for r in results if not r.result.success)
    logger.info("Batch remove finished: %d succeeded, %d failed", len(results) - failed, failed)
    return _format_batch_results(results, "remove", "removed")
