"""Parser helpers for OmniFocus data."""

from typing import Any

from omnifocus_mcp.models.database import Database, Task
from omnifocus_mcp.models.results import TaskDetails

UNKNOWN_TAG = "Unknown Tag"


def _parse_database(data: dict[str, Any] | None) -> Database:
    """
    Parse a raw export dictionary into a Database.

    Tag ids on tasks are resolved to tag names through the exported tag map;
    ids with no matching tag become "Unknown Tag".

    Args:
        data: Dictionary produced by the OmniJS export, or None

    Returns:
        Database instance (empty when data is None)
    """
    if not data:
        return Database()

    database = Database.model_validate(data)
    for task in database.tasks:
        if task.tag_names or not task.tag_ids:
            continue
        task.tag_names = [
            database.tags[tag_id].name if tag_id in database.tags else UNKNOWN_TAG for tag_id in task.tag_ids
        ]
    return database


def _find_task(database: Database, task_id: str | None = None, task_name: str | None = None) -> tuple[bool, Task | str]:
    """
    Locate a task by exact id, or by case-insensitive partial name.

    When several names contain the search text, an exact (case-insensitive)
    match wins; otherwise the lookup fails with up to five suggestions.

    Returns:
        Tuple of (success: bool, task: Task | error: str)
    """
    if task_id:
        task = database.task_map().get(task_id)
        if task is None:
            return False, f"Task not found with ID: {task_id}"
        return True, task

    if not task_name:
        return False, "Either taskId or taskName must be provided"

    search = task_name.lower()
    matches = [t for t in database.tasks if search in t.name.lower()]

    if not matches:
        return False, f'No task found matching name: "{task_name}"'
    if len(matches) == 1:
        return True, matches[0]

    exact = next((t for t in matches if t.name.lower() == search), None)
    if exact is not None:
        return True, exact

    suggestions = ", ".join(f'"{t.name}" [{t.id}]' for t in matches[:5])
    more = f" and {len(matches) - 5} more" if len(matches) > 5 else ""
    return False, (
        f'Multiple tasks found matching "{task_name}". Please be more specific or use task ID. '
        f"Found: {suggestions}{more}"
    )


def _enrich_task_details(task: Task, database: Database) -> TaskDetails:
    """
    Resolve the project, parent task and child task names of a task.

    Dangling ids are left out rather than reported.
    """
    task_map = database.task_map()
    details = TaskDetails(task=task)

    if task.project_id and task.project_id in database.projects:
        details.project_name = database.projects[task.project_id].name

    if task.parent_task_id and (parent := task_map.get(task.parent_task_id)):
        details.parent_task_name = parent.name

    for child_id in task.child_ids:
        if child := task_map.get(child_id):
            details.children.append((child.id, child.name))

    return details
