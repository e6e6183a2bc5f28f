"""Formatting utilities for OmniFocus output."""

from datetime import date, datetime

from omnifocus_mcp.enums import ProjectStatus, TaskStatus
from omnifocus_mcp.models.database import Database, Folder, Project, Task
from omnifocus_mcp.models.results import TaskDetails

INDENT = "   "

REPORT_LEGEND = (
    "FORMAT LEGEND:\n"
    "F: Folder | P: Project | •: Task | 🚩: Flagged\n"
    "Dates: [M/D] | Duration: (30m) or (2h) | Tags: <tag1,tag2>\n"
    "Status: #next #avail #block #due #over #compl #drop\n"
)

STATUS_TAGS = {
    TaskStatus.NEXT.value: "#next",
    TaskStatus.AVAILABLE.value: "#avail",
    TaskStatus.BLOCKED.value: "#block",
    TaskStatus.DUE_SOON.value: "#due",
    TaskStatus.OVERDUE.value: "#over",
    TaskStatus.COMPLETED.value: "#compl",
    TaskStatus.DROPPED.value: "#drop",
}

HIDDEN_TASK_STATUSES = {TaskStatus.COMPLETED.value, TaskStatus.DROPPED.value}
HIDDEN_PROJECT_STATUSES = {ProjectStatus.DONE.value, ProjectStatus.DROPPED.value}


def _compute_tag_prefixes(tag_names: list[str] | set[str]) -> dict[str, str]:
    """
    Map each tag name to its shortest unique prefix of at least 3 characters.

    A prefix is unique when no other name starts with it. Names are sorted
    first so the result does not depend on input order. A name with no
    unique prefix (e.g. "work" next to "working") maps to itself.

    Example: {"urgent", "us", "unique"} -> {"unique": "uni", "urgent": "urg", "us": "us"}
    """
    names = sorted(set(tag_names))
    prefixes: dict[str, str] = {}

    for name in names:
        prefixes[name] = name
        for length in range(3, len(name) + 1):
            prefix = name[:length]
            if not any(other != name and other.startswith(prefix) for other in names):
                prefixes[name] = prefix
                break

    return prefixes


def _to_local(value: datetime) -> datetime:
    """Convert an aware datetime to local time; naive values are already local."""
    if value.tzinfo is not None:
        return value.astimezone()
    return value


def _format_compact_date(value: datetime | None) -> str:
    """Format a date as month/day without zero padding, e.g. 3/7."""
    if value is None:
        return ""
    local = _to_local(value)
    return f"{local.month}/{local.day}"


def _format_duration(minutes: int | None) -> str:
    """Format an estimate as (Nm) under an hour, otherwise whole hours (Nh)."""
    if not minutes:
        return ""
    if minutes < 60:
        return f"({minutes}m)"
    return f"({minutes // 60}h)"


def _format_estimate(minutes: int | None) -> str:
    """Format an estimate as '1h 30m', '2h' or '45m'."""
    if not minutes:
        return ""
    hours, rest = divmod(minutes, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if rest:
        parts.append(f"{rest}m")
    return " ".join(parts)


class _ReportRenderer:
    """Depth-first renderer for the compact report; each entity renders at most once."""

    def __init__(self, database: Database, hide_completed: bool):
        self.database = database
        self.hide_completed = hide_completed
        self.task_map = database.task_map()
        self.lines: list[str] = []
        self.seen_folders: set[str] = set()
        self.seen_projects: set[str] = set()
        self.seen_tasks: set[str] = set()

        tag_names = {tag.name for tag in database.tags.values()}
        for task in database.tasks:
            tag_names.update(task.tag_names)
        self.tag_prefixes = _compute_tag_prefixes(tag_names)

    def render_folder(self, folder: Folder, level: int) -> None:
        if folder.id in self.seen_folders:
            return
        self.seen_folders.add(folder.id)
        self.lines.append(f"{INDENT * level}F: {folder.name}")

        for subfolder_id in folder.subfolder_ids:
            subfolder = self.database.folders.get(subfolder_id)
            if subfolder is not None:
                self.render_folder(subfolder, level + 1)

        for project_id in folder.project_ids:
            project = self.database.projects.get(project_id)
            if project is not None:
                self.render_project(project, level + 1)

    def render_project(self, project: Project, level: int) -> None:
        if project.id in self.seen_projects:
            return
        self.seen_projects.add(project.id)
        if self.hide_completed and project.status in HIDDEN_PROJECT_STATUSES:
            return

        line = f"{INDENT * level}P: {project.name}"
        if project.flagged:
            line += " 🚩"
        if project.status == ProjectStatus.ON_HOLD.value:
            line += " [OnHold]"
        elif project.status == ProjectStatus.DROPPED.value:
            line += " [Dropped]"
        if project.due_date:
            line += f" [DUE:{_format_compact_date(project.due_date)}]"
        self.lines.append(line)

        # Subtasks with a resolvable parent are reached only through its child_ids
        for task in self.database.tasks:
            if task.project_id != project.id:
                continue
            if not task.parent_task_id or task.parent_task_id not in self.task_map:
                self.render_task(task, level + 1)

    def render_task(self, task: Task, level: int) -> None:
        if task.id in self.seen_tasks:
            return
        self.seen_tasks.add(task.id)
        if self.hide_completed and task.task_status in HIDDEN_TASK_STATUSES:
            return

        parts = [f"{INDENT * level}• "]
        if task.flagged:
            parts.append("🚩 ")
        parts.append(task.name)
        if task.due_date:
            parts.append(f" [DUE:{_format_compact_date(task.due_date)}]")
        if task.defer_date:
            parts.append(f" [defer:{_format_compact_date(task.defer_date)}]")
        duration = _format_duration(task.estimated_minutes)
        if duration:
            parts.append(f" {duration}")
        if task.tag_names:
            abbreviated = [self.tag_prefixes.get(name, name) for name in task.tag_names]
            parts.append(f" <{','.join(abbreviated)}>")
        status_tag = STATUS_TAGS.get(task.task_status)
        if status_tag:
            parts.append(f" {status_tag}")
        self.lines.append("".join(parts))

        for child_id in task.child_ids:
            child = self.task_map.get(child_id)
            if child is not None:
                self.render_task(child, level + 1)

    def render(self) -> None:
        folders = self.database.folders
        for folder in folders.values():
            if not folder.parent_folder_id or folder.parent_folder_id not in folders:
                self.render_folder(folder, 0)

        for project in self.database.projects.values():
            if not project.folder_id or project.folder_id not in folders:
                self.render_project(project, 0)


def _format_compact_report(
    database: Database,
    hide_completed: bool = True,
    hide_recurring_duplicates: bool = True,
    today: date | None = None,
) -> str:
    """
    Render a database snapshot as the compact hierarchical report.

    Folders, projects and tasks are rendered depth-first in snapshot order:
    root folders first, then projects with no resolvable folder. Dangling ids
    are skipped and cycles are broken, so any snapshot produces a report.

    Args:
        database: Snapshot to render
        hide_completed: Hide completed/dropped tasks and done/dropped projects
        hide_recurring_duplicates: Accepted for compatibility; the snapshot
            carries no recurrence-instance identity, so it has no effect
        today: Date for the header (defaults to the local date)

    Returns:
        Report text
    """
    header_date = (today or date.today()).isoformat()
    renderer = _ReportRenderer(database, hide_completed)
    renderer.render()

    output = f"# OMNIFOCUS [{header_date}]\n\n{REPORT_LEGEND}\n"
    if renderer.lines:
        output += "\n".join(renderer.lines) + "\n"
    return output


def _format_task_details(details: TaskDetails) -> str:
    """Format a task and its resolved relationships as markdown."""
    task = details.task
    lines = ["📋 **Task Details**", ""]

    lines.append(f"**Name:** {task.name}")
    lines.append(f"**ID:** {task.id}")
    lines.append(f"**Status:** {task.task_status}")

    if task.flagged:
        lines.append("**Flagged:** 🚩 Yes")
    if task.sequential:
        lines.append("**Sequential:** Yes")
    if task.completed_by_children:
        lines.append("**Completed by children:** Yes")

    if task.due_date:
        lines.append(f"**Due Date:** {_to_local(task.due_date).strftime('%Y-%m-%d %H:%M')}")
    if task.defer_date:
        lines.append(f"**Defer Date:** {_to_local(task.defer_date).strftime('%Y-%m-%d %H:%M')}")

    estimate = _format_estimate(task.estimated_minutes)
    if estimate:
        lines.append(f"**Estimated Time:** {estimate}")

    if details.project_name:
        lines.append(f"**Project:** {details.project_name}")
    elif task.in_inbox:
        lines.append("**Project:** Inbox")
    if details.parent_task_name:
        lines.append(f"**Parent Task:** {details.parent_task_name} [{task.parent_task_id}]")
    if details.children:
        lines.append(f"**Subtasks:** {len(details.children)} tasks")
        for child_id, child_name in details.children:
            lines.append(f"  - {child_name} [{child_id}]")

    if task.tag_names:
        lines.append(f"**Tags:** {', '.join(task.tag_names)}")

    if task.note:
        lines.append("")
        lines.append("**Note:**")
        lines.append(task.note)

    lines.append("")
    lines.append("**Metadata:**")
    lines.append(f"- Has Children: {'Yes' if task.has_children else 'No'}")
    lines.append(f"- Active: {'Yes' if task.active else 'No'}")

    return "\n".join(lines)
