"""
Script generators for the OmniFocus automation bridge.

The database export is an Omni Automation (OmniJS) program evaluated inside
OmniFocus through a small JXA wrapper. Mutations are AppleScript programs that
reply with a single JSON line. Values are interpolated only through the
helpers in omnifocus_mcp.utils.escaping.
"""

import json
import textwrap

from omnifocus_mcp.enums import ItemType, ProjectEditStatus, TaskEditStatus
from omnifocus_mcp.models.inputs import AddProjectInput, AddTaskInput, EditItemInput, RemoveItemInput
from omnifocus_mcp.utils.escaping import (
    _applescript_bool,
    _applescript_date,
    _applescript_list,
    _quote_applescript,
)

# ============================================================================
# Database Export (OmniJS)
# ============================================================================

OMNIJS_EXPORT_SCRIPT = r"""
(() => {
  const includeCompleted = __INCLUDE_COMPLETED__;
  const iso = (date) => (date ? date.toISOString() : null);

  const taskStatusNames = new Map([
    [Task.Status.Available, "Available"],
    [Task.Status.Blocked, "Blocked"],
    [Task.Status.Completed, "Completed"],
    [Task.Status.Dropped, "Dropped"],
    [Task.Status.DueSoon, "DueSoon"],
    [Task.Status.Next, "Next"],
    [Task.Status.Overdue, "Overdue"],
  ]);
  const projectStatusNames = new Map([
    [Project.Status.Active, "Active"],
    [Project.Status.Done, "Done"],
    [Project.Status.Dropped, "Dropped"],
    [Project.Status.OnHold, "OnHold"],
  ]);
  const folderStatusNames = new Map([
    [Folder.Status.Active, "Active"],
    [Folder.Status.Dropped, "Dropped"],
  ]);
  const statusName = (names, value) =>
    value === null || value === undefined ? null : names.get(value) || "Unknown";

  const keepTask = (task) =>
    includeCompleted ||
    (task.taskStatus !== Task.Status.Completed && task.taskStatus !== Task.Status.Dropped);
  const keepProject = (project) =>
    includeCompleted ||
    (project.status !== Project.Status.Done && project.status !== Project.Status.Dropped);
  const keepFolder = (folder) => includeCompleted || folder.status !== Folder.Status.Dropped;
  const keepTag = (tag) => includeCompleted || tag.active;

  const folders = {};
  const folderOrder = [];
  flattenedFolders.filter(keepFolder).forEach((folder) => {
    const id = folder.id.primaryKey;
    folders[id] = {
      id: id,
      name: folder.name,
      status: statusName(folderStatusNames, folder.status),
      parentFolderId: folder.parent ? folder.parent.id.primaryKey : null,
      projectIds: [],
      subfolderIds: [],
    };
    folderOrder.push(id);
  });
  folderOrder.forEach((id) => {
    const parentId = folders[id].parentFolderId;
    if (parentId && folders[parentId]) {
      folders[parentId].subfolderIds.push(id);
    }
  });

  const projects = {};
  flattenedProjects.filter(keepProject).forEach((project) => {
    const id = project.id.primaryKey;
    const folderId = project.parentFolder ? project.parentFolder.id.primaryKey : null;
    projects[id] = {
      id: id,
      name: project.name,
      note: project.note || "",
      status: statusName(projectStatusNames, project.status),
      folderId: folderId,
      dueDate: iso(project.dueDate),
      deferDate: iso(project.deferDate),
      flagged: project.flagged,
      sequential: project.sequential,
      containsSingletonActions: project.containsSingletonActions,
      estimatedMinutes: project.estimatedMinutes,
      taskIds: [],
    };
    if (folderId && folders[folderId]) {
      folders[folderId].projectIds.push(id);
    }
  });

  const tags = {};
  flattenedTags.filter(keepTag).forEach((tag) => {
    const id = tag.id.primaryKey;
    tags[id] = {
      id: id,
      name: tag.name,
      parentTagId: tag.parent ? tag.parent.id.primaryKey : null,
      active: tag.active,
      allowsNextAction: tag.allowsNextAction,
      taskIds: [],
    };
  });

  const tasks = [];
  flattenedTasks.filter(keepTask).forEach((task) => {
    const id = task.id.primaryKey;
    const project = task.containingProject;
    const projectId = project ? project.id.primaryKey : null;
    // Top-level tasks report the project's root task as their parent.
    const parent = task.parent;
    const parentTaskId =
      parent && parent.id.primaryKey !== projectId ? parent.id.primaryKey : null;
    const tagIds = task.tags.map((tag) => tag.id.primaryKey);

    tasks.push({
      id: id,
      name: task.name,
      note: task.note || "",
      taskStatus: statusName(taskStatusNames, task.taskStatus),
      flagged: task.flagged,
      dueDate: iso(task.dueDate),
      deferDate: iso(task.deferDate),
      estimatedMinutes: task.estimatedMinutes,
      tags: tagIds,
      tagNames: task.tags.map((tag) => tag.name),
      projectId: projectId,
      parentTaskId: parentTaskId,
      childIds: task.children.filter(keepTask).map((child) => child.id.primaryKey),
      sequential: task.sequential,
      completedByChildren: task.completedByChildren,
      inInbox: task.inInbox,
    });

    if (projectId && projects[projectId]) {
      projects[projectId].taskIds.push(id);
    }
    tagIds.forEach((tagId) => {
      if (tags[tagId]) {
        tags[tagId].taskIds.push(id);
      }
    });
  });

  return JSON.stringify({
    exportDate: new Date().toISOString(),
    tasks: tasks,
    projects: projects,
    folders: folders,
    tags: tags,
  });
})();
"""


def _build_dump_script(include_completed: bool = False) -> str:
    """
    Build the JXA program that exports the database as JSON on stdout.

    Args:
        include_completed: Export completed and dropped items too

    Returns:
        JavaScript source for `osascript -l JavaScript`
    """
    omnijs = OMNIJS_EXPORT_SCRIPT.replace("__INCLUDE_COMPLETED__", "true" if include_completed else "false")
    return (
        "function run() {\n"
        f"  const source = {json.dumps(omnijs)};\n"
        '  return Application("OmniFocus").evaluateJavascript(source);\n'
        "}\n"
    )


# ============================================================================
# Mutation Scripts (AppleScript)
# ============================================================================

# Handlers shared by every mutation script. Replies are built with jsonEscape so
# names containing quotes or newlines still produce a valid JSON line.
APPLESCRIPT_HANDLERS = r"""
on replaceText(theText, searchString, replacementString)
	set savedDelimiters to AppleScript's text item delimiters
	set AppleScript's text item delimiters to searchString
	set textItems to text items of theText
	set AppleScript's text item delimiters to replacementString
	set theText to textItems as text
	set AppleScript's text item delimiters to savedDelimiters
	return theText
end replaceText

on jsonEscape(theValue)
	set theText to theValue as text
	set theText to my replaceText(theText, "\\", "\\\\")
	set theText to my replaceText(theText, "\"", "\\\"")
	set theText to my replaceText(theText, return, "\\r")
	set theText to my replaceText(theText, linefeed, "\\n")
	set theText to my replaceText(theText, tab, "\\t")
	return theText
end jsonEscape

on successReply(itemId, itemName, changedText)
	return "{\"success\":true,\"id\":\"" & my jsonEscape(itemId) & "\",\"name\":\"" & my jsonEscape(itemName) & "\",\"changedProperties\":\"" & my jsonEscape(changedText) & "\"}"
end successReply

on errorReply(message)
	return "{\"success\":false,\"error\":\"" & my jsonEscape(message) & "\"}"
end errorReply

on makeDate(y, m, d, secs)
	set theDate to current date
	set day of theDate to 1
	set year of theDate to y
	set month of theDate to m
	set day of theDate to d
	set time of theDate to secs
	return theDate
end makeDate
""".strip()

_PROJECT_STATUS_TERMS = {
    ProjectEditStatus.ACTIVE: "active status",
    ProjectEditStatus.COMPLETED: "done status",
    ProjectEditStatus.DROPPED: "dropped status",
    ProjectEditStatus.ON_HOLD: "on hold status",
}

_TASK_STATUS_COMMANDS = {
    TaskEditStatus.COMPLETED: "mark complete foundItem",
    TaskEditStatus.DROPPED: "mark dropped foundItem",
    TaskEditStatus.INCOMPLETE: "mark incomplete foundItem",
}


def _wrap_document_script(body_lines: list[str]) -> str:
    """Wrap body lines in the shared handlers and the OmniFocus front-document blocks."""
    body = textwrap.indent("\n".join(body_lines), "\t\t\t")
    return "\n".join(
        [
            APPLESCRIPT_HANDLERS,
            "",
            "try",
            '\ttell application "OmniFocus"',
            "\t\ttell front document",
            body,
            "\t\tend tell",
            "\tend tell",
            "on error errorMessage",
            "\treturn my errorReply(errorMessage)",
            "end try",
        ]
    )


def _property_lines(target: str, params: AddTaskInput | AddProjectInput) -> list[str]:
    """Lines setting the properties shared by new tasks and projects."""
    lines = []
    if params.note:
        lines.append(f"set note of {target} to {_quote_applescript(params.note)}")
    if params.due_date:
        lines.append(f"set due date of {target} to {_applescript_date(params.due_date)}")
    if params.defer_date:
        lines.append(f"set defer date of {target} to {_applescript_date(params.defer_date)}")
    if params.flagged:
        lines.append(f"set flagged of {target} to true")
    if params.estimated_minutes:
        lines.append(f"set estimated minutes of {target} to {params.estimated_minutes}")
    return lines


def _add_existing_tags_lines(target: str, tags: list[str] | None) -> list[str]:
    """Lines attaching tags that already exist; unknown tag names are skipped."""
    if not tags:
        return []
    return [
        f"repeat with tagName in {_applescript_list(tags)}",
        "\ttry",
        "\t\tset theTag to first flattened tag where name = (contents of tagName)",
        f"\t\tadd theTag to tags of {target}",
        "\tend try",
        "end repeat",
    ]


def _find_item_lines(item_type: ItemType, item_id: str | None, name: str | None) -> list[str]:
    """Lines locating foundItem by id, then by name; reply 'Item not found' otherwise."""
    element = "flattened task" if item_type == ItemType.TASK else "flattened project"
    lines = ["set foundItem to missing value"]
    if item_id:
        lines += [
            "try",
            f"\tset foundItem to first {element} where id = {_quote_applescript(item_id)}",
            "end try",
        ]
    if name:
        lines += [
            "if foundItem is missing value then",
            "\ttry",
            f"\t\tset foundItem to first {element} where name = {_quote_applescript(name)}",
            "\tend try",
            "end if",
        ]
    lines.append('if foundItem is missing value then return my errorReply("Item not found")')
    return lines


def _build_add_task_script(params: AddTaskInput) -> str:
    """
    Build the AppleScript that creates a task.

    Container precedence: parent task id, parent task name, project, inbox.
    """
    name = _quote_applescript(params.name)
    lines: list[str] = []

    if params.parent_task_id or params.parent_task_name:
        if params.parent_task_id:
            query = f"where id = {_quote_applescript(params.parent_task_id)}"
            failure = f"Parent task not found with ID: {params.parent_task_id}"
        else:
            query = f"where name = {_quote_applescript(params.parent_task_name or '')}"
            failure = f"Parent task not found with name: {params.parent_task_name}"
        lines += [
            "try",
            f"\tset parentTask to first flattened task {query}",
            "on error",
            f"\treturn my errorReply({_quote_applescript(failure)})",
            "end try",
            f"set newTask to make new task with properties {{name:{name}}} at end of tasks of parentTask",
        ]
    elif params.project_name:
        lines += [
            "try",
            f"\tset theProject to first flattened project where name = {_quote_applescript(params.project_name)}",
            "on error",
            f"\treturn my errorReply({_quote_applescript(f'Project not found: {params.project_name}')})",
            "end try",
            f"set newTask to make new task with properties {{name:{name}}} at end of tasks of theProject",
        ]
    else:
        lines.append(f"set newTask to make new inbox task with properties {{name:{name}}}")

    lines += _property_lines("newTask", params)
    lines += _add_existing_tags_lines("newTask", params.tags)
    lines.append('return my successReply(id of newTask as text, name of newTask, "")')
    return _wrap_document_script(lines)


def _build_add_project_script(params: AddProjectInput) -> str:
    """Build the AppleScript that creates a project at the root or inside a folder."""
    name = _quote_applescript(params.name)
    lines: list[str] = []

    if params.folder_name:
        lines += [
            "try",
            f"\tset theFolder to first flattened folder where name = {_quote_applescript(params.folder_name)}",
            "on error",
            f"\treturn my errorReply({_quote_applescript(f'Folder not found: {params.folder_name}')})",
            "end try",
            f"set newProject to make new project with properties {{name:{name}}} at end of projects of theFolder",
        ]
    else:
        lines.append(f"set newProject to make new project with properties {{name:{name}}}")

    lines += _property_lines("newProject", params)
    lines.append(f"set sequential of newProject to {_applescript_bool(params.sequential)}")
    lines += _add_existing_tags_lines("newProject", params.tags)
    lines.append('return my successReply(id of newProject as text, name of newProject, "")')
    return _wrap_document_script(lines)


def _build_remove_item_script(params: RemoveItemInput) -> str:
    """Build the AppleScript that deletes a task or project."""
    lines = _find_item_lines(params.item_type, params.id, params.name)
    lines += [
        "set itemName to name of foundItem",
        "set itemId to id of foundItem as text",
        "delete foundItem",
        'return my successReply(itemId, itemName, "")',
    ]
    return _wrap_document_script(lines)


def _tag_edit_lines(params: EditItemInput) -> tuple[list[str], list[str]]:
    """Lines and change labels for task tag edits; replace_tags wins over add/remove."""
    lines: list[str] = []
    changed: list[str] = []
    find_or_create = [
        "\tset tagText to contents of tagName",
        "\tset tagObj to missing value",
        "\ttry",
        "\t\tset tagObj to first flattened tag where name = tagText",
        "\tend try",
        "\tif tagObj is missing value then set tagObj to make new tag with properties {name:tagText}",
        "\tadd tagObj to tags of foundItem",
    ]

    if params.replace_tags:
        lines += ["remove (tags of foundItem) from tags of foundItem"]
        lines += [f"repeat with tagName in {_applescript_list(params.replace_tags)}", *find_or_create, "end repeat"]
        changed.append("tags (replaced)")
        return lines, changed

    if params.add_tags:
        lines += [f"repeat with tagName in {_applescript_list(params.add_tags)}", *find_or_create, "end repeat"]
        changed.append("tags (added)")

    if params.remove_tags:
        lines += [
            f"repeat with tagName in {_applescript_list(params.remove_tags)}",
            "\ttry",
            "\t\tset tagObj to first flattened tag where name = (contents of tagName)",
            "\t\tremove tagObj from tags of foundItem",
            "\tend try",
            "end repeat",
        ]
        changed.append("tags (removed)")

    return lines, changed


def _build_edit_item_script(params: EditItemInput) -> str:
    """
    Build the AppleScript that edits a task or project.

    Task-only fields are ignored for projects and vice versa. The reply lists
    the properties that were changed.
    """
    lines = _find_item_lines(params.item_type, params.id, params.name)
    changed: list[str] = []

    if params.new_name is not None:
        lines.append(f"set name of foundItem to {_quote_applescript(params.new_name)}")
        changed.append("name")

    if params.new_note is not None:
        lines.append(f"set note of foundItem to {_quote_applescript(params.new_note)}")
        changed.append("note")

    for value, prop in ((params.new_due_date, "due date"), (params.new_defer_date, "defer date")):
        if value is None:
            continue
        if value == "":
            lines.append(f"set {prop} of foundItem to missing value")
        else:
            lines.append(f"set {prop} of foundItem to {_applescript_date(value)}")
        changed.append(prop)

    if params.new_flagged is not None:
        lines.append(f"set flagged of foundItem to {_applescript_bool(params.new_flagged)}")
        changed.append("flagged")

    if params.new_estimated_minutes is not None:
        lines.append(f"set estimated minutes of foundItem to {params.new_estimated_minutes}")
        changed.append("estimated minutes")

    if params.item_type == ItemType.TASK:
        if params.new_status is not None:
            lines.append(_TASK_STATUS_COMMANDS[params.new_status])
            changed.append(f"status ({params.new_status.value})")

        tag_lines, tag_changes = _tag_edit_lines(params)
        lines += tag_lines
        changed += tag_changes

    if params.item_type == ItemType.PROJECT:
        if params.new_sequential is not None:
            lines.append(f"set sequential of foundItem to {_applescript_bool(params.new_sequential)}")
            changed.append("sequential")

        if params.new_project_status is not None:
            lines.append(f"set status of foundItem to {_PROJECT_STATUS_TERMS[params.new_project_status]}")
            changed.append("status")

        if params.new_folder_name is not None:
            folder = _quote_applescript(params.new_folder_name)
            lines += [
                "set destFolder to missing value",
                "try",
                f"\tset destFolder to first flattened folder where name = {folder}",
                "end try",
                "if destFolder is missing value then",
                f"\tset destFolder to make new folder with properties {{name:{folder}}}",
                "end if",
                "move foundItem to end of sections of destFolder",
            ]
            changed.append("folder")

    lines.append(
        f"return my successReply(id of foundItem as text, name of foundItem, {_quote_applescript(', '.join(changed))})"
    )
    return _wrap_document_script(lines)
