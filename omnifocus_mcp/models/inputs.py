"""Input models for OmniFocus MCP tools."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from omnifocus_mcp.dates import parse_iso_datetime
from omnifocus_mcp.enums import ItemType, ProjectEditStatus, TaskEditStatus

# Tool arguments arrive camelCase (hideCompleted, projectName, ...); snake_case is accepted too.
_INPUT_CONFIG = ConfigDict(str_strip_whitespace=True, alias_generator=to_camel, populate_by_name=True)


def _validate_date(v: str | None) -> str | None:
    if v is None:
        return v
    parse_iso_datetime(v)
    return v


def _validate_optional_date(v: str | None) -> str | None:
    """Like _validate_date, but an empty string (clear the date) is allowed."""
    if v is None or v == "":
        return v
    parse_iso_datetime(v)
    return v


def _validate_name(v: str) -> str:
    if not v.strip():
        raise ValueError("Name cannot be empty")
    return v.strip()


# ============================================================================
# Database Tool Input Models
# ============================================================================


class DumpDatabaseInput(BaseModel):
    """Input model for dumping the database as a compact report."""

    model_config = _INPUT_CONFIG

    hide_completed: bool = Field(
        default=True,
        description="Set to false to show completed and dropped tasks (default: true)",
    )
    hide_recurring_duplicates: bool = Field(
        default=True,
        description="Set to true to hide duplicate instances of recurring tasks (default: true)",
    )


class GetTaskDetailsInput(BaseModel):
    """Input model for getting details of a single task."""

    model_config = _INPUT_CONFIG

    task_id: str | None = Field(default=None, description="The ID of the task to get details for")
    task_name: str | None = Field(
        default=None,
        description="The name of the task to get details for (partial match supported)",
    )

    @model_validator(mode="after")
    def validate_identifier(self) -> "GetTaskDetailsInput":
        if not self.task_id and not self.task_name:
            raise ValueError("Either taskId or taskName must be provided")
        return self


# ============================================================================
# Item Tool Input Models
# ============================================================================


class AddTaskInput(BaseModel):
    """Input model for adding a new task."""

    model_config = _INPUT_CONFIG

    name: str = Field(..., description="The name of the task", min_length=1, max_length=1000)
    note: str | None = Field(default=None, description="Additional notes for the task")
    due_date: str | None = Field(
        default=None,
        description="The due date of the task in ISO format (YYYY-MM-DD or full ISO date)",
    )
    defer_date: str | None = Field(
        default=None,
        description="The defer date of the task in ISO format (YYYY-MM-DD or full ISO date)",
    )
    flagged: bool | None = Field(default=None, description="Whether the task is flagged or not")
    estimated_minutes: int | None = Field(
        default=None, description="Estimated time to complete the task, in minutes", ge=0
    )
    tags: list[str] | None = Field(default=None, description="Tags to assign to the task")
    project_name: str | None = Field(
        default=None,
        description="The name of the project to add the task to (will add to inbox if not specified)",
    )
    parent_task_id: str | None = Field(default=None, description="The ID of the parent task to nest this task under")
    parent_task_name: str | None = Field(
        default=None,
        description="The name of the parent task to nest this task under (alternative to parentTaskId)",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_name(v)

    @field_validator("due_date", "defer_date")
    @classmethod
    def validate_dates(cls, v: str | None) -> str | None:
        return _validate_date(v)


class AddProjectInput(BaseModel):
    """Input model for adding a new project."""

    model_config = _INPUT_CONFIG

    name: str = Field(..., description="The name of the project", min_length=1, max_length=1000)
    note: str | None = Field(default=None, description="Additional notes for the project")
    due_date: str | None = Field(
        default=None,
        description="The due date of the project in ISO format (YYYY-MM-DD or full ISO date)",
    )
    defer_date: str | None = Field(
        default=None,
        description="The defer date of the project in ISO format (YYYY-MM-DD or full ISO date)",
    )
    flagged: bool | None = Field(default=None, description="Whether the project is flagged or not")
    estimated_minutes: int | None = Field(
        default=None, description="Estimated time to complete the project, in minutes", ge=0
    )
    tags: list[str] | None = Field(default=None, description="Tags to assign to the project")
    folder_name: str | None = Field(
        default=None,
        description="The name of the folder to add the project to (will add to root if not specified)",
    )
    sequential: bool = Field(
        default=False,
        description="Whether tasks in the project should be sequential (default: false)",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_name(v)

    @field_validator("due_date", "defer_date")
    @classmethod
    def validate_dates(cls, v: str | None) -> str | None:
        return _validate_date(v)


class RemoveItemInput(BaseModel):
    """Input model for removing a task or project."""

    model_config = _INPUT_CONFIG

    id: str | None = Field(default=None, description="The ID of the task or project to remove")
    name: str | None = Field(
        default=None,
        description="The name of the task or project to remove (as fallback if ID not provided)",
    )
    item_type: ItemType = Field(..., description="Type of item to remove ('task' or 'project')")

    @model_validator(mode="after")
    def validate_identifier(self) -> "RemoveItemInput":
        if not self.id and not self.name:
            raise ValueError("Either id or name must be provided to remove an item")
        return self


class EditItemInput(BaseModel):
    """Input model for editing a task or project."""

    model_config = _INPUT_CONFIG

    id: str | None = Field(default=None, description="The ID of the task or project to edit")
    name: str | None = Field(
        default=None,
        description="The name of the task or project to edit (as fallback if ID not provided)",
    )
    item_type: ItemType = Field(..., description="Type of item to edit ('task' or 'project')")

    # Common editable fields
    new_name: str | None = Field(default=None, description="New name for the item")
    new_note: str | None = Field(default=None, description="New note for the item")
    new_due_date: str | None = Field(
        default=None,
        description="New due date in ISO format (YYYY-MM-DD or full ISO date); set to empty string to clear",
    )
    new_defer_date: str | None = Field(
        default=None,
        description="New defer date in ISO format (YYYY-MM-DD or full ISO date); set to empty string to clear",
    )
    new_flagged: bool | None = Field(
        default=None, description="Set flagged status (set to false for no flag, true for flag)"
    )
    new_estimated_minutes: int | None = Field(default=None, description="New estimated minutes", ge=0)

    # Task-specific fields
    new_status: TaskEditStatus | None = Field(
        default=None, description="New status for tasks (incomplete, completed, dropped)"
    )
    add_tags: list[str] | None = Field(default=None, description="Tags to add to the task")
    remove_tags: list[str] | None = Field(default=None, description="Tags to remove from the task")
    replace_tags: list[str] | None = Field(default=None, description="Tags to replace all existing tags with")

    # Project-specific fields
    new_sequential: bool | None = Field(default=None, description="Whether the project should be sequential")
    new_folder_name: str | None = Field(default=None, description="New folder to move the project to")
    new_project_status: ProjectEditStatus | None = Field(default=None, description="New status for projects")

    @field_validator("new_due_date", "new_defer_date")
    @classmethod
    def validate_dates(cls, v: str | None) -> str | None:
        return _validate_optional_date(v)

    @model_validator(mode="after")
    def validate_identifier(self) -> "EditItemInput":
        if not self.id and not self.name:
            raise ValueError("Either id or name must be provided to edit an item")
        return self


class BatchAddItem(BaseModel):
    """One task or project inside a batch_add_items request."""

    model_config = _INPUT_CONFIG

    item_type: ItemType = Field(
        ...,
        description="Type of item to add ('task' or 'project')",
        validation_alias=AliasChoices("itemType", "type"),
    )
    name: str = Field(..., description="The name of the item", min_length=1, max_length=1000)
    note: str | None = Field(default=None, description="Additional notes for the item")
    due_date: str | None = Field(
        default=None, description="The due date in ISO format (YYYY-MM-DD or full ISO date)"
    )
    defer_date: str | None = Field(
        default=None, description="The defer date in ISO format (YYYY-MM-DD or full ISO date)"
    )
    flagged: bool | None = Field(default=None, description="Whether the item is flagged or not")
    estimated_minutes: int | None = Field(
        default=None, description="Estimated time to complete the item, in minutes", ge=0
    )
    tags: list[str] | None = Field(default=None, description="Tags to assign to the item")

    # Task-specific properties
    project_name: str | None = Field(
        default=None, description="For tasks: The name of the project to add the task to"
    )
    parent_task_id: str | None = Field(
        default=None, description="For tasks: The ID of the parent task to nest this task under"
    )
    parent_task_name: str | None = Field(
        default=None, description="For tasks: The name of the parent task to nest this task under"
    )

    # Project-specific properties
    folder_name: str | None = Field(
        default=None, description="For projects: The name of the folder to add the project to"
    )
    sequential: bool | None = Field(
        default=None, description="For projects: Whether tasks in the project should be sequential"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_name(v)

    @field_validator("due_date", "defer_date")
    @classmethod
    def validate_dates(cls, v: str | None) -> str | None:
        return _validate_date(v)

    def to_task_input(self) -> AddTaskInput:
        return AddTaskInput(
            name=self.name,
            note=self.note,
            due_date=self.due_date,
            defer_date=self.defer_date,
            flagged=self.flagged,
            estimated_minutes=self.estimated_minutes,
            tags=self.tags,
            project_name=self.project_name,
            parent_task_id=self.parent_task_id,
            parent_task_name=self.parent_task_name,
        )

    def to_project_input(self) -> AddProjectInput:
        return AddProjectInput(
            name=self.name,
            note=self.note,
            due_date=self.due_date,
            defer_date=self.defer_date,
            flagged=self.flagged,
            estimated_minutes=self.estimated_minutes,
            tags=self.tags,
            folder_name=self.folder_name,
            sequential=bool(self.sequential),
        )


class BatchAddItemsInput(BaseModel):
    """Input model for adding several tasks or projects at once."""

    model_config = _INPUT_CONFIG

    items: list[BatchAddItem] = Field(
        ..., description="Array of items (tasks or projects) to add", min_length=1, max_length=100
    )


class BatchRemoveItemsInput(BaseModel):
    """Input model for removing several tasks or projects at once."""

    model_config = _INPUT_CONFIG

    items: list[RemoveItemInput] = Field(
        ..., description="Array of items (tasks or projects) to remove", min_length=1, max_length=100
    )
