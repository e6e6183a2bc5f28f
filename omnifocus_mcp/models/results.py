"""Result models for script replies and tool aggregation."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from omnifocus_mcp.enums import ItemType
from omnifocus_mcp.models.database import Task


class ScriptResult(BaseModel):
    """The JSON line a mutation script prints on stdout."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    success: bool = False
    id: str | None = None
    name: str | None = None
    changed_properties: str | None = None
    error: str | None = None


class BatchItemResult(BaseModel):
    """Outcome of one item inside a batch operation."""

    item_type: ItemType
    label: str
    result: ScriptResult


class TaskDetails(BaseModel):
    """A task enriched with the names of the items it references."""

    task: Task
    project_name: str | None = None
    parent_task_name: str | None = None
    children: list[tuple[str, str]] = Field(default_factory=list)
