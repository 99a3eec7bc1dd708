"""Record models for the three extracted entity kinds."""

from enum import Enum
from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field


class RecordKind(str, Enum):
    """Kind of business record; the value is the dataset key it is stored under."""

    CONTACTS = "contacts"
    DEALS = "deals"
    TASKS = "tasks"


class BaseRecord(BaseModel):
    """
    Fields shared by every record kind.
    Identity is the id alone: two records with the same id are the same entity.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    kind: ClassVar[RecordKind]

    id: str = Field(..., min_length=1, description="Unique within its kind")

    @property
    def label(self) -> str:
        """Human-readable title-equivalent field; the id unless a kind has one."""
        return self.id


class ContactRecord(BaseRecord):
    """Contact row from the contacts list."""

    kind: ClassVar[RecordKind] = RecordKind.CONTACTS

    name: str = "Unknown"
    email: str = "N/A"
    phone: str = "N/A"
    tags: list[str] = Field(default_factory=list)
    owner: str = "Unassigned"
    date_created: str = Field(default="N/A", alias="dateCreated")

    @property
    def label(self) -> str:
        return self.name


class DealRecord(BaseRecord):
    """Deal card or row; stage and pipeline are its relational fields."""

    kind: ClassVar[RecordKind] = RecordKind.DEALS

    title: str = "Untitled Deal"
    value: str = "N/A"
    pipeline: str = "Default Pipeline"
    stage: str = "Unknown"
    contact: str = "N/A"
    owner: str = "N/A"
    next_task: str = Field(default="No task", alias="nextTask")

    @property
    def label(self) -> str:
        return self.title


class TaskRecord(BaseRecord):
    """Task row; the id is a content key since rows carry no stable identifier."""

    kind: ClassVar[RecordKind] = RecordKind.TASKS

    type: str = "task"
    title: str = "Untitled"
    description: str = ""
    due_date: str = Field(default="No due date", alias="dueDate")
    status: str = "Unknown"
    is_completed: bool = Field(default=False, alias="isCompleted")
    linked_to: str = Field(default="N/A", alias="linkedTo")
    assignee: str = "Unassigned"
    link: str = ""

    @property
    def label(self) -> str:
        return self.title


Record = Union[ContactRecord, DealRecord, TaskRecord]

_MODELS: dict[RecordKind, type[BaseRecord]] = {
    RecordKind.CONTACTS: ContactRecord,
    RecordKind.DEALS: DealRecord,
    RecordKind.TASKS: TaskRecord,
}


def record_model_for(kind: RecordKind | str) -> type[BaseRecord]:
    """Return the record model class for a kind ('contacts', 'deals', 'tasks')."""
    return _MODELS[RecordKind(kind)]
