"""Tasks page extractor with content-keyed deduplication."""

import logging

from ac_extractor.extractors.base import BaseExtractor, LayoutStrategy
from ac_extractor.extractors.selectors import (
    FieldSpec,
    HasClass,
    Keyword,
    Text,
    css,
    field_specs,
)
from ac_extractor.models.record import RecordKind, TaskRecord

logger = logging.getLogger(__name__)

DUE_DATE_TIP = 'td.date span[rel="tip"]'

ACTIVECAMPAIGN_TABLE = LayoutStrategy(
    name="activecampaign-table",
    root_selector="tr.tasks_task-row",
    fields=field_specs(
        FieldSpec("type", css(".deal-task-type"), "task"),
        FieldSpec("title", css(".tasks_index__title .task-title", ".task-title"), "Untitled"),
        FieldSpec("description", css(".task-description"), ""),
        FieldSpec("linked_to", css('td.owner-type span[rel="tip"]', "td.owner-type span"), "N/A"),
        # Tooltip holds the absolute date; visible text is relative ("Tomorrow").
        FieldSpec("due_date", (Text(DUE_DATE_TIP, attribute="data-original-title"), Text(DUE_DATE_TIP)), "No due date"),
        FieldSpec("status", css(".status-text"), "Unknown"),
        FieldSpec("is_completed", (HasClass("completed"),), False),
        FieldSpec("link", (Text('a[href^="/app/"]', attribute="href"),), ""),
    ),
)

TASK_TYPES = (
    ("call", ("call", "phone")),
    ("email", ("email", "mail")),
    ("meeting", ("meeting", "calendar")),
)

GENERIC_LIST = LayoutStrategy(
    name="generic-list",
    root_selector="[data-task-id], .task-item, .task-card",
    fields=field_specs(
        FieldSpec("type", (Keyword("[data-type], .task-type, .type-badge", TASK_TYPES, icon_css="i, svg, .icon"),), "task"),
        FieldSpec("title", css('[data-field="title"]', ".task-title", "h3", "h4"), "Untitled"),
        FieldSpec("description", css('[data-field="description"]', ".task-description"), ""),
        FieldSpec("linked_to", css("[data-linked]", ".linked-entity", ".related-to"), "N/A"),
        FieldSpec("due_date", css('[data-field="due-date"]', ".due-date", "time"), "No due date"),
        FieldSpec("status", css('[data-field="status"]', ".task-status", ".status-text"), "Unknown"),
        FieldSpec("is_completed", (HasClass("completed"),), False),
        FieldSpec("assignee", css("[data-owner]", ".assignee", '[data-field="assignee"]'), "Unassigned"),
    ),
)


def task_key(task_type: str, title: str, linked_to: str, due_date: str) -> str:
    """Content key identifying a task: normalized type|title|linkedTo|dueDate."""
    parts = (task_type, title, linked_to, due_date)
    return "|".join(" ".join(part.split()).lower() for part in parts)


class TasksExtractor(BaseExtractor):
    """
    Tasks from the tasks table or a generic task list.

    Task rows carry no stable identifier, so a task's id is its content key and
    rows that describe the same task collapse into one record.
    """

    kind = RecordKind.TASKS
    id_prefix = "task"
    strategies = (ACTIVECAMPAIGN_TABLE, GENERIC_LIST)

    def build_record(self, values, container, extraction):
        values["id"] = task_key(values["type"], values["title"], values["linked_to"], values["due_date"])
        return super().build_record(values, container, extraction)

    def collect(self, records: list[TaskRecord]) -> list[TaskRecord]:
        unique: dict[str, TaskRecord] = {}
        for record in records:
            unique[record.id] = record
        if len(unique) < len(records):
            logger.debug("Collapsed %d duplicate task rows", len(records) - len(unique))
        return list(unique.values())
