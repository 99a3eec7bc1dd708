"""Deals page extractor."""

from ac_extractor.extractors.base import BaseExtractor, LayoutStrategy
from ac_extractor.extractors.selectors import (
    Attr,
    Cell,
    FieldSpec,
    HrefTail,
    Text,
    css,
    field_specs,
)
from ac_extractor.models.record import RecordKind

OWNER_SELECTORS = css("[data-owner]", ".owner", ".assignee", '[data-field="owner"]')
PIPELINE_SELECTORS = css("[data-pipeline]", ".pipeline", '[data-field="pipeline"]')

# Pipeline board: one column per stage, deal cards inside each column.
KANBAN_BOARD = LayoutStrategy(
    name="kanban-board",
    root_selector=".deals_index_deal-board_column",
    item_selector=".deals_index_deal-card",
    fields=field_specs(
        FieldSpec("id", (HrefTail("a"), Attr("data-deal-id"))),
        FieldSpec(
            "stage",
            css(".deals_index_deal-board_column__title camp-text", ".deals_index_deal-board_column__title"),
            "Unknown Stage",
            scope="group",
        ),
        FieldSpec("title", css(".deals_index_deal-card_region.title camp-text", ".deals_index_deal-card_region.title"), "Untitled Deal"),
        FieldSpec("value", css(".deals_index_deal-card_region.value"), "$0"),
        FieldSpec(
            "contact",
            css(
                ".deals_index_deal-card_region.contact-fullname-acctname camp-text",
                ".deals_index_deal-card_region.contact-fullname-acctname",
            ),
            "N/A",
        ),
        FieldSpec("next_task", css(".deals_index_deal-card_region.next-action"), "No task"),
        FieldSpec("pipeline", PIPELINE_SELECTORS, "Default Pipeline"),
        FieldSpec("owner", OWNER_SELECTORS, "N/A"),
    ),
)

# Older list view: title, value, stage, contact in the first four cells.
GENERIC_TABLE = LayoutStrategy(
    name="generic-table",
    root_selector="table tbody tr",
    min_cells=3,
    fields=field_specs(
        FieldSpec("id", (Attr("data-deal-id"),)),
        FieldSpec("title", (Text('[data-field="title"]'), Text(".deal-title"), Cell(0)), ""),
        FieldSpec("value", (Text('[data-field="value"]'), Text(".deal-value"), Cell(1)), "N/A"),
        FieldSpec("stage", (Text('[data-field="stage"]'), Text(".deal-stage"), Cell(2)), "Unknown"),
        FieldSpec("contact", (Text('[data-field="contact"]'), Cell(3)), "N/A"),
        FieldSpec("pipeline", PIPELINE_SELECTORS, "Sales"),
        FieldSpec("owner", OWNER_SELECTORS, "Unassigned"),
    ),
    accept=lambda v: bool(v["title"]),
)

CARDS = LayoutStrategy(
    name="cards",
    root_selector="[data-deal-id], .deal-card, .pipeline-card, .kanban-card",
    fields=field_specs(
        FieldSpec("id", (Attr("data-deal-id"),)),
        FieldSpec("title", css('[data-field="title"]', ".deal-title", "h3", "h4"), ""),
        FieldSpec("value", css('[data-field="value"]', ".deal-value", ".amount"), "N/A"),
        FieldSpec("stage", css('[data-field="stage"]', ".deal-stage", ".stage-name"), "Unknown"),
        FieldSpec("contact", css('[data-field="contact"]', ".contact-name"), "N/A"),
        FieldSpec("pipeline", PIPELINE_SELECTORS, "Sales"),
        FieldSpec("owner", OWNER_SELECTORS, "Unassigned"),
    ),
    accept=lambda v: bool(v["title"]),
)


class DealsExtractor(BaseExtractor):
    """Deals from the pipeline board, an older list table, or loose deal cards."""

    kind = RecordKind.DEALS
    id_prefix = "deal"
    strategies = (KANBAN_BOARD, GENERIC_TABLE, CARDS)
