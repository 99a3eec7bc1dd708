"""Contacts page extractor."""

from ac_extractor.extractors.base import BaseExtractor, LayoutStrategy
from ac_extractor.extractors.selectors import (
    Attr,
    Cell,
    FieldSpec,
    Text,
    TextList,
    css,
    field_specs,
)
from ac_extractor.models.record import RecordKind

TAG_SELECTOR = "[data-tag], .tag, .badge, .label"
OWNER_SELECTORS = css("[data-owner]", ".owner", ".assignee", '[data-field="owner"]')

# Current contacts index: one tr per contact, cells addressed by data-testid.
ACTIVECAMPAIGN_TABLE = LayoutStrategy(
    name="activecampaign-table",
    root_selector="tbody.contacts-index-body tr.contacts_index_contact-row",
    fields=field_specs(
        FieldSpec("id", (Attr("id", strip_prefix="contactrow_"), Attr("data-contact-id"))),
        FieldSpec("name", css('[data-testid="c-table__cell--full-name"] a.full-name', '[data-testid="c-table__cell--full-name"]'), "Unknown"),
        FieldSpec("email", css('[data-testid="c-table__cell--email"] a.email', '[data-testid="c-table__cell--email"]'), "N/A"),
        FieldSpec("phone", css('[data-testid="c-table__cell--phone"] a.phone', '[data-testid="c-table__cell--phone"]'), "N/A"),
        FieldSpec("owner", css('[data-testid="c-table__cell--account"]'), "Unassigned", ignore=("—", "-")),
        FieldSpec("date_created", css('[data-testid="c-table__cell--date"]'), "N/A"),
        FieldSpec("tags", (TextList(TAG_SELECTOR),), []),
    ),
    accept=lambda v: v["name"] != "Unknown",
)

# Older generic table: name, email, phone in the first three cells.
GENERIC_TABLE = LayoutStrategy(
    name="generic-table",
    root_selector="table tbody tr",
    min_cells=3,
    fields=field_specs(
        FieldSpec("id", (Attr("data-contact-id"),)),
        FieldSpec("name", (Text('[data-field="name"]'), Text(".contact-name"), Cell(0)), ""),
        FieldSpec("email", (Text('[data-field="email"]'), Text(".contact-email"), Cell(1)), ""),
        FieldSpec("phone", (Text('[data-field="phone"]'), Text(".contact-phone"), Cell(2)), "N/A"),
        FieldSpec("owner", OWNER_SELECTORS, "Unassigned"),
        FieldSpec("tags", (TextList(TAG_SELECTOR),), []),
    ),
    accept=lambda v: bool(v["name"] and v["email"]),
)

CARDS = LayoutStrategy(
    name="cards",
    root_selector="[data-contact-id], .contact-card, .contact-item",
    fields=field_specs(
        FieldSpec("id", (Attr("data-contact-id"),)),
        FieldSpec("name", css('[data-field="name"]', ".contact-name", "h3", "h4"), ""),
        FieldSpec("email", css('[data-field="email"]', ".contact-email", '[href^="mailto:"]'), ""),
        FieldSpec("phone", css('[data-field="phone"]', ".contact-phone", '[href^="tel:"]'), "N/A"),
        FieldSpec("owner", OWNER_SELECTORS, "Unassigned"),
        FieldSpec("tags", (TextList(TAG_SELECTOR),), []),
    ),
    accept=lambda v: bool(v["name"] or v["email"]),
)


class ContactsExtractor(BaseExtractor):
    """Contacts from the index table, an older generic table, or contact cards."""

    kind = RecordKind.CONTACTS
    id_prefix = "contact"
    strategies = (ACTIVECAMPAIGN_TABLE, GENERIC_TABLE, CARDS)

    def build_record(self, values, container, extraction):
        # Cards may carry only one of name/email.
        values["name"] = values["name"] or "Unknown"
        values["email"] = values["email"] or "N/A"
        return super().build_record(values, container, extraction)
