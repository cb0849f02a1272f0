"""Tests for in-memory contact search and tag filtering."""

from dropcard.models.contact import ContactRecord
from dropcard.services.contact_search import (
    collect_tags,
    filter_by_tags,
    search_contacts,
    toggle_tag,
)

ANN = ContactRecord(name="Ann Lee", email="ann@lee.co", company="Lee & Co", tags=("vip",))
BOB = ContactRecord(name="Bob Jones", title="CTO", company="Acme", tags=("work", "scanned"))
CAL = ContactRecord(name="Cal Diaz", email="cal@acme.com", tags=("work", "vip"))

CONTACTS = [ANN, BOB, CAL]


class TestSearchContacts:
    def test_matches_name(self) -> None:
        assert search_contacts(CONTACTS, "ann") == [ANN]

    def test_matches_company_and_email(self) -> None:
        """A query hits every searchable field."""
        assert search_contacts(CONTACTS, "acme") == [BOB, CAL]

    def test_matches_title(self) -> None:
        assert search_contacts(CONTACTS, "cto") == [BOB]

    def test_case_insensitive(self) -> None:
        assert search_contacts(CONTACTS, "JONES") == [BOB]

    def test_blank_query_returns_all(self) -> None:
        assert search_contacts(CONTACTS, "") == CONTACTS
        assert search_contacts(CONTACTS, "   ") == CONTACTS

    def test_no_match(self) -> None:
        assert search_contacts(CONTACTS, "zebra") == []

    def test_notes_not_searched(self) -> None:
        contact = ContactRecord(name="Dee", notes="met at the zebra conference")

        assert search_contacts([contact], "zebra") == []


class TestFilterByTags:
    def test_no_selection_returns_all(self) -> None:
        assert filter_by_tags(CONTACTS, []) == CONTACTS

    def test_single_tag(self) -> None:
        assert filter_by_tags(CONTACTS, ["vip"]) == [ANN, CAL]

    def test_any_selected_tag_matches(self) -> None:
        assert filter_by_tags(CONTACTS, ["scanned", "vip"]) == [ANN, BOB, CAL]

    def test_composes_with_search(self) -> None:
        """Search first, then tag filter."""
        found = search_contacts(CONTACTS, "acme")

        assert filter_by_tags(found, ["vip"]) == [CAL]


class TestTagHelpers:
    def test_collect_tags_first_seen_order(self) -> None:
        assert collect_tags(CONTACTS) == ["vip", "work", "scanned"]

    def test_collect_tags_empty(self) -> None:
        assert collect_tags([]) == []

    def test_toggle_adds_then_removes(self) -> None:
        selected = toggle_tag((), "vip")
        assert selected == ("vip",)

        assert toggle_tag(selected, "vip") == ()

    def test_toggle_keeps_other_selections(self) -> None:
        assert toggle_tag(("work", "vip"), "work") == ("vip",)
