from datetime import date

from dropcard.models.contact import ContactRecord
from dropcard.models.scan_result import JsonScanResult, RawScanResult, VCardScanResult
from dropcard.parsers.scan import decode_scan
from dropcard.services.payload_codec import encode_card_payload
from dropcard.services.reconciler import (
    Channel,
    add_tag,
    build_notes,
    collect_additional_fields,
    format_field_name,
    reconcile,
    reconcile_scan,
    remove_tag,
)


class TestFormatFieldName:
    def test_single_word_capitalized(self) -> None:
        assert format_field_name("linkedin") == "Linkedin"

    def test_camel_case_split(self) -> None:
        assert format_field_name("workPhone") == "Work Phone"
        assert format_field_name("homePhoneNumber") == "Home Phone Number"

    def test_leading_capital_not_padded(self) -> None:
        assert format_field_name("Address") == "Address"

    def test_empty(self) -> None:
        assert format_field_name("") == ""


class TestCollectAdditionalFields:
    def test_skips_standard_fields(self) -> None:
        data = {"name": "Bob", "email": "b@x.com", "phone": "1", "company": "C", "title": "T"}

        assert collect_additional_fields(data) == {}

    def test_skips_empty_values_and_raw_text(self) -> None:
        data = {"name": "Bob", "fax": "", "mobile": None, "raw": "BOB\nb@x.com", "twitter": "@bob"}

        assert collect_additional_fields(data) == {"twitter": "@bob"}

    def test_skips_payload_type_marker(self) -> None:
        assert collect_additional_fields({"name": "Bob", "type": "dropcard"}) == {}

    def test_keeps_other_type_values(self) -> None:
        assert collect_additional_fields({"type": "partner"}) == {"type": "partner"}

    def test_stringifies_non_text_values(self) -> None:
        assert collect_additional_fields({"employees": 250}) == {"employees": "250"}

    def test_preserves_input_order(self) -> None:
        data = {"twitter": "@bob", "address": "1 Elm St", "fax": "555"}

        assert list(collect_additional_fields(data)) == ["twitter", "address", "fax"]


class TestBuildNotes:
    def test_preamble_only(self, added_on: date) -> None:
        assert build_notes({}, added_on=added_on) == "Added on 3/5/2024"

    def test_one_line_per_field(self, added_on: date) -> None:
        notes = build_notes(
            {"workPhone": "555 0100", "linkedin": "http://li/bob"},
            added_on=added_on,
        )

        assert notes.splitlines() == [
            "Added on 3/5/2024",
            "Work Phone: 555 0100",
            "Linkedin: http://li/bob",
        ]

    def test_channel_preamble(self, added_on: date) -> None:
        notes = build_notes({}, added_on=added_on, channel=Channel.QR_SCAN)

        assert notes == "Added via QR scan on 3/5/2024"


class TestReconcile:
    def test_ocr_result_with_extra_fields(self, added_on: date) -> None:
        record = reconcile(
            {"name": "Bob", "email": "b@x.com", "linkedin": "http://li/bob"},
            Channel.BUSINESS_CARD,
            added_on=added_on,
        )

        assert record.name == "Bob"
        assert record.email == "b@x.com"
        assert "Linkedin: http://li/bob" in record.notes.splitlines()
        assert record.metadata == {"linkedin": "http://li/bob"}
        assert record.tags == ("business-card",)

    def test_standard_fields_trimmed(self) -> None:
        record = reconcile({"name": "  Bob  ", "company": " Acme "})

        assert record.name == "Bob"
        assert record.company == "Acme"

    def test_website_is_canonical_not_metadata(self, added_on: date) -> None:
        record = reconcile({"name": "Bob", "website": "bob.dev"}, added_on=added_on)

        assert record.website == "bob.dev"
        assert "website" not in record.metadata
        assert "Website: bob.dev" in record.notes

    def test_name_falls_back_to_raw_text(self) -> None:
        record = reconcile({"raw": "\n  BOB JONES  \nb@x.com"})

        assert record.name == "BOB JONES"

    def test_name_falls_back_to_unknown(self) -> None:
        assert reconcile({"email": "b@x.com"}).name == "Unknown Contact"

    def test_not_a_mapping(self) -> None:
        record = reconcile(None)  # type: ignore[arg-type]

        assert record.name == "Unknown Contact"
        assert record.tags == ()

    def test_manual_channel_has_no_provenance_tag(self) -> None:
        assert reconcile({"name": "Bob"}, Channel.MANUAL).tags == ()

    def test_incoming_tags_merged_and_deduplicated(self) -> None:
        record = reconcile(
            {"name": "Bob", "tags": ["vip", "vip", " friend ", 7]},
            Channel.QR_SCAN,
        )

        assert record.tags == ("vip", "friend", "scanned")

    def test_provenance_tag_not_duplicated(self) -> None:
        record = reconcile({"name": "Bob", "tags": ["scanned"]}, Channel.QR_SCAN)

        assert record.tags == ("scanned",)


class TestReconcileScan:
    def test_json_payload(self, added_on: date) -> None:
        result = JsonScanResult(
            record={"name": "Jane", "email": "jane@x.com", "title": "CTO", "type": "dropcard"}
        )

        record = reconcile_scan(result, added_on=added_on)

        assert record.name == "Jane"
        assert record.title == "CTO"
        assert record.tags == ("scanned",)
        assert record.notes == "Added via QR scan on 3/5/2024"
        assert record.metadata == {}

    def test_vcard(self, sample_vcard: str, added_on: date) -> None:
        result = decode_scan(sample_vcard)
        assert isinstance(result, VCardScanResult)

        record = reconcile_scan(result, added_on=added_on)

        assert record.name == "Jane Smith"
        assert record.company == "Acme Corp"
        assert record.website == "https://acme.com"
        assert record.tags == ("scanned",)
        assert record.metadata["address"] == "123 Main St, Springfield, IL, 62701, USA"
        assert "Linkedin: https://linkedin.com/in/janesmith" in record.notes

    def test_raw_text_kept(self, added_on: date) -> None:
        record = reconcile_scan(RawScanResult(text="Call Bob"), added_on=added_on)

        assert record.name == "Call Bob"
        assert "Notes: Call Bob" in record.notes

    def test_encode_then_reconcile(self) -> None:
        original = ContactRecord(name="Ann Lee", email="ann@x.com", company="Lee & Co")

        record = reconcile_scan(decode_scan(encode_card_payload(original)))

        assert (record.name, record.email, record.company) == ("Ann Lee", "ann@x.com", "Lee & Co")


class TestTags:
    def test_add_tag(self) -> None:
        assert add_tag(("work",), "vip") == ("work", "vip")

    def test_add_duplicate_is_noop(self) -> None:
        tags = add_tag(("vip",), "vip")
        tags = add_tag(tags, "vip")

        assert tags == ("vip",)

    def test_add_trims(self) -> None:
        assert add_tag((), "  vip  ") == ("vip",)

    def test_add_blank_is_noop(self) -> None:
        assert add_tag(("vip",), "   ") == ("vip",)

    def test_add_is_case_sensitive(self) -> None:
        assert add_tag(("vip",), "VIP") == ("vip", "VIP")

    def test_remove_exact_match(self) -> None:
        assert remove_tag(("vip", "work"), "vip") == ("work",)

    def test_remove_is_case_sensitive(self) -> None:
        assert remove_tag(("vip",), "VIP") == ("vip",)

    def test_accepts_lists(self) -> None:
        assert add_tag(["vip"], "work") == ("vip", "work")
