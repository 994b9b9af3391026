"""
Round-trip tests: serialize -> parse -> apply.

Fields with a serializer slot come back as they went in, except values the
serializer treats as unset (None, "", 0, False).
"""

from datetime import date

from parsers.partner_file_parser import parse_partner_file
from services.partner_export_service import serialize_to_partner_file
from services.partner_import_service import apply_parsed_fields


def _round_trip(partner: dict, auth: dict, custom: dict):
    content = serialize_to_partner_file(partner, auth, custom, generated_on=date(2026, 2, 21))
    result = parse_partner_file(content)
    assert result.ok
    assert result.warnings == []
    return result, apply_parsed_fields(result.fields, result.raw_keys())


class TestRoundTrip:
    """Stability of the three buckets through a file."""

    def test_all_slots_survive(self):
        partner = {
            "name": "Supermarché Atlas",
            "code": "CL-0042",
            "partner_type": "CUSTOMER",
            "channel": "DIRECT",
            "status": "ACTIVE",
            "phone": "+212600000001",
            "email": "atlas@example.ma",
            "whatsapp": "+212600000002",
            "website": "https://atlas.ma",
            "address_line1": "123 Rue Mohammed V",
            "address_line2": "Etage 2",
            "city": "Casablanca",
            "region": "Casablanca-Settat",
            "country": "MA",
            "postal_code": "20000",
            "geo_area_code": "CAS-N",
            "price_list_id": 3.0,
            "payment_term_id": 2.0,
            "credit_limit": 50000.0,
            "default_discount_rate": 2.5,
            "tax_number_ice": "001234567000089",
            "tax_number_if": "40123456",
            "tax_exempt": True,
            "delivery_zone": "Zone Nord",
            "delivery_instructions": "Quai 3; sonner",
            "min_order_amount": 500.0,
        }
        auth = {"name": "Mohamed", "last_name": "Atlas", "email": "admin@atlas.ma", "is_active": True}
        custom = {"partner_rib": "MA0123456789012345678", "tier": "gold"}

        result, applied = _round_trip(partner, auth, custom)

        assert result.metadata.version == "1.0"
        assert result.metadata.source == "ERP Dashboard"
        assert applied.partner == partner
        assert applied.auth == auth
        assert applied.custom_fields == custom

    def test_unset_values_dropped(self):
        """Documented lossy behaviour: zero, false and empty do not come back."""
        partner = {"name": "Atlas", "credit_limit": 0, "tax_exempt": False, "email": ""}
        auth = {"name": "Jean", "is_active": False, "phone": None}
        custom = {"rib": "", "tier": "gold"}

        _, applied = _round_trip(partner, auth, custom)

        assert applied.partner == {"name": "Atlas"}
        assert applied.auth == {"name": "Jean"}
        assert applied.custom_fields == {"tier": "gold"}

    def test_partner_fields_without_slot_dropped(self):
        """Parsed-but-not-exported partner fields do not come back."""
        _, applied = _round_trip({"name": "Atlas", "opening_hours": "8h-18h"}, {}, {})
        assert applied.partner == {"name": "Atlas"}

    def test_parse_apply_serialize_parse_is_stable(self, full_file_content):
        first = parse_partner_file(full_file_content)
        applied = apply_parsed_fields(first.fields, first.raw_keys())

        content = serialize_to_partner_file(
            applied.partner, applied.auth, applied.custom_fields, generated_on=date(2026, 2, 21)
        )
        second = parse_partner_file(content)
        again = apply_parsed_fields(second.fields, second.raw_keys())

        assert again == applied
