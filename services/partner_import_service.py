"""
Partner import service — apply parsed .partner fields to a partner form.

The parser produces every field it found; the caller (a review screen, a CLI,
an upload endpoint) decides which raw keys to accept. Only those are turned
into typed values here.
"""

from typing import Any, Iterable, Literal, Mapping, Optional

import structlog

from models.partner_file import AppliedResult, ParsedField
from parsers.partner_file_parser import strip_custom_prefix
from utils.text_utils import parse_leading_float, to_file_value

logger = structlog.get_logger(__name__)

FieldStatus = Literal["new", "modified", "unchanged", "unknown"]

NUMERIC_FIELDS = frozenset({
    "credit_limit",
    "price_list_id",
    "payment_term_id",
    "default_discount_rate",
    "default_discount_amount",
    "max_discount_rate",
    "min_order_amount",
    "risk_score",
    "salesperson_id",
    "parent_partner_id",
    "geo_lat",
    "geo_lng",
})

BOOLEAN_FIELDS = frozenset({"tax_exempt", "allow_show_on_pos", "auth.is_active"})

TRUE_VALUES = frozenset({"true", "1", "oui", "yes"})


def apply_parsed_fields(
    fields: Iterable[ParsedField],
    selected_keys: Iterable[str],
) -> AppliedResult:
    """
    Convert selected parsed fields into form-compatible buckets.

    Only fields whose raw_key is in selected_keys are applied. Numeric
    fields that fail to parse become 0, boolean fields are true only for
    true/1/oui/yes. Unknown selected keys are ignored.

    Args:
        fields: Fields from ParseResult.fields
        selected_keys: Raw keys to apply

    Returns:
        AppliedResult with partner, auth and custom_fields buckets
    """
    selected = set(selected_keys)

    partner: dict[str, Any] = {}
    auth: dict[str, Any] = {}
    custom_fields: dict[str, str] = {}

    for field in fields:
        if field.raw_key not in selected:
            continue

        value = coerce_value(field.canonical_key, field.value)

        if field.section == "auth":
            auth[_strip_auth_prefix(field.canonical_key)] = value
        elif field.section == "custom":
            custom_fields[strip_custom_prefix(field.canonical_key)] = to_file_value(value)
        else:
            partner[field.canonical_key] = value

    logger.debug(
        "partner_fields_applied",
        selected_count=len(selected),
        partner_count=len(partner),
        auth_count=len(auth),
        custom_count=len(custom_fields),
    )

    return AppliedResult(partner=partner, auth=auth, custom_fields=custom_fields)


def coerce_value(canonical_key: str, raw_value: str) -> Any:
    """Type a raw file value according to its canonical key."""
    if canonical_key in NUMERIC_FIELDS:
        return parse_leading_float(raw_value)
    if canonical_key in BOOLEAN_FIELDS:
        return raw_value.lower() in TRUE_VALUES
    return raw_value


# ===================
# REVIEW HELPERS
# ===================

def field_status(
    field: ParsedField,
    current_partner: Mapping[str, Any],
    current_auth: Mapping[str, Any],
) -> FieldStatus:
    """
    Compare a parsed field with the value currently in the form.

    - unknown: the key is not a known partner/auth field
    - new: the form has no value for it
    - unchanged: the form value, as text, equals the file value
    - modified: anything else
    """
    if not field.recognized:
        return "unknown"

    if field.section == "auth":
        existing = current_auth.get(_strip_auth_prefix(field.canonical_key))
    else:
        existing = current_partner.get(field.canonical_key)

    if existing is None or existing == "":
        return "new"
    return "unchanged" if to_file_value(existing) == field.value else "modified"


def select_by_status(
    fields: Iterable[ParsedField],
    status: FieldStatus,
    current_partner: Mapping[str, Any],
    current_auth: Mapping[str, Any],
) -> set[str]:
    """Raw keys of the fields with the given status."""
    return {
        f.raw_key
        for f in fields
        if field_status(f, current_partner, current_auth) == status
    }


def default_selection(
    fields: Iterable[ParsedField],
    current_partner: Optional[Mapping[str, Any]] = None,
    current_auth: Optional[Mapping[str, Any]] = None,
) -> set[str]:
    """
    Raw keys to pre-select for review: everything except unchanged fields.

    With no current form values, every field is selected.
    """
    current_partner = current_partner or {}
    current_auth = current_auth or {}
    return {
        f.raw_key
        for f in fields
        if field_status(f, current_partner, current_auth) != "unchanged"
    }


def merge_applied_result(
    current_partner: Mapping[str, Any],
    current_auth: Mapping[str, Any],
    current_custom: Mapping[str, str],
    applied: AppliedResult,
) -> AppliedResult:
    """
    Overlay applied values on the current form buckets.

    Returns new buckets; the inputs are left untouched.
    """
    return AppliedResult(
        partner={**current_partner, **applied.partner},
        auth={**current_auth, **applied.auth},
        custom_fields={**current_custom, **applied.custom_fields},
    )


def _strip_auth_prefix(key: str) -> str:
    return key[len("auth."):] if key.startswith("auth.") else key
