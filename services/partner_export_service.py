"""
Partner export service — generate .partner files from partner form data.

Only non-empty values are written: None, "", 0 and False are all treated as
"unset". A credit limit of 0 or an explicit false flag therefore does not
survive an export/import cycle.

Partner fields are written from a fixed list per section, so a field that the
parser understands (e.g. opening_hours) is not necessarily exported. Account
and custom fields are written for every key present.
"""

import re
from datetime import date, datetime, timezone
from numbers import Number
from typing import Any, Mapping, Optional

import structlog

from config.settings import get_settings
from models.partner_file import AppliedResult
from utils.partner_file_io import ensure_partner_extension
from utils.text_utils import to_file_value

logger = structlog.get_logger(__name__)

FILE_TITLE = "Partner Import File"
BANNER_WIDTH = 52
BANNER_CHAR = "─"

# (section title, partner keys in output order)
PARTNER_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Identity", ("name", "code", "partner_type", "channel", "status")),
    ("Contact", ("phone", "email", "whatsapp", "website")),
    ("Address", ("address_line1", "address_line2", "city", "region",
                 "country", "postal_code", "geo_area_code")),
    ("Commercial", ("price_list_id", "payment_term_id", "credit_limit",
                    "default_discount_rate")),
    ("Fiscal", ("tax_number_ice", "tax_number_if", "tax_exempt")),
    ("Delivery", ("delivery_zone", "delivery_instructions", "min_order_amount")),
)
ACCOUNT_SECTION = "Account"
CUSTOM_SECTION = "Custom fields"

_LINE_BREAKS = re.compile(r"\s*[\r\n]+\s*")


def serialize_to_partner_file(
    partner_fields: Mapping[str, Any],
    auth_fields: Mapping[str, Any],
    custom_fields: Mapping[str, Any],
    *,
    generated_on: Optional[date] = None,
    source: Optional[str] = None,
) -> str:
    """
    Serialize partner form state to a .partner file string.

    Args:
        partner_fields: Partner profile values keyed by canonical key
        auth_fields: Account values keyed without the "auth." prefix
        custom_fields: Custom field values keyed without the "cf." prefix
        generated_on: Date for the Generated header (defaults to today, UTC)
        source: Source header text (defaults to settings.partner_file_source)

    Returns:
        File content, one "key__:value;" line per non-empty value
    """
    settings = get_settings()
    generated_on = generated_on or datetime.now(timezone.utc).date()

    lines: list[str] = [
        f"# {FILE_TITLE}",
        f"# Version: {settings.partner_file_version}",
        f"# Generated: {generated_on.isoformat()}",
        f"# Source: {source or settings.partner_file_source}",
        "",
    ]

    for title, keys in PARTNER_SECTIONS:
        _emit_section(lines, title, [(k, partner_fields.get(k)) for k in keys])

    _emit_section(
        lines, ACCOUNT_SECTION,
        [(f"auth.{k}", v) for k, v in auth_fields.items()],
    )
    _emit_section(
        lines, CUSTOM_SECTION,
        [(f"cf.{k}", v) for k, v in custom_fields.items()],
    )

    logger.debug("partner_file_serialized", line_count=len(lines))

    return "\n".join(lines)


def serialize_applied_result(result: AppliedResult, **kwargs: Any) -> str:
    """Serialize the buckets of an AppliedResult."""
    return serialize_to_partner_file(
        result.partner, result.auth, result.custom_fields, **kwargs
    )


def export_filename(name: Optional[str], fallback: str = "partner") -> str:
    """
    File name for an exported partner.

    "Supermarché Atlas" -> "supermarché-atlas.partner"
    """
    base = (name or "").strip() or fallback
    return ensure_partner_extension(re.sub(r"\s+", "-", base).lower())


def build_example_partner_file(generated_on: Optional[date] = None) -> str:
    """Sample .partner file covering every section, with usage notes."""
    content = serialize_to_partner_file(
        EXAMPLE_PARTNER,
        EXAMPLE_AUTH,
        EXAMPLE_CUSTOM_FIELDS,
        generated_on=generated_on,
        source="ERP Dashboard — example template",
    )
    header, _, body = content.partition("\n\n")
    return "\n".join([header, "#", *EXAMPLE_USAGE, "", body])


# ===================
# HELPER FUNCTIONS
# ===================

def is_exportable(value: Any) -> bool:
    """False for None, "", 0 and False (treated as unset)."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, Number):
        return value != 0
    return True


def section_banner(title: str) -> str:
    """Comment line opening a section: '# ── Contact ─────…'"""
    return f"# {BANNER_CHAR * 2} {title} {BANNER_CHAR * max(0, BANNER_WIDTH - len(title))}"


def _emit_section(lines: list[str], title: str, entries: list[tuple[str, Any]]) -> None:
    rows = [(k, v) for k, v in entries if is_exportable(v)]
    if not rows:
        return

    lines.append(section_banner(title))
    for key, value in rows:
        text = _LINE_BREAKS.sub(" ", to_file_value(value))
        lines.append(f"{key}__:{text};")
    lines.append("")


# ===================
# EXAMPLE FILE
# ===================

EXAMPLE_USAGE = (
    "# USAGE",
    "# Each line follows the format:  field__:value;",
    "# Lines starting with # are comments.",
    "# Prefix auth.*   → user account fields",
    "# Prefix cf.*     → custom fields",
    "# (no prefix)     → partner profile fields",
)

EXAMPLE_PARTNER: dict[str, Any] = {
    "name": "Supermarché Atlas",
    "partner_type": "CUSTOMER",
    "channel": "DIRECT",
    "status": "ACTIVE",
    "phone": "+212600000001",
    "email": "atlas@example.ma",
    "website": "https://atlas.ma",
    "address_line1": "123 Rue Mohammed V",
    "city": "Casablanca",
    "region": "Casablanca-Settat",
    "country": "MA",
    "postal_code": "20000",
    "price_list_id": 3,
    "payment_term_id": 2,
    "credit_limit": 50000,
    "default_discount_rate": 5,
    "tax_number_ice": "001234567000089",
    "delivery_zone": "Zone Nord Casablanca",
    "min_order_amount": 500,
}

EXAMPLE_AUTH: dict[str, Any] = {
    "name": "Mohamed",
    "last_name": "Atlas",
    "email": "admin@atlas.ma",
    "phone": "+212600000001",
    "gender": "male",
    "branch_code": "A0001",
    "target_app": "B2B",
}

EXAMPLE_CUSTOM_FIELDS: dict[str, str] = {
    "partner_rib": "MA0123456789012345678",
}
