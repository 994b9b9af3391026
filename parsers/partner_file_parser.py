"""
.partner file parser.

File format
-----------
Lines beginning with `#` are comments. Three comment directives are read into
the file metadata (case-insensitive): `Version:`, `Generated:`, `Source:`.
Empty lines are skipped. Data lines follow the pattern:

    fieldName__:value;

The `__:` separator and the trailing `;` are the canonical delimiters. The
parser also accepts `fieldName:value` and a missing `;` so that hand-written
files still work.

Tokenizing a data line:
    - the key is everything before the first ":" (keys never contain ":")
    - one trailing "__" is removed from the key
    - the key must be non-empty and contain no whitespace
    - the value is everything after the first ":" (it may contain ":" or ";"),
      minus one trailing ";", trimmed

Section prefixes
----------------
auth.* / auth_*                   → user account fields
cf.* / custom.* / custom_field.*  → custom entity fields
(no prefix)                       → partner profile fields

A malformed line is recorded in ParseResult.errors and parsing continues;
an empty value is recorded in ParseResult.warnings and the line is dropped.
"""

from typing import Optional

import structlog

from exceptions import InvalidPartnerContentError
from models.partner_file import (
    FieldSection,
    ParsedField,
    PartnerFileMetadata,
    ParseResult,
)
from parsers.partner_aliases import FieldAliasTable, get_alias_table
from utils.text_utils import to_display_label

logger = structlog.get_logger(__name__)

AUTH_PREFIXES = ("auth.", "auth_")
CUSTOM_PREFIXES = ("cf.", "custom.", "custom_field.")

KEY_SUFFIX = "__"
VALUE_TERMINATOR = ";"
ERROR_EXCERPT_LENGTH = 60
BYTE_ORDER_MARK = "\ufeff"

# comment directive -> PartnerFileMetadata attribute
METADATA_DIRECTIVES = {
    "version:": "version",
    "generated:": "generated_at",
    "source:": "source",
}


def parse_partner_file(
    content: str,
    alias_table: Optional[FieldAliasTable] = None,
) -> ParseResult:
    """
    Parse a .partner file string into structured field data.

    Args:
        content: Decoded text of the file
        alias_table: Alias table to resolve keys with (shared table if None)

    Returns:
        ParseResult with fields, per-line errors/warnings and header metadata

    Raises:
        InvalidPartnerContentError: If content is not a string
    """
    if not isinstance(content, str):
        raise InvalidPartnerContentError(type(content).__name__)

    table = alias_table if alias_table is not None else get_alias_table()

    fields: list[ParsedField] = []
    errors: list[str] = []
    warnings: list[str] = []
    metadata: dict[str, str] = {}

    for index, line in enumerate(content.split("\n")):
        line_no = index + 1
        raw = line.strip().strip(BYTE_ORDER_MARK).strip()

        if not raw:
            continue

        if raw.startswith("#"):
            _read_directive(raw[1:].strip(), metadata)
            continue

        token = _tokenize_line(raw)
        if token is None:
            logger.debug("partner_line_invalid", line=line_no)
            errors.append(
                f"Line {line_no}: invalid format — '{raw[:ERROR_EXCERPT_LENGTH]}'"
            )
            continue

        raw_key, raw_value = token
        if not raw_value:
            logger.debug("partner_line_empty_value", line=line_no, key=raw_key)
            warnings.append(f"Line {line_no}: '{raw_key}' ignored (empty value)")
            continue

        fields.append(resolve_field(raw_key, raw_value, table))

    result = ParseResult(
        fields=fields,
        errors=errors,
        warnings=warnings,
        metadata=PartnerFileMetadata(**metadata),
    )

    logger.info(
        "partner_file_parsed",
        field_count=len(result.fields),
        error_count=len(result.errors),
        warning_count=len(result.warnings),
        ok=result.ok,
    )

    return result


def resolve_field(
    raw_key: str,
    value: str,
    alias_table: Optional[FieldAliasTable] = None,
) -> ParsedField:
    """
    Assign section and canonical identity to a raw key/value pair.

    Unknown keys pass through as their own canonical key. An unprefixed key
    that is not a known field is treated as a custom field.
    """
    table = alias_table if alias_table is not None else get_alias_table()

    section: FieldSection = "partner"
    lookup_key = raw_key

    if raw_key.startswith(AUTH_PREFIXES):
        # auth.* aliases include their prefix, keep it for the lookup
        section = "auth"
    elif raw_key.startswith(CUSTOM_PREFIXES):
        section = "custom"
        lookup_key = strip_custom_prefix(raw_key)

    canonical = table.resolve(lookup_key) or lookup_key
    recognized = table.is_known(canonical)

    if not recognized and section == "partner":
        section = "custom"

    return ParsedField(
        raw_key=raw_key,
        canonical_key=canonical,
        display_label=to_display_label(canonical),
        value=value,
        section=section,
        recognized=recognized,
    )


def strip_custom_prefix(key: str) -> str:
    """Remove a leading cf. / custom. / custom_field. prefix, if any."""
    for prefix in CUSTOM_PREFIXES:
        if key.startswith(prefix):
            return key[len(prefix):]
    return key


# ===================
# HELPER FUNCTIONS
# ===================

def _tokenize_line(line: str) -> Optional[tuple[str, str]]:
    """
    Split a trimmed data line into (key, value).

    Returns None if the line has no ":" or the key is empty or contains
    whitespace. The value may be empty.
    """
    key, sep, value = line.partition(":")
    if not sep:
        return None

    if key.endswith(KEY_SUFFIX) and len(key) > len(KEY_SUFFIX):
        key = key[:-len(KEY_SUFFIX)]

    if not key or any(c.isspace() for c in key):
        return None

    if value.endswith(VALUE_TERMINATOR):
        value = value[:-len(VALUE_TERMINATOR)]

    return key, value.strip()


def _read_directive(comment: str, metadata: dict[str, str]) -> None:
    """Store a Version/Generated/Source comment directive, ignore anything else."""
    lowered = comment.lower()
    for directive, attr in METADATA_DIRECTIVES.items():
        if not lowered.startswith(directive):
            continue

        if attr == "version":
            # "Version: 1.0" - only the text up to a second colon
            value = comment.split(":")[1].strip()
        else:
            value = comment.partition(":")[2].strip()

        if value:
            metadata[attr] = value
        return
