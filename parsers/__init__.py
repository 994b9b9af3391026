"""
File parsers module.

.partner files: alias table, line parser and field resolver.
"""

from parsers.partner_aliases import (
    FIELD_ALIASES,
    FieldAliasTable,
    get_alias_table,
)
from parsers.partner_file_parser import (
    parse_partner_file,
    resolve_field,
)

__all__ = [
    "FIELD_ALIASES",
    "FieldAliasTable",
    "get_alias_table",
    "parse_partner_file",
    "resolve_field",
]
