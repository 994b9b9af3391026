"""
Business logic services.

Each service handles one direction of the .partner workflow.
"""

from services.partner_import_service import (
    apply_parsed_fields,
    field_status,
    default_selection,
    select_by_status,
    merge_applied_result,
)
from services.partner_export_service import (
    serialize_to_partner_file,
    serialize_applied_result,
    export_filename,
    build_example_partner_file,
)

__all__ = [
    # Import
    "apply_parsed_fields",
    "field_status",
    "default_selection",
    "select_by_status",
    "merge_applied_result",

    # Export
    "serialize_to_partner_file",
    "serialize_applied_result",
    "export_filename",
    "build_example_partner_file",
]
