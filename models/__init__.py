"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.partner_file import (
    FieldSection,
    ParsedField,
    PartnerFileMetadata,
    ParseResult,
    AppliedResult,
)

__all__ = [
    # Base
    "BaseSchema",

    # Partner file
    "FieldSection",
    "ParsedField",
    "PartnerFileMetadata",
    "ParseResult",
    "AppliedResult",
]
