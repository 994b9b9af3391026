"""
.partner file models.

Value types produced by the parser (ParsedField, ParseResult) and by the
applicator (AppliedResult). Nothing here is mutated after construction.
"""

from typing import Any, Literal, Optional
from pydantic import ConfigDict, Field, computed_field

from models.base import BaseSchema

FieldSection = Literal["partner", "auth", "custom"]


class ParsedField(BaseSchema):
    """One decoded data line of a .partner file."""

    model_config = ConfigDict(frozen=True)

    raw_key: str = Field(description="Key exactly as written in the file")
    canonical_key: str = Field(description="Resolved field key (e.g. 'city', 'auth.name')")
    display_label: str = Field(description="Human-readable label for previews")
    value: str = Field(description="Trimmed raw value from the file")
    section: FieldSection = Field(description="partner, auth or custom")
    recognized: bool = Field(description="True if canonical_key is a known field")


class PartnerFileMetadata(BaseSchema):
    """Header directives found in comment lines."""

    version: Optional[str] = None
    generated_at: Optional[str] = None
    source: Optional[str] = None


class ParseResult(BaseSchema):
    """
    Result of parsing a .partner file.

    Errors are blocking (bad line format), warnings are not (empty values).
    """

    fields: list[ParsedField] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    metadata: PartnerFileMetadata = Field(default_factory=PartnerFileMetadata)

    @computed_field
    @property
    def ok(self) -> bool:
        """True if no errors occurred."""
        return len(self.errors) == 0

    def raw_keys(self) -> set[str]:
        """Every raw key, i.e. the selection that applies the whole file."""
        return {f.raw_key for f in self.fields}

    def fields_by_section(self, section: FieldSection) -> list[ParsedField]:
        return [f for f in self.fields if f.section == section]

    def recognized_fields(self) -> list[ParsedField]:
        return [f for f in self.fields if f.recognized]


class AppliedResult(BaseSchema):
    """Selected fields materialized into typed buckets for a partner form."""

    partner: dict[str, Any] = Field(default_factory=dict)
    auth: dict[str, Any] = Field(default_factory=dict)
    custom_fields: dict[str, str] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True if nothing was applied."""
        return not (self.partner or self.auth or self.custom_fields)
