"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,

    # Partner file
    InvalidPartnerContentError,
    NotPartnerFileError,
    PartnerFileReadError,
    PartnerFileWriteError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",

    # Partner file
    "InvalidPartnerContentError",
    "NotPartnerFileError",
    "PartnerFileReadError",
    "PartnerFileWriteError",
]
