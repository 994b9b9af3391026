"""
Reading and writing .partner files.

The format engine only works on decoded text. This module is the thin layer
that gets that text from bytes or disk and puts serialized text back.
"""

from pathlib import Path
from typing import Optional, Union

import structlog

from config.settings import get_settings
from exceptions import NotPartnerFileError, PartnerFileReadError, PartnerFileWriteError

logger = structlog.get_logger(__name__)

PARTNER_FILE_EXTENSION = ".partner"
PARTNER_FILE_MIME = "application/x-partner"

_BOM = "\ufeff"


def is_partner_file(filename: str, content_type: Optional[str] = None) -> bool:
    """True if the name ends with .partner or the MIME type is application/x-partner."""
    return filename.endswith(PARTNER_FILE_EXTENSION) or content_type == PARTNER_FILE_MIME


def ensure_partner_extension(filename: str) -> str:
    """Append .partner unless the name already ends with it."""
    if filename.endswith(PARTNER_FILE_EXTENSION):
        return filename
    return f"{filename}{PARTNER_FILE_EXTENSION}"


def decode_partner_bytes(data: bytes, encoding: Optional[str] = None) -> str:
    """
    Decode uploaded .partner bytes to text.

    Args:
        data: Raw file bytes
        encoding: Text encoding (defaults to settings.partner_file_encoding)

    Returns:
        Decoded text without a leading byte-order mark

    Raises:
        PartnerFileReadError: If the bytes are not valid in that encoding
    """
    encoding = encoding or get_settings().partner_file_encoding
    try:
        text = data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        logger.warning("partner_file_decode_failed", encoding=encoding, error=str(e))
        raise PartnerFileReadError(
            message=f"File is not valid {encoding} text",
            details={"encoding": encoding, "original_error": str(e)}
        )
    return text[1:] if text.startswith(_BOM) else text


def read_partner_file(path: Union[str, Path]) -> str:
    """
    Read a .partner file from disk.

    Raises:
        NotPartnerFileError: If the name does not end with .partner
        PartnerFileReadError: If the file is missing, too large or undecodable
    """
    path = Path(path)
    if not is_partner_file(path.name):
        raise NotPartnerFileError(path.name)

    max_bytes = get_settings().partner_file_max_bytes
    try:
        size = path.stat().st_size
        if size > max_bytes:
            raise PartnerFileReadError(
                message="File is too large",
                details={"path": str(path), "size": size, "max_bytes": max_bytes}
            )
        data = path.read_bytes()
    except OSError as e:
        logger.error("partner_file_read_failed", path=str(path), error=str(e))
        raise PartnerFileReadError(
            message="Failed to read partner file",
            details={"path": str(path), "original_error": str(e)}
        )

    logger.info("partner_file_read", path=str(path), size=len(data))
    return decode_partner_bytes(data)


def write_partner_file(path: Union[str, Path], content: str) -> Path:
    """
    Write serialized content to disk, adding the .partner suffix if missing.

    Returns:
        The path actually written

    Raises:
        PartnerFileWriteError: If the file cannot be written
    """
    path = Path(path)
    path = path.with_name(ensure_partner_extension(path.name))
    try:
        path.write_text(content, encoding=get_settings().partner_file_encoding)
    except OSError as e:
        logger.error("partner_file_write_failed", path=str(path), error=str(e))
        raise PartnerFileWriteError(
            message="Failed to write partner file",
            details={"path": str(path), "original_error": str(e)}
        )

    logger.info("partner_file_written", path=str(path), size=len(content))
    return path
