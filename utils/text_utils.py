"""
Text utilities for .partner keys and values.

Key normalization is shared by the alias table and the parser, so that
"Code Postal", "code-postal" and "CODE_POSTAL" all look up the same alias.
"""

import math
import re
from decimal import Decimal
from typing import Any

_KEY_SEPARATORS = re.compile(r"[\s\-]")
_WORD_START = re.compile(r"\b\w")
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)

ACCOUNT_LABEL_PREFIX = "Account — "

# exponent range written without "e" notation
POSITIONAL_MIN_EXPONENT = -6
POSITIONAL_MAX_EXPONENT = 20


def normalize_key(key: str) -> str:
    """
    Normalize a field key for alias lookup.

    Lowercases, then turns every whitespace character and hyphen into "_":
    - "Code Postal" → "code_postal"
    - "e-mail" → "e_mail"
    - "Téléphone" → "téléphone"

    Idempotent: normalize_key(normalize_key(x)) == normalize_key(x).
    """
    return _KEY_SEPARATORS.sub("_", key.lower())


def to_display_label(canonical_key: str) -> str:
    """
    Human-readable label for a canonical key.

    - "credit_limit" → "Credit Limit"
    - "auth.last_name" → "Account — Last Name"
    """
    label = canonical_key
    if label.startswith("auth."):
        label = ACCOUNT_LABEL_PREFIX + label[len("auth."):]
    label = label.replace("_", " ")
    return _WORD_START.sub(lambda m: m.group(0).upper(), label)


def parse_leading_float(value: str) -> float:
    """
    Parse the leading number of a string, defaulting to 0.

    Mirrors the lenient behaviour spreadsheet exports rely on:
    - "50000" → 50000.0
    - "12.5 MAD" → 12.5
    - "12,5" → 12.0
    - "abc" / "" → 0.0
    """
    match = _FLOAT_PREFIX.match(value.lstrip())
    if not match:
        return 0.0

    number = float(match.group(0))
    if math.isnan(number) or number == 0:
        return 0.0
    return number


def to_file_value(value: Any) -> str:
    """
    Render a typed field value the way it is written in a .partner file.

    Floats use the shortest round-trip digits, written out in positional
    notation for exponents from -6 to 20 and in exponent notation outside it:
    - True → "true"
    - 50000.0 → "50000"
    - 2.5 → "2.5"
    - 0.0000015 → "0.0000015"
    - 1e-07 → "1e-7"
    - 1e21 → "1e+21"
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_to_file_value(value)
    return str(value)


def _float_to_file_value(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if not sep:
        return text[:-2] if text.endswith(".0") else text

    exp = int(exponent)
    if POSITIONAL_MIN_EXPONENT <= exp <= POSITIONAL_MAX_EXPONENT:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"
