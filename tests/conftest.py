"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add repo root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import pytest
from datetime import date

from parsers.partner_aliases import FieldAliasTable


# ===================
# SAMPLE FILES
# ===================

@pytest.fixture
def atlas_file_content() -> str:
    """Small file with one line per section and one malformed line."""
    return (
        "# Partner Import File\n"
        "name__:Atlas SARL;\n"
        "city__:Casablanca;\n"
        "credit_limit__:50000;\n"
        "auth.email__:admin@atlas.ma;\n"
        "cf.rib__:MA001;\n"
        "bad_line_no_colon\n"
    )


@pytest.fixture
def full_file_content() -> str:
    """Hand-written file mixing delimiters, aliases, metadata and comments."""
    return "\r\n".join([
        "# Partner Import File",
        "# Version: 1.0",
        "# Generated: 2026-02-21",
        "# Source: ERP Dashboard",
        "",
        "# ── Identity ──",
        "raison_sociale__:Supermarché Atlas;",
        "Code-Client:CL-0042;",
        "téléphone__:+212600000001",
        "ville__:Casablanca;",
        "limite_credit__:50000;",
        "exonere_tva__:oui;",
        "",
        "auth.name__:Mohamed;",
        "auth.is_active__:1;",
        "cf.partner_rib__:MA0123456789012345678;",
        "loyalty_tier__:gold;",
    ])


# ===================
# FORM STATE
# ===================

@pytest.fixture
def partner_form() -> dict:
    """Partner form values as held by an edit screen."""
    return {
        "name": "Atlas SARL",
        "code": "CL-0042",
        "partner_type": "CUSTOMER",
        "phone": "+212600000001",
        "city": "Casablanca",
        "country": "MA",
        "credit_limit": 50000.0,
        "payment_term_id": 2.0,
        "tax_exempt": True,
        "delivery_zone": "Zone Nord",
    }


@pytest.fixture
def auth_form() -> dict:
    return {
        "name": "Mohamed",
        "email": "admin@atlas.ma",
        "is_active": True,
    }


@pytest.fixture
def custom_form() -> dict:
    return {"partner_rib": "MA0123456789012345678"}


@pytest.fixture
def export_date() -> date:
    return date(2026, 2, 21)


# ===================
# ALIAS TABLES
# ===================

@pytest.fixture
def small_alias_table() -> FieldAliasTable:
    """Injected table with a handful of keys."""
    return FieldAliasTable({
        "city": ("city", "ville"),
        "auth.name": ("auth.name", "prenom"),
    })
