"""
Unit tests for the .partner command-line tool.
"""

import pytest

from parsers.partner_file_parser import parse_partner_file
from scripts.partner_file import main


@pytest.fixture
def atlas_path(tmp_path, atlas_file_content):
    path = tmp_path / "atlas.partner"
    path.write_text(atlas_file_content, encoding="utf-8")
    return path


@pytest.fixture
def full_path(tmp_path, full_file_content):
    path = tmp_path / "full.partner"
    path.write_text(full_file_content, encoding="utf-8")
    return path


class TestInspect:
    """inspect subcommand."""

    def test_valid_file(self, full_path, capsys):
        assert main(["inspect", str(full_path)]) == 0

        out = capsys.readouterr().out
        assert "raison_sociale" in out
        assert "OK: 10 fields, 0 errors, 0 warnings" in out

    def test_invalid_file_exit_code(self, atlas_path, capsys):
        assert main(["inspect", str(atlas_path)]) == 1

        out = capsys.readouterr().out
        assert "ERROR    Line 7: invalid format — 'bad_line_no_colon'" in out
        assert "INVALID: 5 fields, 1 errors, 0 warnings" in out

    def test_wrong_extension(self, tmp_path, capsys):
        path = tmp_path / "atlas.txt"
        path.write_text("name__:A;", encoding="utf-8")

        assert main(["inspect", str(path)]) == 2
        assert "is not a valid .partner file" in capsys.readouterr().err


class TestNormalize:
    """normalize subcommand."""

    def test_writes_canonical_file(self, full_path, tmp_path):
        assert main(["normalize", str(full_path), "-o", str(tmp_path / "out")]) == 0

        content = (tmp_path / "out.partner").read_text(encoding="utf-8")
        assert "name__:Supermarché Atlas;" in content
        assert "city__:Casablanca;" in content
        assert "credit_limit__:50000;" in content
        assert "tax_exempt__:true;" in content
        assert "auth.is_active__:true;" in content
        assert "cf.loyalty_tier__:gold;" in content
        assert "# Source: ERP Dashboard" in content
        assert parse_partner_file(content).ok

    def test_refuses_invalid_file(self, atlas_path, tmp_path):
        assert main(["normalize", str(atlas_path), "-o", str(tmp_path / "out")]) == 1
        assert not (tmp_path / "out.partner").exists()


class TestExample:
    """example subcommand."""

    def test_stdout(self, capsys):
        assert main(["example"]) == 0
        assert capsys.readouterr().out.startswith("# Partner Import File\n")

    def test_output_file(self, tmp_path):
        assert main(["example", "-o", str(tmp_path / "exemple-partenaire")]) == 0
        assert (tmp_path / "exemple-partenaire.partner").exists()
