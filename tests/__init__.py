"""
Test suite for the .partner file engine.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_partner_file_parser.py -v
"""
