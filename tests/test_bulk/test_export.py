"""Tests for CSV/JSON export rendering."""

import json

from app.bulk.csv_parser import parse_file, parse_line
from app.bulk.export import ExportField, date_only, to_csv, to_json

FIELDS = (
    ExportField(header="name", key="name"),
    ExportField(header="code", key="code"),
    ExportField(header="purchaseDate", key="purchase_date", formatter=date_only),
)


def test_to_csv_header_and_rows():
    rows = [
        {"name": "Black, matte", "code": "#000000", "purchase_date": "2024-03-01T10:00:00"},
        {"name": "White", "code": None, "purchase_date": None},
    ]

    content = to_csv(rows, FIELDS)

    assert content == (
        "name,code,purchaseDate\n"
        '"Black, matte",#000000,2024-03-01\n'
        "White,,\n"
    )


def test_to_csv_output_reads_back_with_parser():
    rows = [{"name": 'Spool 12"', "code": "#FFF", "purchase_date": "2023-01-05"}]

    lines = parse_file(to_csv(rows, FIELDS))

    assert parse_line(lines[0]) == ["name", "code", "purchaseDate"]
    assert parse_line(lines[1]) == ['Spool 12"', "#FFF", "2023-01-05"]


def test_to_csv_without_entities_is_header_only():
    assert to_csv([], FIELDS) == "name,code,purchaseDate\n"


def test_to_json_is_indented_array():
    content = to_json([{"name": "Grün"}])

    assert json.loads(content) == [{"name": "Grün"}]
    assert "Grün" in content
    assert content.startswith("[\n  {")


def test_date_only_on_date_value():
    assert date_only("2024-12-31") == "2024-12-31"
