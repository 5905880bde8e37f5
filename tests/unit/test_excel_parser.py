"""
Unit tests for the Excel parser.

Tests read_first_sheet with workbooks built in memory.
"""

from io import BytesIO

import pytest
import pandas as pd

from parsers.excel_parser import read_first_sheet
from exceptions import ExcelParseError, UnsupportedFileTypeError
from tests.factories import create_excel_file


class TestValidFileParsing:
    """Workbooks that parse into rows."""

    def test_rows_keyed_by_header(self):
        file = create_excel_file([
            {"Product Name": "Widget", "Category": "Tools", "Price": 100, "Stock": 5},
            {"Product Name": "Gadget", "Category": "Toys", "Price": 50, "Stock": 2},
        ])

        rows = read_first_sheet(file, filename="products.xlsx")

        assert len(rows) == 2
        assert rows[0]["Product Name"] == "Widget"
        assert rows[0]["Price"] == 100
        assert rows[1]["Category"] == "Toys"

    def test_empty_cells_become_none(self):
        file = create_excel_file(
            [{"Name": "Widget", "Category": None, "Price": 10}],
            columns=["Name", "Category", "Price"],
        )

        rows = read_first_sheet(file, filename="products.xlsx")

        assert rows[0]["Category"] is None

    def test_only_first_sheet_is_read(self):
        file = create_excel_file(
            [{"Name": "Widget"}],
            extra_sheets={"Other": [{"Name": "Ignored"}, {"Name": "Also ignored"}]},
        )

        rows = read_first_sheet(file, filename="products.xlsx")

        assert [r["Name"] for r in rows] == ["Widget"]

    def test_blank_rows_are_dropped(self):
        file = create_excel_file(
            [{"Name": "Widget"}, {"Name": None}, {"Name": "Gadget"}],
            columns=["Name"],
        )

        rows = read_first_sheet(file, filename="products.xlsx")

        assert [r["Name"] for r in rows] == ["Widget", "Gadget"]

    def test_header_only_sheet_has_no_rows(self):
        file = create_excel_file([], columns=["Product Name", "Category"])

        assert read_first_sheet(file, filename="products.xlsx") == []

    def test_accepts_raw_bytes_without_filename(self):
        content = create_excel_file([{"Name": "Widget"}]).getvalue()

        rows = read_first_sheet(content)

        assert rows == [{"Name": "Widget"}]

    def test_headers_are_trimmed(self):
        output = BytesIO()
        pd.DataFrame([{" Name ": "Widget"}]).to_excel(output, index=False, engine="openpyxl")
        output.seek(0)

        rows = read_first_sheet(output, filename="products.xlsx")

        assert rows[0]["Name"] == "Widget"


class TestInvalidFiles:
    """Files the parser rejects."""

    def test_garbage_bytes_raise_parse_error(self):
        with pytest.raises(ExcelParseError) as exc_info:
            read_first_sheet(b"definitely not a workbook", filename="products.xlsx")

        assert exc_info.value.status_code == 422
        assert exc_info.value.code == "EXCEL_PARSE_ERROR"

    def test_garbage_without_filename_tries_both_engines(self):
        with pytest.raises(ExcelParseError):
            read_first_sheet(BytesIO(b"\x00\x01\x02"))

    @pytest.mark.parametrize("filename", ["products.csv", "products.pdf", "products"])
    def test_unsupported_extension(self, filename):
        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            read_first_sheet(b"irrelevant", filename=filename)

        assert exc_info.value.code == "UNSUPPORTED_FILE_TYPE"
