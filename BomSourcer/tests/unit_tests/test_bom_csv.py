"""
Unit tests for BOM CSV parsing and serialization.
"""

import csv
import io

import pytest

from BomSourcer.exceptions import BomParseError
from BomSourcer.services.bom.bom_csv import parse_bom_csv, validate_bom_headers, rows_to_csv, output_filename


KICAD_BOM = (
    '"Reference","Value","Footprint","Qty","DNP","Vendor Note"\n'
    '"C1,C2","100nF","Capacitor_SMD:C_0402_1005Metric","2","",""\n'
    '"R1","10K, 1%","Resistor_SMD:R_0603_1608Metric","1","","says ""hi"""\n'
)


class TestParseBomCsv:

    def test_quoted_commas_and_escaped_quotes(self):
        rows = parse_bom_csv(KICAD_BOM)

        assert len(rows) == 2
        assert rows[0]["Reference"] == "C1,C2"
        assert rows[1]["Value"] == "10K, 1%"
        assert rows[1]["Vendor Note"] == 'says "hi"'

    def test_trims_headers_and_values(self):
        rows = parse_bom_csv(" Reference , Value \n R1 , 10K \n")
        assert rows == [{"Reference": "R1", "Value": "10K"}]

    def test_blank_lines_and_utf8_bom(self):
        rows = parse_bom_csv("\ufeffReference,Value\r\n\r\nR1,10K\r\n\r\n")
        assert rows == [{"Reference": "R1", "Value": "10K"}]

    def test_quoted_newline_stays_in_cell(self):
        rows = parse_bom_csv('Reference,Value,Description\nR1,10K,"line one\nline two"\n')
        assert len(rows) == 1
        assert rows[0]["Description"] == "line one\nline two"

    def test_delimiter_only_row_is_kept(self):
        rows = parse_bom_csv("Reference,Value,Note\nR1,10K,a\n,,\nR2,1K,b\n")

        assert len(rows) == 3
        assert rows[1] == {"Reference": "", "Value": "", "Note": ""}
        assert rows[2]["Reference"] == "R2"

    def test_short_rows_are_padded(self):
        rows = parse_bom_csv("Reference,Value,Footprint\nR1,10K\n")
        assert rows[0]["Footprint"] == ""

    @pytest.mark.parametrize("text", ["", "   \n", "Reference,Value\n"])
    def test_no_data_rows(self, text):
        assert parse_bom_csv(text) == []


class TestValidateHeaders:

    def test_required_present(self):
        validate_bom_headers(["Reference", "Value", "Other"])

    def test_missing_columns_listed(self):
        with pytest.raises(BomParseError) as exc_info:
            validate_bom_headers(["Designator", "Footprint"], filename="board.csv")

        error = exc_info.value
        assert error.missing_fields == ["Reference", "Value"]
        assert "Reference" in error.message and "Value" in error.message
        assert error.details["filename"] == "board.csv"


class TestRowsToCsv:

    def test_every_cell_quoted(self):
        text = rows_to_csv([{"Reference": "R1", "Value": 'say "x"'}])
        assert text == '"Reference","Value"\n"R1","say ""x"""'

    def test_header_is_union_in_first_seen_order(self):
        text = rows_to_csv([
            {"Reference": "R1", "Value": "10K"},
            {"Reference": "C1", "Value": "1uF", "LCSC Part #": "C52923"},
        ])
        lines = text.split("\n")
        assert lines[0] == '"Reference","Value","LCSC Part #"'
        assert lines[1] == '"R1","10K",""'

    def test_empty(self):
        assert rows_to_csv([]) == ""

    def test_embedded_newline_is_quoted(self):
        text = rows_to_csv([{"Reference": "R1", "Description": "line one\nline two"}])
        assert text == '"Reference","Description"\n"R1","line one\nline two"'

    def test_empty_row_survives_round_trip(self):
        rows = parse_bom_csv("Reference,Value\nR1,10K\n,\n")
        reparsed = list(csv.DictReader(io.StringIO(rows_to_csv(rows))))

        assert [dict(row) for row in reparsed] == [{"Reference": "R1", "Value": "10K"}, {"Reference": "", "Value": ""}]

    def test_round_trip_preserves_unknown_columns(self):
        rows = parse_bom_csv(KICAD_BOM)
        reparsed = list(csv.DictReader(io.StringIO(rows_to_csv(rows))))

        assert [dict(row) for row in reparsed] == rows


class TestOutputFilename:

    @pytest.mark.parametrize("name,expected", [
        ("board.csv", "board_sourced.csv"),
        ("Board.CSV", "Board_sourced.csv"),
        ("bom.v2.csv", "bom.v2_sourced.csv"),
        ("export", "export_sourced.csv"),
    ])
    def test_suffix(self, name, expected):
        assert output_filename(name) == expected
