"""
Unit tests for BOM row interpretation: footprint extraction, component type
inference, quantity and the classification rules.
"""

import pytest

from BomSourcer.services.bom.models import SourcingStatus
from BomSourcer.services.bom.row_interpreter import (
    extract_footprint, infer_component_type, calculate_quantity, classify_row,
)


class TestExtractFootprint:

    def test_metric_suffix_wins(self):
        row = {"Footprint": "apollo4_SE:SMT_0201_0603Metric"}
        assert extract_footprint(row) == "0603"

    def test_metric_suffix_case_insensitive(self):
        assert extract_footprint({"Footprint": "C_0402_1005METRIC"}) == "1005"

    def test_bare_four_digit_code(self):
        assert extract_footprint({"Footprint": "Capacitor 0805 SMD"}) == "0805"

    def test_falls_back_to_case_code(self):
        row = {"Footprint": "SOT-23", "CASE CODE (METRIC)": "1608"}
        assert extract_footprint(row) == "1608"

    def test_nothing_available(self):
        assert extract_footprint({"Footprint": "", "Reference": "U1"}) == ""
        assert extract_footprint({}) == ""


class TestInferComponentType:

    @pytest.mark.parametrize("reference,expected", [
        ("C1,C2", "capacitor"),
        ("R5", "resistor"),
        ("L1", "inductor"),
        ("D3", "diode"),
        ("U1", "ic"),
        ("Y1", "crystal"),
        ("X2", "crystal"),
        ("SW1", "switch"),
        ("J4", "connector"),
        ("MIC1", "microphone"),
        ("r7", "resistor"),
    ])
    def test_reference_prefix(self, reference, expected):
        assert infer_component_type("", reference) == expected

    def test_single_letter_prefixes_checked_first(self):
        # "L" is checked before "LED"
        assert infer_component_type("", "LED1") == "inductor"

    def test_reference_beats_value(self):
        assert infer_component_type("100nF", "R1") == "resistor"

    @pytest.mark.parametrize("value,expected", [
        ("100nF", "capacitor"),
        ("4.7uF", "capacitor"),
        ("1 Farad", "capacitor"),
        ("10K", "resistor"),
        ("4.7M", "resistor"),
        ("100 ohm", "resistor"),
        ("", ""),
        ("ESP32", ""),
    ])
    def test_value_pattern(self, value, expected):
        assert infer_component_type(value, "TP1") == expected

    def test_inductor_value_pattern(self):
        assert infer_component_type("10H", "") == "inductor"


class TestCalculateQuantity:

    def test_explicit_qty(self):
        assert calculate_quantity({"Qty": "4", "Reference": "C1"}) == 4

    def test_counts_references(self):
        assert calculate_quantity({"Qty": "", "Reference": "C1, C2,,C3"}) == 3

    def test_non_positive_qty_ignored(self):
        assert calculate_quantity({"Qty": "0", "Reference": "R1,R2"}) == 2

    def test_default_one(self):
        assert calculate_quantity({}) == 1


class TestClassifyRow:

    def test_excluded_from_bom_always_skipped(self):
        row = {"Reference": "C1", "Value": "100nF", "Exclude from BOM": "Yes", "LCSC Part #": "C1525"}
        plan = classify_row(row)
        assert plan.status == SourcingStatus.SKIPPED
        assert plan.notes == "Excluded from BOM"
        assert plan.query is None

    @pytest.mark.parametrize("flag", ["yes", "TRUE", "Excluded from BOM"])
    def test_exclude_values(self, flag):
        assert classify_row({"Reference": "C1", "Value": "1uF", "Exclude from BOM": flag}).status == SourcingStatus.SKIPPED

    def test_dnp_flag(self):
        plan = classify_row({"Reference": "C1", "Value": "100nF", "DNP": "true"})
        assert plan.status == SourcingStatus.SKIPPED
        assert plan.notes == "DNP (Do Not Populate)"

    def test_dnp_as_part_number(self):
        plan = classify_row({"Reference": "C1", "Value": "100nF", "Manufacturer_Part_Number": "dnp"})
        assert plan.status == SourcingStatus.SKIPPED

    @pytest.mark.parametrize("column", ["LCSC Part #", "JLCPCB Part #"])
    def test_already_sourced(self, column):
        plan = classify_row({"Reference": "C1", "Value": "100nF", column: " C1525 "})
        assert plan.status == SourcingStatus.ALREADY_SOURCED
        assert plan.notes == "Already has LCSC/JLCPCB part number"

    def test_nothing_to_search(self):
        plan = classify_row({"Reference": "TP1", "Value": "  "})
        assert plan.status == SourcingStatus.NOT_FOUND
        assert plan.notes == "No value or part number to search"

    def test_searchable_row_builds_query(self):
        plan = classify_row({
            "Reference": "C1,C2",
            "Value": " 100nF ",
            "Footprint": "Capacitor_SMD:C_0402_1005Metric",
            "Manufacturer_Part_Number": "",
        })

        assert plan.is_searchable
        assert plan.status is None
        assert plan.query.value == "100nF"
        assert plan.query.footprint == "1005"
        assert plan.query.component_type == "capacitor"
        assert plan.query.limit == 10

    def test_part_number_alone_is_searchable(self):
        plan = classify_row({"Reference": "U1", "Value": "", "Manufacturer_Part_Number": "STM32F103C8T6"})
        assert plan.is_searchable
        assert plan.query.manufacturer_part_number == "STM32F103C8T6"
