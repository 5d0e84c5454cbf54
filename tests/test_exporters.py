"""Tests for result exporters."""

import csv
import json

import pandas as pd
import pytest

from commission_planner.exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    get_exporter,
)
from commission_planner.models import Priority, Subject, SubjectSelection
from commission_planner.planner.scheduler import CombinationScheduler, ScheduleResult


@pytest.fixture
def result(catalog_data, request_data):
    """Ranked result for the sample catalog and request."""
    return CombinationScheduler().schedule(
        [Subject.from_dict(s) for s in catalog_data],
        SubjectSelection.from_codes(request_data["selections"]),
        [Priority.from_dict(p) for p in request_data["priorities"]],
    )


def read_csv(path):
    with open(path, encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_export(self, result, tmp_path):
        """Test the JSON file mirrors the result."""
        output = tmp_path / "out" / "result.json"
        JSONExporter().export(result, output)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["total_combinations"] == 3
        assert data["combinations"][0]["weight"] == 59.0
        assert data["combinations"][0]["subjects"][0]["name"] == "Física III"

    def test_non_ascii_kept(self, result, tmp_path):
        output = tmp_path / "result.json"
        JSONExporter().export(result, output)
        assert "Física" in output.read_text(encoding="utf-8")


class TestCSVExporter:
    """Tests for CSVExporter."""

    def test_export_files(self, result, tmp_path):
        """Test the three CSV files are written."""
        CSVExporter().export(result, tmp_path / "csv")

        combinations = read_csv(tmp_path / "csv" / "combinations.csv")
        assert len(combinations) == 3
        assert combinations[0]["rank"] == "1"
        assert combinations[0]["commissions"] == "93.43 A; 22.02 K2"
        assert combinations[0]["satisfied_priorities"] == "1; 2; 3"
        assert combinations[0]["free_days"] == "thursday; friday"

        timetable = read_csv(tmp_path / "csv" / "timetable.csv")
        # 93.43 A meets twice, every other commission once
        assert len(timetable) == 3 + 2 + 2
        assert timetable[0]["professors"] == "Pérez, Juan"

        summary = {row["metric"]: row["value"] for row in read_csv(tmp_path / "csv" / "summary.csv")}
        assert summary["total_combinations"] == "3"
        assert summary["search_space"] == "4"

    def test_empty_result(self, tmp_path):
        """Test empty combination lists still get header-only files."""
        CSVExporter().export(ScheduleResult(), tmp_path)
        for name in ("combinations.csv", "timetable.csv"):
            assert read_csv(tmp_path / name) == []

        header = (tmp_path / "combinations.csv").read_text(encoding="utf-8").splitlines()[0]
        assert header == "rank,weight,commissions,satisfied_priorities,free_days"
        assert "building" in (tmp_path / "timetable.csv").read_text(encoding="utf-8")
        assert (tmp_path / "summary.csv").exists()


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_export_sheets(self, result, tmp_path):
        """Test the workbook has every sheet."""
        output = tmp_path / "result.xlsx"
        ExcelExporter().export(result, output)

        sheets = pd.read_excel(output, sheet_name=None)
        assert set(sheets) == {"Combinations", "Timetable", "Priorities", "Summary"}
        assert len(sheets["Combinations"]) == 3
        assert list(sheets["Priorities"]["Satisfied By"]) == [3, 1, 1]

    def test_empty_result_keeps_headers(self, tmp_path):
        """Test empty sheets still carry their columns."""
        output = tmp_path / "empty.xlsx"
        ExcelExporter().export(ScheduleResult(), output)

        combinations = pd.read_excel(output, sheet_name="Combinations")
        assert combinations.empty
        assert "weight" in combinations.columns


class TestGetExporter:
    """Tests for get_exporter."""

    @pytest.mark.parametrize(
        "name,cls",
        [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)],
    )
    def test_known_formats(self, name, cls):
        assert isinstance(get_exporter(name), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("xml")
