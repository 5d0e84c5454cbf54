"""Export functionality for ranked combinations."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .parser import priority_summary
from .planner.scheduler import ScheduleResult
from .utils import format_time

COMBINATION_COLUMNS = ["rank", "weight", "commissions", "satisfied_priorities", "free_days"]
TIMETABLE_COLUMNS = [
    "rank", "code", "subject", "commission", "professors", "day", "start", "end", "building",
]
SUMMARY_COLUMNS = ["metric", "value"]


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to file.

        Args:
            result: ScheduleResult to export
            output_path: Path to output file or directory
        """
        pass


def _combination_rows(result: ScheduleResult) -> list[dict]:
    """One row per ranked combination."""
    rows = []
    for rank, combination in enumerate(result.combinations, start=1):
        rows.append(
            {
                "rank": rank,
                "weight": combination.weight,
                "commissions": "; ".join(
                    f"{s.code} {s.commission_name}" for s in combination.subjects
                ),
                "satisfied_priorities": "; ".join(
                    str(index + 1) for index in combination.priorities
                ),
                "free_days": "; ".join(d.label for d in combination.get_free_days()),
            }
        )
    return rows


def _timetable_rows(result: ScheduleResult) -> list[dict]:
    """One row per class meeting of every ranked combination."""
    rows = []
    for rank, combination in enumerate(result.combinations, start=1):
        for subject in combination.subjects:
            for block in subject.commission_times:
                rows.append(
                    {
                        "rank": rank,
                        "code": subject.code,
                        "subject": subject.name,
                        "commission": subject.commission_name,
                        "professors": "; ".join(subject.professors or ()),
                        "day": block.day.label,
                        "start": format_time(block.start),
                        "end": format_time(block.end),
                        "building": block.building,
                    }
                )
    return rows


def _summary_rows(result: ScheduleResult) -> list[dict]:
    stats = result.statistics
    return [
        {"metric": "generation_date", "value": result.generation_date},
        {"metric": "sort_mode", "value": result.sort_mode.value},
        {"metric": "total_combinations", "value": result.total_combinations},
        {"metric": "search_space", "value": stats.search_space},
        {"metric": "leaves_visited", "value": stats.leaves_visited},
        {"metric": "branches_pruned", "value": stats.branches_pruned},
        {"metric": "rejected", "value": stats.total_rejected},
        {"metric": "unresolved_codes", "value": ", ".join(result.unresolved_codes)},
        {"metric": "elapsed_seconds", "value": round(stats.elapsed_seconds, 4)},
    ]


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to JSON file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to CSV files.

        Creates three files:
        - combinations.csv: Ranked combinations
        - timetable.csv: Class meetings of every combination
        - summary.csv: Run summary

        Args:
            result: ScheduleResult to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(output_dir / "combinations.csv", _combination_rows(result), COMBINATION_COLUMNS)
        self._write_csv(output_dir / "timetable.csv", _timetable_rows(result), TIMETABLE_COLUMNS)
        self._write_csv(output_dir / "summary.csv", _summary_rows(result), SUMMARY_COLUMNS)

    def _write_csv(self, output_path: Path, rows: list[dict], columns: list[str]) -> None:
        """Write rows to CSV file, keeping the header when there are no rows."""
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=columns)
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, result: ScheduleResult, output_path: str | Path) -> None:
        """Export schedule result to Excel file.

        Creates workbook with sheets:
        - Combinations: Ranked combinations
        - Timetable: Class meetings of every combination
        - Priorities: Priorities and how many combinations satisfy each
        - Summary: Run summary

        Args:
            result: ScheduleResult to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self._write_sheet(
                writer,
                "Combinations",
                _combination_rows(result),
                COMBINATION_COLUMNS,
            )
            self._write_sheet(
                writer,
                "Timetable",
                _timetable_rows(result),
                TIMETABLE_COLUMNS,
            )
            self._export_priorities_sheet(result, writer)
            self._write_sheet(writer, "Summary", _summary_rows(result), SUMMARY_COLUMNS)

    def _export_priorities_sheet(
        self, result: ScheduleResult, writer: pd.ExcelWriter
    ) -> None:
        """Export priorities to Excel sheet."""
        satisfied = result.statistics.satisfied_by_priority
        rows = [
            {
                "Priority": index + 1,
                "Description": priority_summary(priority),
                "Satisfied By": satisfied.get(index, 0),
            }
            for index, priority in enumerate(result.priorities)
        ]
        self._write_sheet(writer, "Priorities", rows, ["Priority", "Description", "Satisfied By"])

    def _write_sheet(
        self,
        writer: pd.ExcelWriter,
        sheet_name: str,
        rows: list[dict],
        columns: list[str],
    ) -> None:
        """Write rows to a sheet, keeping headers when there are no rows."""
        df = pd.DataFrame(rows) if rows else pd.DataFrame(columns=columns)
        df.to_excel(writer, sheet_name=sheet_name, index=False)


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()
