"""Loading of catalog and request JSON files.

Catalog file (list of subjects, or {"subjects": [...]})::

    [
        {
            "code": "93.43",
            "name": "Física III",
            "commissions": [
                {
                    "label": "A",
                    "professors": ["Pérez, Juan"],
                    "schedule": [
                        {"day": "monday", "start": "09:00", "end": "12:00", "building": "Madero"}
                    ]
                }
            ]
        }
    ]

Request file::

    {
        "selections": ["93.43", {"code": "22.02", "weight": 2}],
        "priorities": [
            {"type": "freeday", "value": "thursday", "weight": 1, "exclusive": false}
        ],
        "weighted_priorities": false,
        "sort_mode": "comparator"
    }

Selections given as plain codes are weighted by rank (first is most
important). A request may also embed its own "subjects" catalog.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .exceptions import CatalogError, PlannerError
from .models import (
    Priority,
    PriorityType,
    Subject,
    SubjectSelection,
    weighted_priorities,
)
from .validators import validate_priority, validate_selection, validate_subject

logger = logging.getLogger(__name__)


@dataclass
class CatalogResult:
    """Result of loading a catalog file."""

    file_path: str
    parse_date: str
    subjects: list[Subject] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def total_subjects(self) -> int:
        """Total number of loaded subjects."""
        return len(self.subjects)

    @property
    def total_commissions(self) -> int:
        """Total number of commissions across subjects."""
        return sum(len(s.commissions) for s in self.subjects)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "parse_date": self.parse_date,
            "total_subjects": self.total_subjects,
            "total_commissions": self.total_commissions,
            "subjects": [s.to_dict() for s in self.subjects],
            "errors": self.errors,
            "warnings": self.warnings,
        }


@dataclass
class RequestResult:
    """Result of loading a request file."""

    file_path: str
    parse_date: str
    selections: list[SubjectSelection] = field(default_factory=list)
    priorities: list[Priority] = field(default_factory=list)
    subjects: list[Subject] = field(default_factory=list)
    sort_mode: str | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "parse_date": self.parse_date,
            "selections": [s.to_dict() for s in self.selections],
            "priorities": [p.to_dict() for p in self.priorities],
            "subjects": [s.to_dict() for s in self.subjects],
            "sort_mode": self.sort_mode,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def _load_json(file_path: Path) -> Any:
    """Read a JSON file.

    Raises:
        CatalogError: If the file is missing or not valid JSON
    """
    if not file_path.exists():
        raise CatalogError(str(file_path), "file not found")
    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(str(file_path), f"invalid JSON ({e})") from e


class RequestParser:
    """Parser for subject catalogs and planning requests."""

    def parse_catalog(self, file_path: str | Path) -> CatalogResult:
        """Parse a catalog file.

        Invalid subjects are skipped and reported in ``errors``.

        Args:
            file_path: Path to the catalog JSON file

        Returns:
            CatalogResult with the loaded subjects
        """
        file_path = Path(file_path)
        result = CatalogResult(
            file_path=str(file_path),
            parse_date=datetime.now().isoformat(),
        )

        try:
            data = _load_json(file_path)
        except CatalogError as e:
            result.errors.append(str(e))
            return result

        entries = data.get("subjects", []) if isinstance(data, dict) else data
        if not isinstance(entries, list):
            result.errors.append("Catalog must be a list of subjects")
            return result

        self._parse_subjects(entries, result.subjects, result.errors, result.warnings)
        logger.info(f"Loaded {result.total_subjects} subjects from {file_path.name}")
        return result

    def parse_request(self, file_path: str | Path) -> RequestResult:
        """Parse a request file with selections and priorities.

        Args:
            file_path: Path to the request JSON file

        Returns:
            RequestResult with selections, priorities and optional inline catalog
        """
        file_path = Path(file_path)
        result = RequestResult(
            file_path=str(file_path),
            parse_date=datetime.now().isoformat(),
        )

        try:
            data = _load_json(file_path)
        except CatalogError as e:
            result.errors.append(str(e))
            return result

        if not isinstance(data, dict):
            result.errors.append("Request must be an object")
            return result

        result.selections = self._parse_selections(
            data.get("selections", data.get("selected_subjects", [])), result.errors
        )
        if not result.selections:
            result.warnings.append("No subjects selected")

        result.priorities = self._parse_priorities(data.get("priorities", []), result.errors)
        if data.get("weighted_priorities", False):
            result.priorities = weighted_priorities(result.priorities)

        if "subjects" in data:
            self._parse_subjects(data["subjects"], result.subjects, result.errors, result.warnings)

        result.sort_mode = data.get("sort_mode")
        self._check_related_subjects(result)

        logger.info(
            f"Loaded {len(result.selections)} selections and "
            f"{len(result.priorities)} priorities from {file_path.name}"
        )
        return result

    def _parse_subjects(
        self,
        entries: list[Any],
        subjects: list[Subject],
        errors: list[str],
        warnings: list[str],
    ) -> None:
        """Parse subject entries into ``subjects``."""
        seen: set[str] = {s.code for s in subjects}

        for position, entry in enumerate(entries, start=1):
            valid, error = validate_subject(entry)
            if not valid:
                errors.append(f"Subject #{position}: {error}")
                continue

            try:
                subject = Subject.from_dict(entry)
            except PlannerError as e:
                errors.append(f"Subject #{position}: {e}")
                continue

            if subject.code in seen:
                warnings.append(f"Duplicate subject code '{subject.code}', keeping the first one")
                continue
            seen.add(subject.code)

            if not subject.commissions:
                warnings.append(f"Subject '{subject.code}' has no commissions")
            for commission in subject.commissions:
                if not commission.schedule:
                    warnings.append(
                        f"Subject '{subject.code}', commission '{commission.label}' has no schedule"
                    )

            subjects.append(subject)

    def _parse_selections(self, entries: Any, errors: list[str]) -> list[SubjectSelection]:
        """Parse selections; plain codes are weighted by rank."""
        if not isinstance(entries, list):
            errors.append("Selections must be a list")
            return []

        valid_entries = []
        for position, entry in enumerate(entries, start=1):
            valid, error = validate_selection(entry)
            if not valid:
                errors.append(f"Selection #{position}: {error}")
                continue
            valid_entries.append(entry)

        if all(isinstance(e, str) for e in valid_entries):
            return SubjectSelection.from_codes([e.strip() for e in valid_entries])

        return [
            SubjectSelection(code=e.strip()) if isinstance(e, str) else SubjectSelection.from_dict(e)
            for e in valid_entries
        ]

    def _parse_priorities(self, entries: Any, errors: list[str]) -> list[Priority]:
        """Parse priorities, keeping their order."""
        if not isinstance(entries, list):
            errors.append("Priorities must be a list")
            return []

        priorities: list[Priority] = []
        for position, entry in enumerate(entries, start=1):
            valid, error = validate_priority(entry)
            if not valid:
                errors.append(f"Priority #{position}: {error}")
                continue
            try:
                priorities.append(Priority.from_dict(entry))
            except PlannerError as e:
                errors.append(f"Priority #{position}: {e}")
        return priorities

    def _check_related_subjects(self, result: RequestResult) -> None:
        """Warn about priorities referring to subjects that were not selected."""
        selected = {s.code for s in result.selections}
        for index, priority in enumerate(result.priorities):
            code = priority.related_subject_code
            if code is not None and code not in selected:
                result.warnings.append(
                    f"Priority #{index + 1} ({priority.kind.value}) refers to "
                    f"unselected subject '{code}'"
                )

    def validate(self, file_path: str | Path) -> dict:
        """Validate a catalog or request file.

        The kind is detected from its content: objects with "selections" or
        "priorities" are requests, anything else is a catalog.

        Args:
            file_path: Path to the JSON file

        Returns:
            Dictionary with validation results
        """
        file_path = Path(file_path)
        validation = {
            "valid": True,
            "file_exists": file_path.exists(),
            "kind": None,
            "errors": [],
            "warnings": [],
        }

        try:
            data = _load_json(file_path)
        except CatalogError as e:
            validation["valid"] = False
            validation["errors"].append(str(e))
            return validation

        is_request = isinstance(data, dict) and (
            "selections" in data or "selected_subjects" in data or "priorities" in data
        )
        if is_request:
            validation["kind"] = "request"
            result = self.parse_request(file_path)
            validation["selections"] = len(result.selections)
            validation["priorities"] = len(result.priorities)
        else:
            validation["kind"] = "catalog"
            result = self.parse_catalog(file_path)
            validation["subjects"] = result.total_subjects
            validation["commissions"] = result.total_commissions
            if not result.subjects and not result.errors:
                result.errors.append("No subjects found in catalog")

        validation["errors"].extend(result.errors)
        validation["warnings"].extend(result.warnings)
        validation["valid"] = not validation["errors"]
        return validation

    def get_stats(self, result: CatalogResult) -> dict:
        """Get statistics from a catalog result.

        Args:
            result: CatalogResult from parsing

        Returns:
            Dictionary with statistics
        """
        stats = {
            "file_path": result.file_path,
            "parse_date": result.parse_date,
            "total_subjects": result.total_subjects,
            "total_commissions": result.total_commissions,
            "commissions_by_subject": {},
            "classes_by_day": {},
            "buildings": {},
            "professors_count": 0,
            "unique_professors": set(),
            "errors_count": len(result.errors),
            "warnings_count": len(result.warnings),
        }

        for subject in result.subjects:
            stats["commissions_by_subject"][subject.code] = len(subject.commissions)
            for commission in subject.commissions:
                stats["unique_professors"].update(commission.professors or ())
                for block in commission.schedule:
                    day = block.day.label
                    stats["classes_by_day"][day] = stats["classes_by_day"].get(day, 0) + 1
                    if block.building:
                        stats["buildings"][block.building] = (
                            stats["buildings"].get(block.building, 0) + 1
                        )

        stats["professors_count"] = len(stats["unique_professors"])
        stats["unique_professors"] = sorted(stats["unique_professors"])

        return stats


def priority_summary(priority: Priority) -> str:
    """Short human readable description of a priority."""
    value = priority.value
    if priority.kind == PriorityType.BUSYTIME:
        value = ", ".join(str(b) for b in priority.blocks)
    elif priority.kind == PriorityType.FREEDAY:
        value = priority.day.label
    subject = f" [{priority.related_subject_code}]" if priority.has_subject_related() else ""
    mode = "exclusive" if priority.exclusive else "preferred"
    shown = f" {value}" if value is not None else ""
    return f"{priority.kind.value}{shown}{subject} ({mode}, weight {priority.weight:g})"
