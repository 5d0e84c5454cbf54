"""Test fixtures for commission planner tests."""

import json
from datetime import time

import pytest

from commission_planner.models import Commission, Subject, Timeblock, Weekday


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


@pytest.fixture
def make_block():
    """Factory for timeblocks: make_block(Weekday.MONDAY, "09:00", "12:00", "Madero")."""

    def factory(day: Weekday, start: str, end: str, building: str = "Madero") -> Timeblock:
        return Timeblock(day=day, start=_parse_hhmm(start), end=_parse_hhmm(end), building=building)

    return factory


@pytest.fixture
def make_subject():
    """Factory for subjects: make_subject("A", {"1": [block, ...], "2": [...]})."""

    def factory(
        code: str,
        commissions: dict[str, list[Timeblock]],
        professors: dict[str, list[str]] | None = None,
        name: str | None = None,
    ) -> Subject:
        professors = professors or {}
        return Subject(
            code=code,
            name=name or f"Subject {code}",
            commissions=tuple(
                Commission(
                    label=label,
                    schedule=tuple(blocks),
                    professors=tuple(professors[label]) if label in professors else None,
                )
                for label, blocks in commissions.items()
            ),
        )

    return factory


@pytest.fixture
def two_subjects(make_block, make_subject):
    """Subject A with two commissions (Mon / Thu), subject B with one (Tue)."""
    subject_a = make_subject(
        "A",
        {
            "A1": [make_block(Weekday.MONDAY, "09:00", "12:00")],
            "A2": [make_block(Weekday.THURSDAY, "09:00", "12:00")],
        },
        professors={"A1": ["Pérez, Juan"], "A2": ["Gómez, Ana", "Ruiz, Eva"]},
    )
    subject_b = make_subject(
        "B",
        {"B1": [make_block(Weekday.TUESDAY, "14:00", "17:00", "Campus")]},
    )
    return [subject_a, subject_b]


@pytest.fixture
def catalog_data():
    """Raw catalog data as found in a catalog JSON file."""
    return [
        {
            "code": "93.43",
            "name": "Física III",
            "commissions": [
                {
                    "label": "A",
                    "professors": ["Ing. Pérez,  Juan"],
                    "schedule": [
                        {"day": "monday", "start": "09:00", "end": "12:00", "building": "Madero"},
                        {"day": "wednesday", "start": "09:00", "end": "11:00", "building": "Madero"},
                    ],
                },
                {
                    "label": "B",
                    "professors": ["Gómez, Ana"],
                    "schedule": [
                        {"day": "thursday", "start": "18:00", "end": "21:00", "building": "Campus"},
                    ],
                },
            ],
        },
        {
            "code": "22.02",
            "name": "Electrotecnia I",
            "commissions": [
                {
                    "label": "K1",
                    "teachers": ["Ruiz, Eva"],
                    "schedule": [
                        {"day": "monday", "start": "10:00", "end": "13:00", "building": "Madero"},
                    ],
                },
                {
                    "label": "K2",
                    "schedule": [
                        {"day": "martes", "start": "14:00", "end": "17:00", "building": "Madero"},
                    ],
                },
            ],
        },
    ]


@pytest.fixture
def request_data():
    """Raw request data as found in a request JSON file."""
    return {
        "selections": ["93.43", "22.02"],
        "priorities": [
            {"type": "superposition", "value": 0, "exclusive": True},
            {"type": "freeday", "value": "thursday", "weight": 2},
            {
                "type": "commission",
                "value": "A",
                "related_subject_code": "93.43",
                "weight": 1,
            },
        ],
    }


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    """Catalog JSON file on disk."""
    file_path = tmp_path / "catalog.json"
    file_path.write_text(json.dumps(catalog_data, ensure_ascii=False), encoding="utf-8")
    return file_path


@pytest.fixture
def request_file(tmp_path, request_data):
    """Request JSON file on disk."""
    file_path = tmp_path / "request.json"
    file_path.write_text(json.dumps(request_data), encoding="utf-8")
    return file_path
