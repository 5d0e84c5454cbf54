"""Data models for the commission planner."""

from dataclasses import dataclass, field, replace
from datetime import time
from enum import Enum
from typing import Any, ClassVar, Self

from .exceptions import (
    InvalidPriorityError,
    InvalidTimeblockError,
    UnknownPriorityKindError,
)
from .normalization import normalize_building_name, normalize_professor_name
from .utils import format_time, minutes_of_day, normalize_day_name, parse_time


class Weekday(Enum):
    """Days of the academic week.

    ANY is not a schedulable day: it only appears as the value of a
    FREEDAY priority that accepts whichever weekday turns out free.
    """

    ANY = -1
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        """Get a weekday from a (possibly abbreviated or Spanish) name.

        Raises:
            ValueError: If the name is not recognized
        """
        normalized = normalize_day_name(name)
        if normalized is None:
            raise ValueError(f"Unknown day: '{name}'")
        return cls[normalized.upper()]

    @property
    def label(self) -> str:
        """Lowercase day name used in input and output files."""
        return self.name.lower()


# Days considered when looking for a free day
WEEKDAYS = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
)

# Every day a class can be scheduled on
SCHEDULE_DAYS = WEEKDAYS + (Weekday.SATURDAY,)


class PriorityType(str, Enum):
    """Kind of user-authored priority."""

    SUPERPOSITION = "superposition"
    COMMISSION = "commission"
    PROFESSOR = "professor"
    FREEDAY = "freeday"
    BUSYTIME = "busytime"
    LOCATION = "location"
    TRAVEL = "travel"


@dataclass(frozen=True)
class Timeblock:
    """One recurring meeting slot of a commission."""

    day: Weekday
    start: time
    end: time
    building: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.day, Weekday) or self.day == Weekday.ANY:
            raise InvalidTimeblockError(f"'{self.day}' is not a schedulable day")
        if self.start >= self.end:
            raise InvalidTimeblockError(
                f"start {format_time(self.start)} must be before end {format_time(self.end)}"
            )

    @property
    def duration(self) -> float:
        """Length of the block in hours."""
        return (minutes_of_day(self.end) - minutes_of_day(self.start)) / 60

    def overlaps(self, other: "Timeblock") -> float:
        """Get the overlap degree (hours) with another timeblock."""
        from .planner.geometry import overlap_degree

        return overlap_degree(self, other)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Timeblock from a dictionary.

        Raises:
            InvalidTimeblockError: If the day or times cannot be parsed
        """
        if not isinstance(data, dict):
            raise InvalidTimeblockError(f"expected an object, got {type(data).__name__}")

        try:
            day = Weekday.from_name(data["day"])
            start = parse_time(data["start"])
            end = parse_time(data["end"])
        except KeyError as e:
            raise InvalidTimeblockError(f"missing field {e}") from e
        except ValueError as e:
            raise InvalidTimeblockError(str(e)) from e

        return cls(
            day=day,
            start=start,
            end=end,
            building=normalize_building_name(data.get("building", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "day": self.day.label,
            "start": format_time(self.start),
            "end": format_time(self.end),
            "building": self.building,
        }

    def __str__(self) -> str:
        location = f" @ {self.building}" if self.building else ""
        return (
            f"{self.day.label[:3].capitalize()} "
            f"{format_time(self.start)}-{format_time(self.end)}{location}"
        )


@dataclass(frozen=True)
class Commission:
    """A selectable section of a subject.

    Attributes:
        label: Commission label as published in the catalog (e.g. "A", "K1051")
        schedule: Meeting slots, in catalog order
        professors: Teaching staff, or None when the catalog does not list them
    """

    label: str
    schedule: tuple[Timeblock, ...] = ()
    professors: tuple[str, ...] | None = None

    def has_professors(self) -> bool:
        """Check if the catalog lists at least one professor."""
        return bool(self.professors)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Commission from a dictionary."""
        # Older catalog exports name the staff list "teachers"
        raw_professors = data.get("professors", data.get("teachers"))
        professors = None
        if raw_professors is not None:
            professors = tuple(
                name
                for name in (normalize_professor_name(p) for p in raw_professors)
                if name
            )

        return cls(
            label=str(data["label"]).strip(),
            schedule=tuple(Timeblock.from_dict(t) for t in data.get("schedule", [])),
            professors=professors,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "label": self.label,
            "professors": list(self.professors) if self.professors is not None else None,
            "schedule": [t.to_dict() for t in self.schedule],
        }


@dataclass(frozen=True)
class Subject:
    """A catalog course with its commissions."""

    code: str
    name: str
    commissions: tuple[Commission, ...] = ()

    def get_commission(self, label: str) -> Commission | None:
        """Get a commission by label."""
        for commission in self.commissions:
            if commission.label == label:
                return commission
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Subject from a dictionary."""
        return cls(
            code=str(data["code"]).strip(),
            name=str(data.get("name", "")).strip(),
            commissions=tuple(Commission.from_dict(c) for c in data.get("commissions", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "name": self.name,
            "commissions": [c.to_dict() for c in self.commissions],
        }


@dataclass(frozen=True)
class SubjectSelection:
    """A subject chosen by the student, with its importance weight."""

    code: str
    weight: float = 1.0

    @classmethod
    def from_codes(cls, codes: list[str]) -> list[Self]:
        """Build selections from codes ordered by importance.

        The first code gets weight len(codes), the last one weight 1.
        """
        total = len(codes)
        return [cls(code=code, weight=float(total - index)) for index, code in enumerate(codes)]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a SubjectSelection from a dictionary."""
        return cls(code=str(data["code"]).strip(), weight=float(data.get("weight", 1.0)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"code": self.code, "weight": self.weight}


def _to_float(kind: PriorityType, value: Any) -> float:
    """Convert a numeric priority payload, rejecting negatives."""
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidPriorityError(kind.value, f"expected a number, got {value!r}") from e
    if number < 0:
        raise InvalidPriorityError(kind.value, f"value must not be negative, got {number}")
    return number


@dataclass(frozen=True, kw_only=True)
class Priority:
    """A single user-authored rule evaluated against a combination.

    Concrete rules are the subclasses below, one per PriorityType, each
    carrying its own typed payload. ``exclusive`` turns the rule into a hard
    constraint: a combination violating it is discarded. Otherwise the rule
    only adds to the combination's weight when satisfied.

    Attributes:
        weight: Importance of the priority for scoring
        exclusive: True for hard constraints
        related_subject_code: Subject the priority refers to, if any
    """

    kind: ClassVar[PriorityType]

    weight: float = 1.0
    exclusive: bool = False
    related_subject_code: str | None = None

    @property
    def type(self) -> PriorityType:
        """Priority type tag."""
        return self.kind

    @property
    def value(self) -> Any:
        """Typed payload of the priority."""
        return None

    def has_subject_related(self) -> bool:
        """Check if the priority refers to a specific subject."""
        return self.related_subject_code is not None

    def _require_subject(self) -> None:
        if not self.related_subject_code:
            raise InvalidPriorityError(self.kind.value, "related_subject_code is required")

    @classmethod
    def _payload_from_value(cls, value: Any) -> dict[str, Any]:
        return {}

    def _value_to_dict(self) -> Any:
        return self.value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Priority":
        """Create the matching Priority subclass from a dictionary.

        Raises:
            UnknownPriorityKindError: If the type is not supported
            InvalidPriorityError: If the value does not fit the type
        """
        raw_kind = str(data.get("type", "")).strip().lower()
        try:
            kind = PriorityType(raw_kind)
        except ValueError as e:
            raise UnknownPriorityKindError(
                raw_kind, [k.value for k in PriorityType]
            ) from e

        priority_class = PRIORITY_CLASSES[kind]
        exclusive = data.get("exclusive", False)
        if not isinstance(exclusive, bool):
            raise InvalidPriorityError(
                kind.value, f"exclusive must be true or false, got {exclusive!r}"
            )
        related = data.get("related_subject_code")
        return priority_class(
            weight=float(data.get("weight", 1.0)),
            exclusive=exclusive,
            related_subject_code=str(related).strip() if related is not None else None,
            **priority_class._payload_from_value(data.get("value")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.kind.value,
            "value": self._value_to_dict(),
            "weight": self.weight,
            "exclusive": self.exclusive,
            "related_subject_code": self.related_subject_code,
        }


@dataclass(frozen=True, kw_only=True)
class SuperpositionPriority(Priority):
    """Subjects may overlap by at most ``max_overlap`` hours."""

    kind: ClassVar[PriorityType] = PriorityType.SUPERPOSITION

    max_overlap: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_overlap", _to_float(self.kind, self.max_overlap))

    @property
    def value(self) -> float:
        return self.max_overlap

    @classmethod
    def _payload_from_value(cls, value: Any) -> dict[str, Any]:
        return {"max_overlap": 0.0 if value is None else value}


@dataclass(frozen=True, kw_only=True)
class CommissionPriority(Priority):
    """The related subject must be taken in the commission ``label``."""

    kind: ClassVar[PriorityType] = PriorityType.COMMISSION

    label: str

    def __post_init__(self) -> None:
        self._require_subject()
        if not self.label:
            raise InvalidPriorityError(self.kind.value, "label is required")

    @property
    def value(self) -> str:
        return self.label

    @classmethod
    def _payload_from_value(cls, value: Any) -> dict[str, Any]:
        return {"label": str(value).strip() if value is not None else ""}


@dataclass(frozen=True, kw_only=True)
class ProfessorPriority(Priority):
    """The related subject must be taught by ``professor``."""

    kind: ClassVar[PriorityType] = PriorityType.PROFESSOR

    professor: str

    def __post_init__(self) -> None:
        self._require_subject()
        if not self.professor:
            raise InvalidPriorityError(self.kind.value, "professor is required")

    @property
    def value(self) -> str:
        return self.professor

    @classmethod
    def _payload_from_value(cls, value: Any) -> dict[str, Any]:
        return {"professor": normalize_professor_name(value) if value else ""}


@dataclass(frozen=True, kw_only=True)
class FreeDayPriority(Priority):
    """``day`` must have no classes (ANY: at least one weekday free)."""

    kind: ClassVar[PriorityType] = PriorityType.FREEDAY

    day: Weekday = Weekday.ANY

    def __post_init__(self) -> None:
        if not isinstance(self.day, Weekday):
            raise InvalidPriorityError(self.kind.value, f"'{self.day}' is not a weekday")

    @property
    def value(self) -> Weekday:
        return self.day

    @classmethod
    def _payload_from_value(cls, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        try:
            return {"day": Weekday.from_name(value)}
        except ValueError as e:
            raise InvalidPriorityError(cls.kind.value, str(e)) from e

    def _value_to_dict(self) -> str:
        return self.day.label


@dataclass(frozen=True, kw_only=True)
class BusyTimePriority(Priority):
    """No class may overlap any of the blackout ``blocks``."""

    kind: ClassVar[PriorityType] = PriorityType.BUSYTIME

    blocks: tuple[Timeblock, ...] = ()

    def __post_init__(self) -> None:
        blocks = tuple(self.blocks)
        for block in blocks:
            if not isinstance(block, Timeblock):
                raise InvalidPriorityError(self.kind.value, f"{block!r} is not a timeblock")
        object.__setattr__(self, "blocks", blocks)

    @property
    def value(self) -> tuple[Timeblock, ...]:
        return self.blocks

    @classmethod
    def _payload_from_value(cls, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, list):
            raise InvalidPriorityError(cls.kind.value, "expected a list of timeblocks")
        try:
            return {"blocks": tuple(Timeblock.from_dict(b) for b in value)}
        except InvalidTimeblockError as e:
            raise InvalidPriorityError(cls.kind.value, str(e)) from e

    def _value_to_dict(self) -> list[dict[str, Any]]:
        return [b.to_dict() for b in self.blocks]


@dataclass(frozen=True, kw_only=True)
class LocationPriority(Priority):
    """All classes on the same day must be in the same building."""

    kind: ClassVar[PriorityType] = PriorityType.LOCATION


@dataclass(frozen=True, kw_only=True)
class TravelPriority(Priority):
    """Travel between buildings on the same day may take at most ``max_travel`` hours."""

    kind: ClassVar[PriorityType] = PriorityType.TRAVEL

    max_travel: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "max_travel", _to_float(self.kind, self.max_travel))

    @property
    def value(self) -> float:
        return self.max_travel

    @classmethod
    def _payload_from_value(cls, value: Any) -> dict[str, Any]:
        return {"max_travel": 0.0 if value is None else value}


PRIORITY_CLASSES: dict[PriorityType, type[Priority]] = {
    cls.kind: cls
    for cls in (
        SuperpositionPriority,
        CommissionPriority,
        ProfessorPriority,
        FreeDayPriority,
        BusyTimePriority,
        LocationPriority,
        TravelPriority,
    )
}


def weighted_priorities(priorities: list[Priority]) -> list[Priority]:
    """Re-weight priorities by their position in the list.

    The first priority gets weight len(priorities), the last one weight 1.
    """
    total = len(priorities)
    return [replace(p, weight=float(total - index)) for index, p in enumerate(priorities)]


@dataclass(frozen=True)
class CombinationSubject:
    """Snapshot of one chosen (subject, commission) pair."""

    name: str
    code: str
    commission_name: str
    commission_times: tuple[Timeblock, ...] = ()
    professors: tuple[str, ...] | None = None

    @classmethod
    def from_commission(cls, subject: Subject, commission: Commission) -> Self:
        """Create a snapshot for a commission of a subject."""
        return cls(
            name=subject.name,
            code=subject.code,
            commission_name=commission.label,
            commission_times=commission.schedule,
            professors=commission.professors,
        )

    def has_professors(self) -> bool:
        """Check if the chosen commission lists at least one professor."""
        return bool(self.professors)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "code": self.code,
            "commission": self.commission_name,
            "professors": list(self.professors) if self.professors is not None else None,
            "schedule": [t.to_dict() for t in self.commission_times],
        }


@dataclass
class Combination:
    """One assignment of a commission per selected subject.

    Attributes:
        subjects: Chosen commissions, in enumeration order
        priorities: Indices of the satisfied priorities, in priority order
        weight: Ranking score, 0.0 until the combination is scored
    """

    subjects: list[CombinationSubject] = field(default_factory=list)
    priorities: list[int] = field(default_factory=list)
    weight: float = 0.0

    def copy(self) -> "Combination":
        """Return an independent copy.

        Lists are duplicated, so appending to the copy never affects the
        original. The subject snapshots are immutable and shared.
        """
        return Combination(
            subjects=list(self.subjects),
            priorities=list(self.priorities),
            weight=self.weight,
        )

    def get_subject(self, code: str) -> CombinationSubject | None:
        """Get the chosen subject with the given code."""
        for subject in self.subjects:
            if subject.code == code:
                return subject
        return None

    def timeblocks(self) -> list[Timeblock]:
        """Get all timeblocks of the combination."""
        return [t for subject in self.subjects for t in subject.commission_times]

    def get_timeblocks_by_day(self, day: Weekday) -> list[Timeblock]:
        """Get all timeblocks scheduled on a day, in subject order."""
        return [t for t in self.timeblocks() if t.day == day]

    def get_free_days(self, days: tuple[Weekday, ...] = WEEKDAYS) -> list[Weekday]:
        """Get the days without any scheduled class."""
        busy = {t.day for t in self.timeblocks()}
        return [day for day in days if day not in busy]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "weight": self.weight,
            "priorities": self.priorities,
            "subjects": [s.to_dict() for s in self.subjects],
        }
