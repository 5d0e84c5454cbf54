"""Commission Planner - ranked course-section combinations for students.

Given a catalog of subjects (each offered in several commissions), the
subjects a student wants to take and a list of priorities (hard
constraints or soft preferences), this package builds every combination
of one commission per subject, discards those breaking exclusive
priorities, scores the rest and returns them best first.

Example usage:
    from commission_planner import (
        CombinationScheduler,
        FreeDayPriority,
        RequestParser,
        Weekday,
    )

    parser = RequestParser()
    catalog = parser.parse_catalog("catalog.json")
    request = parser.parse_request("request.json")

    scheduler = CombinationScheduler()
    result = scheduler.schedule(catalog.subjects, request.selections, request.priorities)

    for combination in result.combinations[:5]:
        print(combination.weight, [s.commission_name for s in combination.subjects])

    # Export to Excel
    from commission_planner.exporters import ExcelExporter
    ExcelExporter().export(result, "combinations.xlsx")
"""

from .exceptions import (
    CatalogError,
    InvalidPriorityError,
    InvalidTimeblockError,
    PlannerError,
    SubjectNotFoundError,
    UnknownPriorityKindError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .models import (
    BusyTimePriority,
    Combination,
    CombinationSubject,
    Commission,
    CommissionPriority,
    FreeDayPriority,
    LocationPriority,
    Priority,
    PriorityType,
    ProfessorPriority,
    Subject,
    SubjectSelection,
    SuperpositionPriority,
    Timeblock,
    TravelPriority,
    Weekday,
    weighted_priorities,
)
from .parser import CatalogResult, RequestParser, RequestResult
from .planner import (
    CombinationScheduler,
    PlannerConfig,
    ScheduleResult,
    SortMode,
    schedule,
)

__version__ = "0.1.0"

__all__ = [
    # Main scheduler
    "CombinationScheduler",
    "ScheduleResult",
    "PlannerConfig",
    "SortMode",
    "schedule",
    # Models
    "Weekday",
    "Timeblock",
    "Commission",
    "Subject",
    "SubjectSelection",
    "PriorityType",
    "Priority",
    "SuperpositionPriority",
    "CommissionPriority",
    "ProfessorPriority",
    "FreeDayPriority",
    "BusyTimePriority",
    "LocationPriority",
    "TravelPriority",
    "weighted_priorities",
    "CombinationSubject",
    "Combination",
    # Input files
    "RequestParser",
    "CatalogResult",
    "RequestResult",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "PlannerError",
    "SubjectNotFoundError",
    "UnknownPriorityKindError",
    "InvalidPriorityError",
    "InvalidTimeblockError",
    "CatalogError",
]
