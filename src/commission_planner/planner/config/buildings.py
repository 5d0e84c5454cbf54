"""Building travel time configuration loader."""

import json
from pathlib import Path

from ...constants import DEFAULT_TRAVEL_TIME
from ...exceptions import CatalogError
from ...models import Timeblock
from ...normalization import normalize_building_name
from ...utils import safe_float


class BuildingConfig:
    """Loader for travel times between buildings from travel-times.json.

    Expected format::

        {
            "default": 1.0,
            "pairs": [
                {"from": "Madero", "to": "Campus", "hours": 0.75}
            ]
        }

    Travel times are symmetric. Pairs missing from the table use the
    default estimate.
    """

    def __init__(
        self,
        travel_times_path: Path | None = None,
        default_hours: float = DEFAULT_TRAVEL_TIME,
    ):
        self.default_hours = default_hours
        # frozenset({building_a, building_b}) -> hours
        self._travel_times: dict[frozenset[str], float] = {}

        if travel_times_path and travel_times_path.exists():
            self._load(travel_times_path)

    def _load(self, path: Path) -> None:
        """Load travel times from JSON file.

        Raises:
            CatalogError: If the file is not valid JSON or a pair is incomplete
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(str(path), f"invalid JSON ({e})") from e

        if not isinstance(data, dict):
            raise CatalogError(str(path), "travel times must be an object")

        if "default" in data:
            self.default_hours = safe_float(data["default"], self.default_hours)

        for position, entry in enumerate(data.get("pairs", []), start=1):
            try:
                first, second = entry["from"], entry["to"]
            except (KeyError, TypeError) as e:
                raise CatalogError(str(path), f"pair #{position} needs \"from\" and \"to\"") from e
            hours = safe_float(entry.get("hours"), self.default_hours)
            self.set_travel_time(first, second, hours)

    def set_travel_time(self, first: str, second: str, hours: float) -> None:
        """Set the travel time between two buildings."""
        key = frozenset((normalize_building_name(first), normalize_building_name(second)))
        self._travel_times[key] = hours

    def get_travel_time(self, first: str, second: str) -> float:
        """Get the travel time between two buildings (0 for the same building)."""
        first = normalize_building_name(first)
        second = normalize_building_name(second)
        if first == second:
            return 0.0
        return self._travel_times.get(frozenset((first, second)), self.default_hours)

    def travel_time(self, first: Timeblock, second: Timeblock) -> float:
        """Travel time between two timeblocks (0 when on different days)."""
        if first.day != second.day:
            return 0.0
        return self.get_travel_time(first.building, second.building)

    def get_all_buildings(self) -> set[str]:
        """Get all buildings mentioned in the table."""
        return {building for pair in self._travel_times for building in pair}
