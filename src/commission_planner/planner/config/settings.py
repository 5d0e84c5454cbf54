"""Planner settings loader."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Self

from ...constants import DEFAULT_TRAVEL_TIME
from ...exceptions import CatalogError
from ..scorer import TRANSFORMS, Transform, get_transform
from ..sorting import SortMode

logger = logging.getLogger(__name__)


def _flag(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false, got '{value}'")
    return value


@dataclass
class PlannerConfig:
    """Settings controlling how combinations are searched, scored and sorted.

    Attributes:
        sort_mode: Sort strategy used to rank combinations
        transform: Name of the weight transform (see scorer.TRANSFORMS)
        slope: Optional parameter for the transform
        prune: Discard branches already violating an exclusive priority
        strict: Raise SubjectNotFoundError for unknown selected codes
        default_travel_time: Travel hours between buildings missing from the table
    """

    sort_mode: SortMode = SortMode.COMPARATOR
    transform: str = "identity"
    slope: float | None = None
    prune: bool = False
    strict: bool = False
    default_travel_time: float = DEFAULT_TRAVEL_TIME

    def __post_init__(self) -> None:
        self.sort_mode = SortMode(self.sort_mode)
        if self.transform not in TRANSFORMS:
            raise ValueError(
                f"Unsupported transform: {self.transform}. "
                f"Supported: {', '.join(TRANSFORMS.keys())}"
            )

    def get_transform(self) -> Transform:
        """Build the configured transform function."""
        return get_transform(self.transform, self.slope)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create settings from a dictionary, keeping defaults for missing keys.

        Raises:
            ValueError: If a setting has the wrong type or an unsupported value
        """
        defaults = cls()
        slope = data.get("slope")
        return cls(
            sort_mode=data.get("sort_mode", defaults.sort_mode),
            transform=data.get("transform", defaults.transform),
            slope=float(slope) if slope is not None else None,
            prune=_flag(data, "prune", defaults.prune),
            strict=_flag(data, "strict", defaults.strict),
            default_travel_time=float(
                data.get("default_travel_time", defaults.default_travel_time)
            ),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        """Load settings from a JSON file, or defaults if there is none.

        Raises:
            CatalogError: If the file exists but is not valid JSON or holds
                          invalid settings
        """
        if path is None or not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(str(path), f"invalid JSON ({e})") from e

        if not isinstance(data, dict):
            raise CatalogError(str(path), "settings must be an object")

        try:
            config = cls.from_dict(data)
        except (TypeError, ValueError) as e:
            raise CatalogError(str(path), str(e)) from e

        logger.info(f"Loaded planner settings from {path}")
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "sort_mode": self.sort_mode.value,
            "transform": self.transform,
            "slope": self.slope,
            "prune": self.prune,
            "strict": self.strict,
            "default_travel_time": self.default_travel_time,
        }
