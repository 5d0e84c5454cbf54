"""Unified configuration loader."""

from pathlib import Path

from ...constants import DEFAULT_CONFIG_DIR, PLANNER_CONFIG_FILE, TRAVEL_TIMES_FILE
from .buildings import BuildingConfig
from .settings import PlannerConfig


class ConfigLoader:
    """Unified loader for all planner configuration files."""

    def __init__(self, config_dir: Path | None = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Path to directory containing configuration files.
                       Expected files (all optional):
                       - planner.json
                       - travel-times.json
        """
        if config_dir is None:
            config_dir = Path(DEFAULT_CONFIG_DIR)

        self.config_dir = Path(config_dir)

        self.planner = PlannerConfig.load(self._get_path(PLANNER_CONFIG_FILE))
        self.buildings = BuildingConfig(
            self._get_path(TRAVEL_TIMES_FILE),
            default_hours=self.planner.default_travel_time,
        )

    def _get_path(self, filename: str) -> Path | None:
        """Get path to config file if it exists."""
        path = self.config_dir / filename
        return path if path.exists() else None
