"""Configuration loaders for the planner."""

from .buildings import BuildingConfig
from .loader import ConfigLoader
from .settings import PlannerConfig

__all__ = [
    "ConfigLoader",
    "BuildingConfig",
    "PlannerConfig",
]
