# Application Stats Package
from .metrics_calculator import ProgressCalculator, level_for_xp

__all__ = ["ProgressCalculator", "level_for_xp"]
