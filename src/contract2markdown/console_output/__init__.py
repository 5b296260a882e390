"""Console output exports."""

from .logging_setup import configure_logging, verbosity_level
from .progress_display import FileProgressDisplay

__all__ = ["FileProgressDisplay", "configure_logging", "verbosity_level"]
