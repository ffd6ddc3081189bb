"""Impact analyzer utility modules."""

from impact_analyzer.utils.logging import configure_logging
from impact_analyzer.utils.paths import PathFilter

__all__ = [
    "PathFilter",
    "configure_logging",
]
