"""Impact analyzer services layer.

``impact_analyzer.services.pipeline`` is imported directly by callers;
analyzers depend on the git client exported here.
"""

from impact_analyzer.services.git import GitClient

__all__ = ["GitClient"]
