"""Cross-repository impact analysis for multi-repo setups."""

__version__ = "0.1.0"
