"""Cross-repository impact correlation engine."""

from impact_analyzer.correlation.correlator import CrossRepoCorrelator, analyze
from impact_analyzer.correlation.dedup import dedupe
from impact_analyzer.correlation.matchers import Matcher, find_consumers, get_default_matchers
from impact_analyzer.correlation.patterns import glob_to_regex, matches, matches_any
from impact_analyzer.correlation.registry import MatcherRegistry

__all__ = [
    "CrossRepoCorrelator",
    "Matcher",
    "MatcherRegistry",
    "analyze",
    "dedupe",
    "find_consumers",
    "get_default_matchers",
    "glob_to_regex",
    "matches",
    "matches_any",
]
