"""Per-repository impact analyzers."""

from impact_analyzer.analyzers.angular import AngularAnalyzer, AngularProject
from impact_analyzer.analyzers.base import AnalyzerProtocol, BaseAnalyzer
from impact_analyzer.analyzers.go import GoAnalyzer, GoFileSymbols, is_lambda_handler
from impact_analyzer.analyzers.graphql import (
    ChangeType,
    Criticality,
    GraphQLAnalyzer,
    SchemaChange,
    change_path,
    schema_diff,
)
from impact_analyzer.analyzers.registry import AnalyzerRegistry, get_default_analyzers

__all__ = [
    "AnalyzerProtocol",
    "AnalyzerRegistry",
    "AngularAnalyzer",
    "AngularProject",
    "BaseAnalyzer",
    "ChangeType",
    "Criticality",
    "GoAnalyzer",
    "GoFileSymbols",
    "GraphQLAnalyzer",
    "SchemaChange",
    "change_path",
    "get_default_analyzers",
    "is_lambda_handler",
    "schema_diff",
]
