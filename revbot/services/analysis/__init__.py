"""Analysis service package."""

from revbot.services.analysis.diff_indexer import DiffIndexer, DiffLineEntry, FileLineIndex
from revbot.services.analysis.pipeline import AnalysisPipeline, AnalysisResult
from revbot.services.analysis.report_extractor import (
    ParsedReport,
    RawIssue,
    ReportExtractor,
    RiskLevel,
)
from revbot.services.analysis.snippet_resolver import LocatedIssue, Resolution, SnippetResolver
from revbot.services.analysis.store import AnalysisStore, StoredAnalysis

__all__ = [
    "AnalysisPipeline",
    "AnalysisResult",
    "AnalysisStore",
    "DiffIndexer",
    "DiffLineEntry",
    "FileLineIndex",
    "LocatedIssue",
    "ParsedReport",
    "RawIssue",
    "ReportExtractor",
    "Resolution",
    "RiskLevel",
    "SnippetResolver",
    "StoredAnalysis",
]
