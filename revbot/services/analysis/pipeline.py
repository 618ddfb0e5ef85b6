"""Analysis pipeline orchestration."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import structlog

from revbot.core.exceptions import EmptyDiffError
from revbot.services.analysis.diff_indexer import DiffIndexer
from revbot.services.analysis.report_extractor import ReportExtractor, RiskLevel
from revbot.services.analysis.snippet_resolver import Resolution, SnippetResolver

logger = structlog.get_logger()


@dataclass(frozen=True)
class AnalysisResult:
    """Result handed to the posting layer."""

    score: int | None
    risk_level: RiskLevel | None
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    files_indexed: int = 0
    resolution_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "risk_level": self.risk_level.value if self.risk_level else None,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
        }


class AnalysisPipeline:
    """Turns a PR diff and an analysis report into line-anchored findings."""

    def __init__(
        self,
        indexer: DiffIndexer | None = None,
        extractor: ReportExtractor | None = None,
        resolver: SnippetResolver | None = None,
    ) -> None:
        self.indexer = indexer or DiffIndexer()
        self.extractor = extractor or ReportExtractor()
        self.resolver = resolver or SnippetResolver()

    def analyze(self, diff_text: str | None, report_text: str | None) -> AnalysisResult:
        """
        Run the full analysis for one pull request.

        Args:
            diff_text: Unified diff of the pull request.
            report_text: Raw output of the analysis tool.

        Returns:
            AnalysisResult with score, risk level, located issues and
            recommendations.

        Raises:
            EmptyDiffError: If the diff is missing or blank.
        """
        if not diff_text or not diff_text.strip():
            raise EmptyDiffError()

        logger.info("Starting analysis", diff_chars=len(diff_text))

        index = self.indexer.index(diff_text)
        logger.info(
            "Indexed diff",
            files=len(index),
            lines=self.indexer.count_lines(index),
        )

        report = self.extractor.extract(report_text or "")
        located = self.resolver.locate(report.issues, index)

        counts = Counter(issue.resolution.value for issue in located)
        resolution_counts = {resolution.value: counts[resolution.value] for resolution in Resolution}

        logger.info(
            "Analysis completed",
            score=report.score,
            risk_level=report.risk_level,
            **resolution_counts,
        )

        return AnalysisResult(
            score=report.score,
            risk_level=report.risk_level,
            issues=[str(issue) for issue in located],
            recommendations=list(report.recommendations),
            files_indexed=len(index),
            resolution_counts=resolution_counts,
        )
