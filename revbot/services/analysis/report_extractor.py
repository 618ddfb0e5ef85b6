"""Extraction of structured results from free-text analysis reports.

The report comes from a non-deterministic text generator. It may echo the
requested output format, repeat section headers or wrap the answer in
conversational filler. The grammar below is deliberately tolerant:

* markers (``SCORE:``, ``RISK:``, ``ISSUES:``, ``RECOMMENDATIONS:``) match
  case-insensitively and the last occurrence of each one wins;
* bullets that look like unfilled placeholders (too short, or containing
  ``<``/``>``) are skipped;
* issue bullets missing any of ``file=``, ``snippet=`` or ``reason=`` are
  dropped without error;
* the recommendations list ends at the first non-blank line that is not a
  bullet.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

import structlog

logger = structlog.get_logger()


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class RawIssue:
    """An issue exactly as reported, before resolution against the diff."""

    file: str
    snippet: str
    reason: str


@dataclass(frozen=True)
class ParsedReport:
    """Structured view of an analysis report."""

    score: int | None = None
    risk_level: RiskLevel | None = None
    issues: list[RawIssue] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReportSections:
    """Text spans that follow the authoritative occurrence of each marker."""

    score: str | None = None
    risk: str | None = None
    issues: str | None = None
    recommendations: str | None = None


def _marker(name: str) -> re.Pattern[str]:
    return re.compile(re.escape(name), re.IGNORECASE)


class ReportExtractor:
    """Tolerant scanner for the SCORE / RISK / ISSUES / RECOMMENDATIONS format."""

    SCORE_MARKER = _marker("SCORE:")
    RISK_MARKER = _marker("RISK:")
    ISSUES_MARKER = _marker("ISSUES:")
    RECOMMENDATIONS_MARKER = _marker("RECOMMENDATIONS:")

    LINE_SPLIT_PATTERN = re.compile(r"\r?\n")
    SCORE_VALUE_PATTERN = re.compile(r"\s*(\d+)")
    RISK_VALUE_PATTERN = re.compile(r"\s*(LOW|MEDIUM|HIGH)\b", re.IGNORECASE)
    BULLET_PATTERN = re.compile(r"^[-•*]\s+(.+)$")
    PLACEHOLDER_PATTERN = re.compile(r"[<>]")
    MIN_ITEM_LENGTH = 4

    FILE_FIELD_PATTERN = re.compile(r"file=(\S+)")
    SNIPPET_FIELD_PATTERN = re.compile(r"snippet=(.+?)\s+reason=")
    REASON_FIELD_PATTERN = re.compile(r"reason=(.+)$")

    def extract(self, report_text: str) -> ParsedReport:
        """Parse a report into score, risk level, raw issues and recommendations."""
        sections = self.locate_sections(report_text)

        report = ParsedReport(
            score=self._parse_score(sections.score),
            risk_level=self._parse_risk(sections.risk),
            issues=self._parse_issues(sections.issues),
            recommendations=self._parse_recommendations(sections.recommendations),
        )

        logger.debug(
            "Parsed analysis report",
            score=report.score,
            risk_level=report.risk_level,
            issues=len(report.issues),
            recommendations=len(report.recommendations),
        )
        return report

    def locate_sections(self, text: str) -> ReportSections:
        """Find where each section starts, using the last marker occurrence."""
        issues: str | None = None
        issues_start = self._after_last(self.ISSUES_MARKER, text)
        if issues_start is not None:
            next_rec = self.RECOMMENDATIONS_MARKER.search(text, issues_start)
            issues_end = next_rec.start() if next_rec else len(text)
            issues = text[issues_start:issues_end]

        return ReportSections(
            score=self._tail(self.SCORE_MARKER, text),
            risk=self._tail(self.RISK_MARKER, text),
            issues=issues,
            recommendations=self._tail(self.RECOMMENDATIONS_MARKER, text),
        )

    def bullet_item(self, line: str) -> str | None:
        """Return the trimmed content of a bullet line, or None if it is not one."""
        match = self.BULLET_PATTERN.match(line.strip())
        if not match:
            return None
        return match.group(1).strip()

    def is_placeholder(self, item: str) -> bool:
        """Whether a bullet looks like an unfilled template entry."""
        return len(item) < self.MIN_ITEM_LENGTH or bool(self.PLACEHOLDER_PATTERN.search(item))

    def _after_last(self, marker: re.Pattern[str], text: str) -> int | None:
        last = None
        for last in marker.finditer(text):
            pass
        return last.end() if last else None

    def _tail(self, marker: re.Pattern[str], text: str) -> str | None:
        start = self._after_last(marker, text)
        return None if start is None else text[start:]

    def _parse_score(self, span: str | None) -> int | None:
        if span is None:
            return None
        match = self.SCORE_VALUE_PATTERN.match(span)
        # Out-of-range scores are passed through untouched
        return int(match.group(1)) if match else None

    def _parse_risk(self, span: str | None) -> RiskLevel | None:
        if span is None:
            return None
        match = self.RISK_VALUE_PATTERN.match(span)
        return RiskLevel(match.group(1).upper()) if match else None

    def _parse_issues(self, span: str | None) -> list[RawIssue]:
        if span is None:
            return []

        issues: list[RawIssue] = []
        dropped = 0
        for line in self.LINE_SPLIT_PATTERN.split(span):
            item = self.bullet_item(line)
            if item is None or self.is_placeholder(item):
                continue

            issue = self._parse_issue_fields(item)
            if issue is None:
                dropped += 1
                continue
            issues.append(issue)

        if dropped:
            logger.warning("Dropped malformed issue lines", count=dropped)
        return issues

    def _parse_issue_fields(self, item: str) -> RawIssue | None:
        file_match = self.FILE_FIELD_PATTERN.search(item)
        snippet_match = self.SNIPPET_FIELD_PATTERN.search(item)
        reason_match = self.REASON_FIELD_PATTERN.search(item)
        if not (file_match and snippet_match and reason_match):
            return None
        return RawIssue(
            file=file_match.group(1).strip(),
            snippet=snippet_match.group(1).strip(),
            reason=reason_match.group(1).strip(),
        )

    def _parse_recommendations(self, span: str | None) -> list[str]:
        if span is None:
            return []

        recommendations: list[str] = []
        for line in self.LINE_SPLIT_PATTERN.split(span):
            if not line.strip():
                continue
            item = self.bullet_item(line)
            if item is None:
                # First non-blank, non-bullet line closes the list
                break
            if not self.is_placeholder(item):
                recommendations.append(item)
        return recommendations
