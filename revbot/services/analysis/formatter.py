"""Formatting of analysis results for posting to GitHub."""

import re

from revbot.services.analysis.pipeline import AnalysisResult
from revbot.services.analysis.report_extractor import RiskLevel
from revbot.services.github.models import CheckConclusion, CheckRunOutput, Review, ReviewComment

# Downstream contract for located issue strings: "path:line - message"
LOCATED_ISSUE_PATTERN = re.compile(r"^(.+?):(\d+)\s*-\s*(.+)$")

CONCLUSIONS: dict[RiskLevel | None, CheckConclusion] = {
    RiskLevel.HIGH: "failure",
    RiskLevel.MEDIUM: "neutral",
}

DEFAULT_MAX_ITEMS = 10


def parse_located_issue(issue: str) -> ReviewComment | None:
    """Turn ``path:line - message`` into an inline comment, if it has a line."""
    match = LOCATED_ISSUE_PATTERN.match(issue)
    if not match:
        return None

    path, line, message = match.groups()
    return ReviewComment(
        path=path.strip(),
        line=int(line),
        body=f"⚠️ {message.strip()}",
    )


def check_conclusion(risk_level: RiskLevel | None) -> CheckConclusion:
    """Map the risk level onto a check run conclusion."""
    return CONCLUSIONS.get(risk_level, "success")


def _numbered(items: list[str], max_items: int) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items[:max_items], start=1))


def format_summary(result: AnalysisResult, max_items: int = DEFAULT_MAX_ITEMS) -> str:
    """Format the markdown summary shared by the check run and the PR comment."""
    score = "N/A" if result.score is None else str(result.score)
    risk = result.risk_level.value if result.risk_level else "N/A"

    issues = _numbered(result.issues, max_items) or "No major issues detected"
    recommendations = _numbered(result.recommendations, max_items) or "No recommendations needed"

    return (
        f"**Quality Score:** {score}/100\n"
        f"**Risk Level:** {risk}\n\n"
        f"### Issues Found:\n{issues}\n\n"
        f"### Recommendations:\n{recommendations}"
    )


def format_summary_comment(summary: str) -> str:
    """Wrap a summary into the standalone PR comment."""
    return f"## 🤖 RevBot Review Results\n\n{summary}\n\n---\n*Powered by RevBot Reviewer*"


def analysis_to_review(result: AnalysisResult) -> Review | None:
    """
    Build an inline review from the located issues.

    Issues without a line number are left to the summary comment. Returns
    None when no issue could be anchored to a line.
    """
    comments = [
        comment
        for comment in (parse_located_issue(issue) for issue in result.issues)
        if comment is not None
    ]
    if not comments:
        return None
    return Review(event="COMMENT", comments=comments)


def build_check_run_output(
    result: AnalysisResult,
    max_items: int = DEFAULT_MAX_ITEMS,
) -> CheckRunOutput:
    """Check run payload for a completed analysis."""
    conclusion = check_conclusion(result.risk_level)
    return CheckRunOutput(
        conclusion=conclusion,
        title=f"Code Review Complete - {conclusion.upper()}",
        summary=format_summary(result, max_items=max_items),
    )


def build_failed_check_output(error: Exception) -> CheckRunOutput:
    """Check run payload for an analysis that could not run."""
    message = getattr(error, "message", None) or str(error)
    return CheckRunOutput(
        conclusion="failure",
        title="Code Review Failed",
        summary=f"Analysis encountered an error: {message}",
    )
