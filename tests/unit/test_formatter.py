import pytest

from revbot.core.exceptions import EmptyDiffError
from revbot.services.analysis.formatter import (
    analysis_to_review,
    build_check_run_output,
    build_failed_check_output,
    check_conclusion,
    format_summary,
    format_summary_comment,
    parse_located_issue,
)
from revbot.services.analysis.pipeline import AnalysisResult
from revbot.services.analysis.report_extractor import RiskLevel
from revbot.services.github.models import ReviewComment


class TestFormatter:
    """Tests for review formatter."""

    @pytest.fixture
    def result(self) -> AnalysisResult:
        return AnalysisResult(
            score=80,
            risk_level=RiskLevel.LOW,
            issues=[
                "src/app.js:11 - remove debug statement",
                "src/app.js - unclear naming (line not found)",
                "lib/unrelated.js - unused helper (file not in diff)",
            ],
            recommendations=["Remove console.log before merging"],
        )

    def test_parse_located_issue(self) -> None:
        comment = parse_located_issue("src/server.js:26 - Incorrect HTTP status code")

        assert comment == ReviewComment(
            path="src/server.js",
            line=26,
            body="⚠️ Incorrect HTTP status code",
        )

    def test_parse_located_issue_reason_with_colon_digits(self) -> None:
        comment = parse_located_issue("a.py:3 - timeout of 10:30 is too long")

        assert comment is not None
        assert comment.path == "a.py"
        assert comment.line == 3
        assert comment.body == "⚠️ timeout of 10:30 is too long"

    @pytest.mark.parametrize(
        "issue",
        [
            "src/app.js - unclear naming (line not found)",
            "lib/unrelated.js - unused helper (file not in diff)",
            "no structure at all",
        ],
    )
    def test_parse_located_issue_without_line(self, issue: str) -> None:
        assert parse_located_issue(issue) is None

    @pytest.mark.parametrize(
        ("risk_level", "expected"),
        [
            (RiskLevel.HIGH, "failure"),
            (RiskLevel.MEDIUM, "neutral"),
            (RiskLevel.LOW, "success"),
            (None, "success"),
        ],
    )
    def test_check_conclusion(self, risk_level: RiskLevel | None, expected: str) -> None:
        assert check_conclusion(risk_level) == expected

    def test_format_summary(self, result: AnalysisResult) -> None:
        summary = format_summary(result)

        assert summary == (
            "**Quality Score:** 80/100\n"
            "**Risk Level:** LOW\n\n"
            "### Issues Found:\n"
            "1. src/app.js:11 - remove debug statement\n"
            "2. src/app.js - unclear naming (line not found)\n"
            "3. lib/unrelated.js - unused helper (file not in diff)\n\n"
            "### Recommendations:\n"
            "1. Remove console.log before merging"
        )

    def test_format_summary_empty(self) -> None:
        summary = format_summary(AnalysisResult(score=None, risk_level=None))

        assert "**Quality Score:** N/A/100" in summary
        assert "**Risk Level:** N/A" in summary
        assert "No major issues detected" in summary
        assert "No recommendations needed" in summary

    def test_format_summary_caps_items(self) -> None:
        result = AnalysisResult(
            score=10,
            risk_level=RiskLevel.HIGH,
            issues=[f"a.py:{n} - issue {n}" for n in range(1, 15)],
        )

        summary = format_summary(result, max_items=3)

        assert "3. a.py:3 - issue 3" in summary
        assert "a.py:4" not in summary

    def test_format_summary_comment(self) -> None:
        body = format_summary_comment("**Quality Score:** 80/100")

        assert body.startswith("## 🤖 RevBot Review Results\n\n**Quality Score:** 80/100")
        assert body.endswith("*Powered by RevBot Reviewer*")

    def test_analysis_to_review_keeps_only_anchored_issues(self, result: AnalysisResult) -> None:
        review = analysis_to_review(result)

        assert review is not None
        assert review.event == "COMMENT"
        assert review.comments == [
            ReviewComment(path="src/app.js", line=11, body="⚠️ remove debug statement")
        ]

    def test_analysis_to_review_without_lines(self) -> None:
        result = AnalysisResult(
            score=50,
            risk_level=RiskLevel.MEDIUM,
            issues=["x.py - nothing anchored (line not found)"],
        )

        assert analysis_to_review(result) is None

    def test_build_check_run_output(self, result: AnalysisResult) -> None:
        output = build_check_run_output(result)

        assert output.status == "completed"
        assert output.conclusion == "success"
        assert output.title == "Code Review Complete - SUCCESS"
        assert output.summary == format_summary(result)

    def test_build_failed_check_output(self) -> None:
        output = build_failed_check_output(EmptyDiffError())

        assert output.conclusion == "failure"
        assert output.title == "Code Review Failed"
        assert output.summary == (
            "Analysis encountered an error: Failed to fetch PR diff or PR is empty"
        )

    def test_build_failed_check_output_plain_exception(self) -> None:
        output = build_failed_check_output(RuntimeError("tool crashed"))

        assert output.summary == "Analysis encountered an error: tool crashed"
