import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from revbot.services.analysis.diff_indexer import DiffLineEntry, FileLineIndex, strip_diff_prefix
from revbot.services.analysis.report_extractor import RawIssue

logger = structlog.get_logger()

WHITESPACE_PATTERN = re.compile(r"\s+")


class Resolution(str, Enum):
    RESOLVED = "resolved"
    LINE_NOT_FOUND = "line_not_found"
    FILE_NOT_IN_DIFF = "file_not_in_diff"


@dataclass(frozen=True)
class LocatedIssue:
    """An issue resolved (as far as possible) against the diff."""

    path: str
    reason: str
    resolution: Resolution
    line: int | None = None

    def __str__(self) -> str:
        if self.resolution == Resolution.RESOLVED:
            return f"{self.path}:{self.line} - {self.reason}"
        if self.resolution == Resolution.LINE_NOT_FOUND:
            return f"{self.path} - {self.reason} (line not found)"
        return f"{self.path} - {self.reason} (file not in diff)"


def normalize_code(text: str) -> str:
    """Trim and collapse whitespace runs to single spaces."""
    return WHITESPACE_PATTERN.sub(" ", text.strip())


def paths_match(diff_path: str, reported_path: str) -> bool:
    """Equal paths, or one is a trailing run of ``/`` segments of the other."""
    return (
        diff_path == reported_path
        or diff_path.endswith("/" + reported_path)
        or reported_path.endswith("/" + diff_path)
    )


class SnippetResolver:
    """Maps reported code snippets back to new-file line numbers."""

    def resolve(self, issues: Iterable[RawIssue], index: FileLineIndex) -> list[str]:
        """Resolve issues to ``path:line - reason`` strings, keeping input order."""
        return [str(located) for located in self.locate(issues, index)]

    def locate(self, issues: Iterable[RawIssue], index: FileLineIndex) -> list[LocatedIssue]:
        """Resolve issues to structured records, keeping input order."""
        return [self.locate_issue(issue, index) for issue in issues]

    def locate_issue(self, issue: RawIssue, index: FileLineIndex) -> LocatedIssue:
        matched_file = self.find_file(issue.file, index)
        if matched_file is None:
            logger.warning("Issue file not in diff", file=issue.file)
            return LocatedIssue(
                path=issue.file,
                reason=issue.reason,
                resolution=Resolution.FILE_NOT_IN_DIFF,
            )

        snippet = normalize_code(issue.snippet)
        line = self.find_line(snippet, index[matched_file])
        if line is None:
            logger.warning(
                "Could not match snippet",
                file=matched_file,
                snippet=snippet[:40],
            )
            return LocatedIssue(
                path=matched_file,
                reason=issue.reason,
                resolution=Resolution.LINE_NOT_FOUND,
            )

        logger.debug(
            "Matched snippet",
            file=matched_file,
            line=line,
            snippet=snippet[:40],
        )
        return LocatedIssue(
            path=matched_file,
            reason=issue.reason,
            resolution=Resolution.RESOLVED,
            line=line,
        )

    def find_file(self, reported_path: str, index: FileLineIndex) -> str | None:
        """First indexed file matching the reported path, in diff order."""
        normalized = strip_diff_prefix(reported_path.strip())
        for diff_path in index:
            if paths_match(diff_path, normalized):
                return diff_path
        return None

    def find_line(self, snippet: str, entries: Sequence[DiffLineEntry]) -> int | None:
        """Line number of the best match for an already normalized snippet."""
        normalized = [(entry.line_number, normalize_code(entry.content)) for entry in entries]

        # Exact match takes priority over containment
        for line_number, content in normalized:
            if content == snippet:
                return line_number

        for line_number, content in normalized:
            # A blank line is contained in every snippet
            if snippet in content or content in snippet:
                return line_number

        return None
