import re
from dataclasses import dataclass

DEV_NULL = "/dev/null"


@dataclass(frozen=True)
class DiffLineEntry:
    """A single line as it exists in the new version of a file."""

    line_number: int
    content: str


# Normalized path -> post-change lines, in diff order
FileLineIndex = dict[str, list[DiffLineEntry]]


def strip_diff_prefix(path: str) -> str:
    """Drop the ``a/`` or ``b/`` prefix git puts on diff paths."""
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


class DiffIndexer:
    """Builds a per-file index of new-file line numbers from a unified diff."""

    # Regex patterns
    LINE_SPLIT_PATTERN = re.compile(r"\r?\n")
    FILE_HEADER_PATTERN = re.compile(r"^diff --git ")
    HUNK_HEADER_PATTERN = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")

    def index(self, diff_text: str) -> FileLineIndex:
        """Index every added and context line of a unified diff by file."""
        files: FileLineIndex = {}
        current_file: str | None = None
        new_line_no = 0

        for line in self.LINE_SPLIT_PATTERN.split(diff_text):
            # New file section; nothing is recorded until its +++ line
            if self.FILE_HEADER_PATTERN.match(line):
                current_file = None
                continue

            # New file line (+++ b/file)
            if line.startswith("+++ "):
                # Plain `diff -u` appends a tab and a timestamp
                path = line[4:].split("\t", 1)[0].strip()
                if path == DEV_NULL:
                    current_file = None
                    continue
                current_file = strip_diff_prefix(path)
                files.setdefault(current_file, [])
                continue

            # Hunk header; a malformed one leaves the counter alone
            hunk_match = self.HUNK_HEADER_PATTERN.match(line)
            if hunk_match:
                new_line_no = int(hunk_match.group(1)) - 1
                continue
            if line.startswith("@@"):
                continue

            if current_file is None:
                continue

            if line.startswith("+") and not line.startswith("+++"):
                new_line_no += 1
                files[current_file].append(DiffLineEntry(new_line_no, line[1:]))
            elif line.startswith(" "):
                new_line_no += 1
                files[current_file].append(DiffLineEntry(new_line_no, line[1:]))
            # "-" lines are gone from the new file, "\ No newline" is metadata

        return files

    def count_lines(self, index: FileLineIndex) -> int:
        """Total number of indexed lines across all files."""
        return sum(len(entries) for entries in index.values())
