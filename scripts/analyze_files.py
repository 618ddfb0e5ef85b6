"""Run the analysis pipeline on a saved diff and report."""

import sys
from pathlib import Path

from revbot.core.exceptions import AnalysisError
from revbot.prompts.analysis import ANALYSIS_PROMPT
from revbot.services.analysis.formatter import build_check_run_output
from revbot.services.analysis.pipeline import AnalysisPipeline


def main() -> None:
    if sys.argv[1:] == ["--prompt"]:
        # Prompt to hand the analysis tool so its report can be parsed
        print(ANALYSIS_PROMPT)
        return

    if len(sys.argv) != 3:
        print("Usage: python scripts/analyze_files.py <diff_file> <report_file>")
        print("       python scripts/analyze_files.py --prompt")
        print("Example: python scripts/analyze_files.py pr.diff cline_output.txt")
        print("\nThe report must follow this format:\n")
        print(ANALYSIS_PROMPT)
        sys.exit(1)

    diff_text = Path(sys.argv[1]).read_text(encoding="utf-8")
    report_text = Path(sys.argv[2]).read_text(encoding="utf-8")

    print(f"🔍 Analyzing {sys.argv[1]} against {sys.argv[2]}")
    print("-" * 50)

    try:
        result = AnalysisPipeline().analyze(diff_text, report_text)
    except AnalysisError as e:
        print(f"\n❌ Error: {e.message}")
        sys.exit(1)

    output = build_check_run_output(result)
    print(f"\n✅ {output.title}")
    print(f"   Files in diff: {result.files_indexed}")
    for resolution, count in result.resolution_counts.items():
        print(f"   {resolution}: {count}")
    print()
    print("Summary:")
    print("-" * 50)
    print(output.summary)


if __name__ == "__main__":
    main()
