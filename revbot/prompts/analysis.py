"""Prompt defining the report format the analysis tool is asked to produce."""

ANALYSIS_PROMPT = """Analyze this code diff and provide ONLY the following analysis.
Do not include any conversation, thinking, or explanation.
Output ONLY these exact lines (fill in the values):

SCORE: <number 0-100>
RISK: <LOW|MEDIUM|HIGH>
ISSUES:
- file=<relative file path> snippet=<exact code line from diff> reason=<issue description>
- file=<relative file path> snippet=<exact code line from diff> reason=<issue description>
RECOMMENDATIONS:
- <recommendation 1>
- <recommendation 2>

Rules:
- Do NOT include line numbers
- The snippet must be the exact code line from the diff (trimmed, no + or - prefix)
- Include file path, code snippet, and reason for each issue"""
