"""Sample analysis reports for testing."""

from revbot.prompts.analysis import ANALYSIS_PROMPT

APP_JS_REPORT = """SCORE: 80
RISK: LOW
ISSUES:
- file=src/app.js snippet=console.log("debug"); reason=remove debug statement
RECOMMENDATIONS:
- Remove console.log before merging
"""

# The tool restates the requested format before answering
ECHOED_PROMPT_REPORT = (
    ANALYSIS_PROMPT
    + """

Looking at the diff now.

SCORE: 65
RISK: medium
ISSUES:
- file=b/server.py snippet=payload = json.loads(data) reason=json.loads can raise on malformed input
- file=server.py snippet=import json
RECOMMENDATIONS:
- Validate request bodies before decoding
- Add a test for malformed payloads
"""
)

CONVERSATIONAL_REPORT = """Sure! Here is my analysis of the change.

Score: 72
Risk: High

Issues:
* file=src/main.py snippet=result = a + b reason=shadows builtin naming conventions
• file=src/utils.py snippet=return x is not None reason=missing type hints
- file=lib/unrelated.js snippet=foo() reason=unused helper

Recommendations:
- Add type hints to public helpers
- Cover validate_input with tests

Task completed. Checkpoint created.
"""
