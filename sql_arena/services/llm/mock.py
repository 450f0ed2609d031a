import json
import re
from typing import Any, Dict, Optional

from .base import LLMClient, ProviderError


class MockLLM(LLMClient):
    """Deterministic offline client for local demos.

    Structured requests get a payload shaped after the requested schema; free-form
    requests get a short markdown page titled after the topic named in the prompt.
    """

    def complete(self, prompt: str, schema: Optional[Dict[str, Any]] = None) -> str:
        if schema is None:
            return _mock_markdown(prompt)
        required = set(schema.get("required") or [])
        if "questionText" in required:
            topic = _extract_field(prompt, "Topic") or "SQL"
            return json.dumps(
                {
                    "questionText": f"Write a query that practices {topic} on the ORDERS table.",
                    "schemaContext": "Table: ORDERS\n- ORDER_ID (INT)\n- CUSTOMER_ID (INT)\n- ORDER_DATE (DATE)\n- TOTAL (DECIMAL)",
                    "hints": ["Start from the ORDERS table", "Check the curriculum rules for the topic"],
                }
            )
        if "isCorrect" in required:
            return json.dumps(
                {
                    "isCorrect": False,
                    "scoreAwarded": 0,
                    "explanation": "Offline mode: submissions are not graded.",
                    "correctQuery": "SELECT 1;",
                    "optimizationTip": "N/A",
                    "userFeedback": "Configure an AI provider to receive real feedback.",
                    "suggestDifficultyIncrease": False,
                }
            )
        raise ProviderError("MockLLM has no canned payload for this schema.")


class UnavailableLLM(LLMClient):
    """Stand-in for a provider that is requested but not configured."""

    def __init__(self, reason: str):
        self.reason = reason

    def complete(self, prompt: str, schema: Optional[Dict[str, Any]] = None) -> str:
        raise ProviderError(self.reason)


def _extract_field(prompt: str, label: str) -> str | None:
    match = re.search(rf"^\s*{label}:\s*(.+)$", prompt or "", re.MULTILINE)
    if not match:
        return None
    return match.group(1).strip()


def _mock_markdown(prompt: str) -> str:
    match = re.search(r"tutorial on (.+?) in SQL", prompt or "")
    title = match.group(1).strip() if match else "SQL"
    return (
        f"# {title}\n\n"
        "Offline study notes. Configure an AI provider to generate the full tutorial.\n\n"
        "## Syntax & Examples\n\n"
        "```sql\nSELECT 1;\n```\n"
    )
