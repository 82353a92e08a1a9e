"""
JSON helpers for free-form LLM output.
"""

import json
from typing import Any, Dict


def strip_markdown_fences(response_text: str) -> str:
    """Remove surrounding markdown code fences, if any."""
    cleaned = response_text.strip()

    if cleaned.startswith('```'):
        lines = cleaned.split('\n')
        if lines[0].startswith('```'):
            lines = lines[1:]
        if lines and lines[-1].startswith('```'):
            lines = lines[:-1]
        cleaned = '\n'.join(lines)

    return cleaned.strip()


def extract_json_object(text: str) -> str:
    """
    Return the first balanced ``{...}`` block in ``text``.

    Braces inside JSON strings are skipped.

    Raises:
        ValueError: If no object is found or its braces never balance
    """
    start_idx = text.find('{')
    if start_idx == -1:
        raise ValueError("No JSON object found in response")

    depth = 0
    in_string = False
    escaped = False

    for i in range(start_idx, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return text[start_idx:i + 1]

    raise ValueError("Unmatched braces in JSON response")


def parse_json_object(response_text: str) -> Dict[str, Any]:
    """
    Parse the first JSON object embedded in an LLM response.

    Raises:
        ValueError: If no object can be extracted
        json.JSONDecodeError: If the extracted block is not valid JSON
    """
    json_str = extract_json_object(strip_markdown_fences(response_text))
    return json.loads(json_str)
