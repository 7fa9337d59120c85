"""Pulls the JSON object out of a free-text AI reply.

Providers wrap JSON in prose or markdown fences, so the reply is scanned
for outermost balanced ``{...}`` spans (ignoring braces inside strings)
and the first one that parses as an object wins.
"""

import json
from typing import Any

from credential_verifier.vision.exceptions import MalformedResponseError


def _matching_brace(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def extract_json_object(text: str) -> dict[str, Any]:
    """Return the first balanced JSON object embedded in *text*.

    Raises:
        MalformedResponseError: if no balanced span parses as a JSON object.
    """
    if not text:
        raise MalformedResponseError("AI returned an empty response")

    last_error: str | None = None
    start = text.find("{")
    while start != -1:
        end = _matching_brace(text, start)
        if end is None:
            start = text.find("{", start + 1)
            continue
        try:
            parsed = json.loads(text[start : end + 1])
        except json.JSONDecodeError as exc:
            last_error = str(exc)
        else:
            if isinstance(parsed, dict):
                return parsed
            last_error = "JSON value is not an object"
        start = text.find("{", end + 1)

    if last_error is not None:
        raise MalformedResponseError(f"Invalid JSON in AI response: {last_error}")
    raise MalformedResponseError("No JSON object found in AI response")
