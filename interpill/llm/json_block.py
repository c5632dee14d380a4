"""
Locate a JSON object inside free-form model output.

Models often wrap structured answers in a fenced ```json block or surround them
with prose. This is a best-effort heuristic, not a tokenizer: the returned text
is not guaranteed to parse, and callers must validate it.
"""

from __future__ import annotations

import re

_FENCED_JSON = re.compile(r"```json\s*(.*?)```", re.IGNORECASE | re.DOTALL)


def extract_json_block(text: str | None) -> str | None:
    """
    Return the most likely embedded JSON object text, or None.

    Order of preference:
        1. The trimmed interior of the first ```json ... ``` fence
        2. The span from the first "{" to the last "}" inclusive

    Examples:
        >>> extract_json_block('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
        >>> extract_json_block('Result: {"a": {"b": 2}} done')
        '{"a": {"b": 2}}'
        >>> extract_json_block("no json here") is None
        True
    """
    if not text:
        return None

    match = _FENCED_JSON.search(text)
    if match:
        return match.group(1).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and start < end:
        return text[start : end + 1]

    return None
