"""Plain-text summaries for completed tasks."""

import re
from typing import Optional

SUMMARY_MAX_LENGTH = 250
SUMMARY_DESCRIPTION_LENGTH = 200

_MARKDOWN_PATTERNS = [
    (re.compile(r"```.*?```", re.DOTALL), ""),  # code blocks
    (re.compile(r"#+\s"), ""),  # headers
    (re.compile(r"\*\*"), ""),  # bold
    (re.compile(r"\*"), ""),  # italic
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),  # links keep their text
]


def extract_summary(text: Optional[str], max_length: int = 100) -> str:
    """Strip markdown from ``text`` and truncate it to ``max_length`` characters."""
    if not text:
        return ""

    plain = text
    for pattern, replacement in _MARKDOWN_PATTERNS:
        plain = pattern.sub(replacement, plain)
    plain = re.sub(r"\s+", " ", plain).strip()

    if len(plain) <= max_length:
        return plain
    return plain[:max_length - 3] + "..."


def generate_task_summary(name: str, description: str,
                          completion_details: Optional[str] = None) -> str:
    """Build a completion summary when the caller did not supply one.

    Args:
        name: Task name
        description: Task description
        completion_details: Optional free text describing the outcome

    Returns:
        Summary of at most SUMMARY_MAX_LENGTH characters
    """
    if completion_details:
        return extract_summary(completion_details, SUMMARY_MAX_LENGTH)

    base = (
        f"{name} has been successfully completed. This task involved "
        f"{extract_summary(description, SUMMARY_DESCRIPTION_LENGTH)}"
    )
    return extract_summary(base, SUMMARY_MAX_LENGTH)
