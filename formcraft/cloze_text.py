"""
Cloze text parser.

Cloze questions mark blanks inline with double braces:

    "The capital of France is {{Paris}}."

The same pattern drives blank configuration in the builder, the fill-in
rendering, completeness checks and scoring, so all of them agree on how many
blanks a text has and in what order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Non-greedy up to the nearest "}}"; nested or escaped braces are unsupported
BLANK_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
BLANK_KEY_PATTERN = re.compile(r"^blank-(\d+)$")


@dataclass(frozen=True)
class ParsedBlank:
    """One {{...}} placeholder found in cloze text."""
    index: int  # 0-based occurrence order, left to right
    placeholder: str  # trimmed inner text
    start: int
    end: int

    @property
    def position(self) -> int:
        return self.index

    @property
    def key(self) -> str:
        return blank_key(self.index)


def parse_blanks(text: str) -> list[ParsedBlank]:
    """Return the placeholders in ``text`` in left-to-right order."""
    if not text:
        return []
    return [
        ParsedBlank(index=i, placeholder=match.group(1).strip(), start=match.start(), end=match.end())
        for i, match in enumerate(BLANK_PATTERN.finditer(text))
    ]


def count_blanks(text: str) -> int:
    return len(parse_blanks(text))


def split_text(text: str) -> list[str | ParsedBlank]:
    """
    Split cloze text into literal segments and blanks for rendering.

    Literal segments are strings; each blank is a ParsedBlank that the caller
    replaces with an input control. Empty literal segments are dropped.
    """
    parts: list[str | ParsedBlank] = []
    last_end = 0
    for blank in parse_blanks(text):
        if blank.start > last_end:
            parts.append(text[last_end:blank.start])
        parts.append(blank)
        last_end = blank.end
    if last_end < len(text or ""):
        parts.append(text[last_end:])
    return parts


def has_unbalanced_braces(text: str) -> bool:
    """True if '{{' or '}}' appears outside a matched placeholder."""
    remainder = BLANK_PATTERN.sub("", text or "")
    return "{{" in remainder or "}}" in remainder


def blank_key(index: int) -> str:
    """Answer key for the blank at ``index``."""
    return f"blank-{index}"


def blank_index(key: str) -> int | None:
    """Inverse of blank_key; None for keys that are not blank keys."""
    match = BLANK_KEY_PATTERN.match(key)
    return int(match.group(1)) if match else None
