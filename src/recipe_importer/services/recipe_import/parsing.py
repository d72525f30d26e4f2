"""Shared parsing helpers for durations, servings, difficulty, and text.

Both extractors and the normalizer use these so that a given source string
is interpreted the same way no matter where it was found.
"""

from __future__ import annotations

import math
import re
from typing import Any

from recipe_importer.schemas.enums import Difficulty


MIN_TITLE_LENGTH = 2

# ISO 8601 durations as used by schema.org: P1DT2H30M, PT45M, PT1.5H, PT30M15S
_ISO_DURATION_PATTERN = re.compile(
    r"P(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T(?:(?P<hours>\d+(?:\.\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?",
    re.IGNORECASE,
)

# Free text such as "1 hour 15 min", "1h30m", "45 minutes", "2 hrs"
_TEXT_DURATION_PATTERN = re.compile(
    r"(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>hours?|hrs?|h|minutes?|mins?|m)(?![a-z])",
    re.IGNORECASE,
)

_INTEGER_PATTERN = re.compile(r"\d+")

_DIFFICULTY_KEYWORDS: tuple[tuple[Difficulty, tuple[str, ...]], ...] = (
    (Difficulty.EASY, ("easy", "beginner")),
    (Difficulty.HARD, ("hard", "difficult", "expert")),
)


def parse_duration(value: Any) -> int | None:
    """Parse a duration into whole minutes.

    Accepts ISO 8601 durations ("PT1H30M"), free text with number+unit
    pairs ("1 hour 15 min"), or a bare number ("45"), in that order of
    preference. Seconds are rounded up to the next minute.

    Args:
        value: Duration string or number.

    Returns:
        Total minutes, or None if the input holds no digits at all.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return _ceil_minutes(max(value, 0.0))
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    minutes = _parse_iso_duration(text)
    if minutes is not None:
        return minutes

    matches = list(_TEXT_DURATION_PATTERN.finditer(text))
    if matches:
        total = 0.0
        for match in matches:
            amount = float(match.group("value"))
            if match.group("unit").lower().startswith("h"):
                total += amount * 60
            else:
                total += amount
        return _ceil_minutes(total)

    return _first_integer(text)


def _parse_iso_duration(text: str) -> int | None:
    match = _ISO_DURATION_PATTERN.fullmatch(text)
    if not match or not any(match.groupdict().values()):
        return None

    def part(name: str) -> float:
        raw = match.group(name)
        return float(raw) if raw else 0.0

    total = (
        part("days") * 24 * 60
        + part("hours") * 60
        + part("minutes")
        + part("seconds") / 60
    )
    return _ceil_minutes(total)


def _ceil_minutes(total: float) -> int | None:
    # NaN and infinity mean no value
    if not math.isfinite(total):
        return None
    return math.ceil(total)


def parse_servings(value: Any) -> int | None:
    """Extract a serving count.

    Args:
        value: Yield such as "Serves 4", "4-6 servings", 4, or ["4", "4 servings"].

    Returns:
        The first integer found, or None when there are no digits.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, list):
        for item in value:
            servings = parse_servings(item)
            if servings is not None:
                return servings
        return None
    return _first_integer(str(value))


def map_difficulty(value: str | None) -> Difficulty:
    """Map free-text difficulty onto the closed enum by keyword.

    Unmatched or missing input maps to medium.
    """
    if not value:
        return Difficulty.MEDIUM

    lowered = value.lower()
    for difficulty, keywords in _DIFFICULTY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return difficulty
    return Difficulty.MEDIUM


def _first_integer(text: str) -> int | None:
    match = _INTEGER_PATTERN.search(text)
    return int(match.group()) if match else None


def clean_line(value: str | None) -> str:
    """Collapse all whitespace, newlines included, to single spaces."""
    if not value:
        return ""
    return " ".join(value.split())


def clean_block(value: str | None) -> str:
    """Normalize whitespace in a multi-line block.

    Runs of whitespace inside each line become one space, every line is
    trimmed, and consecutive blank lines collapse to a single blank line.
    """
    if not value:
        return ""

    lines: list[str] = []
    previous_blank = True
    for raw_line in value.splitlines():
        line = clean_line(raw_line)
        if not line:
            if not previous_blank:
                lines.append("")
            previous_blank = True
            continue
        lines.append(line)
        previous_blank = False

    return "\n".join(lines).strip()


def is_usable_title(value: str | None) -> bool:
    """Check whether a title survives cleaning with enough characters."""
    return len(clean_line(value)) >= MIN_TITLE_LENGTH
