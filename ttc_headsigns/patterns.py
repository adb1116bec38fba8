"""Centralized pattern registry for TTC label rewrites.

Every agency-specific regex used by the field cleaners lives here so that
each rule can be unit-tested in isolation and composed declaratively.

Design philosophy:
- Declarative over imperative: rules are data, not nested conditionals
- Order is explicit: callers pass the tuple of rules they apply
- Total: every rule accepts any string (including "") and never raises

Usage:
    cleaned = apply_rewrites(text, ABBREVIATION_FIXES)
    cleaned = GO.apply(cleaned)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Iterable, Union

Replacement = Union[str, Callable[[re.Match[str]], str]]


@dataclass(frozen=True)
class Rewrite:
    """A match/replace rule.

    Attributes:
        name: Unique identifier for this rule (used in logging and tests)
        pattern: Compiled regex; every match is replaced
        replacement: Replacement template or callable, as accepted by ``re.sub``
        description: Human-readable explanation
    """

    name: str
    pattern: re.Pattern[str]
    replacement: Replacement
    description: str = ""

    def matches(self, text: str) -> bool:
        """Return True if this rule would rewrite ``text``."""
        return bool(self.pattern.search(text))

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text) if text else text


def apply_rewrites(text: str, rules: Iterable[Rewrite]) -> str:
    """Apply ``rules`` left to right."""
    return reduce(lambda acc, rule: rule.apply(acc), rules, text)


def clean_words(*words: str) -> re.Pattern[str]:
    """Match any of ``words`` as whole words, case-insensitive.

    A boundary is the start/end of the string or a non-word character. Spaces
    inside a phrase match any run of whitespace.
    """
    alternatives = "|".join(re.escape(w).replace(r"\ ", r"\s+") for w in words)
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)


def keep_word(word: str) -> Rewrite:
    """Restore the canonical spelling of ``word`` after generic title-casing."""
    return Rewrite(
        name=f"keep_{word.lower()}",
        pattern=clean_words(word),
        replacement=word,
        description=f"Keep {word!r} as written",
    )


def abbreviation(name: str, dotted: str, canonical: str) -> Rewrite:
    """Collapse a dotted abbreviation to ``canonical``.

    The undotted whole-word form is matched too, so ``Hs`` (what title-casing
    makes of ``HS``) comes back as ``HS``.
    """
    return Rewrite(
        name=name,
        pattern=re.compile(
            rf"(?<!\w)(?:{dotted}|{re.escape(canonical)}(?!\w))",
            re.IGNORECASE,
        ),
        replacement=canonical,
        description=f"{dotted} -> {canonical}",
    )


# ---------------------------------------------------------------------------
# Abbreviations
# ---------------------------------------------------------------------------

HS = abbreviation("high_school", r"H\.S\.", "HS")
SS = abbreviation("secondary_school", r"S\.S\.", "SS")
CNR = abbreviation("cnr", r"C\.N\.R\.", "CNR")
CN = abbreviation("cn", r"C\.\s*N\.", "CN")
CI = abbreviation("collegiate_institute", r"C\.I\.", "CI")
II = Rewrite(
    name="roman_two",
    pattern=clean_words("II"),
    replacement="II",
    description="Roman numeral two stays upper case",
)

# Order matters: CNR before CN
ABBREVIATION_FIXES: tuple[Rewrite, ...] = (HS, SS, CNR, CN, CI, II)

GO = keep_word("GO")

# ---------------------------------------------------------------------------
# Noise removal
# ---------------------------------------------------------------------------

SIDE = Rewrite(
    name="side",
    pattern=clean_words("side"),
    replacement="",
    description="Drop the standalone word 'side' (North Side -> North)",
)

SHORT_TURN = Rewrite(
    name="short_turn",
    pattern=clean_words("short turn"),
    replacement="",
    description="Drop 'short turn' operational notes",
)

ENDS_EXTRA_FARE_REQUIRED = Rewrite(
    name="extra_fare_required",
    pattern=re.compile(
        r"(?:\s*-)?\s*(?<!\w)extra\s+fare\s+required(?!\w).*$",
        re.IGNORECASE | re.DOTALL,
    ),
    replacement="",
    description="Drop trailing '- extra fare required ...' notices",
)


def _keep_letter_and_towards(match: re.Match[str]) -> str:
    return (match.group("letter") or "") + match.group("rest")


KEEP_LETTER_AND_TOWARDS = Rewrite(
    name="keep_letter_and_towards",
    pattern=re.compile(
        r"^"
        r"(?:[a-z]+\s-\s)?"  # EAST/WEST/NORTH/SOUTH -
        r"(?:\d+(?:/\d+)?)?"  # 000(/000)
        r"(?P<letter>[a-z]\s)?"  # A (from 000A) <- KEEP
        r"(?:.*\b(?:towards|to))?"  # before to/towards
        r"\s(?P<rest>.*)$",  # after to/towards <- KEEP
        re.IGNORECASE,
    ),
    replacement=_keep_letter_and_towards,
    description="'East - 52a Lawrence West towards X' -> 'a X'",
)

# "East - 84 Sheppard West" -> "East"
STARTS_WITH_DASH = Rewrite(
    name="starts_with_dash",
    pattern=re.compile(r"(?<=[a-z]{4})\s*-\s.*$", re.IGNORECASE | re.DOTALL),
    replacement="",
    description="Keep the compass word before ' - <route>'",
)

# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------

STARTS_WITH_RSN = re.compile(
    r"^(?P<prefix>[a-z0-9]*)\s*-\s*(?P<rsn>\d+)\s*.*$",
    re.IGNORECASE | re.DOTALL,
)

NOT_IN_SERVICE = re.compile(r"not\s+in\s+service", re.IGNORECASE)

DIRECTION_ONLY = re.compile(r"^(?:east|west|north|south)$", re.IGNORECASE)

BRANCH_PREFIX = "L "


def route_prefix(route_short_name: str, route_long_name: str) -> re.Pattern[str]:
    """Match a leading ``<number>[<letter>] [<route long name>]`` for one route.

    Only the optional branch letter survives the rewrite (see
    ``headsigns.clean_stop_headsign``).
    """
    numbers = [r"\d+(?:/\d+)?"]
    if route_short_name.strip():
        numbers.insert(0, re.escape(route_short_name.strip()))
    escaped_long_name = re.escape(route_long_name.strip()).replace(r"\ ", r"\s+")
    long_name = (
        rf"(?:{escaped_long_name}(?!\w)\s*)?"
        if route_long_name.strip()
        else ""
    )
    return re.compile(
        rf"^\s*(?:{'|'.join(numbers)})(?:(?P<letter>[a-z])(?!\w))?(?!\w)\s*{long_name}",
        re.IGNORECASE,
    )
