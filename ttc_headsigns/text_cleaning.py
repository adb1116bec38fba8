"""text_cleaning

Generic label helpers shared by every field cleaner.

Public API (stable):
- pipe
- stabilize
- to_fixpoint
- to_lower_case_upper_case_words
- fix_mc_x_case
- clean_bounds
- clean_street_types
- clean_numbers
- clean_at
- clean_and
- remove_via
- repair_text
- clean_label

Notes:
- Functions are pure and total: any string (including "") is accepted and
  no function raises.
- Regexes are precompiled and grouped for readability.
- Composition uses `pipe()` for a declarative flow.
"""

from __future__ import annotations

import re
from typing import Callable, TypeVar

import ftfy

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


def pipe(value: T, *funcs: Callable[[T], T]) -> T:
    """Left-to-right function composition for a single value."""
    for fn in funcs:
        value = fn(value)
    return value


def stabilize(value: T, transform: Callable[[T], T], *, limit: int = 10) -> T:
    """Apply ``transform`` until a fixpoint is reached or ``limit`` iterations pass."""

    for _ in range(limit):
        updated = transform(value)
        if updated == value:
            return value
        value = updated
    return value


def to_fixpoint(text: str, clean: Callable[[str], str]) -> str:
    """Re-run a whole field cleaner until its output is stable.

    Every productive pass after the first shortens the text, so the bound
    scales with its length.
    """
    return stabilize(text, clean, limit=2 * len(text) + 4)


# ---------------------------------------------------------------------------
# Patterns & Constants
# ---------------------------------------------------------------------------

# Casing
_WORD_RE = re.compile(r"[^\W\d_]+(?:'[^\W\d_]+)*")
_MC_RE = re.compile(r"\bMc([a-z])")
_LOWERCASE_WORDS = {
    "en": frozenset(),
    "fr": frozenset({"à", "au", "aux", "de", "des", "du", "et", "la", "le", "les", "sur"}),
}

# Bounds
_BOUNDS_RE = re.compile(
    r"(?<!\w)(?:(?:north|south|east|west)-?bound|[nsew]/?b)(?!\w)",
    re.IGNORECASE,
)
_EMPTY_BRACKETS_RE = re.compile(r"\(\s*\)|\[\s*\]")

# Street types
_STREET_TYPES = {
    "ave": "Avenue",
    "blvd": "Boulevard",
    "cir": "Circle",
    "cres": "Crescent",
    "crt": "Court",
    "ct": "Court",
    "gdns": "Gardens",
    "grv": "Grove",
    "hts": "Heights",
    "hwy": "Highway",
    "ln": "Lane",
    "pkwy": "Parkway",
    "pl": "Place",
    "rd": "Road",
    "sq": "Square",
    "ter": "Terrace",
    "terr": "Terrace",
}
_STREET_TYPES_RE = re.compile(
    r"(?<!\w)(" + "|".join(sorted(_STREET_TYPES, key=len, reverse=True)) + r")\.?(?!\w)",
    re.IGNORECASE,
)
# "St" and "Dr" double as Saint/Doctor: "St Clair", "Dr Martin ..."
_AMBIGUOUS_STREET_TYPES = {"st": "Street", "dr": "Drive"}
_AMBIGUOUS_STREET_TYPES_RE = re.compile(
    r"(?<=\w)(?P<ws>\s+)(?P<abbr>St|Dr)\b\.?(?=(?P<next>\s*\w+)?)",
    re.IGNORECASE,
)
_COMPASS_WORDS = frozenset({"north", "south", "east", "west"})

# Numbers
_ORDINAL_WORDS = {
    "first": "1st",
    "second": "2nd",
    "third": "3rd",
    "fourth": "4th",
    "fifth": "5th",
    "sixth": "6th",
    "seventh": "7th",
    "eighth": "8th",
    "ninth": "9th",
    "tenth": "10th",
}
_ORDINAL_WORDS_RE = re.compile(
    r"(?<!\w)(" + "|".join(_ORDINAL_WORDS) + r")(?!\w)",
    re.IGNORECASE,
)
_ORDINAL_SUFFIX_RE = re.compile(r"(?<=\d)(st|nd|rd|th)(?!\w)", re.IGNORECASE)

# Symbols
CLEAN_AT = re.compile(r"(?<!\S)(?:at|@)(?!\S)", re.IGNORECASE)
CLEAN_AT_REPLACEMENT = "/"
CLEAN_AND = re.compile(r"(?<!\S)(?:and|&amp;)(?!\S)", re.IGNORECASE)
CLEAN_AND_REPLACEMENT = "&"

_VIA_RE = re.compile(r"(^|\W)via(?!\w).*$", re.IGNORECASE | re.DOTALL)

# Labels
_NBSP_TRANSLATION = str.maketrans(
    {
        "\u00a0": " ",  # non-breaking space
        "\u2007": " ",  # figure space
        "\u2009": " ",  # thin space
        "\u202f": " ",  # narrow no-break space
        "\u200b": "",  # zero-width space
        "\ufeff": "",  # zero-width no-break space
    }
)
_PAREN_OPEN_SPACE_RE = re.compile(r"\(\s+")
_PAREN_CLOSE_SPACE_RE = re.compile(r"\s+\)")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([,;])")
_WHITESPACE_RE = re.compile(r"\s+")
_LABEL_EDGES_RE = re.compile(r"^[\s\-,/&;:]+|[\s\-,/&;:]+$")


# ---------------------------------------------------------------------------
# Casing
# ---------------------------------------------------------------------------


def to_lower_case_upper_case_words(language: str, text: str) -> str:
    """Title-case words written entirely in upper or lower case.

    Mixed-case words (``McDonald``, ``iPhone``) are left alone. For languages
    with a small-word list (French), those words stay lowercase unless they
    open the label.
    """
    if not text:
        return text
    keep_lower = _LOWERCASE_WORDS.get(language.split("_")[0].lower(), frozenset())

    def _recase(match: re.Match[str]) -> str:
        word = match.group(0)
        if match.start() > 0 and word.lower() in keep_lower:
            return word.lower()
        if word.isupper() or word.islower():
            return word[:1].title() + word[1:].lower()
        return word

    return _WORD_RE.sub(_recase, text)


def fix_mc_x_case(text: str) -> str:
    """``Mcdonald`` -> ``McDonald``."""
    return _MC_RE.sub(lambda m: "Mc" + m.group(1).upper(), text)


# ---------------------------------------------------------------------------
# Place-name helpers
# ---------------------------------------------------------------------------


def clean_bounds(text: str) -> str:
    """Drop bound markers (``Eastbound``, ``EB``, ``E/B``) and brackets left empty."""
    stripped = _BOUNDS_RE.sub("", text)
    return stabilize(stripped, lambda s: _EMPTY_BRACKETS_RE.sub(" ", s))


def _expand_ambiguous(match: re.Match[str]) -> str:
    # "St Clair", "St 1st" keep the abbreviation; "St", "St North" expand
    following = (match.group("next") or "").strip()
    if following and not following[:1].islower() and following.lower() not in _COMPASS_WORDS:
        return match.group(0)
    return match.group("ws") + _AMBIGUOUS_STREET_TYPES[match.group("abbr").lower()]


def clean_street_types(text: str) -> str:
    """Expand street-type abbreviations (``Ave`` -> ``Avenue``, ``St`` -> ``Street``)."""
    return pipe(
        text,
        lambda s: _STREET_TYPES_RE.sub(lambda m: _STREET_TYPES[m.group(1).lower()], s),
        lambda s: _AMBIGUOUS_STREET_TYPES_RE.sub(_expand_ambiguous, s),
    )


def clean_numbers(text: str) -> str:
    """Spell ordinals as numbers and lowercase their suffixes (``1St`` -> ``1st``)."""
    return pipe(
        text,
        lambda s: _ORDINAL_WORDS_RE.sub(lambda m: _ORDINAL_WORDS[m.group(1).lower()], s),
        lambda s: _ORDINAL_SUFFIX_RE.sub(lambda m: m.group(1).lower(), s),
    )


def clean_at(text: str) -> str:
    return CLEAN_AT.sub(CLEAN_AT_REPLACEMENT, text)


def clean_and(text: str) -> str:
    return CLEAN_AND.sub(CLEAN_AND_REPLACEMENT, text)


def remove_via(text: str) -> str:
    """Remove a trailing ``via <somewhere>`` clause."""
    return _VIA_RE.sub(r"\1", text)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def repair_text(text: str) -> str:
    """Fix mojibake and odd widths; HTML entities are left for the symbol rules.

    Runs first in every field pipeline so that casing sees the repaired
    characters (``"CAFÃ‰"`` -> ``"CAFÉ"`` -> ``"Café"``).
    """
    return ftfy.fix_text(text, unescape_html=False) if text else text


def _clean_label_once(text: str) -> str:
    return pipe(
        text,
        lambda s: s.translate(_NBSP_TRANSLATION),
        lambda s: _PAREN_OPEN_SPACE_RE.sub("(", s),
        lambda s: _PAREN_CLOSE_SPACE_RE.sub(")", s),
        lambda s: _EMPTY_BRACKETS_RE.sub(" ", s),
        lambda s: _SPACE_BEFORE_PUNCT_RE.sub(r"\1", s),
        lambda s: _WHITESPACE_RE.sub(" ", s),
        lambda s: _LABEL_EDGES_RE.sub("", s),
    )


def clean_label(text: str) -> str:
    """Final pass: collapse whitespace and trim separators."""
    return stabilize(text, _clean_label_once)
