"""
Sentence-case validation engine, the only rule in this package.

Given the plain text of one heading (or one front-matter block), decide
which of these it is and check it accordingly. First match wins:

  1. Empty / whitespace-only      → nothing to check
  2. Front-matter block           → check the `title:` value only
  3. All caps ("NASA", "FAQ")     → exempt
  4. Numbered ("3. Deploy ...")   → check the text after the number
  5. Plain heading                → check the whole text

Steps 2, 4 and 5 share one word check; only the message wording differs.

The validator:
  - Takes a string and an AllowList
  - Returns a list of Violation objects (empty = all clear)
  - Never raises for a bad heading, never logs, never mutates anything
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .allow_list import AllowList
from .models import NUMBERED_RE, HeadingKind, HeadingText, Violation

FIRST_WORD_NOT_CAPITALIZED = "FIRST_WORD_NOT_CAPITALIZED"
INTERIOR_WORD_CAPITALIZED = "INTERIOR_WORD_CAPITALIZED"

_TITLE_FIELD_RE = re.compile(r"^[ \t]*title:[ \t]*(\S.*?)[ \t\r]*$", re.IGNORECASE | re.MULTILINE)
_LEADING_QUOTE_RE = re.compile(r"^[\"'“”‘’]")
_TRAILING_QUOTE_RE = re.compile(r"[\"'“”‘’]$")
_TECHNICAL_MARKERS = (".", "-", "_")
_WORD_CHAR_RE = re.compile(r"\w")


# ─── Message Wording ─────────────────────────────────────────────────


@dataclass(frozen=True)
class _Wording:
    """Message templates for one context.

    Templates are formatted with `{subject}` (the quoted heading or "title: ..."
    text) and, for the interior rule, `{word}`.
    """

    first_letter: str
    interior: str


_HEADING_INTERIOR = (
    "Only the first word of a sentence-case heading may be capitalized "
    "(unless it's a proper noun or technical term): \"{word}\" in \"{subject}\""
)
_TITLE_INTERIOR = (
    "Only the first word of a sentence-case title may be capitalized "
    "(unless it's a proper noun or technical term): \"{word}\" in \"{subject}\""
)

HEADING_WORDING = _Wording(
    first_letter="Heading should start with an uppercase letter (Sentence case): \"{subject}\"",
    interior=_HEADING_INTERIOR,
)
NUMBERED_HEADING_WORDING = _Wording(
    first_letter="Numbered heading should have first letter capitalized after the number: \"{subject}\"",
    interior=_HEADING_INTERIOR,
)
TITLE_WORDING = _Wording(
    first_letter="Title should start with an uppercase letter (Sentence case): \"{subject}\"",
    interior=_TITLE_INTERIOR,
)
NUMBERED_TITLE_WORDING = _Wording(
    first_letter="Title should have first letter capitalized after the number: \"{subject}\"",
    interior=_TITLE_INTERIOR,
)


# ─── Validator ───────────────────────────────────────────────────────


class HeadingCaseValidator:
    """Checks heading text against the sentence-case policy.

    Usage:
        validator = HeadingCaseValidator()            # default allow-list
        violations = validator.validate("Getting Started With the API")
        # → "Started" and "With" flagged, "API" exempt

    The allow-list is fixed at construction and never written afterwards, so
    one validator can be shared freely between threads.
    """

    def __init__(self, allow_list: AllowList | Iterable[str] | None = None):
        if allow_list is None:
            allow_list = AllowList()
        elif not isinstance(allow_list, AllowList):
            allow_list = AllowList(allow_list)
        self.allow_list = allow_list

    def validate(self, text: str, location: Any = None) -> list[Violation]:
        """Validate one heading or front-matter block.

        Args:
            text: Flattened text content of the node.
            location: Opaque node handle, copied onto every Violation.

        Returns:
            Violations in detection order (first-letter check first).
        """
        heading = HeadingText(raw=text)
        kind = heading.classify()

        if kind in (HeadingKind.EMPTY, HeadingKind.ALL_CAPS):
            return []

        if kind is HeadingKind.FRONTMATTER:
            title = extract_frontmatter_title(text)
            if title is None:
                return []
            numbered = NUMBERED_RE.match(title)
            if numbered:
                return self._check_words(
                    numbered.group(2), f"title: {title}", NUMBERED_TITLE_WORDING, kind, location
                )
            return self._check_words(title, f"title: {title}", TITLE_WORDING, kind, location)

        if kind is HeadingKind.NUMBERED:
            remainder = text[len(heading.number_prefix or ""):]
            return self._check_words(remainder, text, NUMBERED_HEADING_WORDING, kind, location)

        return self._check_words(text, text, HEADING_WORDING, kind, location)

    # ─── Word Check ─────────────────────────────────────────────────

    def _check_words(
        self,
        candidate: str,
        subject: str,
        wording: _Wording,
        kind: HeadingKind,
        location: Any,
    ) -> list[Violation]:
        """First word must start uppercase; later words must not, unless exempt."""
        violations: list[Violation] = []

        words = candidate.split()
        if not any(_WORD_CHAR_RE.search(word) for word in words):
            return violations

        if not _starts_uppercase(words[0]):
            violations.append(
                Violation(
                    message=wording.first_letter.format(subject=subject),
                    code=FIRST_WORD_NOT_CAPITALIZED,
                    location=location,
                    details={"word": words[0], "text": subject, "kind": kind.value},
                )
            )

        for word in words[1:]:
            if self._is_exempt(word):
                continue
            if _starts_uppercase(word):
                violations.append(
                    Violation(
                        message=wording.interior.format(word=word, subject=subject),
                        code=INTERIOR_WORD_CAPITALIZED,
                        location=location,
                        details={"word": word, "text": subject, "kind": kind.value},
                    )
                )

        return violations

    def _is_exempt(self, word: str) -> bool:
        """Allow-listed words and technical tokens (v1.2, config.yaml, 42) may keep capitals."""
        if word in self.allow_list:
            return True
        if any(marker in word for marker in _TECHNICAL_MARKERS) or word.isdigit():
            return True
        return self.allow_list.allows(word)


# ─── Public Helpers ──────────────────────────────────────────────────


def validate(
    text: str, allow_list: AllowList | Iterable[str] | None = None, location: Any = None
) -> list[Violation]:
    """Functional shortcut for one-off checks. Prefer a shared HeadingCaseValidator."""
    return HeadingCaseValidator(allow_list).validate(text, location)


def extract_frontmatter_title(block: str) -> str | None:
    """Return the first `title:` value in a front-matter block, one quote layer removed.

    Example:
        'title: "My project"\\ndescription: x'  →  'My project'
    """
    match = _TITLE_FIELD_RE.search(block)
    if match is None:
        return None
    title = match.group(1)
    title = _LEADING_QUOTE_RE.sub("", title)
    return _TRAILING_QUOTE_RE.sub("", title)


def _starts_uppercase(word: str) -> bool:
    return word[:1].isupper()
