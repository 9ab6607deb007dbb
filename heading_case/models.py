"""
Pydantic models for heading-case linting: strict typing at the boundaries.

The validator consumes a plain string and produces Violations; the host
pipeline wraps those in HeadingNodes and LintReports. Everything that
crosses a boundary (CLI, API, tests) is one of these models.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

# ─── Classification Patterns ────────────────────────────────────────

FRONTMATTER_MARKER_RE = re.compile(r"^\s*(?:title|description|keywords):", re.MULTILINE)
NUMBERED_RE = re.compile(r"^(\d+)\.\s+(.+)$")


# ─── Enums ──────────────────────────────────────────────────────────


class Severity(str, Enum):
    """Severity of a violation. The host decides whether a warning fails a build."""

    WARNING = "WARNING"


class HeadingKind(str, Enum):
    """Which classification branch a piece of heading text falls into."""

    EMPTY = "EMPTY"
    FRONTMATTER = "FRONTMATTER"
    ALL_CAPS = "ALL_CAPS"
    NUMBERED = "NUMBERED"
    PLAIN = "PLAIN"


class NodeKind(str, Enum):
    """Where in a Markdown document a heading node came from."""

    FRONTMATTER = "frontmatter"
    ATX = "atx"
    SETEXT = "setext"


# ─── Heading Text ───────────────────────────────────────────────────


class HeadingText(BaseModel):
    """The plain-text content of one heading or title, built per validation."""

    raw: str

    @property
    def is_empty(self) -> bool:
        return not self.raw.strip()

    @property
    def is_all_caps(self) -> bool:
        return self.raw == self.raw.upper()

    @property
    def is_frontmatter_block(self) -> bool:
        return FRONTMATTER_MARKER_RE.search(self.raw) is not None

    @property
    def number_prefix(self) -> Optional[str]:
        """The leading '<digits>. ' prefix, if any."""
        match = NUMBERED_RE.match(self.raw)
        if match is None:
            return None
        return self.raw[: match.start(2)]

    def classify(self) -> HeadingKind:
        """First match wins: empty, front matter, all caps, numbered, plain."""
        if self.is_empty:
            return HeadingKind.EMPTY
        if self.is_frontmatter_block:
            return HeadingKind.FRONTMATTER
        if self.is_all_caps:
            return HeadingKind.ALL_CAPS
        if self.number_prefix is not None:
            return HeadingKind.NUMBERED
        return HeadingKind.PLAIN


# ─── Violation ──────────────────────────────────────────────────────


class Violation(BaseModel):
    """A single capitalization violation.

    `location` is an opaque handle to the originating node. The validator
    passes it through without looking at it.
    """

    message: str
    code: str  # Machine-readable, e.g. "INTERIOR_WORD_CAPITALIZED"
    severity: Severity = Severity.WARNING
    location: Any = None
    details: dict = Field(default_factory=dict)


# ─── Document Nodes ─────────────────────────────────────────────────


class HeadingNode(BaseModel):
    """A heading (or front-matter block) located in a Markdown document."""

    line: int  # 1-based line of the heading text
    depth: int  # 1-6 for headings, 0 for front matter
    kind: NodeKind
    text: str  # Flattened plain-text content


# ─── Lint Report ────────────────────────────────────────────────────


class LintReport(BaseModel):
    """The final output of linting one document."""

    source: str
    is_clean: bool
    headings_checked: int = 0
    violations: list[Violation] = Field(default_factory=list)
    content_hash: str = ""  # SHA-256 of the input document for audit trail
