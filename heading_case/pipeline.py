"""
Lint pipeline: wires the validator into a Markdown document workflow.

Flow:
  ┌──────────┐
  │ Markdown │
  └────┬─────┘
       │
  ┌────▼─────┐
  │ Extract  │   ← Front matter, ATX and setext headings
  └────┬─────┘
       │
  ┌────▼─────┐
  │ Validate │   ← One pure call per node, node attached as location
  └────┬─────┘
       │
  ┌────▼─────┐
  │  Report  │   ← Violations + clean/dirty verdict
  └──────────┘

Design principles:
  - The allow-list is built ONCE per linter and never mutated.
  - The validator knows nothing about documents; the pipeline knows nothing
    about capitalization.
  - The original document text is SHA-256 hashed for audit trail.
"""

from __future__ import annotations

import hashlib
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .allow_list import AllowList, load_allow_list
from .exceptions import DocumentReadError
from .extractor import extract_headings
from .models import LintReport, Violation
from .validator import HeadingCaseValidator

logger = logging.getLogger(__name__)

ALLOW_LIST_ENV_VAR = "HEADING_CASE_ALLOW_LIST"
MARKDOWN_SUFFIXES: frozenset[str] = frozenset({".md", ".mdx", ".markdown"})


class HeadingCaseLinter:
    """Orchestrates heading extraction and validation for whole documents.

    Usage:
        linter = HeadingCaseLinter()
        report = linter.lint_file("docs/quickstart.md")
        if not report.is_clean:
            for violation in report.violations:
                print(violation.location.line, violation.message)
    """

    def __init__(
        self,
        allow_list_path: str | Path | None = None,
        allowed_words: Iterable[str] | None = None,
    ):
        if allowed_words is not None:
            allow_list = AllowList(allowed_words)
        else:
            allow_list = load_allow_list(allow_list_path or os.environ.get(ALLOW_LIST_ENV_VAR) or None)
        self.validator = HeadingCaseValidator(allow_list)

    @property
    def allow_list(self) -> AllowList:
        return self.validator.allow_list

    def lint(self, markdown: str, source: str = "<string>") -> LintReport:
        """Run the full pipeline on one Markdown document.

        Args:
            markdown: The document text.
            source: A label for the report (usually the file path).

        Returns:
            LintReport with violations and a clean/dirty verdict.
        """
        # ── Step 0: Audit hash of original input ────────────────────
        doc_hash = hashlib.sha256(markdown.encode("utf-8")).hexdigest()

        # ── Step 1: Extract heading nodes ───────────────────────────
        nodes = extract_headings(markdown)
        logger.info("Linting %s (%d heading nodes)", source, len(nodes))

        # ── Step 2: Validate each node ──────────────────────────────
        violations: list[Violation] = []
        for node in nodes:
            found = self.validator.validate(node.text, location=node)
            if found:
                logger.debug("%s:%d: %d violation(s) in %r", source, node.line, len(found), node.text)
            violations.extend(found)

        # ── Step 3: Compile report ──────────────────────────────────
        return LintReport(
            source=source,
            is_clean=not violations,
            headings_checked=len(nodes),
            violations=violations,
            content_hash=doc_hash,
        )

    def lint_file(self, path: str | Path) -> LintReport:
        """Read a UTF-8 Markdown file and lint it.

        Raises:
            DocumentReadError: if the file is missing or not UTF-8 text.
        """
        resolved = Path(path)
        try:
            markdown = resolved.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise DocumentReadError(
                f"File '{resolved}' is not UTF-8 encoded text.",
                details={"path": str(resolved)},
            ) from exc
        except OSError as exc:
            raise DocumentReadError(
                f"Could not read file '{resolved}': {exc}",
                details={"path": str(resolved)},
            ) from exc

        return self.lint(markdown, source=str(resolved))

    def lint_paths(self, paths: Iterable[str | Path]) -> list[LintReport]:
        """Lint files and directories. Directories are walked for Markdown files."""
        return [self.lint_file(path) for path in collect_markdown_files(paths)]


def collect_markdown_files(paths: Iterable[str | Path]) -> list[Path]:
    """Expand directories into their Markdown files (sorted); keep files as given."""
    files: list[Path] = []
    for path in paths:
        resolved = Path(path)
        if resolved.is_dir():
            files.extend(
                sorted(p for p in resolved.rglob("*") if p.is_file() and p.suffix in MARKDOWN_SUFFIXES)
            )
        else:
            files.append(resolved)
    return files
