#!/usr/bin/env python3
"""
Heading Case Linter — Entry Point
=================================

Lints Markdown headings and front-matter titles for sentence case.

Usage:
    python main.py                                # Lint the built-in sample document
    python main.py docs/ README.md                # Lint files and directories
    python main.py --allow-list words.json docs/  # Custom allow-list
    HEADING_CASE_ALLOW_LIST=words.json python main.py docs/

Exit codes:
    0  all headings are sentence case
    1  at least one violation
    2  a file or the allow-list could not be read
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from heading_case.exceptions import HeadingCaseError
from heading_case.models import LintReport
from heading_case.pipeline import HeadingCaseLinter

load_dotenv()


# ─── A Sample Document, Wrong on Purpose ────────────────────────────

SAMPLE_DOCUMENT = """\
---
title: 'my New Project'
description: Everything you need to ship your first agent
---

# Getting started with Claude

## Getting Started With the API

## 3. Deploy the Service to Production

### Install the CLI on macOS

NASA
====

```bash
# Not A Heading
```
"""


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_report(report: LintReport) -> None:
    """Pretty-print one document's lint report with ANSI color codes."""
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  {report.source}{_RESET}")
    print(f"  Headings:    {report.headings_checked}")
    print(f"  Audit Hash:  {_DIM}{report.content_hash[:16]}...{_RESET}")
    print(f"{'─' * _WIDTH}")

    if report.is_clean:
        print(f"  {_GREEN}{_BOLD}ALL HEADINGS ARE SENTENCE CASE{_RESET}")
        return

    print(f"  {_YELLOW}{_BOLD}VIOLATIONS ({len(report.violations)}){_RESET}")
    for violation in report.violations:
        line = getattr(violation.location, "line", "?")
        print(f"    {_DIM}line {line}{_RESET}  {_YELLOW}[{violation.code}]{_RESET}")
        print(f"    {violation.message}")
        print()


def print_summary(reports: list[LintReport]) -> int:
    """Print a one-line summary across documents.

    Returns:
        0 if every document is clean, 1 otherwise.
    """
    total = sum(len(r.violations) for r in reports)
    dirty = sum(1 for r in reports if not r.is_clean)

    print(f"{'=' * _WIDTH}")
    if total == 0:
        print(f"  {_GREEN}{_BOLD}{len(reports)} document(s) checked, no violations{_RESET}")
    else:
        print(f"  {_RED}{_BOLD}{total} violation(s) in {dirty} of {len(reports)} document(s){_RESET}")
    print(f"{'=' * _WIDTH}\n")

    return 0 if total == 0 else 1


# ─── Main ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check Markdown headings for sentence case.")
    parser.add_argument("paths", nargs="*", help="Markdown files or directories to lint.")
    parser.add_argument("--allow-list", dest="allow_list", help="JSON file of allowed capitalized words.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Lint the given paths (or the sample document) and print the reports."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        linter = HeadingCaseLinter(allow_list_path=args.allow_list)
        if args.paths:
            reports = linter.lint_paths(args.paths)
        else:
            reports = [linter.lint(SAMPLE_DOCUMENT, source="<sample>")]
    except HeadingCaseError as exc:
        print(f"{_RED}[{exc.code}]{_RESET} {exc}", file=sys.stderr)
        return 2

    for report in reports:
        print_report(report)
    return print_summary(reports)


if __name__ == "__main__":
    sys.exit(main())
