"""
Custom exception hierarchy for the heading-case linter.

Capitalization problems are never raised; they are reported as Violations.
These exceptions cover the plumbing around the validator: reading documents
and loading the allow-list.
"""

from __future__ import annotations


class HeadingCaseError(Exception):
    """Base exception for all linter failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class AllowListError(HeadingCaseError):
    """The allow-list file is missing, unreadable, or not a list of strings."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("ALLOW_LIST_INVALID", message, details)


class DocumentReadError(HeadingCaseError):
    """A document could not be read as UTF-8 text."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("DOCUMENT_UNREADABLE", message, details)
