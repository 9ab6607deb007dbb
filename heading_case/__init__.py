"""
Heading Case Linter: sentence-case policing for Markdown headings and titles.

Architecture: Extract headings → Classify → Word-capitalization check → Report
Philosophy:  The validator is a pure function. Everything else is plumbing.
"""

__version__ = "1.0.0"
