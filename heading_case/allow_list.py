"""
The allow-list: proper nouns and technical terms that may stay capitalized.

Built once before any validation runs and shared read-only afterwards.
Membership is case-sensitive ("GitHub" is allowed, "Github" is not).

Sources, in order of precedence:
  1. An explicit iterable of words passed by the caller
  2. A JSON file (a list of strings, or {"extend": bool, "words": [...]})
  3. DEFAULT_ALLOWED_WORDS
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from .exceptions import AllowListError

logger = logging.getLogger(__name__)

# ─── Default Content ─────────────────────────────────────────────────

DEFAULT_ALLOWED_WORDS: frozenset[str] = frozenset({
    # Acronyms
    "API", "APIs", "MCP", "I", "ID", "SDK", "CLI", "AI", "JWT", "REST",
    "GPT", "LLM", "LLMs", "S3", "IPC", "IPFS", "URL", "ETH", "SOL",
    # Products, brands and platform names
    "AgentRank", "Recall", "Agent", "RecallAgentToolkit", "RecallNetwork",
    "AgentToolkit", "Portal", "Hub", "Toolkit", "Competition", "Competitions",
    "GitHub", "OAuth", "OpenAI", "Claude", "DALL-E", "LangChain", "Mastra",
    "Eliza", "Cursor", "MinIO", "Vercel", "AI SDK", "Filecoin", "WebSocket",
    # Programming languages
    "TypeScript", "Python",
    # Operating systems
    "macOS", "Windows", "Linux", "Ubuntu",
    # UI actions and labels
    "Setup", "Configure", "Desktop", "Local", "Registration", "Live", "Key",
    "Private", "Format", "Invalid",
})

_EDGE_PUNCTUATION_RE = re.compile(r"^\W+|\W+$")


# ─── Allow-List ──────────────────────────────────────────────────────


def strip_edge_punctuation(word: str) -> str:
    """'Desktop?' → 'Desktop', '(OAuth)' → 'OAuth'. Inner characters are kept."""
    return _EDGE_PUNCTUATION_RE.sub("", word)


class AllowList:
    """Immutable set of words exempt from the interior-capital rule."""

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str] = DEFAULT_ALLOWED_WORDS):
        self._words = frozenset(words)

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"AllowList({len(self._words)} words)"

    def allows(self, word: str) -> bool:
        """True if the exact token or its punctuation-stripped form is listed."""
        return word in self._words or strip_edge_punctuation(word) in self._words

    def union(self, words: Iterable[str]) -> AllowList:
        return AllowList(self._words | frozenset(words))


# ─── Loading ─────────────────────────────────────────────────────────


def load_allow_list(path: str | Path | None = None) -> AllowList:
    """Load an allow-list from a JSON file, or the defaults if no path is given.

    Accepted file shapes:
        ["API", "GitHub", ...]                       → replaces the defaults
        {"extend": true, "words": ["Acme", ...]}     → merged with the defaults
        {"extend": false, "words": [...]}            → replaces the defaults

    Raises:
        AllowListError: if the file is unreadable or has the wrong shape.
    """
    if path is None:
        return AllowList()

    resolved = Path(path)
    try:
        with resolved.open(encoding="utf-8") as f:
            data: Any = json.load(f)
    except OSError as exc:
        raise AllowListError(
            f"Could not read allow-list file '{resolved}': {exc}",
            details={"path": str(resolved)},
        ) from exc
    except json.JSONDecodeError as exc:
        raise AllowListError(
            f"Allow-list file '{resolved}' is not valid JSON: {exc}",
            details={"path": str(resolved), "line": exc.lineno},
        ) from exc

    extend = False
    if isinstance(data, dict):
        extend = bool(data.get("extend", True))
        data = data.get("words")

    if not isinstance(data, list) or not all(isinstance(w, str) for w in data):
        raise AllowListError(
            f"Allow-list file '{resolved}' must contain a list of strings.",
            details={"path": str(resolved)},
        )

    allow_list = AllowList().union(data) if extend else AllowList(data)
    logger.info(
        "Loaded allow-list from %s (%d words, extend=%s)", resolved, len(allow_list), extend
    )
    return allow_list
