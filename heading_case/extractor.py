"""
Deterministic regex-based heading extraction from Markdown / MDX text.

This is NOT a CommonMark parser. It finds the three things the validator
cares about and flattens them to plain text:

  - a leading `---` front-matter block (emitted as ONE node, body only)
  - ATX headings      (`## Install the CLI`)
  - setext headings   (a paragraph underlined with `===` or `---`)

Fenced code blocks are skipped so that `# comment` lines inside them are
never mistaken for headings.
"""

from __future__ import annotations

import re

from .models import HeadingNode, NodeKind

_FRONTMATTER_FENCE = "---"
_ATX_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+|$)(.*?)(?:[ \t]+#+)?[ \t]*$")
_SETEXT_RE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_INDENTED_CODE_RE = re.compile(r"^(?: {4}|\t)")
_BLOCK_START_RE = re.compile(r"^ {0,3}(?:[-*+][ \t]|\d+[.)][ \t]|>|\|)")

# Inline markup, applied in order
_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_REF_LINK_RE = re.compile(r"\[([^\]]+)\]\[[^\]]*\]")
_HTML_TAG_RE = re.compile(r"</?[A-Za-z][^<>]*?/?>")
_STRONG_RE = re.compile(r"(\*\*|__)(?=\S)(.+?)(?<=\S)\1")
_EMPHASIS_STAR_RE = re.compile(r"\*(?=\S)(.+?)(?<=\S)\*")
_EMPHASIS_UNDERSCORE_RE = re.compile(r"(?<!\w)_(?=\S)(.+?)(?<=\S)_(?!\w)")
_STRIKE_RE = re.compile(r"~~(.+?)~~")
_ESCAPE_RE = re.compile(r"\\([\\`*_{}\[\]()#+\-.!<>~|])")
_PARKED_SPAN_RE = re.compile(r"\x00(\d+)\x00")


def extract_headings(markdown: str) -> list[HeadingNode]:
    """Extract every heading node from a Markdown document, in document order.

    Args:
        markdown: Full document text.

    Returns:
        HeadingNodes with 1-based line numbers and flattened text.
    """
    lines = markdown.splitlines()
    nodes: list[HeadingNode] = []

    start = 0
    frontmatter = _extract_frontmatter(lines)
    if frontmatter is not None:
        node, start = frontmatter
        nodes.append(node)

    fence: str | None = None
    paragraph: list[tuple[int, str]] = []

    for index in range(start, len(lines)):
        line = lines[index]

        # ── Fenced code: skip until the matching closing fence ──────
        fence_match = _FENCE_RE.match(line)
        if fence is not None:
            if fence_match and fence_match.group(1)[0] == fence[0] and len(fence_match.group(1)) >= len(fence):
                fence = None
            continue
        if fence_match:
            fence = fence_match.group(1)
            paragraph = []
            continue

        if not line.strip():
            paragraph = []
            continue

        # ── Setext underline closes the current paragraph ───────────
        if paragraph and _SETEXT_RE.match(line):
            first_line = paragraph[0][0]
            text = "\n".join(content.strip() for _, content in paragraph)
            depth = 1 if line.strip().startswith("=") else 2
            nodes.append(
                HeadingNode(line=first_line + 1, depth=depth, kind=NodeKind.SETEXT, text=flatten_inline(text))
            )
            paragraph = []
            continue

        # ── ATX heading ─────────────────────────────────────────────
        atx = _ATX_RE.match(line)
        if atx:
            nodes.append(
                HeadingNode(
                    line=index + 1,
                    depth=len(atx.group(1)),
                    kind=NodeKind.ATX,
                    text=flatten_inline(atx.group(2)),
                )
            )
            paragraph = []
            continue

        if not paragraph and _INDENTED_CODE_RE.match(line):
            continue

        if _BLOCK_START_RE.match(line):
            paragraph = []
            continue

        paragraph.append((index, line))

    return nodes


def flatten_inline(text: str) -> str:
    """Reduce inline Markdown/MDX to the text a reader would see.

    Example:
        "Use the **`init`** [command](./cli.md)"  →  "Use the init command"
    """
    # Code spans are literal: park them so later passes cannot rewrite them
    spans: list[str] = []

    def _park(match: re.Match[str]) -> str:
        spans.append(match.group(2).strip())
        return f"\x00{len(spans) - 1}\x00"

    text = _CODE_SPAN_RE.sub(_park, text)
    text = _IMAGE_RE.sub(r"\1", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _REF_LINK_RE.sub(r"\1", text)
    text = _HTML_TAG_RE.sub("", text)
    text = _STRONG_RE.sub(r"\2", text)
    text = _EMPHASIS_STAR_RE.sub(r"\1", text)
    text = _EMPHASIS_UNDERSCORE_RE.sub(r"\1", text)
    text = _STRIKE_RE.sub(r"\1", text)
    text = _ESCAPE_RE.sub(r"\1", text)
    text = _PARKED_SPAN_RE.sub(lambda m: spans[int(m.group(1))], text)
    return text.strip()


# ─── Internal Helpers ────────────────────────────────────────────────


def _extract_frontmatter(lines: list[str]) -> tuple[HeadingNode, int] | None:
    """Match a `---` block on the very first line. Unclosed blocks are ignored.

    Returns the node and the index of the first line after the block.
    """
    if not lines or lines[0].strip() != _FRONTMATTER_FENCE:
        return None

    for index in range(1, len(lines)):
        if lines[index].strip() == _FRONTMATTER_FENCE:
            body = "\n".join(lines[1:index])
            node = HeadingNode(line=1, depth=0, kind=NodeKind.FRONTMATTER, text=body)
            return node, index + 1

    return None
