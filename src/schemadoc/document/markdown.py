"""
Line-oriented Markdown scanner.

Only the block structure a tutorial needs is recognised: ATX headings,
fenced code blocks, bullet items and paragraphs. Inline markup is left
untouched in the node text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import DocumentParseError

_FENCE_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_HEADING_RE = re.compile(r"^ {0,3}(?P<marks>#{1,6})(?:\s+(?P<title>.*?))?\s*#*\s*$")
_BULLET_RE = re.compile(r"^(?P<indent> {0,3})[-*+]\s+(?P<text>.*)$")


@dataclass
class Heading:
    level: int
    title: str
    line: int


@dataclass
class CodeBlock:
    language: str
    text: str
    line: int  # first line of the body
    fence_line: int


@dataclass
class BulletItem:
    text: str
    line: int


@dataclass
class Paragraph:
    text: str
    line: int


Node = Heading | CodeBlock | BulletItem | Paragraph


def _closes(line: str, fence: str) -> bool:
    stripped = line.lstrip(" ")
    if len(line) - len(stripped) > 3:
        return False
    stripped = stripped.rstrip()
    char = fence[0]
    return len(stripped) >= len(fence) and stripped == char * len(stripped)


def scan_markdown(text: str) -> list[Node]:
    """Scan Markdown text into block nodes in document order.

    Raises:
        DocumentParseError: If a code fence is never closed
    """
    nodes: list[Node] = []
    lines = text.splitlines()

    fence: str | None = None
    fence_line = 0
    language = ""
    body: list[str] = []

    # Currently open bullet or paragraph that continuation lines extend
    open_node: BulletItem | Paragraph | None = None

    for number, line in enumerate(lines, start=1):
        if fence is not None:
            if _closes(line, fence):
                nodes.append(
                    CodeBlock(
                        language=language,
                        text="\n".join(body),
                        line=fence_line + 1,
                        fence_line=fence_line,
                    )
                )
                fence = None
                body = []
            else:
                body.append(line)
            continue

        if not line.strip():
            # Blank lines end paragraphs; bullets may resume after them
            open_node = None
            continue

        match = _FENCE_RE.match(line)
        if match and not (match.group("fence")[0] == "`" and "`" in match.group("info")):
            fence = match.group("fence")
            fence_line = number
            info = match.group("info").strip()
            language = info.split()[0].lower() if info else ""
            open_node = None
            continue

        match = _HEADING_RE.match(line)
        if match:
            nodes.append(
                Heading(
                    level=len(match.group("marks")),
                    title=(match.group("title") or "").strip(),
                    line=number,
                )
            )
            open_node = None
            continue

        match = _BULLET_RE.match(line)
        if match:
            open_node = BulletItem(text=match.group("text").strip(), line=number)
            nodes.append(open_node)
            continue

        if open_node is not None:
            open_node.text = f"{open_node.text} {line.strip()}"
            continue

        open_node = Paragraph(text=line.strip(), line=number)
        nodes.append(open_node)

    if fence is not None:
        raise DocumentParseError(f"Unterminated code fence opened on line {fence_line}", fence_line)

    return nodes
