"""Generate a table of contents between doctoc marker comments."""

import re
from dataclasses import dataclass

from .markdown import iter_headings
from .titles import slug

TOC_START = "<!-- START doctoc -->"
TOC_END = "<!-- END doctoc -->"
TOC_TAG = f"{TOC_START}\n{TOC_END}"

START_PATTERN = re.compile(r"^<!-- START doctoc.*-->[ \t]*$", re.MULTILINE)
END_PATTERN = re.compile(r"^<!-- END doctoc.*-->[ \t]*$", re.MULTILINE)

_LINK_TEXT = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")


@dataclass
class TocResult:
    """Outcome of a TOC transform."""
    transformed: bool
    data: str


def find_markers(content: str) -> tuple[re.Match, re.Match] | None:
    """Locate the start/end marker lines, in that order."""
    start = START_PATTERN.search(content)
    if not start:
        return None
    end = END_PATTERN.search(content, start.end())
    if not end:
        return None
    return start, end


def has_toc_markers(content: str) -> bool:
    return find_markers(content) is not None


def build_toc(headings: list[tuple[int, str]]) -> list[str]:
    """Render (level, text) headings as a nested markdown list."""
    if not headings:
        return []

    lowest = min(level for level, _ in headings)
    seen: dict[str, int] = {}
    lines = []
    for level, text in headings:
        label = _LINK_TEXT.sub(r"\1", text)
        anchor = slug(label)
        # GitHub numbers repeated anchors: intro, intro-1, intro-2...
        count = seen.get(anchor, 0)
        seen[anchor] = count + 1
        if count:
            anchor = f"{anchor}-{count}"
        indent = "  " * (level - lowest)
        lines.append(f"{indent}- [{label}](#{anchor})")
    return lines


def transform(content: str, max_level: int = 3) -> TocResult:
    """Fill the marker region with links to the headings that follow it.

    Headings deeper than max_level are skipped.
    """
    markers = find_markers(content)
    if markers is None:
        return TocResult(False, content)
    start, end = markers

    headings = [
        (level, text)
        for level, text in iter_headings(content[end.end():])
        if level <= max_level
    ]
    if not headings:
        return TocResult(False, content)

    toc = "\n".join(build_toc(headings))
    data = f"{content[:start.end()]}\n\n{toc}\n\n{content[end.start():]}"
    return TocResult(data != content, data)
