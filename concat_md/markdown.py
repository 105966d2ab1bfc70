"""Line-level markdown transforms that leave fenced code blocks alone."""

import re
from typing import Callable

# A backtick fence line may not contain another backtick.
FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}(?!.*`)|~{3,})")
HEADING_MARKER_PATTERN = re.compile(r"^#+", re.MULTILINE)
ATX_HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")

# [text](target "optional title"), but not ![alt](image)
INLINE_LINK_PATTERN = re.compile(r'(?<!!)(\[[^\]]*\]\()(<[^>]*>|[^)\s]*)((?:\s+"[^"]*")?\s*\))')


def split_code_fences(text: str) -> list[tuple[str, bool]]:
    """Split text into (chunk, is_code) pieces.

    Joining the chunks gives back the original text. An unclosed fence runs
    to the end of the text.
    """
    pieces = []
    buf: list[str] = []
    fence = None

    for line in text.splitlines(keepends=True):
        match = FENCE_PATTERN.match(line)
        if fence is None:
            if match:
                if buf:
                    pieces.append(("".join(buf), False))
                    buf = []
                fence = match.group(1)
            buf.append(line)
            continue

        buf.append(line)
        closing = line.strip()
        if match and closing.startswith(fence) and set(closing) == {fence[0]}:
            pieces.append(("".join(buf), True))
            buf = []
            fence = None

    if buf:
        pieces.append(("".join(buf), fence is not None))
    return pieces


def map_outside_fences(text: str, transform: Callable[[str], str]) -> str:
    """Apply transform to every chunk of text outside fenced code blocks."""
    return "".join(
        chunk if is_code else transform(chunk)
        for chunk, is_code in split_code_fences(text)
    )


def shift_headings(body: str, shift: int) -> str:
    """Push every heading in body `shift` levels deeper.

    '# Intro' shifted by 2 becomes '### Intro'. Only '#' runs that start a
    line outside fenced code are touched.
    """
    if shift <= 0:
        return body
    extra = "#" * shift
    return map_outside_fences(
        body, lambda chunk: HEADING_MARKER_PATTERN.sub(lambda m: m.group(0) + extra, chunk)
    )


def transform_links(body: str, transform: Callable[[str], str]) -> str:
    """Replace the target of every inline link with transform(target)."""
    def replace(match: re.Match) -> str:
        raw = match.group(2)
        target = raw[1:-1] if raw.startswith("<") and raw.endswith(">") else raw
        new_target = transform(target)
        if new_target == target:
            new_target = raw
        return f"{match.group(1)}{new_target}{match.group(3)}"

    return map_outside_fences(body, lambda chunk: INLINE_LINK_PATTERN.sub(replace, chunk))


def iter_headings(text: str):
    """Yield (level, text) for every ATX heading outside fenced code."""
    for chunk, is_code in split_code_fences(text):
        if is_code:
            continue
        for line in chunk.splitlines():
            match = ATX_HEADING_PATTERN.match(line)
            if match:
                yield len(match.group(1)), match.group(2).strip()
