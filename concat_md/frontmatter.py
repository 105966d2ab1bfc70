"""Split YAML front matter from markdown text."""

import re
from pathlib import Path

import yaml

from .errors import FrontMatterError

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def split_front_matter(text: str, path: Path | None = None) -> tuple[dict, str]:
    """Return (attributes, body) for markdown text.

    Text without a leading '---' block has no attributes and is returned
    whole as the body.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        where = f" in {path}" if path else ""
        raise FrontMatterError(f"Invalid front matter{where}: {e}", path=path) from e

    if not isinstance(data, dict):
        data = {}
    return data, text[match.end():]
