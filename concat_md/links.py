"""Rewrite links between concatenated files into in-document anchors."""

import os
from pathlib import Path

from .markdown import transform_links
from .titles import TitleIndex, slug


def resolve_link(link: str, source_dir: Path, index: TitleIndex) -> str:
    """Return the new target for a link found in a file under source_dir.

    Link forms handled:
        [Condition](../interfaces/condition.md)   - link to a file
        [Format](../README.md#format)             - section in another file
        [save](datafile.md#save)                  - section in the same file
    """
    if not link or link.startswith("http"):
        return link

    target = os.path.normpath(os.path.join(source_dir, link))
    target_file, sep, fragment = target.partition("#")
    if sep:
        # Section anchors in the original files are kept as they are.
        return sep + fragment

    entry = index.find(Path(target_file))
    if entry is None:
        return ""
    return f"#{slug(entry.title)}"


def rewrite_links(body: str, source_path: Path, index: TitleIndex) -> str:
    """Rewrite every non-http link in body, which was read from source_path.

    Must only run once every file of the run has been titled.
    """
    source_dir = source_path.parent
    return transform_links(body, lambda link: resolve_link(link, source_dir, index))
