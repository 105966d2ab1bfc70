"""Find markdown files and read them into Documents."""

from __future__ import annotations

import fnmatch
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from .errors import ConcatError
from .frontmatter import split_front_matter

if TYPE_CHECKING:
    from .concatenate import Document


def _matches(rel_path: str, pattern: str) -> bool:
    if fnmatch.fnmatchcase(rel_path, pattern):
        return True
    # '**/' also matches files directly in the root.
    return pattern.startswith("**/") and _matches(rel_path, pattern[3:])


def _ignored(rel_path: str, patterns: list[str]) -> bool:
    """Match the path and each of its parent directories, so 'drafts' skips drafts/."""
    parts = rel_path.split("/")
    candidates = ["/".join(parts[:i]) for i in range(1, len(parts) + 1)]
    return any(_matches(candidate, pat) for candidate in candidates for pat in patterns)


def _sort_key(path: Path, root: Path):
    """Depth first, files of a directory before its subdirectories."""
    rel = path.relative_to(root)
    return rel.parent.parts, rel.name


def find_markdown_files(
    root: Path,
    include: Iterable[str] = ("**/*.md",),
    ignore: Iterable[str] = (),
) -> list[Path]:
    """Find files under root matching an include glob and no ignore glob."""
    root = Path(root).resolve()
    if not root.exists():
        raise FileNotFoundError(f"Not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"{root} is not a directory.")

    ignore = list(ignore)
    found = set()
    for pattern in include:
        for path in root.glob(pattern):
            if not path.is_file():
                continue
            rel = path.relative_to(root).as_posix()
            if _ignored(rel, ignore):
                continue
            found.add(path)

    return sorted(found, key=lambda p: _sort_key(p, root))


def collect_sources(
    paths: Iterable[Path | str],
    include: Iterable[str] = ("**/*.md",),
    ignore: Iterable[str] = (),
) -> list[tuple[Path, Path]]:
    """Expand paths into ordered (file, root) pairs.

    Directories are scanned; a file is taken as is, with its parent as root.
    A file reached twice is kept at its first position.
    """
    include = list(include)
    ignore = list(ignore)
    sources = []
    seen = set()

    for path in paths:
        path = Path(path).resolve()
        if path.is_dir():
            pairs = [(f, path) for f in find_markdown_files(path, include, ignore)]
        elif path.is_file():
            pairs = [(path, path.parent)]
        else:
            raise FileNotFoundError(f"Not found: {path}")

        for file_path, root in pairs:
            if file_path not in seen:
                seen.add(file_path)
                sources.append((file_path, root))

    return sources


def read_document(path: Path, root: Path) -> Document:
    """Read one markdown file and split off its front matter."""
    from .concatenate import Document

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConcatError(f"Cannot read {path} as UTF-8: {e}") from e
    metadata, body = split_front_matter(text, path)
    return Document(path=path, root=root, raw_body=body, metadata=metadata)


def read_documents(sources: list[tuple[Path, Path]], jobs: int = 1) -> list[Document]:
    """Read (file, root) pairs, in parallel when jobs > 1, keeping their order."""
    if jobs > 1 and len(sources) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            return list(executor.map(lambda pair: read_document(*pair), sources))
    return [read_document(path, root) for path, root in sources]
