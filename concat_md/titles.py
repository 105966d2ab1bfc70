"""Section titles, GitHub-style anchors and the per-run title index."""

import re
from dataclasses import dataclass
from pathlib import Path

from .errors import DuplicateTitleError, MissingTitleError

# lodash-style word split: camelCase humps, all-caps runs, digit runs, and
# any other run of letters (non-ASCII included).
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+|[^\W\d_]+")


def slug(text: str) -> str:
    """Derive the anchor GitHub generates for a heading.

    >>> slug("My Title")
    'my-title'
    """
    value = (text or "").strip().lower()
    value = re.sub(r"[^\w\- ]+", "", value)
    value = re.sub(r"\s+", "-", value)
    return re.sub(r"-+$", "", value)


def start_case(text: str) -> str:
    """Title-case a file or directory name: 'my_file-name' -> 'My File Name'."""
    words = []
    for chunk in re.split(r"[\W_]+", text):
        words.extend(_WORD_PATTERN.findall(chunk))
    return " ".join(word[0].upper() + word[1:] for word in words)


@dataclass(frozen=True)
class TitleEntry:
    """Title assigned to a file or directory."""
    key: Path
    title: str
    level: int
    markdown: str


class TitleIndex:
    """Append-only mapping of path -> TitleEntry for one run.

    Entries keep insertion order, so directories always come before the
    files they contain.
    """

    def __init__(self):
        self._entries: dict[Path, TitleEntry] = {}

    def add(self, entry: TitleEntry) -> TitleEntry:
        if entry.key in self._entries:
            raise DuplicateTitleError(entry.key)
        self._entries[entry.key] = entry
        return entry

    def __getitem__(self, path: Path) -> TitleEntry:
        try:
            return self._entries[path]
        except KeyError:
            raise MissingTitleError(path) from None

    def find(self, path: Path) -> TitleEntry | None:
        """Look up a link target, returning None when it was never titled."""
        return self._entries.get(path)

    def __contains__(self, path: Path) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())
