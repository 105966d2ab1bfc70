"""Concatenate markdown files into one document.

Pipeline:
1. Title pass: give every file (and optionally every directory) a section
   title, shift the file's own headings below it, prefix the title.
2. Link pass: rewrite links between files to anchors of those titles.
3. Join the files and add the global title and table of contents.

The link pass needs the title of any file in the set, including files that
come later, so it only starts once the title pass has seen every file.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path

from . import toc
from .errors import ConfigError
from .links import rewrite_links
from .markdown import shift_headings
from .titles import TitleEntry, TitleIndex, slug, start_case

TITLE_SUFFIX = "\n\n"


@dataclass(frozen=True)
class RunConfig:
    """Options for one concatenation run."""
    title: str | None = None
    toc: bool = False
    toc_level: int = 3
    ignore: tuple[str, ...] = ()
    include: tuple[str, ...] = ("**/*.md",)
    decrease_title_levels: bool = False
    start_title_level_at: int = 1
    join_string: str | None = None
    title_key: str | None = None
    file_name_as_title: bool = False
    dir_name_as_title: bool = False

    def __post_init__(self):
        # Accept a single glob or any iterable of globs.
        for name in ("ignore", "include"):
            value = getattr(self, name)
            if isinstance(value, str):
                value = (value,)
            object.__setattr__(self, name, tuple(value))
        if not self.include:
            object.__setattr__(self, "include", ("**/*.md",))

        if self.toc_level < 1:
            raise ConfigError(f"toc_level must be at least 1, got {self.toc_level}")
        if self.start_title_level_at < 1:
            raise ConfigError(
                f"start_title_level_at must be at least 1, got {self.start_title_level_at}"
            )

    @classmethod
    def from_options(cls, **options) -> "RunConfig":
        """Build a config from keyword options, rejecting unknown names."""
        known = {f.name for f in fields(cls)}
        for name in options:
            if name not in known:
                raise ConfigError(f"Unknown option '{name}'")
        return cls(**options)

    @property
    def join_separator(self) -> str:
        return f"\n{self.join_string}\n" if self.join_string else "\n"


@dataclass
class Document:
    """A markdown file being concatenated."""
    path: Path
    root: Path
    raw_body: str
    metadata: dict = field(default_factory=dict)
    body: str = ""

    def __post_init__(self):
        if not self.body:
            self.body = self.raw_body


class Concatenator:
    """Runs the title and link passes over one ordered set of documents."""

    def __init__(self, config: RunConfig | None = None):
        self.config = config or RunConfig()
        self.index = TitleIndex()
        self.visited_dirs: set[Path] = set()

    def dir_parts(self, document: Document) -> list[str]:
        parent = document.path.parent
        if parent == document.root:
            return []
        return list(parent.relative_to(document.root).parts)

    def file_title(self, document: Document) -> str | None:
        """Title from front matter, else from the file name if enabled."""
        key = self.config.title_key
        if key and document.metadata.get(key) not in (None, ""):
            return str(document.metadata[key])
        if self.config.file_name_as_title:
            return start_case(document.path.stem)
        return None

    def add_title(self, document: Document) -> TitleEntry:
        """Record titles for the document and any directory not seen before.

        Returns the document's own entry, whose markdown holds every heading
        to put in front of its body.
        """
        title_md = ""
        level = self.config.start_title_level_at - 1

        if self.config.dir_name_as_title:
            current_dir = document.root
            for part in self.dir_parts(document):
                current_dir = current_dir / part
                level += 1
                if current_dir in self.visited_dirs:
                    continue
                dir_title = start_case(part)
                title_md += f"{'#' * level} {dir_title}{TITLE_SUFFIX}"
                self.visited_dirs.add(current_dir)
                self.index.add(TitleEntry(current_dir, dir_title, level, title_md))

        file_title = self.file_title(document)
        if file_title:
            level += 1
            title_md += f"{'#' * level} {file_title}{TITLE_SUFFIX}"
        else:
            # No heading for this file: leave an anchor for links pointing to it.
            file_title = slug(str(document.path.relative_to(document.root)))
            title_md += f'\n<a name="{file_title}"></a>\n\n'

        return self.index.add(TitleEntry(document.path, file_title, level, title_md))

    def add_titles(self, documents: list[Document]):
        for document in documents:
            self.add_title(document)
            entry = self.index[document.path]
            body = document.body
            if self.config.decrease_title_levels:
                body = shift_headings(body, entry.level)
            document.body = entry.markdown + body

    def modify_links(self, documents: list[Document]):
        for document in documents:
            document.body = rewrite_links(document.body, document.path, self.index)

    def add_global_title_and_toc(self, content: str) -> str:
        title = self.config.title
        if not self.config.toc:
            return f"# {title}\n{content}" if title else content

        result = content
        if not toc.has_toc_markers(result):
            result = f"{toc.TOC_TAG}\n\n{result}"
        if title:
            result = f"# {title}\n\n{result}"

        toc_result = toc.transform(result, self.config.toc_level)
        if toc_result.transformed:
            result = toc_result.data
        return result

    def concat(self, documents: list[Document]) -> str:
        self.add_titles(documents)
        self.modify_links(documents)
        content = self.config.join_separator.join(d.body for d in documents)
        return self.add_global_title_and_toc(content)


def concat_documents(documents: list[Document], config: RunConfig | None = None) -> str:
    """Concatenate already-read documents, in the given order."""
    return Concatenator(config).concat(documents)


def concat_md(
    paths: list[Path | str] | Path | str,
    config: RunConfig | None = None,
    jobs: int = 1,
    **options,
) -> str:
    """Find, read and concatenate all markdown files under the given paths.

    Args:
        paths: Directories to scan and/or single markdown files.
        config: Run options. Keyword options build one when omitted.
        jobs: Number of files read in parallel.

    Returns:
        The concatenated markdown.

    Raises:
        ConfigError: Unknown or invalid option.
        FileNotFoundError: A path does not exist.
    """
    from .discovery import collect_sources, read_documents

    if config is None:
        config = RunConfig.from_options(**options)
    elif options:
        raise ConfigError("Pass either a RunConfig or keyword options, not both")

    if isinstance(paths, (str, Path)):
        paths = [paths]

    sources = collect_sources(paths, config.include, config.ignore)
    documents = read_documents(sources, jobs=jobs)
    return concat_documents(documents, config)
