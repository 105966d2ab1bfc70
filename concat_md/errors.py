"""Errors raised while concatenating markdown files."""

from pathlib import Path


class ConcatError(Exception):
    """Base error for concat-md."""


class ConfigError(ConcatError):
    """Invalid or unknown run option."""


class FrontMatterError(ConcatError):
    """Front matter block that cannot be parsed."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class DuplicateTitleError(ConcatError):
    """A path was given a title twice in one run."""

    def __init__(self, path: Path):
        super().__init__(f"Title already recorded for {path}")
        self.path = path


class MissingTitleError(ConcatError):
    """A title was requested for a path that was never titled.

    Raised only by strict lookups. It means a file was skipped by the
    title pass, so it is never recovered from.
    """

    def __init__(self, path: Path):
        super().__init__(f"Cannot get title for {path}")
        self.path = path
