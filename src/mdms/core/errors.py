"""Compilation error taxonomy"""


class ManuscriptError(Exception):
    """Base class for every error surfaced by a compilation pass."""


class NotFound(ManuscriptError):
    """The compilation root does not exist."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"No such file or directory: {self.path}")


class FileNotFound(ManuscriptError):
    """A manifest include has no matching document in the corpus."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Included file not found: {path}")


class NestedManifest(ManuscriptError):
    """An included document declares its own include list."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Included file declares its own include list: {path}")


class ParseSkipped(ManuscriptError):
    """A file under the root could not be read; recorded, never raised by the loader."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Skipped {path}: {reason}")


class UnknownError(ManuscriptError):
    """I/O failure while writing compiled output."""
