"""Recursive loading of a manuscript tree into a path-keyed corpus"""

import logging
from pathlib import Path

from mdms.core.errors import NotFound, ParseSkipped
from mdms.core.models import Corpus, Document
from mdms.core.parse import is_markdown, read_markdown


logger = logging.getLogger(__name__)

ROOT_METADATA = 'metadata.md'


def _read(path: Path, key: str, skipped: list[ParseSkipped]) -> dict[str, Document]:
    """Parse one file into a single-entry mapping, or record why it was skipped."""
    try:
        return {key: read_markdown(path)}
    except (OSError, UnicodeDecodeError) as e:
        diagnostic = ParseSkipped(key, str(e))
        logger.warning("%s", diagnostic)
        skipped.append(diagnostic)
        return {}


def _read_dir(root: Path, path: Path, skipped: list[ParseSkipped]) -> dict[str, Document]:
    """Return a fresh mapping for every markdown file under path, keyed relative to root."""
    files: dict[str, Document] = {}
    for entry in sorted(path.iterdir()):
        if entry.is_file():
            if is_markdown(entry):
                files.update(_read(entry, entry.relative_to(root).as_posix(), skipped))
            else:
                logger.debug("Skipping non-markdown file '%s'", entry)
        elif entry.is_dir():
            files.update(_read_dir(root, entry, skipped))
        else:
            logger.debug("Skipping '%s'", entry)
    return files


def load_corpus(root: Path) -> Corpus:
    """Parse a markdown file, or every markdown file under a directory, into a Corpus."""
    root = Path(root)
    if not root.exists():
        raise NotFound(root)

    skipped: list[ParseSkipped] = []
    if root.is_file():
        files = _read(root, root.name, skipped) if is_markdown(root) else {}
    else:
        files = _read_dir(root, root, skipped)

    logger.info("Loaded %d document(s) from %s", len(files), root)
    return Corpus(files, tuple(skipped))


def select_root(corpus: Corpus) -> Document | None:
    """Pick the document whose metadata drives compilation.

    A root-level metadata.md supplies manuscript metadata (its body is not
    compiled); otherwise the first document by path is a standalone manuscript.
    """
    if ROOT_METADATA in corpus:
        return Document(metadata=corpus[ROOT_METADATA].metadata)
    for key in sorted(corpus):
        return corpus[key]
    return None
