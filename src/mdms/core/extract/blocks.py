"""Manifest flattening: fragments to an ordered sequence of manuscript blocks"""

import logging

from mdms.core.errors import FileNotFound, NestedManifest
from mdms.core.extract.runs import tokenize_line
from mdms.core.models import (
    SCENE_MARKER,
    Block,
    Corpus,
    Document,
    Paragraph,
    SceneSeparator,
    SectionBreak,
)


logger = logging.getLogger(__name__)


def content_to_blocks(content: str, preset: str = 'commonmark') -> list[Block]:
    """Convert fragment content into blocks, one per non-blank line.

    A line holding only the scene marker becomes a SceneSeparator.
    """
    blocks: list[Block] = []
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if stripped == SCENE_MARKER:
            blocks.append(SceneSeparator())
        else:
            blocks.append(Paragraph(runs=tuple(tokenize_line(stripped, preset))))
    return blocks


def _append(blocks: list[Block], block: Block) -> None:
    """Append block, dropping a separator that would follow another separator."""
    if isinstance(block, SceneSeparator) and blocks and isinstance(blocks[-1], SceneSeparator):
        return
    blocks.append(block)


def assemble(corpus: Corpus, root: Document, preset: str = 'commonmark') -> list[Block]:
    """Flatten root's include manifest against corpus into blocks, in manifest order.

    Raises FileNotFound for a dangling include and NestedManifest for an include
    that declares its own manifest; no partial sequence is returned.
    """
    if root.metadata.include is None:
        return content_to_blocks(root.content, preset)

    blocks: list[Block] = []
    separator_pending = False

    for path in root.metadata.include:
        if path not in corpus:
            raise FileNotFound(path)
        doc = corpus[path]
        if doc.metadata.include is not None:
            raise NestedManifest(path)

        if doc.metadata.heading is not None:
            blocks.append(SectionBreak(heading=doc.metadata.heading))
            separator_pending = False
        elif separator_pending:
            _append(blocks, SceneSeparator())

        fragment = content_to_blocks(doc.content, preset)
        for block in fragment:
            _append(blocks, block)
        if any(isinstance(b, Paragraph) for b in fragment):
            separator_pending = True
        else:
            logger.debug("%s contributed no paragraphs", path)

    return blocks
