"""Word counting and the editorial rounding rule"""

import re
from typing import Iterable

from mdms.core.models import Block, Paragraph, SectionBreak


WORD_RE = re.compile(r"\b[\w']+\b", re.UNICODE)
FLASH_LIMIT = 100           # counts at or below this are reported exactly
NOVELLA_LIMIT = 17500       # above this, round to the nearest 500


def round_up(count: int) -> int:
    """Round a word count up for display (next multiple of 100, or 500 past novelette length)."""
    if count > NOVELLA_LIMIT:
        return count + 500 - (count + 500) % 500
    if count <= FLASH_LIMIT:
        return count
    return count + 100 - (count + 100) % 100


def count_words(blocks: Iterable[Block]) -> int:
    """Count words in paragraphs and section headings; scene separators are not words."""
    total = 0
    for block in blocks:
        if isinstance(block, Paragraph):
            total += len(WORD_RE.findall(block.text))
        elif isinstance(block, SectionBreak):
            total += len(WORD_RE.findall(block.heading))
    return total
