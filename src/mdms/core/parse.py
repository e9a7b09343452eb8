"""Front-matter extraction and body cleanup for manuscript fragments"""

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mdms.core.models import Document, Metadata, Pii


FRONTMATTER_RE = re.compile(r'^---[ \t]*\n(.*?)\n---[ \t]*(?:\n|$)', re.DOTALL)
COMMENT_RE = re.compile(r'%%\s+.*?\s+%%', re.DOTALL)
LINK_RE = re.compile(r'\[([^\[\]]+)\]\(([^)]+)\)')
SPACES_RE = re.compile(r'[ ]+')
MD_EXTENSION = '.md'


def is_markdown(path: Path) -> bool:
    """Return True for files with the (case-sensitive) .md extension."""
    return path.suffix == MD_EXTENSION


def _split_frontmatter(text: str) -> tuple[dict[str, Any], str] | None:
    """Return (frontmatter_dict, body), or None when there is no usable YAML header."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return None
    try:
        fm = yaml.safe_load(m.group(1))
    except yaml.YAMLError:
        return None
    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        return None
    return fm, text[m.end():]


def strip_comments(text: str) -> str:
    """Remove single and multi-line %% comment %% blocks, then trim."""
    return COMMENT_RE.sub('', text).strip()


def strip_links(text: str) -> str:
    """Replace [label](target) with label until no link construct remains."""
    while True:
        stripped = LINK_RE.sub(r'\1', text)
        if stripped == text:
            return stripped
        text = stripped


def collapse_spaces(text: str) -> str:
    return SPACES_RE.sub(' ', text)


def clean_body(text: str) -> str:
    """Apply comment, link, and whitespace cleanup until the text is stable."""
    while True:
        cleaned = collapse_spaces(strip_links(strip_comments(text)))
        if cleaned == text:
            return cleaned
        text = cleaned


def parse_markdown(text: str) -> Document:
    """Parse a fragment into a Document.

    A missing or unparseable front-matter block is not an error: the fragment
    is standalone content with empty metadata and its raw text as the body.
    """
    metadata, body = Metadata(), text
    split = _split_frontmatter(text)
    if split is not None:
        fm, rest = split
        try:
            metadata, body = Metadata.model_validate(fm), rest
        except ValidationError:
            pass
    return Document(metadata=metadata, content=clean_body(body))


def parse_pii(text: str) -> Pii:
    """Parse a PII document's front matter; anything unusable yields an empty Pii."""
    split = _split_frontmatter(text)
    if split is None:
        return Pii()
    try:
        return Pii.model_validate(split[0])
    except ValidationError:
        return Pii()


def read_markdown(path: Path) -> Document:
    """Read and parse a single markdown file."""
    return parse_markdown(path.read_text(encoding='utf-8'))
