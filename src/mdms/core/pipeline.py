"""Pipeline step functions: compile a manuscript tree and render its variants"""

import logging
from itertools import product
from pathlib import Path

from mdms.config import Settings
from mdms.core.corpus import load_corpus, select_root
from mdms.core.errors import ManuscriptError
from mdms.core.export import render_docx
from mdms.core.extract.blocks import assemble
from mdms.core.models import Manuscript, Pii, Variant
from mdms.core.parse import parse_pii
from mdms.core.utils.wordcount import count_words


logger = logging.getLogger(__name__)


def compile_manuscript(path: Path, preset: str = 'commonmark') -> Manuscript:
    """Load path, flatten its manifest, and count words.

    Raises NotFound, FileNotFound, or NestedManifest; never returns a partial manuscript.
    """
    corpus = load_corpus(Path(path))
    root = select_root(corpus)
    if root is None:
        raise ManuscriptError(f"No markdown files found in {path}")
    if root.metadata.is_empty:
        logger.warning("%s has no front matter; compiling as a standalone document", path)

    blocks = assemble(corpus, root, preset)
    return Manuscript(metadata=root.metadata, blocks=tuple(blocks), word_count=count_words(blocks))


def build_variants(settings: Settings) -> list[Variant]:
    """Every font x attribution x style combination enabled by settings."""
    anonymity = (False, True) if settings.anonymous else (False,)
    styles = (False, True) if settings.classic else (False,)
    return [
        Variant(font=font, anonymous=anonymous, classic=classic)
        for font, anonymous, classic in product(settings.fonts, anonymity, styles)
    ]


def load_pii(path: str | None) -> Pii | None:
    """Read the PII document, if configured."""
    if not path:
        return None
    pii_path = Path(path).expanduser()
    try:
        return parse_pii(pii_path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError) as e:
        raise ManuscriptError(f"Could not read PII file {pii_path}: {e}") from e


def run_compile(path: str, settings: Settings, manuscript: Manuscript = None) -> list[Path]:
    """Compile path and write one DOCX per variant. Returns the written paths."""
    if manuscript is None:
        manuscript = compile_manuscript(Path(path), settings.parser_config)
    pii = load_pii(settings.pii)
    output_dir = Path(settings.output_dir).expanduser()
    return [
        render_docx(manuscript, variant, output_dir, pii, settings.font_size, settings.exact_word_count)
        for variant in build_variants(settings)
    ]
