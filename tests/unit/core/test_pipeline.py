"""Unit tests for core/pipeline.py"""

import pytest

from mdms.config import Settings
from mdms.core.errors import FileNotFound, ManuscriptError, NotFound
from mdms.core.models import Paragraph, SceneSeparator, SectionBreak, Variant
from mdms.core.pipeline import build_variants, compile_manuscript, load_pii, run_compile


# --- compile_manuscript ---

def test_compile_manuscript_tree(novella):
    """The novella compiles into headings, scenes, and separators in manifest order."""
    ms = compile_manuscript(novella)
    assert ms.metadata.title == "The Lighthouse"
    assert [b.kind for b in ms.blocks] == [
        "section_break",     # Part One
        "paragraph",         # scene1 line 1
        "paragraph",         # scene1 line 2
        "scene_separator",
        "paragraph",         # scene2
        "section_break",     # Part Two
        "paragraph",
    ]
    assert ms.blocks[5] == SectionBreak(heading="Part Two")


def test_compile_manuscript_word_count(novella):
    ms = compile_manuscript(novella)
    # Part One (2) + 6 + 5 + 3 + Part Two (2) + 4
    assert ms.word_count == 22


def test_compile_manuscript_standalone(tmp_path, write_file):
    f = write_file(tmp_path, "flash.md", "---\ntitle: Flash\n---\nOne line.\n#\nAnother *line*.\n")
    ms = compile_manuscript(f)
    assert isinstance(ms.blocks[0], Paragraph)
    assert isinstance(ms.blocks[1], SceneSeparator)
    assert ms.metadata.title == "Flash"


def test_compile_manuscript_missing_include(novella):
    (novella / "Part 2" / "scene1.md").unlink()
    with pytest.raises(FileNotFound) as exc:
        compile_manuscript(novella)
    assert exc.value.path == "Part 2/scene1.md"


def test_compile_manuscript_missing_root(tmp_path):
    with pytest.raises(NotFound):
        compile_manuscript(tmp_path / "missing")


def test_compile_manuscript_no_markdown(tmp_path):
    (tmp_path / "notes.txt").write_text("x")
    with pytest.raises(ManuscriptError, match="No markdown files"):
        compile_manuscript(tmp_path)


# --- build_variants ---

def test_build_variants_default():
    variants = build_variants(Settings())
    assert variants == [Variant("Courier New"), Variant("Times New Roman")]


def test_build_variants_product():
    variants = build_variants(Settings(fonts=["Courier New"], anonymous=True, classic=True))
    assert variants == [
        Variant("Courier New", False, False),
        Variant("Courier New", False, True),
        Variant("Courier New", True, False),
        Variant("Courier New", True, True),
    ]


# --- load_pii / run_compile ---

def test_load_pii_none():
    assert load_pii(None) is None


def test_load_pii_missing_file(tmp_path):
    with pytest.raises(ManuscriptError):
        load_pii(str(tmp_path / "pii.md"))


def test_run_compile_writes_each_variant(tmp_path, novella, write_file):
    pii = write_file(tmp_path, "pii.md", "---\nlegal_name: Jane Q. Writer\n---\n")
    settings = Settings(output_dir=str(tmp_path / "out"), pii=str(pii), anonymous=True)
    written = run_compile(str(novella), settings)
    assert len(written) == 4
    assert all(p.exists() and p.suffix == ".docx" for p in written)
    assert {p.parent for p in written} == {tmp_path / "out"}


def test_load_pii_undecodable_file(tmp_path):
    """A PII file that is not UTF-8 surfaces as a ManuscriptError."""
    pii = tmp_path / "pii.md"
    pii.write_bytes(b"\xff\xfe\x00broken")
    with pytest.raises(ManuscriptError, match="Could not read PII file"):
        load_pii(str(pii))
