"""DOCX rendering: lay out a compiled manuscript in standard manuscript format"""

import logging
from pathlib import Path

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_LINE_SPACING
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt

from mdms.core.errors import UnknownError
from mdms.core.models import Manuscript, Paragraph, Pii, Run, SceneSeparator, SectionBreak, Variant
from mdms.core.utils.wordcount import FLASH_LIMIT, round_up


logger = logging.getLogger(__name__)

TITLE_SPACER_LINES = 10     # lines between the cover block and the title
FIRST_LINE_INDENT = Inches(0.5)
MARGIN = Inches(1)


def word_count_label(count: int, exact: bool = False) -> str:
    """Cover-page word count: rounded and approximate unless exact or a flash piece."""
    if exact or count <= FLASH_LIMIT:
        return f"{count:,} words"
    return f"about {round_up(count):,} words"


def header_text(manuscript: Manuscript, variant: Variant) -> str:
    meta = manuscript.metadata
    short_title = meta.short_title or meta.title or ""
    if variant.anonymous:
        return f"{short_title} / "
    short_author = meta.short_author or meta.author or ""
    return f"{short_author} / {short_title} / "


def output_filename(manuscript: Manuscript, variant: Variant, fallback: str = "manuscript") -> str:
    parts = [manuscript.metadata.title or fallback, variant.font]
    if variant.anonymous:
        parts.append("Anonymous")
    if variant.classic:
        parts.append("Classic")
    return " - ".join(parts).replace("/", "-") + ".docx"


def _add_page_field(paragraph) -> None:
    """Append a PAGE field to paragraph."""
    run = paragraph.add_run()
    begin = OxmlElement("w:fldChar")
    begin.set(qn("w:fldCharType"), "begin")
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = "PAGE"
    end = OxmlElement("w:fldChar")
    end.set(qn("w:fldCharType"), "end")
    run._r.append(begin)
    run._r.append(instr)
    run._r.append(end)


def _centered(doc, text: str):
    p = doc.add_paragraph(text)
    p.alignment = WD_ALIGN_PARAGRAPH.CENTER
    return p


def _blank_lines(doc, count: int) -> None:
    for _ in range(count):
        doc.add_paragraph()


def _setup(doc, manuscript: Manuscript, variant: Variant, font_size: int) -> None:
    normal = doc.styles["Normal"]
    normal.font.name = variant.font
    normal.font.size = Pt(font_size)

    section = doc.sections[0]
    section.top_margin = section.bottom_margin = MARGIN
    section.left_margin = section.right_margin = MARGIN
    section.different_first_page_header_footer = True

    header = section.header.paragraphs[0]
    header.text = header_text(manuscript, variant)
    header.alignment = WD_ALIGN_PARAGRAPH.RIGHT
    _add_page_field(header)


def _cover(doc, manuscript: Manuscript, variant: Variant, pii: Pii | None, exact: bool) -> None:
    """Contact block on the left, word count on the right, then title and byline."""
    table = doc.add_table(rows=1, cols=2)
    contact, count = table.rows[0].cells

    lines = [] if variant.anonymous or pii is None else pii.contact_lines()
    contact.paragraphs[0].text = lines[0] if lines else ""
    for line in lines[1:]:
        contact.add_paragraph(line)
    for warning in manuscript.metadata.content_warnings or []:
        contact.add_paragraph(f"Content warning: {warning}")

    count.paragraphs[0].text = word_count_label(manuscript.word_count, exact)
    count.paragraphs[0].alignment = WD_ALIGN_PARAGRAPH.RIGHT

    _blank_lines(doc, TITLE_SPACER_LINES)
    _centered(doc, manuscript.metadata.title or "")
    if not variant.anonymous and manuscript.metadata.author:
        _centered(doc, f"by {manuscript.metadata.author}")
    _blank_lines(doc, 1)


def _add_runs(paragraph, runs: tuple[Run, ...], classic: bool) -> None:
    for run in runs:
        r = paragraph.add_run(run.text)
        r.bold = run.bold or None
        if classic:
            r.underline = run.italic or None
        else:
            r.italic = run.italic or None
        r.font.strike = run.strikethrough or None


def _body(doc, manuscript: Manuscript, variant: Variant) -> None:
    for block in manuscript.blocks:
        if isinstance(block, SectionBreak):
            doc.add_paragraph().paragraph_format.page_break_before = True
            _blank_lines(doc, block.spacer_lines)
            _centered(doc, block.heading)
        elif isinstance(block, SceneSeparator):
            _centered(doc, block.marker)
        elif isinstance(block, Paragraph):
            p = doc.add_paragraph()
            fmt = p.paragraph_format
            fmt.line_spacing_rule = WD_LINE_SPACING.DOUBLE
            fmt.first_line_indent = FIRST_LINE_INDENT
            _add_runs(p, block.runs, variant.classic)
    _centered(doc, "END")


def render_docx(
    manuscript: Manuscript,
    variant: Variant,
    output_dir: Path,
    pii: Pii | None = None,
    font_size: int = 12,
    exact: bool = False,
    ) -> Path:
    """Write one variant of manuscript to output_dir and return the file path."""
    doc = DocxDocument()
    _setup(doc, manuscript, variant, font_size)
    _cover(doc, manuscript, variant, pii, exact)
    _body(doc, manuscript, variant)

    out = Path(output_dir).expanduser() / output_filename(manuscript, variant)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        doc.save(str(out))
    except OSError as e:
        raise UnknownError(f"Could not write {out}: {e}") from e
    logger.info("Wrote %s", out)
    return out
