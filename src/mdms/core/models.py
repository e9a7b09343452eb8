"""Data models for parsed fragments, styled runs, and manuscript blocks"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mdms.core.errors import ParseSkipped


SCENE_MARKER = "#"
HEADING_SPACER_LINES = 23     # blank lines between the page break and a section heading


class Metadata(BaseModel):
    """Front-matter fields recognized on a fragment; unknown keys are ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    title:            Optional[str] = None
    author:           Optional[str] = None
    short_title:      Optional[str] = None    # running header
    short_author:     Optional[str] = None    # running header
    heading:          Optional[str] = None    # section heading emitted when included
    content_warnings: Optional[list[str]] = None
    include:          Optional[list[str]] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)


class Pii(BaseModel):
    """Author contact details shown on the cover of attributed manuscripts."""
    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    legal_name:   Optional[str] = None
    email:        Optional[str] = None
    phone:        Optional[str] = None
    address1:     Optional[str] = None
    address2:     Optional[str] = None
    city:         Optional[str] = None
    state:        Optional[str] = None
    postal_code:  Optional[str] = None
    country:      Optional[str] = None
    affiliations: Optional[list[str]] = None

    def contact_lines(self) -> list[str]:
        """Return the non-empty cover lines in postal order."""
        locality = ", ".join(p for p in (self.city, self.state) if p)
        if self.postal_code:
            locality = f"{locality} {self.postal_code}".strip()
        lines = [
            self.legal_name, self.address1, self.address2,
            locality, self.country, self.phone, self.email,
        ]
        lines.extend(self.affiliations or [])
        return [line for line in lines if line]


class Document(BaseModel):
    """One parsed fragment: front-matter metadata plus the cleaned body."""
    model_config = ConfigDict(frozen=True)

    metadata: Metadata = Field(default_factory=Metadata)
    content: str = ""


class Run(BaseModel):
    """A span of text sharing at most one style attribute."""
    model_config = ConfigDict(frozen=True)

    text:          str = ""
    bold:          bool = False
    italic:        bool = False
    strikethrough: bool = False

    @model_validator(mode="after")
    def _single_style(self):
        if sum((self.bold, self.italic, self.strikethrough)) > 1:
            raise ValueError("a run carries at most one style attribute")
        return self


class SectionBreak(BaseModel):
    """Page break, blank spacer lines, then a centered heading."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["section_break"] = "section_break"
    heading: str
    spacer_lines: int = Field(default=HEADING_SPACER_LINES, ge=0)


class SceneSeparator(BaseModel):
    """A centered marker between scenes."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["scene_separator"] = "scene_separator"
    marker: str = SCENE_MARKER


class Paragraph(BaseModel):
    """A double-spaced, first-line-indented paragraph of styled runs."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    runs: tuple[Run, ...] = ()

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


Block = Annotated[Union[SectionBreak, SceneSeparator, Paragraph], Field(discriminator="kind")]


class Manuscript(BaseModel):
    """Result of one compilation pass, handed to the renderer."""
    model_config = ConfigDict(frozen=True)

    metadata: Metadata
    blocks: tuple[Block, ...] = ()
    word_count: int = Field(default=0, ge=0)


@dataclass(frozen=True)
class Variant:
    """One font/anonymity/style combination rendered from the same blocks."""
    font:      str
    anonymous: bool = False
    classic:   bool = False     # underline instead of italics


class Corpus(Mapping):
    """Read-only lookup of parsed fragments keyed by root-relative posix path."""

    def __init__(self, documents: dict[str, Document], skipped: tuple[ParseSkipped, ...] = ()):
        self._documents = dict(documents)
        self.skipped = tuple(skipped)

    def __getitem__(self, key: str) -> Document:
        return self._documents[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self) -> str:
        return f"Corpus({sorted(self._documents)!r})"
