"""Data models for outline items, level styles, ToC config and results."""

from enum import Enum
from pathlib import Path
from typing import Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class NumeralStyle(str, Enum):
    """Numeral systems available for entry labels."""

    DECIMAL = "decimal"
    UPPER_ROMAN = "upper-roman"
    UPPER_ALPHA = "upper-alpha"
    SIMPLIFIED_CHINESE = "simplified-chinese"


class LevelStyle(BaseModel):
    """Numbering and rendering options for one outline depth."""

    style: NumeralStyle = Field(default=NumeralStyle.DECIMAL, description="Numeral style of the label")
    prefix: str = Field(default="", description="Literal text before the label")
    suffix: str = Field(default="", description="Literal text after the label")
    separator: str = Field(default=".", description="Joins inherited ordinals, e.g. 2.3")
    inherit_parent: bool = Field(
        default=False,
        description="Prefix the label with the parent's ordinal path instead of restarting",
    )
    font_size: float = Field(default=11, gt=0, description="Entry font size (points)")
    bold: bool = Field(default=False, description="Use the bold font for this level")
    dot_leader: str = Field(default=".", description="Leader glyph; empty string disables the leader")
    color: str = Field(default="#000000", description="Text color as #rrggbb")
    line_spacing: float = Field(default=1.8, gt=0, description="Line height as a multiple of font_size")

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        value = value.strip()
        if len(value) != 7 or not value.startswith("#"):
            raise ValueError(f"color must look like #rrggbb, got {value!r}")
        int(value[1:], 16)
        return value.lower()

    @property
    def rgb(self) -> tuple[float, float, float]:
        """Color as an (r, g, b) triple of floats in [0, 1]."""
        return (
            int(self.color[1:3], 16) / 255,
            int(self.color[3:5], 16) / 255,
            int(self.color[5:7], 16) / 255,
        )


def default_levels() -> list[LevelStyle]:
    """First level bold with independent numbering; deeper levels inherit the parent path."""
    return [
        LevelStyle(font_size=13, bold=True, line_spacing=1.8),
        LevelStyle(font_size=11, inherit_parent=True, color="#333333", line_spacing=1.8),
    ]


def level_style_at(levels: Sequence[LevelStyle], depth: int) -> LevelStyle:
    """Style for a depth; depths past the table reuse its last entry."""
    return levels[min(max(depth, 0), len(levels) - 1)]


class OutlineItem(BaseModel):
    """One ToC entry. target_page is 1-based in the original document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = ""
    target_page: int = Field(
        default=1,
        validation_alias=AliasChoices("target_page", "page", "to"),
    )
    children: list["OutlineItem"] = Field(default_factory=list)
    display_prefix: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _none_title(cls, value):
        return "" if value is None else value

    @field_validator("children", mode="before")
    @classmethod
    def _none_children(cls, value):
        return [] if value is None else value

    @property
    def rendered_title(self) -> str:
        return f"{self.display_prefix} {self.title}".strip()


class TocConfig(BaseModel):
    """Options for ToC synthesis."""

    insert_at: int = Field(
        default=2,
        description="1-based page number the ToC is inserted before (clamped to the document)",
    )
    page_offset: int = Field(
        default=0,
        description="Added to every entry's page number when resolving its link",
    )
    title: str = Field(default="Table of Contents", description="Heading on the first ToC page")
    numbering: bool = Field(default=True, description="Prefix titles with generated labels")
    levels: list[LevelStyle] = Field(
        default_factory=default_levels,
        min_length=1,
        description="Per-depth styles; deeper levels reuse the last entry",
    )
    regular_font: Path | None = Field(default=None, description="Font file for regular text (default: Helvetica)")
    bold_font: Path | None = Field(default=None, description="Font file for bold text (default: Helvetica-Bold)")
    backend: str = Field(default="pymupdf", description="Drawing backend: pymupdf (default)")

    def style_for_depth(self, depth: int) -> LevelStyle:
        return level_style_at(self.levels, depth)


class TocResult(BaseModel):
    """Result of adding a ToC to a PDF file."""

    success: bool = Field(description="Whether the output was written")
    output_path: Path | None = Field(default=None, description="Path of the written PDF")
    source_page_count: int = Field(default=0, description="Pages in the source PDF")
    toc_page_count: int = Field(default=0, description="ToC pages inserted")
    page_count: int = Field(default=0, description="Pages in the output PDF")
    link_count: int = Field(default=0, description="Link annotations written")
    errors: list[str] = Field(default_factory=list, description="Fatal errors, if any")
    message: str = Field(default="", description="Human-readable summary")
