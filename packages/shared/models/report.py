from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .enums import Alignment, BadgeLevel, TextRole


class Badge(BaseModel):
    text: str
    level: BadgeLevel = BadgeLevel.NEUTRAL


class Row(BaseModel):
    cells: list[str] = Field(default_factory=list)
    badge: Optional[Badge] = None


class Column(BaseModel):
    header: str
    width: Optional[float] = Field(default=None, ge=0)  # None = auto width


class Section(BaseModel):
    title: str
    columns: list[Column] = Field(default_factory=list)
    rows: list[Row] = Field(default_factory=list)
    stats: dict[str, float] = Field(default_factory=dict)

    @property
    def header_row(self) -> list[str]:
        return [c.header for c in self.columns]


class TextAt(BaseModel):
    kind: Literal["text"] = "text"
    x: float
    y: float
    font_size: float
    text: str
    align: Alignment = Alignment.LEFT
    role: Optional[TextRole] = None


class Table(BaseModel):
    kind: Literal["table"] = "table"
    x: float
    y: float
    column_widths: list[float]
    header_row: list[str]
    body_rows: list[Row] = Field(default_factory=list)
    style_hints: dict[str, float | str] = Field(default_factory=dict)


DrawCommand = Annotated[Union[TextAt, Table], Field(discriminator="kind")]


class Page(BaseModel):
    index: int = Field(ge=1)
    commands: list[DrawCommand] = Field(default_factory=list)
    cursor_y: float = 0.0


class Document(BaseModel):
    pages: list[Page] = Field(default_factory=list)
    total_pages: Optional[int] = None
    page_width: float = 210.0
    page_height: float = 297.0
