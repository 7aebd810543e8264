from enum import Enum
from pydantic import BaseModel, ConfigDict

class ContentType(str, Enum):
    main_content = "main_content"
    example = "example"
    metadata = "metadata"
    table_only = "table_only"
    other = "other"

class Line(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int                 # 1-based position in the source text
    text: str
    is_heading: bool = False
    heading_level: int | None = None # 1 | 2 | 3 | None
    heading_text: str | None = None
    is_separator: bool = False
    # Forward-filled ancestors
    h1: str | None = None
    h2: str | None = None
    h3: str | None = None

class Section(BaseModel):
    """A chunk before size normalisation. Sections partition the source lines."""
    model_config = ConfigDict(frozen=True)

    chunk_id: int
    chunk_text: str
    word_count: int
    heading: str | None = None
    level: int | None = None
    parent_h1: str | None = None
    parent_h2: str | None = None
    hierarchy: str | None = None     # "Chapter 1 > Section A > Subsection 1"
    content_type: ContentType = ContentType.other
    start_line: int
    end_line: int

class Chunk(BaseModel):
    model_config = ConfigDict(frozen=True)

    chunk_id: str                    # "<parent_chunk_id>.<sub_chunk_id>"
    chunk_text: str
    word_count: int
    heading: str | None = None
    level: int | None = None
    parent_h1: str | None = None
    parent_h2: str | None = None
    hierarchy: str | None = None
    content_type: ContentType
    parent_chunk_id: int
    sub_chunk_id: int = 1
