from pydantic import BaseModel
from models.chunk import Chunk
from models.competency import CompetencyRecord, ValidatedCompetency, ValidationSummary

class ChunkRequest(BaseModel):
    markdown_text: str
    max_words: int | None = None     # None = settings.chunking.max_words
    min_words: int | None = None

class ChunkResponse(BaseModel):
    total_chunks: int
    chunks: list[Chunk]

class FilterRequest(BaseModel):
    chunks: list[Chunk]

class PreviewRow(BaseModel):
    chunk_id: str
    hierarchy_short: str | None = None
    word_count: int
    content_type: str
    preview: str

class WordCountStats(BaseModel):
    min: float
    q1: float
    median: float
    mean: float
    q3: float
    max: float

class ChunkPreview(BaseModel):
    rows: list[PreviewRow]
    total_chunks: int
    content_type_counts: dict[str, int]
    word_count_stats: WordCountStats | None = None  # None for an empty chunk list

class ValidateRequest(BaseModel):
    competencies: list[CompetencyRecord]
    chunks: list[Chunk]

class ValidateResponse(BaseModel):
    competencies: list[ValidatedCompetency]
    summary: ValidationSummary

class ExtractRequest(BaseModel):
    markdown_text: str
    max_words: int | None = None
    min_words: int | None = None
    max_per_chunk: int | None = None
    model: str | None = None         # None = settings.llm.model

class ExtractionResult(BaseModel):
    chunks: list[Chunk]
    keyword_chunks: list[Chunk]
    competencies: list[ValidatedCompetency]
    summary: ValidationSummary
    failed_chunks: list[str] = []    # chunk_ids whose LLM call failed

class SetupReport(BaseModel):
    api_key_found: bool
    api_key_format_ok: bool
    api_key_length: int
    model: str
    api_test_ok: bool
    api_error: str | None = None
    recommendations: list[str] = []
