from enum import Enum
from pydantic import BaseModel, ConfigDict

class CompetencyCategory(str, Enum):
    skill = "skill"
    knowledge = "knowledge"
    behavior = "behavior"
    tool = "tool"
    practice = "practice"
    role = "role"

class Importance(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"

class CompetencyRecord(BaseModel):
    """
    A term extracted from one chunk.
    Custom extraction schemas may add fields (e.g. "plo"); they are kept as extras.
    """
    model_config = ConfigDict(extra="allow")

    term: str
    category: str | None = None      # CompetencyCategory for the default schema
    importance: str | None = None    # Importance for the default schema
    definition: str | None = None
    source_chunk: str | None = None  # chunk_id of the source chunk
    source_hierarchy: str | None = None

class ValidatedCompetency(CompetencyRecord):
    text_found: bool
    partial_match: bool
    confidence: float

class ValidationSummary(BaseModel):
    total: int
    exact_matches: int
    exact_match_pct: float
    partial_matches: int
    partial_match_pct: float
    high_confidence: int             # confidence > high threshold
    high_confidence_pct: float
    low_confidence: int              # confidence < low threshold
    low_confidence_pct: float
    low_confidence_terms: list[str] = []

class ExtractionBatch(BaseModel):
    """Records of one extraction run, grouped by source chunk, in chunk order."""
    by_chunk: dict[str, list[CompetencyRecord]] = {}
    failed_chunks: list[str] = []    # chunk_ids whose LLM call failed

    @property
    def records(self) -> list[CompetencyRecord]:
        return [r for chunk_records in self.by_chunk.values() for r in chunk_records]
