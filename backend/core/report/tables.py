from typing import List, Sequence
import pandas as pd
from models.chunk import Chunk
from models.competency import CompetencyRecord, ValidatedCompetency

CHUNK_COLUMNS = [
    "chunk_id", "chunk_text", "word_count", "heading", "level",
    "parent_h1", "parent_h2", "hierarchy", "content_type",
]
COMPETENCY_COLUMNS = [
    "term", "category", "importance", "definition", "source_chunk", "source_hierarchy",
]
VALIDATED_COLUMNS = COMPETENCY_COLUMNS + ["text_found", "partial_match", "confidence"]


def _to_frame(rows: List[dict], columns: List[str]) -> pd.DataFrame:
    """
    Builds a DataFrame that always carries the expected columns, so joins on an
    empty result still work. Extra fields from custom schemas are appended after them.
    """
    df = pd.DataFrame(rows)
    extra = [c for c in df.columns if c not in columns]
    return df.reindex(columns=columns + extra)


def chunks_to_frame(chunks: Sequence[Chunk]) -> pd.DataFrame:
    rows = [c.model_dump(mode="json", include=set(CHUNK_COLUMNS)) for c in chunks]
    return _to_frame(rows, CHUNK_COLUMNS)


def competencies_to_frame(competencies: Sequence[CompetencyRecord]) -> pd.DataFrame:
    return _to_frame([c.model_dump(mode="json") for c in competencies], COMPETENCY_COLUMNS)


def validated_to_frame(validated: Sequence[ValidatedCompetency]) -> pd.DataFrame:
    return _to_frame([v.model_dump(mode="json") for v in validated], VALIDATED_COLUMNS)
