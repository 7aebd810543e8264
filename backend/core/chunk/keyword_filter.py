from typing import List, Optional
from models.chunk import Chunk, ContentType
from config.settings import settings, ChunkingConfig

class KeywordFilter:
    """
    Keeps chunks worth sending to keyword extraction:
    main_content or example chunks with at least keyword_min_words words.
    Results are ordered by chunk_id as plain text, so "10.1" sorts before "2.1".
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or settings.chunking

    def filter(self, chunks: List[Chunk]) -> List[Chunk]:
        allowed = {ContentType(t) for t in self.config.keyword_content_types}
        kept = [
            c for c in chunks
            if c.content_type in allowed and c.word_count >= self.config.keyword_min_words
        ]
        return sorted(kept, key=lambda c: c.chunk_id)
