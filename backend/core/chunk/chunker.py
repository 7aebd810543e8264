import logging
from typing import List, Optional
from models.chunk import Chunk, Section
from config.settings import settings, ChunkingConfig
from core.parse.line_tagger import LineTagger
from core.chunk.segmenter import ChunkSegmenter
from core.chunk.classifier import ContentClassifier
from core.chunk.size_normalizer import SizeNormalizer

logger = logging.getLogger(__name__)

class Chunker:
    """
    Heading-aware markdown chunking for keyword extraction.
    - Tags lines and tracks the h1/h2/h3 hierarchy.
    - Starts a new chunk at every level 2-3 heading.
    - Classifies each chunk (main_content, example, metadata, table_only, other).
    - Splits chunks above max_words along paragraph boundaries.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or settings.chunking
        self.tagger = LineTagger()
        self.segmenter = ChunkSegmenter()
        self.classifier = ContentClassifier(self.config)
        self.normalizer = SizeNormalizer()

    def chunk_document(self,
                       markdown_text: str,
                       max_words: Optional[int] = None,
                       min_words: Optional[int] = None) -> List[Chunk]:
        """
        Main entry point. Returns chunks with two-part ids ("3.1", "3.2", ...).
        """
        max_words = self.config.max_words if max_words is None else max_words
        sections = self.build_sections(markdown_text, min_words=min_words)
        chunks = self.normalizer.normalize(sections, max_words)

        logger.info(f"Chunked document into {len(sections)} sections and {len(chunks)} chunks")
        return chunks

    def build_sections(self, markdown_text: str, min_words: Optional[int] = None) -> List[Section]:
        """
        Chunks before size normalisation, classified and in document order.
        Joining their chunk_text with newlines reproduces the input.
        """
        min_words = self.config.min_words if min_words is None else min_words

        lines = self.tagger.tag(markdown_text)
        sections = self.segmenter.segment(lines)

        return [
            s.model_copy(update={"content_type": self.classifier.classify(s, min_words)})
            for s in sections
        ]
