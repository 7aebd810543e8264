import re
from typing import Optional
from models.chunk import ContentType, Section
from config.settings import settings, ChunkingConfig

class ContentClassifier:
    """
    Assigns a ContentType to a section. Rules are checked in order, first match wins:
    metadata heading -> table_only -> example heading -> main_content -> other.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or settings.chunking
        self.metadata_pattern = self._compile(self.config.metadata_patterns)
        self.example_pattern = self._compile(self.config.example_patterns)

    def classify(self, section: Section, min_words: Optional[int] = None) -> ContentType:
        min_words = self.config.min_words if min_words is None else min_words
        heading = section.heading

        if heading is not None and self.metadata_pattern.search(heading):
            return ContentType.metadata
        if (section.chunk_text.count("|") > self.config.table_pipe_threshold
                and section.word_count < min_words):
            return ContentType.table_only
        if heading is not None and self.example_pattern.search(heading):
            return ContentType.example
        if section.word_count >= min_words:
            return ContentType.main_content
        return ContentType.other

    @staticmethod
    def _compile(patterns: list[str]) -> re.Pattern:
        if not patterns:
            return re.compile(r"(?!)")  # never matches
        return re.compile("|".join(re.escape(p) for p in patterns), re.IGNORECASE)
