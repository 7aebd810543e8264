import logging
from typing import List
from models.chunk import Chunk, Section
from core.text import count_words, split_paragraphs

logger = logging.getLogger(__name__)

class SizeNormalizer:
    """
    Splits sections above a word budget into paragraph-aligned sub-chunks.
    - Paragraphs are packed greedily and never split.
    - A single paragraph larger than the budget becomes its own sub-chunk.
    - Every section yields chunk ids "<section_id>.<sub_id>", sub ids starting at 1.
    """

    def normalize(self, sections: List[Section], max_words: int) -> List[Chunk]:
        chunks = []
        for section in sections:
            chunks.extend(self.split_section(section, max_words))
        return chunks

    def split_section(self, section: Section, max_words: int) -> List[Chunk]:
        if section.word_count <= max_words:
            return [self._make_chunk(section, 1, section.chunk_text, section.word_count)]

        pieces = self._pack_paragraphs(split_paragraphs(section.chunk_text), max_words)
        logger.debug(f"Section {section.chunk_id} ({section.word_count} words) split into {len(pieces)} sub-chunks")

        return [
            self._make_chunk(section, sub_id, "\n\n".join(paragraphs), words)
            for sub_id, (paragraphs, words) in enumerate(pieces, start=1)
        ]

    def _pack_paragraphs(self, paragraphs: List[str], max_words: int) -> List[tuple]:
        pieces = []
        current = []
        current_words = 0

        for para in paragraphs:
            para_words = count_words(para)
            if current and current_words + para_words > max_words:
                pieces.append((current, current_words))
                current = [para]
                current_words = para_words
            else:
                current.append(para)
                current_words += para_words

        if current:
            pieces.append((current, current_words))
        return pieces

    @staticmethod
    def _make_chunk(section: Section, sub_id: int, text: str, word_count: int) -> Chunk:
        return Chunk(
            chunk_id=f"{section.chunk_id}.{sub_id}",
            chunk_text=text,
            word_count=word_count,
            heading=section.heading,
            level=section.level,
            parent_h1=section.parent_h1,
            parent_h2=section.parent_h2,
            hierarchy=section.hierarchy,
            content_type=section.content_type,
            parent_chunk_id=section.chunk_id,
            sub_chunk_id=sub_id
        )
