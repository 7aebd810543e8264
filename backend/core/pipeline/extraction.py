import logging
from typing import Callable, Optional
from models.requests import ExtractionResult
from core.chunk.chunker import Chunker
from core.chunk.keyword_filter import KeywordFilter
from core.generate.extractor import CompetencyExtractor
from core.validate.grounding import GroundingValidator

logger = logging.getLogger(__name__)

class ExtractionPipeline:
    """
    Orchestrates competency extraction for one markdown document:
    chunk -> filter -> extract (LLM) -> validate
    """

    def __init__(self, extractor: CompetencyExtractor):
        self.chunker = Chunker()
        self.keyword_filter = KeywordFilter()
        self.extractor = extractor
        self.validator = GroundingValidator()

    def run(self,
            markdown_text: str,
            max_words: Optional[int] = None,
            min_words: Optional[int] = None,
            max_per_chunk: Optional[int] = None,
            model: Optional[str] = None,
            progress_callback: Optional[Callable[[int, str], None]] = None) -> ExtractionResult:
        """
        Runs the full pipeline. LLM failures on single chunks do not stop the run.
        """
        def update_progress(progress: int, message: str):
            if progress_callback:
                progress_callback(progress, message)
            logger.info(f"{progress}%: {message}")

        try:
            update_progress(5, "Chunking markdown")
            chunks = self.chunker.chunk_document(markdown_text, max_words=max_words, min_words=min_words)
            update_progress(20, f"Created {len(chunks)} chunks")

            keyword_chunks = self.keyword_filter.filter(chunks)
            update_progress(25, f"{len(keyword_chunks)} chunks suitable for extraction")

            update_progress(30, "Extracting competencies")
            batch = self.extractor.extract(keyword_chunks, max_per_chunk=max_per_chunk, model=model)
            update_progress(85, f"Extracted {len(batch.records)} competencies")

            # Validate against the full chunk table, not only the filtered one
            validated = self.validator.validate(batch.records, chunks)
            summary = self.validator.summarize(validated)
            update_progress(100, "Extraction completed successfully")

            return ExtractionResult(
                chunks=chunks,
                keyword_chunks=keyword_chunks,
                competencies=validated,
                summary=summary,
                failed_chunks=batch.failed_chunks
            )

        except Exception as e:
            logger.exception("Extraction pipeline failed")
            if progress_callback:
                progress_callback(-1, str(e))
            raise
