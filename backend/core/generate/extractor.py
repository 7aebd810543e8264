import json
import logging
import math
import time
from typing import Any, Dict, List, Optional, Sequence
from pydantic import ValidationError
from models.chunk import Chunk
from models.competency import CompetencyRecord, ExtractionBatch
from config.settings import settings, ExtractionConfig
from core.errors import AuthenticationError, LLMError, MalformedResponseError
from core.generate.llm_client import LLMClient
from core.generate.prompt_builder import PromptStrategy, DataLiteracyPromptStrategy

logger = logging.getLogger(__name__)

class CompetencyExtractor:
    """
    Sends chunks to the LLM one at a time and collects competency records.
    A failed call is logged and counts as zero results for that chunk;
    extraction continues with the next chunk.
    """

    def __init__(self,
                 llm: LLMClient,
                 strategy: Optional[PromptStrategy] = None,
                 config: Optional[ExtractionConfig] = None):
        self.llm = llm
        self.strategy = strategy or DataLiteracyPromptStrategy()
        self.config = config or settings.extraction

    def target_count(self, word_count: int, max_per_chunk: Optional[int] = None) -> int:
        """Roughly one competency per words_per_competency words, clamped to [min, max]."""
        max_per_chunk = max_per_chunk or self.config.max_per_chunk
        n = math.ceil(word_count / self.config.words_per_competency)
        n = min(n, max_per_chunk)
        return max(n, self.config.min_per_chunk)

    def extract(self,
                chunks: Sequence[Chunk],
                max_per_chunk: Optional[int] = None,
                model: Optional[str] = None) -> ExtractionBatch:
        """
        Returns the records grouped by chunk_id in chunk order, plus the ids of chunks
        whose call failed. Failed chunks map to []. The extractor holds no per-run state.
        """
        if chunks and not self.llm.has_api_key:
            raise AuthenticationError(
                "OpenAI API key not found. Set OPENAI_API_KEY in your environment or .env file."
            )

        by_chunk: Dict[str, List[CompetencyRecord]] = {}
        failed_chunks: List[str] = []

        for i, chunk in enumerate(chunks):
            if i > 0 and self.config.request_delay_seconds > 0:
                time.sleep(self.config.request_delay_seconds)

            logger.info(f"Processing chunk {chunk.chunk_id} ({chunk.word_count} words) [{i+1}/{len(chunks)}]")
            try:
                by_chunk[chunk.chunk_id] = self.extract_chunk(chunk, max_per_chunk=max_per_chunk, model=model)
            except LLMError as e:
                logger.warning(f"Chunk {chunk.chunk_id}: {e.kind} - {e}. {e.hint}".rstrip())
                failed_chunks.append(chunk.chunk_id)
                by_chunk[chunk.chunk_id] = []

        batch = ExtractionBatch(by_chunk=by_chunk, failed_chunks=failed_chunks)
        logger.info(
            f"Extracted {len(batch.records)} competencies from {sum(1 for v in by_chunk.values() if v)} chunks, "
            f"{len(failed_chunks)} failed"
        )
        return batch

    def extract_chunk(self,
                      chunk: Chunk,
                      max_per_chunk: Optional[int] = None,
                      model: Optional[str] = None) -> List[CompetencyRecord]:
        n_competencies = self.target_count(chunk.word_count, max_per_chunk)
        messages = self.strategy.build_messages(n_competencies, chunk.hierarchy, chunk.chunk_text)

        reply = self.llm.generate(
            messages,
            model=model,
            response_format=self.strategy.response_format()
        )
        return self.parse_reply(reply, chunk)

    def parse_reply(self, reply: str, chunk: Chunk) -> List[CompetencyRecord]:
        if not reply or not reply.strip():
            return []

        try:
            parsed = json.loads(reply)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"Reply is not valid JSON: {e}")

        items = self._competency_items(parsed)
        records = []
        for item in items:
            if not isinstance(item, dict) or not item.get("term"):
                continue
            fields = {**item, "term": str(item["term"])}
            fields["source_chunk"] = chunk.chunk_id
            fields["source_hierarchy"] = chunk.hierarchy
            try:
                records.append(CompetencyRecord(**fields))
            except ValidationError as e:
                logger.debug(f"Chunk {chunk.chunk_id}: skipping malformed competency {item!r}: {e}")
        return records

    @staticmethod
    def _competency_items(parsed: Any) -> List[Any]:
        # Structured output wraps the array; plain JSON mode may return it bare
        if isinstance(parsed, list):
            return parsed
        if isinstance(parsed, dict):
            items = parsed.get("competencies", [])
            if isinstance(items, list):
                return items
        raise MalformedResponseError(f"Expected a competencies array, got {type(parsed).__name__}")
