import logging
import math
import re
from typing import Dict, List, Optional, Sequence
from models.chunk import Chunk
from models.competency import CompetencyRecord, ValidatedCompetency, ValidationSummary
from config.settings import settings, ValidationConfig

logger = logging.getLogger(__name__)

SCORE_FIELDS = {"text_found", "partial_match", "confidence"}

class GroundingValidator:
    """
    Scores extracted competencies by how well their source chunk supports them.
    - text_found: the whole term appears in the chunk text (case-insensitive).
    - partial_match: at least half of the term's key words appear in the chunk text.
    - confidence: exact > partial > definition found in text > fallback.
    Records are scored, never dropped. summarize() aggregates and logs a scored list.
    """

    def __init__(self, config: Optional[ValidationConfig] = None):
        self.config = config or settings.validation
        self.stop_words = {w.lower() for w in self.config.stop_words}

    def validate(self,
                 competencies: Sequence[CompetencyRecord],
                 chunks: Sequence[Chunk]) -> List[ValidatedCompetency]:
        if not competencies:
            return []

        chunk_texts: Dict[str, str] = {c.chunk_id: c.chunk_text for c in chunks}
        validated = []

        for record in competencies:
            text = chunk_texts.get(record.source_chunk) if record.source_chunk is not None else None
            text_found = self.is_text_found(record.term, text)
            partial_match = self.is_partial_match(record.term, text)
            confidence = self.score(text_found, partial_match, record.definition, text)

            validated.append(ValidatedCompetency(
                **record.model_dump(exclude=SCORE_FIELDS),
                text_found=text_found,
                partial_match=partial_match,
                confidence=confidence
            ))

        return validated

    def is_text_found(self, term: Optional[str], text: Optional[str]) -> bool:
        if not term or text is None:
            return False
        return term.lower() in text.lower()

    def is_partial_match(self, term: Optional[str], text: Optional[str]) -> bool:
        if not term or text is None:
            return False

        key_words = self.key_words(term)
        if not key_words:
            return False

        haystack = text.lower()
        matches = sum(1 for w in key_words if w in haystack)
        return matches >= math.ceil(len(key_words) / 2)

    def key_words(self, term: str) -> List[str]:
        tokens = re.findall(r"\w+", term.lower())
        return [
            t for t in tokens
            if t not in self.stop_words and len(t) >= self.config.min_key_word_length
        ]

    def score(self,
              text_found: bool,
              partial_match: bool,
              definition: Optional[str],
              text: Optional[str]) -> float:
        if text_found:
            return self.config.exact_score
        if partial_match:
            return self.config.partial_score
        # An empty definition is not evidence of grounding
        if definition and text is not None and definition.lower() in text.lower():
            return self.config.definition_score
        return self.config.fallback_score

    def summarize(self, validated: Sequence[ValidatedCompetency]) -> ValidationSummary:
        total = len(validated)

        def pct(n: int) -> float:
            return round(100 * n / total, 1) if total else 0.0

        exact = sum(1 for v in validated if v.text_found)
        partial = sum(1 for v in validated if v.partial_match)
        high = sum(1 for v in validated if v.confidence > self.config.high_confidence)
        low_terms = [v.term for v in validated if v.confidence < self.config.low_confidence]

        summary = ValidationSummary(
            total=total,
            exact_matches=exact,
            exact_match_pct=pct(exact),
            partial_matches=partial,
            partial_match_pct=pct(partial),
            high_confidence=high,
            high_confidence_pct=pct(high),
            low_confidence=len(low_terms),
            low_confidence_pct=pct(len(low_terms)),
            low_confidence_terms=low_terms[:self.config.max_low_confidence_terms]
        )
        self.log_summary(summary)
        return summary

    def log_summary(self, summary: ValidationSummary) -> None:
        logger.info(
            f"Competency validation: total={summary.total}, "
            f"exact={summary.exact_matches} ({summary.exact_match_pct}%), "
            f"partial={summary.partial_matches} ({summary.partial_match_pct}%), "
            f"high confidence={summary.high_confidence} ({summary.high_confidence_pct}%), "
            f"low confidence={summary.low_confidence} ({summary.low_confidence_pct}%)"
        )
        if summary.low_confidence_terms:
            logger.warning(
                f"Low confidence terms may not be grounded in the source text: "
                f"{', '.join(summary.low_confidence_terms)}"
            )
